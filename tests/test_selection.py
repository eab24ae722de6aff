"""
Tests for roulette wheel selection.
"""

import unittest

import numpy as np

from crossword_ga.selection import (
    best_index,
    fitness_prefix_sums,
    reaches_threshold,
    roulette_select,
)


class FixedDraw:
    """Stand-in generator whose uniform() always returns the same value."""

    def __init__(self, value):
        self.value = value

    def uniform(self, low, high):
        return self.value


class TestRouletteSelect(unittest.TestCase):
    """Test survivor selection."""

    def setUp(self):
        self.rng = np.random.default_rng(42)

    def test_single_fit_candidate_always_survives(self):
        population = [f"c{i}" for i in range(10)]
        fitness = [0.0] * 10
        fitness[4] = 2.0

        for _ in range(50):
            selected = roulette_select(population, fitness, self.rng)
            self.assertIn("c4", selected)
            self.assertEqual(selected, population[4:])

    def test_zero_total_keeps_everyone(self):
        population = ["a", "b", "c"]

        self.assertEqual(roulette_select(population, [0.0, 0.0, 0.0], self.rng), population)

    def test_survivors_are_a_suffix(self):
        population = list(range(8))
        fitness = [0.3, 1.2, 0.7, 2.0, 0.1, 1.5, 0.9, 0.4]

        for _ in range(50):
            selected = roulette_select(population, fitness, self.rng)
            self.assertTrue(selected)
            self.assertEqual(selected, population[selected[0]:])

    def test_draw_picks_cut(self):
        population = ["a", "b", "c"]

        self.assertEqual(roulette_select(population, [1.0, 1.0, 1.0], FixedDraw(1.5)), ["b", "c"])
        self.assertEqual(roulette_select(population, [1.0, 1.0, 1.0], FixedDraw(0.0)), population)

    def test_draw_at_total_keeps_last(self):
        population = ["a", "b", "c"]

        self.assertEqual(roulette_select(population, [1.0, 1.0, 1.0], FixedDraw(3.0)), ["c"])

    def test_length_mismatch(self):
        with self.assertRaises(ValueError):
            roulette_select(["a", "b"], [1.0], self.rng)

    def test_empty_population(self):
        with self.assertRaises(ValueError):
            roulette_select([], [], self.rng)

    def test_accepts_numpy_fitness(self):
        selected = roulette_select(["a", "b"], np.array([0.0, 1.0]), self.rng)

        self.assertEqual(selected, ["b"])


class TestHelpers(unittest.TestCase):
    """Test prefix sums, best index and threshold comparison."""

    def test_prefix_sums(self):
        np.testing.assert_allclose(fitness_prefix_sums([0.5, 1.0, 0.25]), [0.5, 1.5, 1.75])

    def test_best_index_first_on_ties(self):
        self.assertEqual(best_index([0.5, 2.0, 2.0]), 1)

    def test_best_index_empty(self):
        with self.assertRaises(ValueError):
            best_index([])

    def test_threshold_tolerance(self):
        self.assertTrue(reaches_threshold(2.0, 2.0))
        self.assertTrue(reaches_threshold(2.0 - 1e-9, 2.0))
        self.assertFalse(reaches_threshold(1.9, 2.0))


if __name__ == '__main__':
    unittest.main()
