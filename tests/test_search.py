"""
Tests for the generational loop.
"""

import io
import unittest
from contextlib import redirect_stdout
from unittest import mock

import numpy as np

from crossword_ga.builder import InfeasibleWordError, initial_population
from crossword_ga.config_loader import GAConfig
from crossword_ga.fitness import evaluate
from crossword_ga.orchestration import (
    EmptyInputError,
    NoSolutionFound,
    SearchResult,
    next_population,
    run_search,
    select_two_parents,
    validate_words,
)


def zero_fitness(population, config):
    return np.zeros(len(population))


def fitness_solved_on_call(winning_call):
    """Zero fitness until the given evaluation, where the first candidate scores 2.0."""
    calls = []

    def values(population, config):
        calls.append(len(population))
        fitness = np.zeros(len(population))
        if len(calls) == winning_call:
            fitness[0] = 2.0
        return fitness

    return values


class TestValidateWords(unittest.TestCase):
    """Test input checks run before the search."""

    def setUp(self):
        self.config = GAConfig()

    def test_empty_input(self):
        with self.assertRaises(EmptyInputError):
            validate_words([], self.config)
        with self.assertRaises(EmptyInputError):
            run_search([])

    def test_blank_word(self):
        with self.assertRaises(ValueError):
            validate_words(["CAT", "  "], self.config)

    def test_duplicate_word(self):
        with self.assertRaises(ValueError):
            validate_words(["CAT", "TAR", "CAT"], self.config)

    def test_word_too_long_for_grid(self):
        with self.assertRaises(InfeasibleWordError):
            run_search(["A" * 20, "ANT"])

    def test_word_too_long_for_custom_grid(self):
        with self.assertRaises(InfeasibleWordError):
            validate_words(["CATS"], GAConfig(grid_size=4))

    def test_returns_list(self):
        self.assertEqual(validate_words(("CAT", "TAR"), self.config), ["CAT", "TAR"])


class TestUnreachableThreshold(unittest.TestCase):
    """Inputs that can never form one connected crossword fail fast."""

    def test_single_word(self):
        with self.assertRaises(NoSolutionFound):
            run_search(["CAT"])

    def test_words_without_shared_letters(self):
        with self.assertRaises(NoSolutionFound) as ctx:
            run_search(["CAT", "DOG"])
        self.assertEqual(ctx.exception.generations, 0)

    def test_lower_threshold_skips_precheck(self):
        config = GAConfig(fitness_threshold=1.0, population_size=5, random_seed=1)

        result = run_search(["CAT", "DOG"], config)

        self.assertGreaterEqual(result.fitness, 1.0 - 1e-6)


class TestRunSearch(unittest.TestCase):
    """Test complete searches."""

    def test_two_words(self):
        config = GAConfig(population_size=20, max_steps=200, max_restarts=20, random_seed=1)

        result = run_search(["CAT", "TAR"], config)

        self.assertIsInstance(result, SearchResult)
        self.assertEqual(result.candidate.words, ["CAT", "TAR"])
        self.assertAlmostEqual(result.fitness, 2.0)
        self.assertAlmostEqual(evaluate(result.candidate, config).total, 2.0)
        self.assertEqual(len(result.solution()), 2)
        self.assertEqual(result.history[-1].restart, result.restarts)
        self.assertEqual(len(result.history), result.history[-1].generation + 1)

    def test_three_words(self):
        config = GAConfig(population_size=30, max_steps=300, max_restarts=20, random_seed=5)

        result = run_search(["CAT", "TAR", "TEA"], config)

        self.assertEqual(result.candidate.words, ["CAT", "TAR", "TEA"])
        self.assertAlmostEqual(evaluate(result.candidate, config).total, 2.0)

    def test_same_seed_same_result(self):
        config = GAConfig(population_size=20, max_steps=200, max_restarts=20, random_seed=9)

        first = run_search(["CAT", "TAR", "TEA"], config)
        second = run_search(["CAT", "TAR", "TEA"], config)

        self.assertEqual(first.solution(), second.solution())
        self.assertEqual(first.generations, second.generations)

    def test_explicit_generator(self):
        config = GAConfig(population_size=20, max_steps=200, max_restarts=20)

        result = run_search(["CAT", "TAR"], config, rng=np.random.default_rng(3))

        self.assertAlmostEqual(result.fitness, 2.0)

    def test_verbose_summary(self):
        config = GAConfig(population_size=20, max_steps=200, max_restarts=20,
                          random_seed=1, verbose=True)
        buffer = io.StringIO()

        with redirect_stdout(buffer):
            run_search(["CAT", "TAR"], config)

        self.assertIn("SUMMARY", buffer.getvalue())
        self.assertIn("Generation 0", buffer.getvalue())


class TestSearchBudgets(unittest.TestCase):
    """Test restarts, step and time limits."""

    def test_restart_budget_exhausted(self):
        config = GAConfig(population_size=6, max_steps=2, max_restarts=1, random_seed=1)

        with mock.patch("crossword_ga.orchestration.fitness_values", side_effect=zero_fitness):
            with self.assertRaises(NoSolutionFound) as ctx:
                run_search(["CAT", "TAR"], config)

        # two runs of generations 0, 1 and 2
        self.assertEqual(ctx.exception.generations, 6)
        self.assertEqual(ctx.exception.best_fitness, 0.0)

    def test_no_restarts(self):
        config = GAConfig(population_size=6, max_steps=1, max_restarts=0, random_seed=1)

        with mock.patch("crossword_ga.orchestration.fitness_values", side_effect=zero_fitness):
            with self.assertRaises(NoSolutionFound) as ctx:
                run_search(["CAT", "TAR"], config)

        self.assertEqual(ctx.exception.generations, 2)

    def test_time_limit(self):
        config = GAConfig(population_size=6, max_steps=None, time_limit=1e-9, random_seed=1)

        with mock.patch("crossword_ga.orchestration.fitness_values", side_effect=zero_fitness):
            with self.assertRaises(NoSolutionFound) as ctx:
                run_search(["CAT", "TAR"], config)

        self.assertEqual(ctx.exception.generations, 1)

    def test_history_covers_final_run(self):
        config = GAConfig(population_size=6, max_steps=1, max_restarts=None, random_seed=1)

        with mock.patch("crossword_ga.orchestration.fitness_values",
                        side_effect=fitness_solved_on_call(5)):
            result = run_search(["CAT", "TAR"], config)

        # runs 0 and 1 use two generations each, run 2 wins at once
        self.assertEqual(result.generations, 5)
        self.assertEqual(result.restarts, 2)
        self.assertEqual(len(result.history), 1)
        self.assertEqual(result.history[0].restart, 2)
        self.assertEqual(result.history[0].generation, 0)


class TestNextPopulation(unittest.TestCase):
    """Test next-generation production."""

    def setUp(self):
        self.rng = np.random.default_rng(42)
        self.words = ["CAT", "TAR", "TEA"]

    def test_exact_population_size(self):
        config = GAConfig(population_size=12, include_parent_probability=1.0)
        selected = initial_population(self.words, config.replace(population_size=3), self.rng)

        population = next_population(selected, config, self.rng)

        self.assertEqual(len(population), 12)
        for candidate in population:
            self.assertEqual(candidate.words, self.words)

    def test_parents_carried_over(self):
        config = GAConfig(population_size=10, include_parent_probability=1.0, mutation_rate=0.0)
        selected = initial_population(self.words, config.replace(population_size=1), self.rng)

        population = next_population(selected, config, self.rng)

        self.assertTrue(any(candidate is selected[0] for candidate in population))

    def test_unplaceable_child_keeps_parent(self):
        config = GAConfig(population_size=8, include_parent_probability=0.0)
        selected = initial_population(self.words, config.replace(population_size=3), self.rng)
        failure = InfeasibleWordError("CAT", "no legal position")

        for target in ("crossword_ga.orchestration.crossover", "crossword_ga.orchestration.mutate"):
            with self.subTest(target=target):
                with mock.patch(target, side_effect=failure):
                    population = next_population(selected, config, self.rng)

                self.assertEqual(len(population), 8)
                for candidate in population:
                    self.assertTrue(any(candidate is parent for parent in selected))

    def test_select_two_parents(self):
        selected = initial_population(self.words, GAConfig(population_size=4), self.rng)

        parent_a, parent_b = select_two_parents(selected, self.rng)

        self.assertIn(parent_a, selected)
        self.assertIn(parent_b, selected)

    def test_select_from_nothing(self):
        with self.assertRaises(ValueError):
            select_two_parents([], self.rng)


if __name__ == '__main__':
    unittest.main()
