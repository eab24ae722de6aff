"""
Roulette wheel selection.

A single uniform draw in [0, total fitness) is compared against the running
prefix sums of the population's fitness values; every candidate whose prefix
sum exceeds the draw survives. Fitter candidates widen the gap between
consecutive prefix sums, so they are more likely to sit past the cut.
"""

from typing import List, Sequence, TypeVar

import numpy as np


FITNESS_TOLERANCE = 1e-6

T = TypeVar("T")


def fitness_prefix_sums(fitness: Sequence[float]) -> np.ndarray:
    """Running sum of the fitness values, aligned with the population."""
    return np.cumsum(np.asarray(fitness, dtype=float))


def roulette_select(
    population: Sequence[T],
    fitness: Sequence[float],
    rng: np.random.Generator
) -> List[T]:
    """
    Select the survivors of a generation.

    Args:
        population: Candidates of the current generation
        fitness: Fresh fitness value per candidate
        rng: Random number generator

    Returns:
        Candidates whose prefix sum exceeds the roulette draw, in population
        order. The whole population when the total fitness is zero.

    Raises:
        ValueError: If population and fitness lengths differ or population is empty
    """
    if len(population) != len(fitness):
        raise ValueError(
            f"Got {len(fitness)} fitness values for {len(population)} candidates"
        )
    if not population:
        raise ValueError("Cannot select from an empty population")

    sums = fitness_prefix_sums(fitness)
    total = float(sums[-1])

    if total <= 0.0:
        return list(population)

    # uniform() may round up to the high end; keep the draw below the total
    draw = min(rng.uniform(0.0, total), float(np.nextafter(total, 0.0)))
    return [candidate for candidate, prefix in zip(population, sums) if prefix > draw]


def best_index(fitness: Sequence[float]) -> int:
    """Index of the highest fitness value (first one on ties)."""
    if len(fitness) == 0:
        raise ValueError("No fitness values")
    return int(np.argmax(np.asarray(fitness, dtype=float)))


def reaches_threshold(value: float, threshold: float) -> bool:
    """Compare a fitness value to the threshold with floating tolerance."""
    return value >= threshold - FITNESS_TOLERANCE
