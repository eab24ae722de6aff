"""
Orchestration module for the crossword GA.

Implements the generational loop: initial population, evaluation,
termination check, roulette selection and next-population production via
crossover + mutation, with restarts and search budgets.
"""

import time
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .builder import InfeasibleWordError, check_word_fits, initial_population
from .config_loader import GAConfig
from .crossover import crossover
from .data_models import MAX_FITNESS, Candidate, GenerationStats, Orientation
from .fitness import fitness_values, letters_connected
from .io_utils import grid_to_text
from .mutation import mutate
from .selection import best_index, reaches_threshold, roulette_select


class EmptyInputError(ValueError):
    """Raised when the search is started without any words."""
    pass


class NoSolutionFound(RuntimeError):
    """
    Raised when the search ends without reaching the fitness threshold.

    Attributes:
        best_fitness: Best total fitness seen (None if nothing was evaluated)
        generations: Generations evaluated across all restarts
    """

    def __init__(self, message: str, best_fitness: Optional[float] = None, generations: int = 0):
        super().__init__(message)
        self.best_fitness = best_fitness
        self.generations = generations


@dataclass
class SearchResult:
    """
    Outcome of a successful search.

    Attributes:
        candidate: Winning candidate, placements in input order
        fitness: Its total fitness
        generations: Generations evaluated across all restarts
        restarts: Number of restarts performed
        history: Per-generation statistics of the final run (since the last restart)
    """
    candidate: Candidate
    fitness: float
    generations: int
    restarts: int
    history: List[GenerationStats] = field(default_factory=list)

    def solution(self) -> List[Tuple[int, int, Orientation]]:
        """(start_row, start_column, orientation) per input word."""
        return self.candidate.solution()


def validate_words(words: Sequence[str], config: GAConfig) -> List[str]:
    """
    Check the input word list before searching.

    Args:
        words: Input words
        config: GA configuration

    Returns:
        The words as a list

    Raises:
        EmptyInputError: If there are no words
        ValueError: If a word is blank or repeated
        InfeasibleWordError: If a word is too long for the grid
    """
    words = list(words)
    if not words:
        raise EmptyInputError("No words to place")

    seen = set()
    for word in words:
        if not word or not word.strip():
            raise ValueError("Words must be non-empty")
        if word in seen:
            raise ValueError(f"Duplicate word: '{word}'")
        seen.add(word)
        check_word_fits(word, config.grid_size)

    return words


def select_two_parents(
    selected: Sequence[Candidate],
    rng: np.random.Generator
) -> Tuple[Candidate, Candidate]:
    """
    Draw two survivors uniformly, with replacement.

    Raises:
        ValueError: If there are no survivors
    """
    if not selected:
        raise ValueError("Need at least 1 survivor to produce children")
    idx_a = int(rng.integers(0, len(selected)))
    idx_b = int(rng.integers(0, len(selected)))
    return selected[idx_a], selected[idx_b]


def next_population(
    selected: Sequence[Candidate],
    config: GAConfig,
    rng: np.random.Generator
) -> List[Candidate]:
    """
    Produce the next generation from the survivors.

    Each step crosses two random survivors, mutates the child and adds it;
    with probability include_parent_probability one of the two parents is
    also carried over unchanged. Stops at population_size.

    When a word of the child finds no legal position on the crowded grid,
    the first parent is carried over in place of the child.

    Args:
        selected: Survivors of roulette selection
        config: GA configuration
        rng: Random number generator

    Returns:
        List of exactly population_size candidates
    """
    population: List[Candidate] = []

    while len(population) < config.population_size:
        parent_a, parent_b = select_two_parents(selected, rng)

        try:
            child, _ = crossover(parent_a, parent_b, config, rng)
            child, _ = mutate(child, config, rng)
        except InfeasibleWordError:
            child = parent_a
        population.append(child)

        if rng.random() < config.include_parent_probability:
            population.append(parent_a if rng.random() < 0.5 else parent_b)

    return population[:config.population_size]


def run_search(
    words: Sequence[str],
    config: Optional[GAConfig] = None,
    rng: Optional[np.random.Generator] = None
) -> SearchResult:
    """
    Evolve crossword layouts until one reaches the fitness threshold.

    Algorithm:
        1. Validate the words and check a connected layout is possible
        2. Build the initial population and evaluate it
        3. Stop if the best candidate reaches fitness_threshold
        4. Otherwise select survivors, produce the next population, repeat
        5. After max_steps generations restart from step 2
        6. Give up when max_restarts or time_limit is exceeded

    Args:
        words: Input words, in the order the solution must follow
        config: GA configuration (defaults when None)
        rng: Random number generator (seeded from config.random_seed when None)

    Returns:
        SearchResult holding the winning candidate

    Raises:
        EmptyInputError: If there are no words
        InfeasibleWordError: If a word cannot fit the grid
        NoSolutionFound: If the threshold is unreachable or a budget ran out
    """
    config = config or GAConfig()
    words = validate_words(words, config)

    needs_full_connectivity = reaches_threshold(config.fitness_threshold, MAX_FITNESS)
    if needs_full_connectivity and not letters_connected(words):
        raise NoSolutionFound(
            "Words cannot form a single connected crossword "
            "(some words share no letter with the rest)"
        )

    if rng is None:
        rng = np.random.default_rng(config.random_seed)

    if config.verbose:
        print("=" * 70)
        print("CROSSWORD GA SEARCH")
        print("=" * 70)
        print(f"Words: {len(words)}, grid: {config.grid_size}x{config.grid_size}, "
              f"population: {config.population_size}")

    started = time.monotonic()
    generations = 0
    restart = 0
    best_seen: Optional[float] = None

    while True:
        population = initial_population(words, config, rng)
        history: List[GenerationStats] = []
        step = 0
        selected_count = 0

        while True:
            fitness = fitness_values(population, config)
            generations += 1

            idx = best_index(fitness)
            best = float(fitness[idx])
            best_seen = best if best_seen is None else max(best_seen, best)

            stats = GenerationStats(
                generation=step,
                restart=restart,
                best_fitness=best,
                mean_fitness=float(np.mean(fitness)),
                selected_count=selected_count
            )
            history.append(stats)
            _report_progress(stats, config)

            if reaches_threshold(best, config.fitness_threshold):
                result = SearchResult(
                    candidate=population[idx],
                    fitness=best,
                    generations=generations,
                    restarts=restart,
                    history=history
                )
                _report_done(result, config)
                return result

            if config.time_limit is not None and time.monotonic() - started > config.time_limit:
                raise NoSolutionFound(
                    f"Time limit of {config.time_limit}s exceeded after {generations} generations",
                    best_fitness=best_seen,
                    generations=generations
                )

            if config.max_steps is not None and step >= config.max_steps:
                break

            selected = roulette_select(population, fitness, rng)
            selected_count = len(selected)
            population = next_population(selected, config, rng)
            step += 1

        restart += 1
        if config.max_restarts is not None and restart > config.max_restarts:
            raise NoSolutionFound(
                f"No solution after {restart} run(s) of {config.max_steps} generations",
                best_fitness=best_seen,
                generations=generations
            )
        if config.verbose:
            print(f"  Restart {restart}: best fitness so far {best_seen:.3f}")


def _report_progress(stats: GenerationStats, config: GAConfig) -> None:
    if not config.verbose:
        return
    if stats.generation % config.progress_every == 0:
        print(
            f"  Generation {stats.generation} (run {stats.restart}): "
            f"best {stats.best_fitness:.3f}, mean {stats.mean_fitness:.3f}, "
            f"survivors {stats.selected_count}"
        )


def _report_done(result: SearchResult, config: GAConfig) -> None:
    if not config.verbose:
        return
    print()
    print("=" * 70)
    print("SUMMARY")
    print("=" * 70)
    print(f"Fitness: {result.fitness:.3f}")
    print(f"Generations: {result.generations} ({result.restarts} restart(s))")
    print(grid_to_text(result.candidate.grid))
