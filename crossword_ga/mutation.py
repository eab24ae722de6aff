"""
Mutation operator for the crossword GA.

Splits a candidate's words into connectivity components, picks components
to mutate, keeps every other word where it is and re-places the mutated
words so that they cross the kept ones where possible.
"""

import math
from typing import List, Sequence, Tuple

import numpy as np

from .builder import PlacementState
from .config_loader import GAConfig
from .crossover import place_crossing_or_random
from .data_models import Candidate, PlacedWord
from .fitness import connectivity_components, intersection_graph


def mutation_selection(
    components: Sequence[Sequence[PlacedWord]],
    config: GAConfig,
    rng: np.random.Generator
) -> Tuple[List[PlacedWord], List[PlacedWord]]:
    """
    Choose which words will be re-placed.

    Policies:
        components: each component is mutated as a whole with probability
            mutation_rate, independently of the others
        last_component: only the last component is eligible; its first
            ceil(size * mutation_rate) words are mutated

    Args:
        components: Connectivity components in discovery order
        config: GA configuration
        rng: Random number generator

    Returns:
        Tuple of (mutated_words, kept_words)
    """
    mutated: List[PlacedWord] = []
    kept: List[PlacedWord] = []

    if config.mutation_policy == "last_component":
        if not components:
            return mutated, kept
        for component in components[:-1]:
            kept.extend(component)
        last = list(components[-1])
        count = math.ceil(len(last) * config.mutation_rate)
        mutated.extend(last[:count])
        kept.extend(last[count:])
        return mutated, kept

    for component in components:
        if rng.random() < config.mutation_rate:
            mutated.extend(component)
        else:
            kept.extend(component)

    return mutated, kept


def mutate(
    candidate: Candidate,
    config: GAConfig,
    rng: np.random.Generator
) -> Tuple[Candidate, List[str]]:
    """
    Re-place the words of randomly chosen connectivity components.

    Kept words are written verbatim into a fresh grid first. Mutated words
    are then placed one at a time, crossing an already placed word when a
    legal crossing exists and at a random legal position otherwise.

    A candidate whose words already form a single component is returned
    unchanged: re-placing it could only lower its connectivity.

    Args:
        candidate: Candidate to mutate (left untouched)
        config: GA configuration
        rng: Random number generator

    Returns:
        Tuple of (mutated_candidate, operation_log); the candidate itself is
        returned when it is fully connected or no word was selected
    """
    graph = intersection_graph(candidate.placements)
    components = connectivity_components(graph, candidate.placements)

    if len(components) <= 1:
        return candidate, ["no_mutation: already connected"]

    mutated, kept = mutation_selection(components, config, rng)

    if not mutated:
        return candidate, ["no_mutation: no component selected"]

    state = PlacementState(config.grid_size)
    for placed in kept:
        state.put(placed)

    op_log = []
    for placed in mutated:
        new_placed, tier = place_crossing_or_random(placed.word, state, config, rng)
        op_log.append(
            f"{tier}({placed.word}): {placed.as_triple()[:2]} {placed.orientation.name} -> "
            f"{new_placed.as_triple()[:2]} {new_placed.orientation.name}"
        )

    return state.seal(candidate.words), op_log
