"""
Crossover operator for the crossword GA.

Builds a child word by word, alternating the source parent by word index.
Each word tries, in order: the parent's own position, a position crossing a
word already in the child, and finally a random legal position.
"""

from typing import Iterator, List, Optional, Sequence, Tuple

import numpy as np

from .builder import ORIENTATIONS, PlacementState, place_randomly
from .config_loader import GAConfig
from .data_models import Candidate, Orientation, PlacedWord


TIER_SAME = "same"
TIER_CROSSING = "crossing"
TIER_RANDOM = "random"


def crossing_positions(
    word: str,
    placed_words: Sequence[PlacedWord],
    orientation: Orientation
) -> Iterator[PlacedWord]:
    """
    Enumerate positions where the word would cross already placed words.

    For every placed word (in placement order) and every letter of the new
    word (in reading order), each cell of the placed word holding that letter
    is a connection point. The start aligns the first occurrence of the
    letter in the new word with the connection point.

    Args:
        word: Word to place
        placed_words: Placed words of the opposite orientation
        orientation: Orientation of the new word

    Yields:
        Candidate placements (not yet checked for feasibility)
    """
    for other in placed_words:
        letters = other.letter_map()
        for ch in word:
            offset = word.index(ch)
            for connection in letters.get(ch, []):
                if orientation is Orientation.HORIZONTAL:
                    if connection.column < offset:
                        continue
                    yield PlacedWord(word, connection.row, connection.column - offset, orientation)
                else:
                    if connection.row < offset:
                        continue
                    yield PlacedWord(word, connection.row - offset, connection.column, orientation)


def find_crossing_placement(word: str, state: PlacementState) -> Optional[PlacedWord]:
    """
    Find the first feasible position crossing a word already on the grid.

    Horizontal positions crossing vertical words are tried first, then
    vertical positions crossing horizontal words.

    Args:
        word: Word to place
        state: Grid under construction

    Returns:
        Feasible placement, or None if no crossing position is legal
    """
    for orientation in ORIENTATIONS:
        opposite = state.index.opposite_of(orientation)
        for placed in crossing_positions(word, opposite, orientation):
            if state.can_place(placed):
                return placed
    return None


def try_put_crossing(word: str, state: PlacementState) -> Optional[PlacedWord]:
    """Place the word crossing another one if possible, otherwise return None."""
    placed = find_crossing_placement(word, state)
    if placed is None:
        return None
    return state.put(placed)


def place_crossing_or_random(
    word: str,
    state: PlacementState,
    config: GAConfig,
    rng: np.random.Generator
) -> Tuple[PlacedWord, str]:
    """
    Crossing placement with random fallback.

    Returns:
        Tuple of (placement, tier used)
    """
    placed = try_put_crossing(word, state)
    if placed is not None:
        return placed, TIER_CROSSING
    return place_randomly(word, state, rng, config.max_placement_attempts), TIER_RANDOM


def crossover(
    parent_a: Candidate,
    parent_b: Candidate,
    config: GAConfig,
    rng: np.random.Generator
) -> Tuple[Candidate, List[str]]:
    """
    Combine two parents into one child.

    Word i is taken from parent_a when i is even and from parent_b when i
    is odd. Each placement is written into the child immediately, so later
    words see (and may cross) earlier ones.

    Args:
        parent_a: First parent
        parent_b: Second parent
        config: GA configuration
        rng: Random number generator

    Returns:
        Tuple of (child, tiers) where tiers[i] is "same", "crossing" or
        "random" for word i

    Raises:
        ValueError: If the parents do not hold the same words in the same order
    """
    if parent_a.words != parent_b.words:
        raise ValueError("Parents must place the same words in the same order")

    state = PlacementState(config.grid_size)
    tiers = []

    for i, (placed_a, placed_b) in enumerate(zip(parent_a.placements, parent_b.placements)):
        inherited = placed_a if i % 2 == 0 else placed_b

        if state.try_put(inherited) is not None:
            tiers.append(TIER_SAME)
            continue

        _, tier = place_crossing_or_random(inherited.word, state, config, rng)
        tiers.append(tier)

    return state.seal(parent_a.words), tiers
