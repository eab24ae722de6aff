"""
Candidate builder.

Places words one by one on a fresh grid by rejection sampling random start
cells, and builds initial populations out of independently built candidates.
"""

from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from .config_loader import GAConfig
from .data_models import (
    Candidate,
    DirectionalIndex,
    Grid,
    Orientation,
    PlacedWord,
    reorder_placements,
)
from .feasibility import can_place, can_place_word


ORIENTATIONS = (Orientation.HORIZONTAL, Orientation.VERTICAL)


class InfeasibleWordError(ValueError):
    """Raised when a word can never (or could not) be legally placed."""

    def __init__(self, word: str, reason: str):
        super().__init__(f"Cannot place '{word}': {reason}")
        self.word = word
        self.reason = reason


class PlacementState:
    """
    Grid under construction plus the words placed on it so far.

    Owned by the one candidate being built; seal() hands the result over as
    an immutable Candidate.
    """

    def __init__(self, size: int):
        self.grid = Grid(size)
        self.index = DirectionalIndex()
        self.placed: Dict[str, PlacedWord] = {}

    @property
    def size(self) -> int:
        return self.grid.size

    def can_place(self, placed: PlacedWord) -> bool:
        return can_place_word(placed, self.grid, self.index)

    def put(self, placed: PlacedWord) -> PlacedWord:
        """Write a placement into the grid and the directional index."""
        self.grid.write(placed)
        self.index.add(placed)
        self.placed[placed.word] = placed
        return placed

    def try_put(self, placed: PlacedWord) -> Optional[PlacedWord]:
        """Place the word if legal, otherwise return None."""
        if not self.can_place(placed):
            return None
        return self.put(placed)

    def seal(self, order: Sequence[str]) -> Candidate:
        """
        Freeze the state into a Candidate.

        Args:
            order: Input words; placements are reordered to match

        Returns:
            Candidate owning a copy of the grid
        """
        return Candidate(
            grid=self.grid.copy(),
            placements=reorder_placements(order, self.placed)
        )


def check_word_fits(word: str, size: int) -> None:
    """
    Fail fast on words that no start cell could ever hold.

    Raises:
        InfeasibleWordError: If the word is empty or too long for the grid
    """
    if not word:
        raise InfeasibleWordError(word, "empty word")
    if len(word) >= size:
        raise InfeasibleWordError(
            word, f"length {len(word)} needs a grid larger than {size}x{size}"
        )


def random_start(word: str, orientation: Orientation, size: int,
                 rng: np.random.Generator) -> Tuple[int, int]:
    """
    Draw a random start cell whose span fits the grid.

    Args:
        word: Word to place
        orientation: Orientation to place it in
        size: Grid size
        rng: Random number generator

    Returns:
        Tuple of (start_row, start_column)
    """
    if orientation is Orientation.HORIZONTAL:
        row = int(rng.integers(0, size))
        column = int(rng.integers(0, size - len(word)))
    else:
        row = int(rng.integers(0, size - len(word)))
        column = int(rng.integers(0, size))
    return row, column


def place_randomly(
    word: str,
    state: PlacementState,
    rng: np.random.Generator,
    max_attempts: int = 10000
) -> PlacedWord:
    """
    Place a word at a random legal position.

    Repeatedly samples an orientation and a start cell until the feasibility
    checker accepts one. The word is written into the state on success.
    Connectivity is not guaranteed: the word may cross nothing.

    Args:
        word: Word to place
        state: Grid under construction
        rng: Random number generator
        max_attempts: Sampling attempts before giving up

    Returns:
        The accepted placement

    Raises:
        InfeasibleWordError: If the word is too long or no attempt succeeded
    """
    check_word_fits(word, state.size)

    for _ in range(max_attempts):
        orientation = ORIENTATIONS[int(rng.integers(0, 2))]
        row, column = random_start(word, orientation, state.size, rng)
        if can_place(word, row, column, orientation, state.grid, state.index):
            return state.put(PlacedWord(word, row, column, orientation))

    raise InfeasibleWordError(word, f"no legal position found in {max_attempts} attempts")


def build_candidate(words: Sequence[str], config: GAConfig,
                    rng: np.random.Generator) -> Candidate:
    """
    Build one candidate by placing every word at random, in input order.

    Args:
        words: Input words
        config: GA configuration
        rng: Random number generator

    Returns:
        Candidate with no boundary, letter or adjacency violations
    """
    state = PlacementState(config.grid_size)
    for word in words:
        place_randomly(word, state, rng, config.max_placement_attempts)
    return state.seal(words)


def initial_population(words: Sequence[str], config: GAConfig,
                       rng: np.random.Generator) -> List[Candidate]:
    """Build population_size independent random candidates."""
    return [build_candidate(words, config, rng) for _ in range(config.population_size)]
