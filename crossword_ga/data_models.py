"""
Data models for the crossword GA.

Core data structures representing words placed on a grid, the grid itself,
candidates (individuals in the GA population) and their fitness reports.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence, Set, Tuple

import numpy as np


GRID_SIZE = 20
EMPTY = ""
MAX_FITNESS = 2.0


class Orientation(Enum):
    """Word orientation; the values are the solution file encoding."""
    HORIZONTAL = 0
    VERTICAL = 1

    def opposite(self) -> "Orientation":
        if self is Orientation.HORIZONTAL:
            return Orientation.VERTICAL
        return Orientation.HORIZONTAL


@dataclass(frozen=True)
class Coord:
    """A single cell of a placed word, with the letter it holds."""
    row: int
    column: int
    char: Optional[str] = None


@dataclass(frozen=True)
class PlacedWord:
    """
    A word with its start cell and orientation.

    Attributes:
        word: The word itself (its length is the span length)
        start_row: Zero-based row of the first letter
        start_column: Zero-based column of the first letter
        orientation: HORIZONTAL (left to right) or VERTICAL (top to bottom)
    """
    word: str
    start_row: int
    start_column: int
    orientation: Orientation

    def __len__(self) -> int:
        return len(self.word)

    @property
    def end_row(self) -> int:
        """Exclusive end row (start row + 1 for horizontal words)."""
        if self.orientation is Orientation.VERTICAL:
            return self.start_row + len(self.word)
        return self.start_row + 1

    @property
    def end_column(self) -> int:
        """Exclusive end column (start column + 1 for vertical words)."""
        if self.orientation is Orientation.HORIZONTAL:
            return self.start_column + len(self.word)
        return self.start_column + 1

    def coords(self) -> List[Coord]:
        """
        Enumerate every cell of the word's span.

        Returns:
            List of Coord in reading order, each carrying its letter
        """
        if self.orientation is Orientation.HORIZONTAL:
            return [
                Coord(self.start_row, self.start_column + i, ch)
                for i, ch in enumerate(self.word)
            ]
        return [
            Coord(self.start_row + i, self.start_column, ch)
            for i, ch in enumerate(self.word)
        ]

    def cells(self) -> FrozenSet[Tuple[int, int]]:
        """Set of (row, column) pairs occupied by the word."""
        return frozenset((c.row, c.column) for c in self.coords())

    def rows(self) -> Set[int]:
        return set(range(self.start_row, self.end_row))

    def columns(self) -> Set[int]:
        return set(range(self.start_column, self.end_column))

    def letter_map(self) -> Dict[str, List[Coord]]:
        """
        Group the word's coordinates by letter.

        Returns:
            Dictionary mapping each letter to the coordinates holding it
        """
        letters: Dict[str, List[Coord]] = {}
        for coord in self.coords():
            letters.setdefault(coord.char, []).append(coord)
        return letters

    def as_triple(self) -> Tuple[int, int, Orientation]:
        return self.start_row, self.start_column, self.orientation


class Grid:
    """
    Square character grid backed by a numpy array.

    Empty cells hold the EMPTY sentinel. A grid belongs to exactly one
    candidate (or one candidate under construction); use copy() to hand
    an independent grid to someone else.
    """

    def __init__(self, size: int = GRID_SIZE, cells: Optional[np.ndarray] = None):
        if cells is None:
            cells = np.full((size, size), EMPTY, dtype="<U1")
        elif cells.shape != (size, size):
            raise ValueError(f"Grid cells must be {size}x{size}, got {cells.shape}")
        self.size = size
        self.cells = cells

    def __getitem__(self, position: Tuple[int, int]) -> str:
        row, column = position
        return str(self.cells[row, column])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self.size == other.size and np.array_equal(self.cells, other.cells)

    def contains(self, row: int, column: int) -> bool:
        return 0 <= row < self.size and 0 <= column < self.size

    def is_empty(self, row: int, column: int) -> bool:
        return self.cells[row, column] == EMPTY

    def write(self, placed: PlacedWord) -> None:
        """Write a placed word's letters into the grid (last writer wins)."""
        for coord in placed.coords():
            self.cells[coord.row, coord.column] = coord.char

    def copy(self) -> "Grid":
        return Grid(self.size, self.cells.copy())

    def occupied(self) -> Set[Tuple[int, int]]:
        """All (row, column) pairs holding a letter."""
        rows, columns = np.nonzero(self.cells != EMPTY)
        return {(int(r), int(c)) for r, c in zip(rows, columns)}


@dataclass
class DirectionalIndex:
    """
    Placed words split by orientation.

    Maintained alongside a grid while a candidate is built so adjacency
    checks only look at already placed words of the relevant orientation.
    """
    horizontal: List[PlacedWord] = field(default_factory=list)
    vertical: List[PlacedWord] = field(default_factory=list)

    def add(self, placed: PlacedWord) -> None:
        self.same_as(placed.orientation).append(placed)

    def same_as(self, orientation: Orientation) -> List[PlacedWord]:
        if orientation is Orientation.HORIZONTAL:
            return self.horizontal
        return self.vertical

    def opposite_of(self, orientation: Orientation) -> List[PlacedWord]:
        return self.same_as(orientation.opposite())

    def __len__(self) -> int:
        return len(self.horizontal) + len(self.vertical)


@dataclass(frozen=True, eq=False)
class Candidate:
    """
    One complete crossword layout (individual in the GA population).

    Candidates compare and hash by identity since their grid is a mutable array.

    Attributes:
        grid: Rasterization of all placements
        placements: One PlacedWord per input word, in input order
    """
    grid: Grid
    placements: Tuple[PlacedWord, ...]

    @property
    def words(self) -> List[str]:
        return [p.word for p in self.placements]

    def __len__(self) -> int:
        return len(self.placements)

    @classmethod
    def from_placements(cls, placements: Iterable[PlacedWord], size: int = GRID_SIZE) -> "Candidate":
        """
        Rasterize a placement list into a fresh grid.

        Args:
            placements: Placements in the desired (input) order
            size: Grid size

        Returns:
            Candidate whose grid holds every placement's letters
        """
        placements = tuple(placements)
        grid = Grid(size)
        for placed in placements:
            grid.write(placed)
        return cls(grid=grid, placements=placements)

    def solution(self) -> List[Tuple[int, int, Orientation]]:
        """(start_row, start_column, orientation) per word, in input order."""
        return [p.as_triple() for p in self.placements]


@dataclass(frozen=True)
class FitnessReport:
    """
    Fitness breakdown of a candidate.

    Attributes:
        per_word_scores: Score in [0, 1] per placement, aligned with placements
        connectivity_score: Largest component size / word count, in [0, 1]
    """
    per_word_scores: Tuple[float, ...]
    connectivity_score: float

    @property
    def words_score(self) -> float:
        """Average per-word score (0.0 when there are no words)."""
        if not self.per_word_scores:
            return 0.0
        return sum(self.per_word_scores) / len(self.per_word_scores)

    @property
    def total(self) -> float:
        if not self.per_word_scores:
            return 0.0
        return self.connectivity_score + self.words_score


@dataclass
class GenerationStats:
    """Per-generation statistics recorded by the generational loop."""
    generation: int
    restart: int
    best_fitness: float
    mean_fitness: float
    selected_count: int = 0


def reorder_placements(order: Sequence[str], placements: Dict[str, PlacedWord]) -> Tuple[PlacedWord, ...]:
    """
    Put placements back into the canonical input-word order.

    Args:
        order: Input words in the order they were given
        placements: Mapping word -> placement (must cover every word)

    Returns:
        Tuple of placements aligned with order

    Raises:
        KeyError: If a word has no placement
    """
    return tuple(placements[word] for word in order)
