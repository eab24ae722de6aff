"""
Placement feasibility rules.

Pure predicates deciding whether a word may be written onto a grid at a
given start cell and orientation. A failed check is a normal outcome used by
callers to retry or fall back, never an exception.
"""

from .data_models import DirectionalIndex, Grid, Orientation, PlacedWord


def within_bounds(word: str, start_row: int, start_column: int,
                  orientation: Orientation, size: int) -> bool:
    """
    Check that the word's span fits the grid.

    The bound on the extending axis is strict (start + length < size), so
    the last grid row/column is never reached by the extending axis.

    Args:
        word: Word to place
        start_row: Start row
        start_column: Start column
        orientation: Word orientation
        size: Grid size

    Returns:
        True if the span lies inside the grid
    """
    if start_row < 0 or start_column < 0:
        return False
    if orientation is Orientation.HORIZONTAL:
        return start_row < size and start_column + len(word) < size
    return start_column < size and start_row + len(word) < size


def letters_match(placed: PlacedWord, grid: Grid) -> bool:
    """Every occupied cell along the span must already hold the same letter."""
    for coord in placed.coords():
        existing = grid[coord.row, coord.column]
        if existing and existing != coord.char:
            return False
    return True


def is_followed(placed: PlacedWord, grid: Grid) -> bool:
    """
    Check whether the word touches another letter at either end.

    Example: "b_e_x_a_m" where b does not belong to "exam" would read as
    one longer word.

    Args:
        placed: Word placement to check
        grid: Grid holding the other words

    Returns:
        True if the cell right before the start or right after the end is taken
    """
    if placed.orientation is Orientation.HORIZONTAL:
        row = placed.start_row
        before = (row, placed.start_column - 1)
        after = (row, placed.end_column)
    else:
        column = placed.start_column
        before = (placed.start_row - 1, column)
        after = (placed.end_row, column)

    for row, column in (before, after):
        if grid.contains(row, column) and not grid.is_empty(row, column):
            return True
    return False


def too_big_neighbouring_border(a: PlacedWord, b: PlacedWord) -> bool:
    """
    Two parallel words on neighbouring lines may share at most one aligned cell.

    Args:
        a: First placement
        b: Second placement, same orientation as a

    Returns:
        True if the words run side by side for more than one cell
    """
    if a.orientation is Orientation.HORIZONTAL:
        if abs(a.start_row - b.start_row) != 1:
            return False
        return len(a.columns() & b.columns()) > 1

    if abs(a.start_column - b.start_column) != 1:
        return False
    return len(a.rows() & b.rows()) > 1


def adjacent_on_line(a: PlacedWord, b: PlacedWord) -> bool:
    """
    Check whether two words on the same line overlap or are one cell apart.

    Ends are exclusive, so |end_a - start_b| == 1 covers both a one-cell
    gap and a one-cell overlap. Longer overlaps ("CAT" under "CATS") are
    rejected as well: parallel words never share a cell.
    """
    if a.orientation is Orientation.HORIZONTAL:
        if a.start_row != b.start_row:
            return False
        a_start, a_end = a.start_column, a.end_column
        b_start, b_end = b.start_column, b.end_column
    else:
        if a.start_column != b.start_column:
            return False
        a_start, a_end = a.start_row, a.end_row
        b_start, b_end = b.start_row, b.end_row

    if a_start < b_end and b_start < a_end:
        return True
    return abs(a_end - b_start) == 1 or abs(b_end - a_start) == 1


def can_place(
    word: str,
    start_row: int,
    start_column: int,
    orientation: Orientation,
    grid: Grid,
    index: DirectionalIndex
) -> bool:
    """
    Decide whether a word can be written at the given position.

    Rules, checked in order:
    1. The span fits inside the grid (strict bound on the extending axis)
    2. Occupied cells along the span hold the same letters
    3. No parallel neighbour shares more than one aligned row/column
    4. No same-line neighbour overlapping or one cell away, and no letter
       touching either end

    Args:
        word: Word to place
        start_row: Start row
        start_column: Start column
        orientation: Word orientation
        grid: Grid built so far
        index: Words already placed on grid, split by orientation

    Returns:
        True if the placement is legal
    """
    if not within_bounds(word, start_row, start_column, orientation, grid.size):
        return False

    placed = PlacedWord(word, start_row, start_column, orientation)

    if not letters_match(placed, grid):
        return False

    parallel = index.same_as(orientation)

    if any(too_big_neighbouring_border(placed, other) for other in parallel):
        return False

    if any(adjacent_on_line(placed, other) for other in parallel):
        return False

    return not is_followed(placed, grid)


def can_place_word(placed: PlacedWord, grid: Grid, index: DirectionalIndex) -> bool:
    """can_place() for an existing PlacedWord."""
    return can_place(
        placed.word,
        placed.start_row,
        placed.start_column,
        placed.orientation,
        grid,
        index
    )
