"""
I/O utilities for the crossword GA.

Handles word-list parsing, solution serialization, grid rendering and
input/output file pairing for batch runs. The search itself never touches
the filesystem; these helpers sit around it.
"""

import re
from pathlib import Path
from typing import List, Tuple, Union

from .data_models import Candidate, Grid


INPUT_PATTERN = re.compile(r"input([0-9]+)\.txt")


def load_words(words_path: Union[str, Path]) -> List[str]:
    """
    Load a word list, one word per line.

    Surrounding whitespace is stripped and blank lines are skipped.

    Args:
        words_path: Path to the word list

    Returns:
        Words in file order

    Raises:
        FileNotFoundError: If the file doesn't exist
    """
    words_path = Path(words_path)

    if not words_path.exists():
        raise FileNotFoundError(f"Word list not found: {words_path}")

    with open(words_path, 'r', encoding='utf-8') as f:
        return [line.strip() for line in f if line.strip()]


def format_solution(candidate: Candidate) -> str:
    """
    Render a candidate as solution text.

    One line per input word: "<row> <column> <orientation>" where
    orientation is 0 for horizontal and 1 for vertical.
    """
    lines = [
        f"{row} {column} {orientation.value}"
        for row, column, orientation in candidate.solution()
    ]
    return "\n".join(lines) + "\n"


def save_solution(
    candidate: Candidate,
    output_path: Union[str, Path],
    overwrite: bool = False
) -> Path:
    """
    Save a candidate's placements to a solution file.

    Args:
        candidate: Solved candidate (placements in input order)
        output_path: Path for the solution file
        overwrite: If True, overwrite existing file

    Returns:
        Path to saved file

    Raises:
        FileExistsError: If file exists and overwrite=False
    """
    output_path = Path(output_path)

    if output_path.exists() and not overwrite:
        raise FileExistsError(f"Output file already exists: {output_path}")

    # Create parent directory if needed
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w', encoding='utf-8') as f:
        f.write(format_solution(candidate))

    return output_path


def grid_to_text(grid: Grid, empty: str = "_") -> str:
    """Render a grid as rows of space-separated letters."""
    rows = []
    for row in range(grid.size):
        rows.append(" ".join(grid[row, column] or empty for column in range(grid.size)))
    return "\n".join(rows)


def output_name_for(input_name: str) -> str:
    """
    Map an input file name to its output file name.

    input7.txt -> output7.txt; names without a number map to output0.txt.
    """
    match = INPUT_PATTERN.fullmatch(input_name)
    number = int(match.group(1)) if match else 0
    return f"output{number}.txt"


def pair_input_files(
    input_dir: Union[str, Path],
    output_dir: Union[str, Path]
) -> List[Tuple[Path, Path]]:
    """
    Find input<N>.txt files and pair them with output<N>.txt paths.

    Args:
        input_dir: Directory holding the word lists
        output_dir: Directory for the solutions

    Returns:
        List of (input_path, output_path) sorted by input number

    Raises:
        NotADirectoryError: If input_dir is not a directory
    """
    input_dir = Path(input_dir)
    output_dir = Path(output_dir)

    if not input_dir.is_dir():
        raise NotADirectoryError(f"Input directory not found: {input_dir}")

    inputs = [
        path for path in input_dir.iterdir()
        if path.is_file() and INPUT_PATTERN.fullmatch(path.name)
    ]
    inputs.sort(key=lambda path: int(INPUT_PATTERN.fullmatch(path.name).group(1)))

    return [(path, output_dir / output_name_for(path.name)) for path in inputs]
