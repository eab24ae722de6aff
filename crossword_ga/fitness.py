"""
Fitness evaluation for crossword candidates.

Total fitness = connectivity score + average per-word score, in [0, 2]:

- per-word score: whether the word crosses at least one other word,
  averaged with whether it is free of touching letters at its ends
  (when score_adjacency is on)
- connectivity score: size of the largest connected component of the
  intersection graph divided by the number of words
"""

from typing import Dict, FrozenSet, List, Optional, Sequence, Set, Tuple

import numpy as np

from .config_loader import GAConfig
from .data_models import Candidate, FitnessReport, Grid, PlacedWord
from .feasibility import is_followed


IntersectionGraph = Dict[PlacedWord, Set[PlacedWord]]

MAX_CRITERIA_WEIGHT = 1.0


def word_cells(placements: Sequence[PlacedWord]) -> Dict[PlacedWord, FrozenSet[Tuple[int, int]]]:
    """Map each placement to the set of cells it occupies."""
    return {placed: placed.cells() for placed in placements}


def intersection_graph(placements: Sequence[PlacedWord]) -> IntersectionGraph:
    """
    Build the symmetric intersection graph of a placement list.

    Two placements are adjacent iff they share at least one cell.

    Args:
        placements: Placed words of one candidate

    Returns:
        Dictionary mapping each placement to the placements it crosses
    """
    cells = word_cells(placements)
    owners: Dict[Tuple[int, int], List[PlacedWord]] = {}
    for placed, placed_cells in cells.items():
        for cell in placed_cells:
            owners.setdefault(cell, []).append(placed)

    graph: IntersectionGraph = {placed: set() for placed in placements}
    for sharing in owners.values():
        if len(sharing) < 2:
            continue
        for placed in sharing:
            graph[placed].update(other for other in sharing if other != placed)
    return graph


def connectivity_components(
    graph: IntersectionGraph,
    order: Optional[Sequence[PlacedWord]] = None
) -> List[List[PlacedWord]]:
    """
    Partition placements into connected components.

    Iterative depth-first search over the intersection graph. Components are
    returned in discovery order; each component lists its placements in the
    order given by `order` (graph key order by default).

    Args:
        graph: Intersection graph
        order: Placement order used to seed the search

    Returns:
        List of components, each a list of placements
    """
    if order is None:
        order = list(graph)
    position = {placed: i for i, placed in enumerate(order)}

    visited: Set[PlacedWord] = set()
    components = []

    for start in order:
        if start in visited:
            continue
        component = []
        stack = [start]
        visited.add(start)
        while stack:
            current = stack.pop()
            component.append(current)
            for neighbour in graph[current]:
                if neighbour not in visited:
                    visited.add(neighbour)
                    stack.append(neighbour)
        component.sort(key=lambda placed: position[placed])
        components.append(component)

    return components


def largest_component_size(graph: IntersectionGraph) -> int:
    components = connectivity_components(graph)
    if not components:
        return 0
    return max(len(component) for component in components)


def connectivity_score(graph: IntersectionGraph) -> float:
    """Largest component size divided by word count (0.0 for no words)."""
    if not graph:
        return 0.0
    return largest_component_size(graph) / len(graph)


def word_fitness(placed: PlacedWord, grid: Grid, graph: IntersectionGraph,
                 config: GAConfig) -> float:
    """
    Score a single word in [0, 1].

    crossed = 1 if the word crosses at least one other word, else 0.
    With score_adjacency on, the score is (crossed + not_followed) / 2
    where not_followed = 1 unless a letter touches either end of the word.

    Args:
        placed: Placement being scored
        grid: Candidate grid
        graph: Candidate intersection graph
        config: GA configuration

    Returns:
        Word score
    """
    crossed = MAX_CRITERIA_WEIGHT if graph.get(placed) else 0.0
    if not config.score_adjacency:
        return crossed / config.word_criteria_count

    not_followed = 0.0 if is_followed(placed, grid) else MAX_CRITERIA_WEIGHT
    return (crossed + not_followed) / config.word_criteria_count


def evaluate(candidate: Candidate, config: GAConfig) -> FitnessReport:
    """
    Compute the fitness report of a candidate.

    Args:
        candidate: Candidate to evaluate
        config: GA configuration

    Returns:
        FitnessReport with per-word scores aligned with placements
    """
    graph = intersection_graph(candidate.placements)
    scores = tuple(
        word_fitness(placed, candidate.grid, graph, config)
        for placed in candidate.placements
    )
    return FitnessReport(per_word_scores=scores, connectivity_score=connectivity_score(graph))


def total_fitness(candidate: Candidate, config: GAConfig) -> float:
    return evaluate(candidate, config).total


def fitness_values(population: Sequence[Candidate], config: GAConfig) -> np.ndarray:
    """Total fitness of every candidate, recomputed fresh."""
    return np.array([total_fitness(candidate, config) for candidate in population], dtype=float)


def letters_connected(words: Sequence[str]) -> bool:
    """
    Check whether a fully connected layout is possible at all.

    Words can only cross on a shared letter, so the graph linking words
    that share a letter must be connected. A lone word has nothing to
    cross, so it never reaches full fitness either.

    Args:
        words: Input words

    Returns:
        True if the shared-letter graph over at least two words is connected
    """
    if len(words) < 2:
        return False

    letters = [set(word) for word in words]
    reached = {0}
    stack = [0]
    while stack:
        current = stack.pop()
        for other in range(len(words)):
            if other not in reached and letters[current] & letters[other]:
                reached.add(other)
                stack.append(other)
    return len(reached) == len(words)
