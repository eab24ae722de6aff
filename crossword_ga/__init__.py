"""
Crossword GA - genetic search for connected crossword layouts

Places a fixed list of words on a square grid so that no word breaks the
grid bounds or touches a neighbour illegally, and all words form one
connected crossword through letter crossings.

Key Features:
- Rejection-sampled random placement with strict feasibility rules
- Fitness = largest connected component share + average per-word score
- Single-cut roulette selection
- Three-tier crossover (same position, crossing, random)
- Component-based mutation

Modules:
- data_models: Grid, placements, candidates and fitness reports
- feasibility: Placement legality rules
- builder: Random candidate and initial population construction
- fitness: Intersection graph, connectivity and fitness evaluation
- selection: Roulette wheel selection
- crossover: Per-word recombination of two parents
- mutation: Connectivity-component based re-placement
- orchestration: Generational loop with restarts and budgets
- config_loader: GA configuration (YAML)
- io_utils: Word lists, solution files, grid rendering
- cli: Command-line interface for run configurations
"""

__version__ = "0.1.0"

from .builder import InfeasibleWordError
from .config_loader import ConfigurationError, GAConfig, load_config
from .data_models import Candidate, FitnessReport, Grid, Orientation, PlacedWord
from .orchestration import EmptyInputError, NoSolutionFound, SearchResult, run_search

__all__ = [
    "Candidate",
    "ConfigurationError",
    "EmptyInputError",
    "FitnessReport",
    "GAConfig",
    "Grid",
    "InfeasibleWordError",
    "NoSolutionFound",
    "Orientation",
    "PlacedWord",
    "SearchResult",
    "load_config",
    "run_search",
]
