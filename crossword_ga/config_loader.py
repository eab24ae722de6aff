"""
Configuration Loading System

Loads YAML configuration files and converts them to the GAConfig object
passed explicitly through the crossword GA.
"""

from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from .data_models import GRID_SIZE, MAX_FITNESS


MUTATION_POLICIES = ("components", "last_component")


class ConfigurationError(Exception):
    """Raised when configuration is invalid"""
    pass


@dataclass
class GAConfig:
    """
    Parameters of the genetic search.

    Attributes:
        grid_size: Side of the square grid
        population_size: Candidates per generation
        mutation_rate: Probability a connectivity component is mutated
        include_parent_probability: Chance a parent is copied into the next generation
        fitness_threshold: Total fitness that ends the search
        max_steps: Generations before restarting from a fresh population (None = never)
        max_restarts: Restarts before giving up (None = unbounded)
        time_limit: Wall-clock budget in seconds (None = unbounded)
        max_placement_attempts: Random placement attempts per word before giving up
        score_adjacency: Fold the "not followed" criterion into the per-word score
        mutation_policy: "components" or "last_component"
        random_seed: Seed for the numpy generator (None = fresh entropy)
        verbose: Print progress while searching
        progress_every: Generations between progress lines
    """
    grid_size: int = GRID_SIZE
    population_size: int = 100
    mutation_rate: float = 0.33
    include_parent_probability: float = 0.25
    fitness_threshold: float = 2.0
    max_steps: Optional[int] = 1000
    max_restarts: Optional[int] = None
    time_limit: Optional[float] = None
    max_placement_attempts: int = 10000
    score_adjacency: bool = True
    mutation_policy: str = "components"
    random_seed: Optional[int] = None
    verbose: bool = False
    progress_every: int = 50

    @property
    def word_criteria_count(self) -> int:
        """Number of per-word criteria averaged into the word score."""
        return 2 if self.score_adjacency else 1

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "GAConfig":
        """
        Build a config from a mapping, rejecting unknown keys and bad values.

        Args:
            data: Mapping of option name to value (None means all defaults)

        Returns:
            Validated GAConfig

        Raises:
            ConfigurationError: If keys are unknown or values invalid
        """
        data = dict(data or {})
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(f"Unknown GA option(s): {', '.join(unknown)}")

        issues = validate_config(data)
        if issues:
            raise ConfigurationError("; ".join(issues))

        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def replace(self, **changes: Any) -> "GAConfig":
        """Return a validated copy with some options changed."""
        data = self.to_dict()
        data.update(changes)
        return GAConfig.from_dict(data)


def load_config(config_path: Union[str, Path] = "ga_config.yaml") -> GAConfig:
    """Load GA configuration from YAML file"""
    try:
        with open(config_path, 'r') as f:
            config = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigurationError(f"Configuration file not found: {config_path}")
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in configuration file: {e}")

    if config is not None and not isinstance(config, dict):
        raise ConfigurationError(f"Configuration file must contain a mapping: {config_path}")

    return GAConfig.from_dict(config)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_config(config: Dict[str, Any]) -> List[str]:
    """
    Validate GA configuration and return list of issues

    Returns:
        List of validation error messages (empty if valid)
    """
    issues = []

    grid_size = config.get("grid_size", GRID_SIZE)
    if not _is_int(grid_size) or grid_size < 2:
        issues.append("grid_size must be an integer >= 2")

    population_size = config.get("population_size", 100)
    if not _is_int(population_size) or population_size <= 0:
        issues.append("population_size must be a positive integer")

    for name in ("mutation_rate", "include_parent_probability"):
        value = config.get(name, 0.0)
        if not _is_number(value) or not 0.0 <= value <= 1.0:
            issues.append(f"{name} must be a number in [0, 1]")

    threshold = config.get("fitness_threshold", 2.0)
    if not _is_number(threshold) or not 0.0 < threshold <= MAX_FITNESS:
        issues.append(f"fitness_threshold must be a number in (0, {MAX_FITNESS}]")

    for name in ("max_steps", "max_restarts"):
        value = config.get(name)
        if value is not None and (not _is_int(value) or value < 0):
            issues.append(f"{name} must be a non-negative integer or null")

    if config.get("max_steps") == 0:
        issues.append("max_steps must be at least 1 when set")

    time_limit = config.get("time_limit")
    if time_limit is not None and (not _is_number(time_limit) or time_limit <= 0):
        issues.append("time_limit must be a positive number of seconds or null")

    attempts = config.get("max_placement_attempts", 10000)
    if not _is_int(attempts) or attempts <= 0:
        issues.append("max_placement_attempts must be a positive integer")

    policy = config.get("mutation_policy", "components")
    if policy not in MUTATION_POLICIES:
        issues.append(
            f"mutation_policy must be one of {', '.join(MUTATION_POLICIES)}, got: {policy}"
        )

    seed = config.get("random_seed")
    if seed is not None and (not _is_int(seed) or seed < 0):
        issues.append("random_seed must be a non-negative integer or null")

    progress_every = config.get("progress_every", 50)
    if not _is_int(progress_every) or progress_every <= 0:
        issues.append("progress_every must be a positive integer")

    return issues


def print_config_summary(config: GAConfig) -> None:
    """Print a summary of the configuration"""
    print("=" * 50)
    print("GA CONFIGURATION")
    print("=" * 50)
    print(f"Grid Size: {config.grid_size} x {config.grid_size}")
    print(f"Population: {config.population_size}")
    print(f"Mutation rate: {config.mutation_rate} ({config.mutation_policy})")
    print(f"Parent inclusion probability: {config.include_parent_probability}")
    print(f"Fitness threshold: {config.fitness_threshold}")
    print(f"Max steps per restart: {config.max_steps if config.max_steps is not None else 'unbounded'}")
    print(f"Max restarts: {config.max_restarts if config.max_restarts is not None else 'unbounded'}")
    print(f"Time limit: {config.time_limit if config.time_limit is not None else 'none'}")
    print(f"Word criteria: {config.word_criteria_count}")
    print("=" * 50)
