"""
CLI module for the crossword GA.

Handles run configuration loading, validation, and mode dispatching.
"""

from typing import Dict, Any, List
from pathlib import Path
import yaml

from .config_loader import GAConfig, load_config, print_config_summary
from .io_utils import load_words, pair_input_files, save_solution


class ConfigValidationError(Exception):
    """Raised when run configuration is invalid."""
    pass


def load_run_config(config_path: str) -> Dict[str, Any]:
    """
    Load run configuration from YAML file.

    Args:
        config_path: Path to run configuration YAML file

    Returns:
        Dictionary containing run configuration

    Raises:
        FileNotFoundError: If config file doesn't exist
        ConfigValidationError: If config is invalid
    """
    config_file = Path(config_path)

    if not config_file.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    try:
        with open(config_file, 'r') as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigValidationError(f"Invalid YAML in configuration file: {e}")

    if config is None:
        raise ConfigValidationError("Configuration file is empty")

    if not isinstance(config, dict):
        raise ConfigValidationError("Configuration file must contain a mapping")

    return config


def validate_run_config(config: Dict[str, Any]) -> None:
    """
    Validate run configuration structure.

    Args:
        config: Run configuration dictionary

    Raises:
        ConfigValidationError: If configuration is invalid
    """
    for field in ['input', 'output']:
        if field not in config:
            raise ConfigValidationError(f"Missing required field: '{field}'")
        if not isinstance(config[field], dict):
            raise ConfigValidationError(f"'{field}' must be a dictionary")

    input_config = config['input']
    output_config = config['output']

    has_words = 'words' in input_config
    has_dir = 'words_dir' in input_config

    if not has_words and not has_dir:
        raise ConfigValidationError(
            "Input requires either 'input.words' or 'input.words_dir'"
        )

    if has_words and has_dir:
        raise ConfigValidationError(
            "Input cannot have both 'words' and 'words_dir'. "
            "Please specify only one."
        )

    if has_words:
        words_path = Path(input_config['words'])
        if not words_path.exists():
            raise ConfigValidationError(f"Word list not found: {words_path}")
        if 'path' not in output_config:
            raise ConfigValidationError("Single mode requires 'output.path' field")

    if has_dir:
        dir_path = Path(input_config['words_dir'])
        if not dir_path.exists():
            raise ConfigValidationError(f"Word list directory not found: {dir_path}")
        if not dir_path.is_dir():
            raise ConfigValidationError(f"Word list path is not a directory: {dir_path}")
        if 'dir' not in output_config:
            raise ConfigValidationError("Batch mode requires 'output.dir' field")

    if 'ga' in config and not isinstance(config['ga'], dict):
        raise ConfigValidationError("'ga' must be a dictionary")

    if 'ga_config' in config and not Path(config['ga_config']).exists():
        raise ConfigValidationError(f"GA config not found: {config['ga_config']}")


def build_ga_config(config: Dict[str, Any]) -> GAConfig:
    """
    Assemble the GA configuration for a run.

    Precedence (lowest first): defaults, 'ga_config' file, inline 'ga'
    mapping, top-level 'random_seed'.

    Args:
        config: Validated run configuration

    Returns:
        GAConfig for the run
    """
    ga_config = GAConfig()
    if 'ga_config' in config:
        ga_config = load_config(config['ga_config'])

    overrides = dict(config.get('ga') or {})
    if 'random_seed' in config:
        overrides['random_seed'] = config['random_seed']

    if overrides:
        ga_config = ga_config.replace(**overrides)

    return ga_config


def run_from_config(config_path: str) -> List[Path]:
    """
    Load run configuration and execute appropriate mode.

    This is the main entry point called by ga_cli.py.

    Args:
        config_path: Path to run configuration YAML file

    Returns:
        Paths of the solution files written

    Raises:
        FileNotFoundError: If config file doesn't exist
        ConfigValidationError: If config is invalid
        Various exceptions from the search (single mode only)
    """
    from .orchestration import NoSolutionFound, run_search

    print(f"Loading configuration from: {config_path}")
    config = load_run_config(config_path)

    print(f"Validating configuration...")
    validate_run_config(config)

    ga_config = build_ga_config(config)
    print_config_summary(ga_config)

    overwrite = config['output'].get('overwrite', False)
    written = []

    if 'words' in config['input']:
        print(f"Mode: single\n")
        words = load_words(config['input']['words'])
        result = run_search(words, ga_config)
        written.append(save_solution(result.candidate, config['output']['path'], overwrite=overwrite))
        print(f"Solution written to: {written[-1]}")
    else:
        print(f"Mode: batch\n")
        pairs = pair_input_files(config['input']['words_dir'], config['output']['dir'])
        print(f"Found {len(pairs)} word lists")
        for input_path, output_path in pairs:
            print(f"\n{input_path.name}:")
            words = load_words(input_path)
            try:
                result = run_search(words, ga_config)
            except NoSolutionFound as e:
                print(f"  No solution: {e}")
                continue
            except ValueError as e:
                # empty, blank, duplicate or oversized words
                print(f"  Invalid word list: {e}")
                continue
            written.append(save_solution(result.candidate, output_path, overwrite=overwrite))
            print(f"  Solved in {result.generations} generations -> {output_path}")

    print("\nRun completed successfully!")
    return written
