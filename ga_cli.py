#!/usr/bin/env python3
"""
Crossword GA CLI - Minimal entry point.

This is the command-line interface for the crossword genetic algorithm.
All configuration is specified in YAML files.

Usage:
    crossword-ga run_config.yaml
    crossword-ga --config run_config.yaml
    crossword-ga --config=run_config.yaml
    crossword-ga --help

Examples:
    # Solve a single word list
    crossword-ga run_config.yaml

    # Solve every inputs/input<N>.txt into outputs/output<N>.txt
    crossword-ga batch_run.yaml

Run configuration keys:
    input.words / input.words_dir     word list file or directory
    output.path / output.dir          solution file or directory
    output.overwrite                  allow replacing existing solutions
    ga_config                         optional GA config YAML
    ga                                optional inline GA options
    random_seed                       optional seed override

Exit status:
    0  solution(s) written
    1  configuration or word list error
    2  bad command line
    3  no solution found (single mode)
"""

import sys
from typing import List, Optional

from crossword_ga.cli import ConfigValidationError, run_from_config
from crossword_ga.config_loader import ConfigurationError
from crossword_ga.orchestration import NoSolutionFound

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_USAGE = 2
EXIT_NO_SOLUTION = 3

HELP_FLAGS = ('-h', '--help', 'help')


class UsageError(Exception):
    """Raised for a malformed command line."""
    pass


def parse_config_path(argv: List[str]) -> Optional[str]:
    """
    Extract the run configuration path from the command-line arguments.

    Accepts "<path>", "--config <path>" and "--config=<path>".

    Args:
        argv: Arguments without the program name

    Returns:
        The configuration path, or None when help was requested

    Raises:
        UsageError: If the path is missing or extra arguments follow it
    """
    if not argv:
        raise UsageError("a run configuration file is required")
    if argv[0] in HELP_FLAGS:
        return None

    first, rest = argv[0], argv[1:]
    if first.startswith('--config='):
        path = first.split('=', 1)[1]
    elif first == '--config':
        if not rest:
            raise UsageError("--config requires an argument")
        path, rest = rest[0], rest[1:]
    elif first.startswith('-'):
        raise UsageError(f"unknown option: {first}")
    else:
        path = first

    if not path:
        raise UsageError("empty run configuration path")
    if rest:
        raise UsageError(f"unexpected arguments: {' '.join(rest)}")
    return path


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for crossword GA CLI.

    Args:
        argv: Arguments without the program name (sys.argv[1:] when None)

    Returns:
        Process exit status
    """
    try:
        config_path = parse_config_path(sys.argv[1:] if argv is None else argv)
    except UsageError as e:
        print(f"Error: {e}")
        print(__doc__)
        return EXIT_USAGE

    if config_path is None:
        print(__doc__)
        return EXIT_OK

    try:
        run_from_config(config_path)
    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        return EXIT_ERROR
    except NoSolutionFound as e:
        print(f"\nNo solution: {e}")
        if e.best_fitness is not None:
            print(f"Best fitness reached: {e.best_fitness:.3f} after {e.generations} generations")
        return EXIT_NO_SOLUTION
    except (FileNotFoundError, ConfigValidationError, ConfigurationError) as e:
        print(f"\nConfiguration error: {e}")
        return EXIT_ERROR
    except ValueError as e:
        # empty, blank, duplicate or oversized words
        print(f"\nInvalid word list: {e}")
        return EXIT_ERROR

    return EXIT_OK


if __name__ == '__main__':
    sys.exit(main())
