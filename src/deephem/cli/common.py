"""
Command-line interface utilities for deephem.

This module provides the shared ephemeris-file option, file loading with
error reporting, and logging configuration from verbosity flags.
"""

import logging
from typing import Any, Callable, Dict

import click

from ..de import DEEphemeris, load_file
from ..errors import EphemerisError
from ..logging import set_log_level

FILE_ENV_VAR = "DEEPHEM_FILE"


def ephemeris_file_option(func: Callable[..., Any]) -> Callable[..., Any]:
    """Add the --file option, defaulting to $DEEPHEM_FILE."""
    return click.option(
        "-f",
        "--file",
        "file_path",
        envvar=FILE_ENV_VAR,
        required=True,
        type=click.Path(exists=True, dir_okay=False),
        help=f"Path to a JPL DE binary file (default: ${FILE_ENV_VAR})",
    )(func)


def open_ephemeris(file_path: str) -> DEEphemeris:
    """Load an ephemeris file, turning load failures into CLI errors."""
    try:
        return load_file(file_path)
    except (EphemerisError, OSError) as e:
        raise click.ClickException(f"Cannot load {file_path}: {e}")


def configure_logging(args: Dict[str, Any]) -> None:
    """
    Configure logging based on command line arguments.

    Args:
        args: Parsed verbosity flags ("quiet", "debug", "verbose")
    """
    quiet = args.get("quiet", False)
    debug = args.get("debug", False)
    verbosity = args.get("verbose", 0)

    if quiet:
        log_level = logging.ERROR
    elif debug:
        log_level = logging.DEBUG
    else:
        # 0 -> WARNING, 1 -> INFO, 2+ -> DEBUG
        if verbosity == 0:
            log_level = logging.WARNING
        elif verbosity == 1:
            log_level = logging.INFO
        else:
            log_level = logging.DEBUG

    set_log_level(log_level)
