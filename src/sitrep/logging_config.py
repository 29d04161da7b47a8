"""Logging for Sitrep.

Reports go to stdout, so every log line goes to stderr through rich. Per-file
parse failures log at WARNING and are visible by default; per-file progress
logs at DEBUG and only shows with ``--verbose``.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "sitrep"


def log_level(verbose: bool = False, quiet: bool = False) -> int:
    """Level for the CLI flags; ``quiet`` wins over ``verbose``."""
    if quiet:
        return logging.ERROR
    if verbose:
        return logging.DEBUG
    return logging.WARNING


def setup_logging(verbose: bool = False, quiet: bool = False) -> logging.Logger:
    """Install a stderr RichHandler and return the ``sitrep`` logger.

    Verbose runs also show timestamps, source locations and traceback locals.
    """
    level = log_level(verbose, quiet)
    handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        tracebacks_show_locals=verbose,
        markup=False,
        show_time=verbose,
        show_path=verbose,
    )
    logging.basicConfig(
        level=level, format="%(message)s", datefmt="[%X]", handlers=[handler], force=True
    )

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger under the ``sitrep`` namespace, e.g. ``sitrep.scanning.visitor``."""
    if name is None:
        return logging.getLogger(ROOT_LOGGER)
    if not name.startswith(ROOT_LOGGER):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
