"""
Logging for git-activity.

All project loggers live under ``git_activity``. Records go to stderr
through rich, so the summary table and chart paths printed on stdout stay
clean. Only the project's own loggers follow ``--verbose``: matplotlib logs
font discovery at DEBUG on every render and stays at WARNING.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "git_activity"

LEVELS = {
    "quiet": logging.ERROR,
    "normal": logging.WARNING,
    "verbose": logging.DEBUG,
}

_LIBRARY_LOGGERS = ("matplotlib", "PIL")


def setup_logging(
    verbose: bool = False, quiet: bool = False, log_file: Optional[str] = None
) -> logging.Logger:
    """
    Install the stderr handler (and optional file handler) and set the level.

    ``quiet`` wins over ``verbose``. Calling again replaces the handlers of
    the previous call.

    Args:
        verbose: DEBUG for git_activity loggers, with source paths and locals
            in tracebacks
        quiet: ERROR only
        log_file: Also append records to this file

    Returns:
        The ``git_activity`` logger
    """
    verbosity = "quiet" if quiet else "verbose" if verbose else "normal"

    handlers: list[logging.Handler] = [
        RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            tracebacks_show_locals=verbose,
            # Messages contain repository paths and emails, not markup
            markup=False,
            show_time=True,
            show_path=verbose,
        )
    ]

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a")
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
            )
        )
        handlers.append(file_handler)

    logging.basicConfig(
        level=logging.WARNING, format="%(message)s", datefmt="[%X]", handlers=handlers, force=True
    )
    for name in _LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return apply_verbosity(verbosity)


def apply_verbosity(verbosity: str) -> logging.Logger:
    """Set the git_activity level from a ``quiet``/``normal``/``verbose`` setting."""
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(LEVELS.get(verbosity, logging.WARNING))
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger under ``git_activity``; ``__name__`` of project modules passes through."""
    if name is None:
        return logging.getLogger(ROOT_LOGGER)
    if not name.startswith(ROOT_LOGGER):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
