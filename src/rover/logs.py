"""Logging setup. Records always go to stderr so stdout stays a clean body."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

from .config import LogLevel

LOGGER_NAME = "rover"


def configure_logging(level: LogLevel | None, console: Console | None = None) -> logging.Logger:
    """
    Attach a single rich handler to the package logger.

    Args:
        level: Requested verbosity; None keeps only warnings and errors
        console: Console to log through (defaults to one bound to stderr)

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=False,
        show_path=False,
        markup=False,
    )
    logger.addHandler(handler)
    logger.setLevel(level.to_logging() if level is not None else logging.WARNING)
    logger.propagate = False
    return logger
