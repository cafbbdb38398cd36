"""Logging setup for golicense-analyzer.

Library modules only create loggers; handlers are installed by the CLI.
"""
from __future__ import annotations

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from golicense_analyzer.models.scan import Verbosity

_LEVELS = {
    Verbosity.QUIET: logging.ERROR,
    Verbosity.NORMAL: logging.WARNING,
    Verbosity.VERBOSE: logging.DEBUG,
}


def configure_logging(
    verbosity: Verbosity = Verbosity.NORMAL,
    console: Optional[Console] = None,
) -> logging.Logger:
    """Route package log records to a Rich handler on stderr.

    Args:
        verbosity: Output verbosity level; selects the log level.
        console: Optional Rich Console to log to (defaults to stderr).

    Returns:
        The package root logger.
    """
    logger = logging.getLogger("golicense_analyzer")
    logger.setLevel(_LEVELS[verbosity])

    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console if console is not None else Console(stderr=True),
        show_path=False,
        show_time=verbosity == Verbosity.VERBOSE,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    return logger
