"""
Logging setup for BulkPTR

All modules log through ``logging.getLogger(__name__)`` under the
``bulkptr`` hierarchy. Records go to stderr through rich, so stdout
stays clean for results.
"""

import logging
import os
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler


LOGGER_NAME = "bulkptr"
LEVELS = [logging.WARNING, logging.INFO, logging.DEBUG]


def level_for(verbosity: int = 0, env_level: Optional[str] = None) -> int:
    """
    Pick a level from the -v count, falling back to BULKPTR_LOG_LEVEL.

    Args:
        verbosity: Number of -v flags
        env_level: Level name override (default: read from environment)

    Returns:
        logging level constant
    """
    if verbosity > 0:
        return LEVELS[min(verbosity, len(LEVELS) - 1)]
    env_level = env_level if env_level is not None else os.getenv("BULKPTR_LOG_LEVEL", "")
    if env_level:
        return getattr(logging, env_level.upper(), logging.WARNING)
    return logging.WARNING


def setup_logging(verbosity: int = 0, console: Optional[Console] = None) -> logging.Logger:
    """
    Configure the ``bulkptr`` logger.

    Args:
        verbosity: Number of -v flags (0: WARNING, 1: INFO, 2+: DEBUG)
        console: Console to log to (default: a stderr console)

    Returns:
        Configured logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level_for(verbosity))
    logger.propagate = False

    # Remove existing handlers to avoid duplicates
    logger.handlers.clear()

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=verbosity > 1,
        rich_tracebacks=True,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.addHandler(handler)
    return logger
