"""Logging setup for the command-line entry point.

Library modules only create loggers; handlers are installed here, once.
"""

from __future__ import annotations

import logging
import os

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def resolve_level(verbose: bool = False) -> int:
    if verbose:
        return logging.INFO
    name = os.environ.get("LENDING_LOG_LEVEL", "WARNING").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.WARNING


def configure_logging(level: int = logging.WARNING) -> None:
    logger = logging.getLogger("lending")
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
