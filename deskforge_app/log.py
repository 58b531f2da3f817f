"""Logging setup.

The terminal belongs to curses while a form is open, so records only ever
go to a file under the user's state directory.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from .paths import state_dir

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
DEFAULT_LEVEL = "WARNING"

__all__ = ["setup_logging", "resolve_level"]


def resolve_level(name: Optional[str]) -> int:
    """Map a level name to a ``logging`` level, defaulting to WARNING."""
    level = logging.getLevelName((name or DEFAULT_LEVEL).upper())
    if isinstance(level, int):
        return level
    return logging.WARNING


def setup_logging(log_file: Optional[Path] = None, level: Optional[str] = None) -> Path:
    """Attach a file handler to the package logger and return the log path."""
    if log_file is None:
        log_file = state_dir() / "deskforge.log"
    if level is None:
        level = os.environ.get("DESKFORGE_LOG_LEVEL")

    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logger = logging.getLogger("deskforge_app")
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
        existing.close()
    logger.addHandler(handler)
    logger.setLevel(resolve_level(level))
    logger.propagate = False
    return log_file
