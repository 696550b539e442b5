"""Logging helpers for the yucon package."""

from __future__ import annotations

import logging
import sys

DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
LOGGER_NAME = "yucon"


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """Return a logger under the ``yucon`` hierarchy, installing the stderr handler once."""
    base = logging.getLogger(LOGGER_NAME)
    if not base.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
        base.addHandler(handler)
        base.setLevel(logging.WARNING)
    return logging.getLogger(name)


def set_level(level: str | int) -> None:
    """Set the level of the package logger, e.g. ``"DEBUG"`` or ``logging.INFO``."""
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"unknown log level: {level!r}")
        level = resolved
    get_logger().setLevel(level)


__all__ = ["DEFAULT_FORMAT", "LOGGER_NAME", "get_logger", "set_level"]
