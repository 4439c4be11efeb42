"""Logging helpers shared by every fractalizer module."""

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | int = "INFO") -> None:
    """
    Configure the root ``fractalizer`` logger once.

    Safe to call repeatedly; handlers are only attached the first time.

    Args:
        level: Logging level name or number (default INFO)
    """
    root = logging.getLogger("fractalizer")
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    root.setLevel(level)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
