"""
Centralized logging configuration for the tiler.

Usage:
    from core.logging_config import setup_logging
    setup_logging("DEBUG")  # Call once at startup

Loggers of the core, render and guis packages write to the console.
"""

import logging
import sys
from typing import Union

LOGGER_NAMES = ("core", "render", "guis")

_logging_initialized = False


def setup_logging(level: Union[int, str] = logging.WARNING) -> None:
    """
    Configure console logging for the tiler packages.

    Args:
        level: Console level, as a logging constant or its name
    """
    global _logging_initialized

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {level}")

    formatter = logging.Formatter(
        fmt="%(levelname)-8s | %(name)-25s | %(message)s"
    )
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(formatter)

    for name in LOGGER_NAMES:
        package_logger = logging.getLogger(name)
        package_logger.setLevel(level)
        # Clear any existing handlers (for re-initialization)
        package_logger.handlers.clear()
        package_logger.addHandler(handler)
        package_logger.propagate = False

    _logging_initialized = True
    logging.getLogger("core").debug("Logging initialized at %s", logging.getLevelName(level))


def is_logging_initialized() -> bool:
    """Check if logging has been set up."""
    return _logging_initialized
