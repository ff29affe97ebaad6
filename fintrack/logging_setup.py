"""Logging configuration for fintrack.

Two helpers:

- ``configure_logging(...)``: attach a single ``RichHandler`` to the package
  root logger (``"fintrack"``). Called once by the CLI at startup.
- ``get_logger(name)``: acquire a logger, making sure the package root has a
  ``NullHandler`` when nothing has been configured yet.

Library modules never attach handlers of their own.
"""

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER_NAME = "fintrack"
LOG_LEVEL_ENV = "FINTRACK_LOG_LEVEL"

_configured = False


def parse_level(level: int | str | None, default: int = logging.WARNING) -> int:
    """Parse a level given as an int, a numeric string, or a level name.

    Args:
        level: Level such as logging.INFO, "10" or "debug". None falls back to
            the FINTRACK_LOG_LEVEL environment variable, then to default.
        default: Level used when nothing else is set or the name is unknown.

    Returns:
        Numeric logging level.
    """
    if isinstance(level, int):
        return level
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV)
        if not level:
            return default

    level = level.strip().upper()
    if level.isdigit():
        return int(level)
    numeric = logging.getLevelName(level)
    return numeric if isinstance(numeric, int) else default


def configure_logging(level: int | str | None = None) -> None:
    """Configure the package root logger exactly once.

    Args:
        level: Logging level. See parse_level.
    """
    global _configured
    if _configured:
        return

    logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    for handler in list(logger.handlers):
        if isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)

    numeric_level = parse_level(level)
    handler = RichHandler(console=Console(stderr=True), show_path=False)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))

    logger.setLevel(numeric_level)
    logger.addHandler(handler)
    logger.propagate = False

    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger by name, with silent defaults for library use."""
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    if not _configured and not package_logger.handlers:
        package_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)
