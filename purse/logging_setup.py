"""Centralized logging configuration for the ``purse`` package.

- ``configure_logging(...)``: attach a single ``RichHandler`` to the package
  logger (``"purse"``). Called by the CLI at startup.
- ``get_logger(name)``: acquire a logger, making sure the package logger has
  at least a ``NullHandler`` when nothing has been configured.

Library modules never attach their own handlers.
"""

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

_PKG_LOGGER_NAME = "purse"
_LEVEL_ENV_VAR = "PURSE_LOG_LEVEL"

_handler: RichHandler | None = None


def _parse_level(level: int | str | None) -> int:
    if level is None:
        level = os.getenv(_LEVEL_ENV_VAR)
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        level = level.strip().upper()
        if level.isdigit():
            return int(level)
        numeric = getattr(logging, level, None)
        if isinstance(numeric, int):
            return numeric
    return logging.WARNING


def configure_logging(level: int | str | None = None) -> None:
    """Configure the package logger.

    Args:
        level: Level as int or name (e.g. "DEBUG"). If None, uses the
            PURSE_LOG_LEVEL environment variable, else WARNING.

    Calling again only updates the level.
    """
    global _handler

    logger = logging.getLogger(_PKG_LOGGER_NAME)
    numeric = _parse_level(level)

    if _handler is None:
        for h in list(logger.handlers):
            if isinstance(h, logging.NullHandler):
                logger.removeHandler(h)

        _handler = RichHandler(
            console=Console(stderr=True),
            show_time=False,
            show_path=False,
            rich_tracebacks=True,
        )
        _handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        logger.addHandler(_handler)
        logger.propagate = False

    _handler.setLevel(numeric)
    logger.setLevel(numeric)


def get_logger(name: str) -> logging.Logger:
    """Return a logger by name, silent until logging is configured."""
    pkg_logger = logging.getLogger(_PKG_LOGGER_NAME)
    if _handler is None and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)
