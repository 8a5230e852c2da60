# logging_utils.py

"""
Small logging helpers shared by the generator and the command-line tools.

Library modules only call `get_logger(__name__)`; nothing is printed unless
an entry point calls `configure_root_logger`.

    from logging_utils import get_logger

    logger = get_logger(__name__)
    logger.debug("final seed: %d", seed)
"""

from __future__ import annotations

import logging
from logging import Logger
from typing import Optional

from config import LOG_DATEFMT, LOG_FORMAT, LOG_LEVEL


_LOGGER_CACHE: dict[str, Logger] = {}


def parse_level(level: str | int) -> int:
    """
    Accept either a numeric level or a name such as "debug".
    """
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return value


def configure_root_logger(level: str | int = LOG_LEVEL) -> None:
    """
    Configure stderr logging for a command-line run.

    Call this once from an entry point. If the root logger already has
    handlers (pytest, an embedding application) only the level is changed.

    Args:
        level:
            Logging level, numeric or by name.
    """
    level = parse_level(level)

    root = logging.getLogger()
    if root.handlers:
        root.setLevel(level)
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT))
    logging.basicConfig(level=level, handlers=[handler])


def get_logger(name: Optional[str] = None) -> Logger:
    """
    Get a (cached) logger by name.

    Unlike an entry point, a library module must not install handlers, so
    the logger inherits whatever the root logger is configured with.

    Args:
        name:
            Logger name (usually __name__ in the caller).

    Returns:
        logging.Logger instance.
    """
    if name is None:
        name = "__main__"

    logger = _LOGGER_CACHE.get(name)
    if logger is None:
        logger = logging.getLogger(name)
        _LOGGER_CACHE[name] = logger
    return logger
