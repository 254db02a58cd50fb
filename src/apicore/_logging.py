"""Centralize logger creation for the request runtime.

'why': one package logger, configured from ClientConfig, shared by every component
"""
from __future__ import annotations

import logging
from typing import Final


_ROOT_LOGGER_NAME: Final[str] = "apicore"
LOG_LEVELS: Final[dict[str, int]] = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
}

_root: logging.Logger | None = None


def _root_logger() -> logging.Logger:
    global _root
    if _root is not None:
        return _root
    logger = logging.getLogger(_ROOT_LOGGER_NAME)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter(fmt="%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(handler)
    logger.propagate = False
    _root = logger
    return logger


def get_logger(component: str | None = None) -> logging.Logger:
    """Return the package logger, or a child logger for `component`."""

    root = _root_logger()
    if not component:
        return root
    return root.getChild(component)


def set_log_level(level: str) -> None:
    """Apply `level` to the package logger; unknown names fall back to INFO."""

    _root_logger().setLevel(LOG_LEVELS.get(level.upper(), logging.INFO))
