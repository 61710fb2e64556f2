# src/centraldeudores/logging_utils.py
"""
Logging for centraldeudores.

Everything logs under the "centraldeudores" logger tree. Entry points accept
an explicit logger and fall back to `get_logger()` when given None:

    lookup_debtor_chart(None, "20-12345678-6")   # logs to "centraldeudores"
    search(None, state)                          # logs to "centraldeudores.session"

The level defaults to $CENTRALDEUDORES_LOG_LEVEL (e.g. "WARNING"), else INFO.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional, TextIO, Union


LOGGER_NAME = "centraldeudores"
LOG_LEVEL_ENV = "CENTRALDEUDORES_LOG_LEVEL"


def _qualified_name(name: Optional[str]) -> str:
    if not name:
        return LOGGER_NAME
    if name == LOGGER_NAME or name.startswith(LOGGER_NAME + "."):
        return name
    return f"{LOGGER_NAME}.{name}"


def _resolve_level(level: Union[int, str, None]) -> int:
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV) or logging.INFO
    if isinstance(level, str):
        resolved = logging.getLevelName(level.strip().upper())
        return resolved if isinstance(resolved, int) else logging.INFO
    return int(level)


def get_logger(
    name: Optional[str] = None,
    level: Union[int, str, None] = None,
    stream: Optional[TextIO] = None,
    fmt: str = "%(message)s",
    datefmt: Optional[str] = None,
    propagate: bool = False,
) -> logging.Logger:
    """
    Return a configured logger inside the package tree.

    Parameters
    ----------
    name:
        None for the package logger, or a suffix ("session" gives
        "centraldeudores.session"). Fully qualified names are kept as given.
    level:
        Level number or name. None reads $CENTRALDEUDORES_LOG_LEVEL; unknown
        names fall back to INFO.
    stream:
        Defaults to sys.stdout. Repeated calls with the same stream reuse
        one handler.
    propagate:
        False by default, so a configured root logger does not print twice.
    """
    logger = logging.getLogger(_qualified_name(name))
    level = _resolve_level(level)
    stream = sys.stdout if stream is None else stream
    formatter = logging.Formatter(fmt=fmt, datefmt=datefmt)

    logger.setLevel(level)
    logger.propagate = propagate

    handler = next(
        (h for h in logger.handlers if isinstance(h, logging.StreamHandler) and h.stream is stream),
        None,
    )
    if handler is None:
        handler = logging.StreamHandler(stream)
        logger.addHandler(handler)

    handler.setLevel(level)
    handler.setFormatter(formatter)
    return logger
