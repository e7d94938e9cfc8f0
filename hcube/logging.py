"""Logging utilities for hcube.

Every module logs through :func:`get_logger`. The package keeps one output
configuration (level, stream and format); :func:`configure_logging` changes it
for loggers that already exist and for those created afterwards.
"""

from __future__ import annotations

import logging
import sys
from typing import IO, Optional

_ROOT = "hcube"
_DEFAULT_FORMAT = "[%(levelname)s] %(name)s: %(message)s"

_level: int = logging.WARNING
_stream: Optional[IO[str]] = None
_formatter = logging.Formatter(_DEFAULT_FORMAT)

_loggers: dict[str, logging.Logger] = {}


def _coerce_level(level: int | str) -> int:
    if isinstance(level, str):
        value = getattr(logging, level.upper(), None)
        if not isinstance(value, int):
            raise ValueError(f"unknown logging level: {level!r}")
        return value
    return int(level)


def _attach_handler(logger: logging.Logger) -> None:
    """Replace ``logger``'s handlers with one using the package configuration."""
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    # None resolves to the current sys.stderr, so pytest capture keeps working
    handler = logging.StreamHandler(_stream if _stream is not None else sys.stderr)
    handler.setLevel(_level)
    handler.setFormatter(_formatter)
    logger.addHandler(handler)
    logger.setLevel(_level)
    logger.propagate = False


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get or create a logger under the ``hcube`` namespace.

    Loggers are cached so repeated calls do not stack handlers. A new logger
    picks up whatever :func:`configure_logging` last set.

    Args:
        name: Logger name, typically ``__name__``. ``None`` returns the
            package logger.

    Example:
        >>> from hcube.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.debug("sampling population")
    """
    if name is None or name == _ROOT:
        logger_name = _ROOT
    elif name.startswith(_ROOT + "."):
        logger_name = name
    else:
        logger_name = f"{_ROOT}.{name}"

    logger = _loggers.get(logger_name)
    if logger is None:
        logger = logging.getLogger(logger_name)
        _attach_handler(logger)
        _loggers[logger_name] = logger
    return logger


def set_log_level(level: int | str) -> None:
    """Change the level of every hcube logger without touching its output.

    Args:
        level: ``logging.DEBUG``, ``logging.INFO``, ... or the level name.

    Raises:
        ValueError: If ``level`` names no logging level.
    """
    global _level
    _level = _coerce_level(level)
    for logger in _loggers.values():
        logger.setLevel(_level)
        for handler in logger.handlers:
            handler.setLevel(_level)


def configure_logging(
    level: int | str = logging.WARNING,
    format_string: Optional[str] = None,
    stream: Optional[IO[str]] = None,
) -> None:
    """Set level, format and stream for all hcube loggers, present and future.

    Args:
        level: Logging level (default: WARNING).
        format_string: Custom format string. Defaults to
            ``[LEVEL] name: message``.
        stream: Output stream. ``None`` writes to ``sys.stderr``.

    Raises:
        ValueError: If ``level`` names no logging level.
    """
    global _level, _stream, _formatter
    _level = _coerce_level(level)
    _stream = stream
    _formatter = logging.Formatter(format_string or _DEFAULT_FORMAT)
    for logger in _loggers.values():
        _attach_handler(logger)


__all__ = ["configure_logging", "get_logger", "set_log_level"]
