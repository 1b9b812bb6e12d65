"""
Logging utilities for rustydeps.

All diagnostic output lives under the ``rustydeps`` logger namespace. The
CLI calls :func:`setup_logging` once; library users who never do get a
``NullHandler`` so nothing leaks onto their streams.
"""

from __future__ import annotations

import os
import sys
import logging
import threading
from typing import IO, Optional

from rustydeps.constants import (
    LOG_DATE_FORMAT,
    LOG_DEFAULT_FORMAT,
    LOG_VERBOSE_FORMAT,
)

ROOT_LOGGER_NAME = "rustydeps"

_logging_configured: bool = False
_lock = threading.Lock()


class ColoredFormatter(logging.Formatter):
    """Formatter that colors the level name when writing to a terminal."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def __init__(
        self,
        fmt: str,
        *,
        datefmt: Optional[str] = None,
        use_color: bool = True,
    ) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname) if self._colors_enabled() else None
        if color is None:
            return super().format(record)

        # Handlers may share one record; restore the plain name afterwards
        original = record.levelname
        record.levelname = f"{color}{original}{self.RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = original

    def _colors_enabled(self) -> bool:
        if not self.use_color:
            return False
        if os.environ.get("NO_COLOR") or os.environ.get("CI"):
            return False
        try:
            return sys.stderr.isatty()
        except (AttributeError, OSError):
            return False


def setup_logging(
    *,
    level: int = logging.WARNING,
    verbose: bool = False,
    stream: Optional[IO[str]] = None,
) -> None:
    """Configure the ``rustydeps`` logger.

    Safe to call repeatedly; each call replaces the previous handler.

    Args:
        level: Logging level (e.g. ``logging.INFO``).
        verbose: Use the timestamped format including the logger name.
        stream: Output stream; defaults to ``sys.stderr``.
    """
    global _logging_configured

    with _lock:
        root_logger = logging.getLogger(ROOT_LOGGER_NAME)
        root_logger.handlers.clear()
        root_logger.setLevel(level)

        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setLevel(level)
        handler.setFormatter(
            ColoredFormatter(
                LOG_VERBOSE_FORMAT if verbose else LOG_DEFAULT_FORMAT,
                datefmt=LOG_DATE_FORMAT,
                use_color=stream is None,
            )
        )

        root_logger.addHandler(handler)
        root_logger.propagate = False
        _logging_configured = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger within the ``rustydeps`` namespace.

    Args:
        name: Short name (``"resolver"``) or dotted module name.

    Returns:
        Logger named ``rustydeps.<name>`` (or the root ``rustydeps`` logger).
    """
    if not name or name == ROOT_LOGGER_NAME:
        logger = logging.getLogger(ROOT_LOGGER_NAME)
    elif name.startswith(ROOT_LOGGER_NAME + "."):
        logger = logging.getLogger(name)
    else:
        logger = logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")

    if not logger.handlers and (not logger.parent or not logger.parent.handlers):
        logger.addHandler(logging.NullHandler())

    return logger


def is_logging_configured() -> bool:
    """Return True if :func:`setup_logging` has run."""
    return _logging_configured


def disable_logging() -> None:
    """Silence all rustydeps logging output."""
    global _logging_configured

    with _lock:
        root_logger = logging.getLogger(ROOT_LOGGER_NAME)
        root_logger.handlers.clear()
        root_logger.addHandler(logging.NullHandler())
        root_logger.setLevel(logging.NOTSET)
        _logging_configured = False
