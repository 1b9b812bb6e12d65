"""
Console output utilities for rustydeps using Rich.

User-facing output only; diagnostics belong to :mod:`rustydeps.utils.logger`.
Results go to stdout, while errors and warnings go to stderr so that
``--format json`` output stays machine-readable.
"""

from __future__ import annotations

import os
import sys
import threading
from typing import Any, Optional

from rich.theme import Theme
from rich.console import Console, RenderableType

RUSTYDEPS_THEME = Theme(
    {
        "success": "bold green",
        "error": "bold red",
        "warning": "bold yellow",
        "info": "bold cyan",
        "dim": "dim",
    }
)

# ---------------------------------------------------------------------------
# Console lifecycle management
# ---------------------------------------------------------------------------

_console: Optional[Console] = None
_error_console: Optional[Console] = None
_console_lock = threading.Lock()


def _should_use_color(stream: Any = None) -> bool:
    """Return True if colored output should be enabled for ``stream``."""
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("CI"):
        return False
    try:
        return (stream or sys.stdout).isatty()
    except (AttributeError, OSError):
        return False


def _get_console() -> Console:
    """Return the stdout Console singleton."""
    global _console

    if _console is None:
        with _console_lock:
            if _console is None:
                use_color = _should_use_color(sys.stdout)
                _console = Console(
                    theme=RUSTYDEPS_THEME,
                    no_color=not use_color,
                    highlight=False,
                )
    return _console


def _get_error_console() -> Console:
    """Return the stderr Console singleton."""
    global _error_console

    if _error_console is None:
        with _console_lock:
            if _error_console is None:
                use_color = _should_use_color(sys.stderr)
                _error_console = Console(
                    theme=RUSTYDEPS_THEME,
                    stderr=True,
                    no_color=not use_color,
                    highlight=False,
                )
    return _error_console


def reconfigure_console() -> None:
    """Drop the cached consoles so the next call re-reads the environment."""
    global _console, _error_console
    with _console_lock:
        _console = None
        _error_console = None


# ---------------------------------------------------------------------------
# Status message helpers
# ---------------------------------------------------------------------------


def print_success(message: str, *, prefix: str = "[OK]") -> None:
    """Print a success message."""
    _get_console().print(f"{prefix} {message}", style="success", markup=False)


def print_error(message: str, *, prefix: str = "[ERROR]") -> None:
    """Print an error message to stderr."""
    _get_error_console().print(f"{prefix} {message}", style="error", markup=False)


def print_warning(message: str, *, prefix: str = "[WARNING]") -> None:
    """Print a warning message to stderr."""
    _get_error_console().print(f"{prefix} {message}", style="warning", markup=False)


# ---------------------------------------------------------------------------
# Structured output
# ---------------------------------------------------------------------------


def print_renderable(renderable: RenderableType) -> None:
    """Print a Rich renderable (e.g. a dependency table) without wrapping."""
    _get_console().print(renderable, soft_wrap=True)


def print_json(data: Any) -> None:
    """Print ``data`` as indented JSON."""
    _get_console().print_json(data=data)

