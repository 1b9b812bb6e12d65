"""
Utility helpers for rustydeps.

This package provides reusable utilities used across rustydeps:

- Console output helpers (Rich-based)
- Logging configuration and retrieval
- Manifest backup helpers
- Async HTTP client

Only symbols listed in ``__all__`` are considered part of the public API.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Filesystem utilities
# ---------------------------------------------------------------------------

from rustydeps.utils.filesystem import (
    create_backup,
    discard_backup,
    remove_file,
    restore_backup,
)

# ---------------------------------------------------------------------------
# Logging utilities
# ---------------------------------------------------------------------------

from rustydeps.utils.logger import (
    disable_logging,
    get_logger,
    is_logging_configured,
    setup_logging,
)

# ---------------------------------------------------------------------------
# Console utilities
# ---------------------------------------------------------------------------

from rustydeps.utils.console import (
    print_error,
    print_json,
    print_renderable,
    print_success,
    print_warning,
    reconfigure_console,
)

# ---------------------------------------------------------------------------
# HTTP utilities
# ---------------------------------------------------------------------------

from rustydeps.utils.http import HTTPClient

__all__ = [
    # Console
    "print_error",
    "print_json",
    "print_success",
    "print_warning",
    "print_renderable",
    "reconfigure_console",
    # Logging
    "get_logger",
    "setup_logging",
    "disable_logging",
    "is_logging_configured",
    # Filesystem
    "create_backup",
    "restore_backup",
    "discard_backup",
    "remove_file",
    # HTTP
    "HTTPClient",
]
