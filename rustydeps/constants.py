"""
Centralized constants for rustydeps.

Immutable values shared across the package: registry endpoints, network
defaults, manifest names, rendering layout and logging formats.
"""

from typing import Final, Tuple

# ---------------------------------------------------------------------------
# Project metadata
# ---------------------------------------------------------------------------

#: HTTP User-Agent template used for outbound requests.
USER_AGENT_TEMPLATE: Final[str] = "rustydeps/{version} (https://github.com/rustydeps/rustydeps)"

# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

#: Base URL of the crates.io sparse index.
CRATES_INDEX_URL: Final[str] = "https://index.crates.io"

# ---------------------------------------------------------------------------
# HTTP configuration
# ---------------------------------------------------------------------------

#: Default network timeout in seconds.
DEFAULT_TIMEOUT: Final[float] = 30.0

#: Retries are opt-in; a failed fetch fails the run unless configured.
DEFAULT_MAX_RETRIES: Final[int] = 0

#: Maximum number of registry requests in flight at once.
DEFAULT_MAX_CONCURRENCY: Final[int] = 10

# ---------------------------------------------------------------------------
# Cargo
# ---------------------------------------------------------------------------

#: Default manifest file name.
MANIFEST_FILE_NAME: Final[str] = "Cargo.toml"

#: Lock file updated alongside the manifest by ``cargo add``.
LOCK_FILE_NAME: Final[str] = "Cargo.lock"

#: Executable used for ``cargo add``.
DEFAULT_CARGO_COMMAND: Final[str] = "cargo"

#: Argument cargo passes first when running us as ``cargo rusty-deps``.
CARGO_SUBCOMMAND_NAME: Final[str] = "rusty-deps"

#: Leading operators stripped from a manifest version requirement.
REQUIREMENT_OPERATORS: Final[Tuple[str, ...]] = ("^", "=", "~")

# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

#: Table column headers.
NAME_HEADER: Final[str] = "Name"
VERSION_HEADER: Final[str] = "Version"
LATEST_HEADER: Final[str] = "Latest"

#: Spaces added after the widest cell of each padded column.
COLUMN_PADDING: Final[int] = 3

#: Style applied to the version field that differs.
EMPHASIS_STYLE: Final[str] = "bold red"

#: Style applied to the header row.
HEADER_STYLE: Final[str] = "bold"

# ---------------------------------------------------------------------------
# Logging configuration
# ---------------------------------------------------------------------------

#: Timestamp format for verbose logging.
LOG_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

#: Default log format (non-verbose).
LOG_DEFAULT_FORMAT: Final[str] = "%(levelname)s: %(message)s"

#: Verbose log format including timestamp and logger name.
LOG_VERBOSE_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
