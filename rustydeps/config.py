"""Configuration file loader for rustydeps.

Handles discovery, loading, parsing, and validation of configuration files.
Supports two locations:

- ``rustydeps.toml``: settings under a ``[rustydeps]`` table
- ``Cargo.toml``: settings under ``[package.metadata.rustydeps]`` or
  ``[workspace.metadata.rustydeps]``

Discovery order:

1. Explicit path from ``--config`` or ``RUSTYDEPS_CONFIG``
2. ``rustydeps.toml`` in the project directory
3. ``Cargo.toml`` in the project directory with a rustydeps metadata section

The project directory is the one holding the manifest given with
``--manifest-path`` (the current directory by default).

Configuration precedence: defaults < config file < CLI args.

Example (``rustydeps.toml``)::

    [rustydeps]
    timeout = 10
    max_retries = 2
    max_concurrency = 8
"""

from __future__ import annotations

import tomli as tomllib
from pathlib import Path
from typing import Any, Dict, Optional
from dataclasses import dataclass, field

from rustydeps.exceptions import ConfigError
from rustydeps.utils.logger import get_logger
from rustydeps.constants import (
    CRATES_INDEX_URL,
    DEFAULT_CARGO_COMMAND,
    DEFAULT_MAX_CONCURRENCY,
    DEFAULT_MAX_RETRIES,
    DEFAULT_TIMEOUT,
    MANIFEST_FILE_NAME,
)

logger = get_logger("config")

CONFIG_FILE_NAME = "rustydeps.toml"
SECTION_NAME = "rustydeps"


@dataclass
class RustyDepsConfig:
    """Parsed and validated rustydeps configuration.

    All fields have defaults, so empty config files are valid.

    Attributes:
        timeout: Registry request timeout in seconds.
        max_retries: Extra attempts for transient registry failures.
        max_concurrency: Maximum registry requests in flight at once.
        index_url: Base URL of the sparse registry index.
        cargo_command: Executable used for ``cargo add``.
        source_path: Path to loaded config file, or ``None`` if using defaults.
    """

    timeout: float = DEFAULT_TIMEOUT
    max_retries: int = DEFAULT_MAX_RETRIES
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY
    index_url: str = CRATES_INDEX_URL
    cargo_command: str = DEFAULT_CARGO_COMMAND

    # Metadata (not a user-facing option)
    source_path: Optional[Path] = field(default=None, repr=False)

    def to_log_dict(self) -> Dict[str, Any]:
        """Return configuration as dictionary for debug logging.

        Excludes ``source_path`` metadata.
        """
        return {
            "timeout": self.timeout,
            "max_retries": self.max_retries,
            "max_concurrency": self.max_concurrency,
            "index_url": self.index_url,
            "cargo_command": self.cargo_command,
        }


def discover_config_file(
    explicit_path: Optional[Path] = None,
    project_dir: Optional[Path] = None,
) -> Optional[Path]:
    """Find the configuration file to load.

    Without an explicit path, ``rustydeps.toml`` and then ``Cargo.toml``
    metadata are looked up in ``project_dir``.

    Args:
        explicit_path: Explicit config path. If provided, must exist.
        project_dir: Directory holding the manifest. Defaults to the
            current working directory.

    Returns:
        Resolved path to config file, or ``None`` if not found.

    Raises:
        ConfigError: Explicit path provided but does not exist.
    """
    if explicit_path is not None:
        resolved = explicit_path.resolve()
        if not resolved.is_file():
            raise ConfigError(
                f"Configuration file not found: {explicit_path}",
                config_path=str(explicit_path),
            )
        logger.debug("Using explicit config: %s", resolved)
        return resolved

    search_dir = project_dir if project_dir is not None else Path.cwd()

    config_toml = search_dir / CONFIG_FILE_NAME
    if config_toml.is_file():
        logger.debug("Found %s: %s", CONFIG_FILE_NAME, config_toml)
        return config_toml

    cargo_toml = search_dir / MANIFEST_FILE_NAME
    if cargo_toml.is_file() and _cargo_has_rustydeps_section(cargo_toml):
        logger.debug("Found rustydeps metadata in %s", cargo_toml)
        return cargo_toml

    logger.debug("No configuration file found")
    return None


def _cargo_metadata_section(raw: Dict[str, Any]) -> Dict[str, Any]:
    """Return the rustydeps metadata table of a Cargo manifest, or ``{}``."""
    for owner in ("package", "workspace"):
        section = raw.get(owner, {}).get("metadata", {}).get(SECTION_NAME)
        if section is not None:
            return section
    return {}


def _cargo_has_rustydeps_section(path: Path) -> bool:
    """Check whether a Cargo manifest carries rustydeps metadata.

    Parse errors are ignored here; the manifest reader reports them later
    with better context.
    """
    try:
        raw = _read_toml(path)
    except ConfigError:
        return False
    return SECTION_NAME in raw.get("package", {}).get("metadata", {}) or (
        SECTION_NAME in raw.get("workspace", {}).get("metadata", {})
    )


def load_config(
    config_path: Optional[Path] = None,
    project_dir: Optional[Path] = None,
) -> RustyDepsConfig:
    """Load and validate rustydeps configuration.

    Args:
        config_path: Explicit path to config file. If ``None``, uses
            auto-discovery (see :func:`discover_config_file`).
        project_dir: Directory searched during auto-discovery.

    Returns:
        Validated :class:`RustyDepsConfig` with values from file or defaults.

    Raises:
        ConfigError: File cannot be parsed, has unknown keys, or invalid values.
    """
    resolved = discover_config_file(config_path, project_dir)

    if resolved is None:
        logger.debug("No config file found, using defaults")
        return RustyDepsConfig()

    logger.info("Loading configuration from %s", resolved)
    raw = _read_toml(resolved)

    if resolved.name == MANIFEST_FILE_NAME:
        section = _cargo_metadata_section(raw)
    else:
        section = raw.get(SECTION_NAME, {})

    if not section:
        logger.debug("Config file found but no rustydeps section, using defaults")
        return RustyDepsConfig(source_path=resolved)

    if not isinstance(section, dict):
        raise ConfigError(
            f"[{SECTION_NAME}] must be a table",
            config_path=str(resolved),
        )

    config = _parse_section(section, config_path=str(resolved))
    config.source_path = resolved

    logger.debug("Loaded configuration: %s", config.to_log_dict())
    return config


def _read_toml(path: Path) -> Dict[str, Any]:
    """Read and parse a TOML file.

    Raises:
        ConfigError: File cannot be read or is not valid TOML.
    """
    try:
        with open(path, "rb") as fh:
            return tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(
            f"Invalid TOML in {path.name}: {exc}",
            config_path=str(path),
        ) from exc
    except OSError as exc:
        raise ConfigError(
            f"Cannot read configuration file {path}: {exc}",
            config_path=str(path),
        ) from exc


def _parse_section(
    section: Dict[str, Any],
    *,
    config_path: str,
) -> RustyDepsConfig:
    """Parse and validate a rustydeps configuration table.

    Rejects unknown keys, type mismatches and out-of-range values.

    Raises:
        ConfigError: Unknown keys or invalid values.
    """
    config = RustyDepsConfig()

    known = set(config.to_log_dict())
    unknown = set(section.keys()) - known
    if unknown:
        raise ConfigError(
            f"Unknown configuration keys: {', '.join(sorted(unknown))}",
            config_path=config_path,
        )

    if "timeout" in section:
        val = section["timeout"]
        # bool is an int subclass; reject it explicitly
        if isinstance(val, bool) or not isinstance(val, (int, float)) or val <= 0:
            raise ConfigError(
                f"timeout must be a positive number, got {val!r}",
                config_path=config_path,
                option="timeout",
            )
        config.timeout = float(val)

    if "max_retries" in section:
        config.max_retries = _int_option(section, "max_retries", 0, config_path)

    if "max_concurrency" in section:
        config.max_concurrency = _int_option(section, "max_concurrency", 1, config_path)

    for option in ("index_url", "cargo_command"):
        if option in section:
            val = section[option]
            if not isinstance(val, str) or not val.strip():
                raise ConfigError(
                    f"{option} must be a non-empty string, got {val!r}",
                    config_path=config_path,
                    option=option,
                )
            setattr(config, option, val)

    return config


def _int_option(section: Dict[str, Any], option: str, minimum: int, config_path: str) -> int:
    val = section[option]
    if isinstance(val, bool) or not isinstance(val, int) or val < minimum:
        raise ConfigError(
            f"{option} must be an integer >= {minimum}, got {val!r}",
            config_path=config_path,
            option=option,
        )
    return val
