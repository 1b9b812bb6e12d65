"""Cargo manifest reader for rustydeps.

Reads the ``[dependencies]`` table of a ``Cargo.toml`` in document order.
Cargo accepts two shapes for a versioned dependency::

    [dependencies]
    log = "0.4"                                        # bare version
    serde = { version = "1.0", features = ["derive"] } # table with version
    json = { package = "serde_json", version = "1" }   # renamed crate

Every entry is classified into one of the two variants below. Anything
else (``path``/``git``/``workspace`` entries without a version, numbers,
arrays) is rejected with a :class:`ManifestError` naming the dependency.

Typical usage::

    reader = ManifestReader()
    entries = reader.read(Path("Cargo.toml"))
    # [ManifestDependency("log", "0.4"), ..., ManifestDependency("json", "1", "serde_json")]
"""

from __future__ import annotations

from pathlib import Path
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Union

import tomli as tomllib

from rustydeps.exceptions import ManifestError
from rustydeps.models import ManifestDependency
from rustydeps.utils.logger import get_logger

logger = get_logger("manifest")

DEPENDENCIES_TABLE = "dependencies"


@dataclass(frozen=True)
class BareVersion:
    """A dependency written as ``name = "requirement"``."""

    requirement: str


@dataclass(frozen=True)
class TableWithVersion:
    """A dependency written as ``name = { version = "requirement", ... }``.

    ``package`` holds the registry crate name of a renamed dependency.
    """

    requirement: str
    package: Optional[str] = None


ManifestEntry = Union[BareVersion, TableWithVersion]


def classify_entry(name: str, value: Any, *, file_path: Optional[str] = None) -> ManifestEntry:
    """Turn a raw TOML dependency value into a :data:`ManifestEntry`.

    Raises:
        ManifestError: The value is neither a string nor a table with a
            string ``version`` key, or its ``package`` key is not a string.
    """
    if isinstance(value, str):
        return BareVersion(value)

    if isinstance(value, Mapping):
        version = value.get("version")
        if not isinstance(version, str):
            raise ManifestError(
                f"Dependency '{name}' has no version string",
                file_path=file_path,
                dependency=name,
            )

        package = value.get("package")
        if package is not None and not isinstance(package, str):
            raise ManifestError(
                f"Dependency '{name}' has a non-string package name",
                file_path=file_path,
                dependency=name,
            )
        return TableWithVersion(version, package=package)

    raise ManifestError(
        f"Dependency '{name}' must be a version string or a table, "
        f"got {type(value).__name__}",
        file_path=file_path,
        dependency=name,
    )


class ManifestReader:
    """Extract dependency rows from a Cargo manifest."""

    def read(self, path: Path) -> List[ManifestDependency]:
        """Read and parse the manifest at ``path``.

        Raises:
            ManifestError: The file is missing, unreadable, not valid TOML,
                or contains an unsupported dependency entry.
        """
        if not path.is_file():
            raise ManifestError(
                f"Manifest not found: {path}",
                file_path=str(path),
            )

        try:
            with open(path, "rb") as fh:
                document = tomllib.load(fh)
        except tomllib.TOMLDecodeError as exc:
            raise ManifestError(
                f"Invalid TOML in {path.name}: {exc}",
                file_path=str(path),
            ) from exc
        except OSError as exc:
            raise ManifestError(
                f"Cannot read manifest {path}: {exc}",
                file_path=str(path),
            ) from exc

        logger.debug("Loaded manifest %s", path)
        return self.parse_document(document, file_path=str(path))

    def read_string(self, content: str) -> List[ManifestDependency]:
        """Parse manifest content held in memory."""
        try:
            document = tomllib.loads(content)
        except tomllib.TOMLDecodeError as exc:
            raise ManifestError(f"Invalid TOML: {exc}") from exc
        return self.parse_document(document)

    def parse_document(
        self,
        document: Dict[str, Any],
        *,
        file_path: Optional[str] = None,
    ) -> List[ManifestDependency]:
        """Extract dependency rows from an already parsed TOML document."""
        table = document.get(DEPENDENCIES_TABLE)
        if table is None:
            logger.debug("No [%s] table found", DEPENDENCIES_TABLE)
            return []

        if not isinstance(table, Mapping):
            raise ManifestError(
                f"[{DEPENDENCIES_TABLE}] must be a table",
                file_path=file_path,
            )

        entries: List[ManifestDependency] = []
        for name, value in table.items():
            entry = classify_entry(name, value, file_path=file_path)
            package = entry.package if isinstance(entry, TableWithVersion) else None
            if package == name:
                package = None
            elif package is not None:
                logger.debug("Dependency %s is crate %s", name, package)
            entries.append(ManifestDependency(name, entry.requirement, package))

        logger.info("Found %d dependencies", len(entries))
        return entries
