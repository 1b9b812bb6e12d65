"""
Dependency data model for rustydeps.

A :class:`Dependency` starts out knowing only its declared version; the
resolver later fills in the latest published version and the severity of
the difference. :class:`DependencySet` keeps manifest order for the whole
run.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, List, NamedTuple, Optional, Sequence

from rustydeps.models.version import Severity, Version


class ManifestDependency(NamedTuple):
    """One dependency row as read from the manifest.

    ``package`` is set only for renamed dependencies, where the manifest key
    differs from the crate published on the registry.
    """

    name: str
    requirement: str
    package: Optional[str] = None


@dataclass
class Dependency:
    """
    A declared crate dependency and its resolution state.

    Attributes:
        name: Dependency key as written in the manifest.
        declared_version: Version declared in the manifest.
        latest_version: Latest stable version on the registry, once resolved.
        severity: Classification of declared vs. latest, once resolved.
        package: Registry crate name when the dependency is renamed.
    """

    name: str
    declared_version: Version
    latest_version: Optional[Version] = None
    severity: Optional[Severity] = None
    package: Optional[str] = None

    @property
    def crate(self) -> str:
        """Name of the crate on the registry."""
        return self.package or self.name

    @property
    def is_resolved(self) -> bool:
        """Whether both the latest version and the severity are known."""
        return self.latest_version is not None and self.severity is not None

    @property
    def is_outdated(self) -> bool:
        """Whether the resolved severity is anything but unchanged."""
        return self.severity is not None and self.severity.is_outdated

    def to_json(self) -> Dict[str, Any]:
        """
        Serialize the dependency to a JSON-compatible dictionary.

        Returns:
            JSON-safe dependency representation.
        """
        return {
            "name": self.name,
            "version": str(self.declared_version),
            "latest": str(self.latest_version) if self.latest_version else None,
            "severity": self.severity.value if self.severity else None,
        }

    def __str__(self) -> str:
        if self.latest_version is None:
            return f"{self.name} {self.declared_version}"
        return f"{self.name} {self.declared_version} -> {self.latest_version} ({self.severity})"


class DependencySet:
    """Ordered collection of dependencies with unique names.

    Order is fixed when the set is built from the manifest and is kept by
    every later stage.

    Args:
        dependencies: Dependencies in manifest order.

    Raises:
        ValueError: Two dependencies share a name.
    """

    __slots__ = ("_dependencies",)

    def __init__(self, dependencies: Iterable[Dependency] = ()) -> None:
        self._dependencies: List[Dependency] = list(dependencies)

        seen = set()
        for dependency in self._dependencies:
            if dependency.name in seen:
                raise ValueError(f"Duplicate dependency: {dependency.name}")
            seen.add(dependency.name)

    @classmethod
    def from_entries(cls, entries: Iterable[Sequence[Any]]) -> "DependencySet":
        """Build a set from manifest rows.

        Each row is a :class:`ManifestDependency` or a plain
        ``(name, requirement)`` pair.

        Raises:
            VersionParseError: A requirement does not name a single version.
        """
        rows = (ManifestDependency(*entry) for entry in entries)
        return cls(
            Dependency(
                name=row.name,
                declared_version=Version.from_requirement(row.requirement),
                package=row.package,
            )
            for row in rows
        )

    @property
    def is_resolved(self) -> bool:
        """Whether every dependency has been resolved."""
        return all(dependency.is_resolved for dependency in self._dependencies)

    def names(self) -> List[str]:
        """Dependency names in set order."""
        return [dependency.name for dependency in self._dependencies]

    def crates(self) -> List[str]:
        """Registry crate names in set order."""
        return [dependency.crate for dependency in self._dependencies]

    def to_json(self) -> List[Dict[str, Any]]:
        return [dependency.to_json() for dependency in self._dependencies]

    def __iter__(self) -> Iterator[Dependency]:
        return iter(self._dependencies)

    def __len__(self) -> int:
        return len(self._dependencies)

    def __getitem__(self, index: int) -> Dependency:
        return self._dependencies[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DependencySet):
            return NotImplemented
        return self._dependencies == other._dependencies

    def __repr__(self) -> str:
        return f"DependencySet({self._dependencies!r})"
