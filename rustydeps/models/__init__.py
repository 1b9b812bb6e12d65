"""
Unified data model exports for rustydeps.

Example:
    >>> from rustydeps.models import Dependency, DependencySet, Severity, Version
"""

from __future__ import annotations

from rustydeps.models.version import SEVERITY_FIELDS, Severity, Version
from rustydeps.models.dependency import Dependency, DependencySet, ManifestDependency

__all__ = [
    "Version",
    "Severity",
    "SEVERITY_FIELDS",
    "Dependency",
    "DependencySet",
    "ManifestDependency",
]
