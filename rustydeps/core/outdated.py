"""Outdated-dependency filter for rustydeps."""

from __future__ import annotations

from rustydeps.models.dependency import DependencySet


def filter_outdated(dependencies: DependencySet) -> DependencySet:
    """Keep only dependencies whose severity is not unchanged.

    Returns a new set in the same relative order; the entries themselves
    are shared, not copied. Filtering a filtered set returns an equal set.

    Raises:
        ValueError: A dependency has not been resolved yet.
    """
    for dependency in dependencies:
        if dependency.severity is None:
            raise ValueError(f"Dependency '{dependency.name}' has not been resolved")

    return DependencySet(d for d in dependencies if d.is_outdated)
