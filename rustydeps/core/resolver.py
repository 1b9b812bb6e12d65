"""Concurrent latest-version resolution for rustydeps.

:class:`VersionResolver` fans out one task per dependency, waits for all of
them, and only then writes results back into the set. Completion order
never leaks into the output:

- results are collected into a list addressed by manifest position;
- a run with any failed fetch writes nothing and raises;
- when several fetches fail, the error of the earliest dependency in
  manifest order is the one reported.

Typical usage::

    async with HTTPClient() as http:
        resolver = VersionResolver(CratesIndexClient(http))
        await resolver.resolve(dependencies)

    for dependency in dependencies:
        print(dependency.name, dependency.latest_version, dependency.severity)
"""

from __future__ import annotations

import asyncio
from typing import List, Union, cast

from rustydeps.models import DependencySet, Version
from rustydeps.core.registry import RegistryClient
from rustydeps.core.classifier import classify
from rustydeps.utils.logger import get_logger

logger = get_logger("resolver")

FetchResult = Union[Version, BaseException]


class VersionResolver:
    """Resolve the latest version of every dependency in parallel.

    Args:
        registry: Source of latest versions. **Required**.

    Raises:
        TypeError: If *registry* is ``None``.
    """

    def __init__(self, registry: RegistryClient) -> None:
        if registry is None:
            raise TypeError("registry must not be None; pass a RegistryClient instance")

        self.registry: RegistryClient = registry

    async def resolve(self, dependencies: DependencySet) -> DependencySet:
        """Fill in latest versions and severities for ``dependencies``.

        Every fetch runs to completion before this returns or raises, so no
        task outlives the call.

        Args:
            dependencies: Set with declared versions; updated in place.

        Returns:
            The same set, fully resolved and in its original order.

        Raises:
            RegistryError: At least one fetch failed. ``dependencies`` is
                left untouched.
        """
        names = dependencies.crates()
        logger.info("Resolving %d dependencies", len(names))

        tasks = [asyncio.ensure_future(self.registry.fetch_latest(name)) for name in names]
        results: List[FetchResult] = list(
            await asyncio.gather(*tasks, return_exceptions=True)
        )

        failures = [
            (name, result)
            for name, result in zip(names, results)
            if isinstance(result, BaseException)
        ]
        if failures:
            for name, error in failures:
                logger.debug("Fetch failed for %s: %s", name, error)
            logger.info("%d of %d fetches failed", len(failures), len(names))
            raise failures[0][1]

        for dependency, result in zip(dependencies, results):
            latest = cast(Version, result)
            dependency.latest_version = latest
            dependency.severity = classify(dependency.declared_version, latest)
            logger.debug(
                "%s: %s -> %s (%s)",
                dependency.name,
                dependency.declared_version,
                latest,
                dependency.severity,
            )

        return dependencies
