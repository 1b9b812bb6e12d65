"""Registry client for the crates.io sparse index.

The sparse index serves one file per crate. Each line is a JSON record
describing one published version, for example::

    {"name": "serde", "vers": "1.0.197", "yanked": false, ...}

The latest version is the highest release that is neither yanked nor a
pre-release, which is what ``cargo add`` picks by default.

Typical usage::

    from rustydeps.utils.http import HTTPClient
    from rustydeps.core.registry import CratesIndexClient

    async with HTTPClient() as http:
        registry = CratesIndexClient(http)
        latest = await registry.fetch_latest("serde")
        print(latest)  # e.g. 1.0.197
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Protocol

from rustydeps.models import Version
from rustydeps.utils.http import HTTPClient
from rustydeps.utils.logger import get_logger
from rustydeps.constants import CRATES_INDEX_URL
from rustydeps.exceptions import (
    NetworkError,
    PackageNotFoundError,
    RegistryError,
    RegistryParseError,
    VersionParseError,
)

logger = get_logger("registry")

__all__ = ["RegistryClient", "CratesIndexClient", "index_path", "parse_index_file"]


class RegistryClient(Protocol):
    """Anything that can look up the latest published version of a crate."""

    async def fetch_latest(self, name: str) -> Version:
        """Return the latest version of ``name``.

        Raises:
            PackageNotFoundError: The registry has no such crate.
            RegistryError: The registry could not be reached.
            RegistryParseError: The registry response was malformed.
        """
        ...


def index_path(name: str) -> str:
    """Return the sparse-index path of a crate.

    Example::

        >>> index_path("a"), index_path("ab"), index_path("abc")
        ('1/a', '2/ab', '3/a/abc')
        >>> index_path("Serde")
        'se/rd/serde'
    """
    lowered = name.lower()
    if len(lowered) <= 2:
        return f"{len(lowered)}/{lowered}"
    if len(lowered) == 3:
        return f"3/{lowered[0]}/{lowered}"
    return f"{lowered[0:2]}/{lowered[2:4]}/{lowered}"


class CratesIndexClient:
    """:class:`RegistryClient` backed by the crates.io sparse index.

    Args:
        http_client: A configured :class:`HTTPClient`; the caller owns its
            lifecycle.
        index_url: Base URL of the sparse index.
    """

    def __init__(
        self,
        http_client: HTTPClient,
        index_url: str = CRATES_INDEX_URL,
    ) -> None:
        self.http_client = http_client
        self.index_url = index_url.rstrip("/")

    def url_for(self, name: str) -> str:
        """Return the index URL of a crate."""
        return f"{self.index_url}/{index_path(name)}"

    async def fetch_latest(self, name: str) -> Version:
        url = self.url_for(name)
        logger.debug("Fetching %s", url)

        try:
            body = await self.http_client.get_text(url)
        except NetworkError as exc:
            if exc.status_code in (404, 410):
                raise PackageNotFoundError(
                    f"Crate '{name}' not found in registry",
                    package_name=name,
                    url=url,
                    status_code=exc.status_code,
                ) from exc
            raise RegistryError(
                f"Failed to fetch '{name}' from registry: {exc.message}",
                package_name=name,
                url=url,
                status_code=exc.status_code,
            ) from exc

        latest = parse_index_file(name, body)
        logger.debug("Latest version of %s is %s", name, latest)
        return latest


def parse_index_file(name: str, body: str) -> Version:
    """Pick the highest stable, non-yanked version out of an index file.

    Raises:
        RegistryParseError: A line is not a valid record, or no stable
            release exists.
    """
    candidates: List[Version] = []

    for line_number, line in enumerate(body.splitlines(), start=1):
        if not line.strip():
            continue

        record = _parse_record(name, line, line_number)
        if record.get("yanked"):
            continue

        version = _record_version(name, record, line_number)
        if version.is_prerelease:
            continue
        candidates.append(version)

    if not candidates:
        raise RegistryParseError(
            f"Crate '{name}' has no stable, non-yanked release",
            package_name=name,
        )

    return max(candidates, key=lambda version: version.release)


def _parse_record(name: str, line: str, line_number: int) -> Dict[str, Any]:
    try:
        record = json.loads(line)
    except json.JSONDecodeError as exc:
        raise RegistryParseError(
            f"Malformed index entry for '{name}' on line {line_number}",
            package_name=name,
            response_body=line,
        ) from exc

    if not isinstance(record, dict):
        raise RegistryParseError(
            f"Malformed index entry for '{name}' on line {line_number}",
            package_name=name,
            response_body=line,
        )
    return record


def _record_version(name: str, record: Dict[str, Any], line_number: int) -> Version:
    raw: Optional[Any] = record.get("vers")
    if not isinstance(raw, str):
        raise RegistryParseError(
            f"Index entry for '{name}' on line {line_number} has no version",
            package_name=name,
        )

    try:
        return Version.parse(raw)
    except VersionParseError as exc:
        raise RegistryParseError(
            f"Index entry for '{name}' has invalid version {raw!r}",
            package_name=name,
        ) from exc
