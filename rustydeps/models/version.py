"""
Semantic version model for rustydeps.

Crates are versioned with Semantic Versioning 2.0.0. A :class:`Version`
keeps the five fields separately so that the diff classifier and the
renderer can address each one individually.
"""

from __future__ import annotations

from enum import Enum
from dataclasses import dataclass
from typing import List, Tuple

import semver

from rustydeps.constants import REQUIREMENT_OPERATORS
from rustydeps.exceptions import VersionParseError


class Severity(str, Enum):
    """The most significant version field that differs between two versions.

    Members are declared in precedence order, most significant first.
    """

    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"
    PRE_RELEASE = "pre-release"
    BUILD_METADATA = "build-metadata"
    UNCHANGED = "unchanged"

    @property
    def precedence(self) -> int:
        """Rank of this severity; ``0`` is the most significant."""
        return list(Severity).index(self)

    @property
    def is_outdated(self) -> bool:
        """``True`` for every severity except :attr:`UNCHANGED`."""
        return self is not Severity.UNCHANGED

    def __str__(self) -> str:
        return self.value


#: Version attribute compared for each severity, in precedence order.
SEVERITY_FIELDS: Tuple[Tuple[str, Severity], ...] = (
    ("major", Severity.MAJOR),
    ("minor", Severity.MINOR),
    ("patch", Severity.PATCH),
    ("pre", Severity.PRE_RELEASE),
    ("build", Severity.BUILD_METADATA),
)


@dataclass(frozen=True)
class Version:
    """An immutable semantic version.

    Attributes:
        major: Major version number.
        minor: Minor version number.
        patch: Patch version number.
        pre: Pre-release identifier, empty when absent.
        build: Build metadata, empty when absent.

    Example::

        >>> v = Version.parse("1.4.2-beta+007")
        >>> (v.major, v.minor, v.patch, v.pre, v.build)
        (1, 4, 2, 'beta', '007')
        >>> str(v)
        '1.4.2-beta+007'
    """

    major: int
    minor: int
    patch: int
    pre: str = ""
    build: str = ""

    @classmethod
    def parse(cls, text: str) -> "Version":
        """Parse a full ``MAJOR.MINOR.PATCH[-PRE][+BUILD]`` version.

        Raises:
            VersionParseError: ``text`` is not a valid semantic version.
        """
        try:
            info = semver.Version.parse(text)
        except (TypeError, ValueError) as exc:
            raise VersionParseError(
                f"Invalid semantic version: {text!r}",
                version=text,
            ) from exc

        return cls._from_semver(info)

    @classmethod
    def from_requirement(cls, requirement: str) -> "Version":
        """Derive the declared version from a Cargo version requirement.

        A single leading ``^``, ``=`` or ``~`` is dropped and partial
        requirements are padded with zeros, so ``"^1.2"`` declares
        ``1.2.0``. Ranges and wildcards do not name a single version.

        Raises:
            VersionParseError: The requirement does not name one version.
        """
        text = requirement.strip()
        if text[:1] in REQUIREMENT_OPERATORS:
            text = text[1:].lstrip()

        try:
            info = semver.Version.parse(text, optional_minor_and_patch=True)
        except (TypeError, ValueError) as exc:
            raise VersionParseError(
                f"Unsupported version requirement: {requirement!r}",
                version=requirement,
            ) from exc

        return cls._from_semver(info)

    @classmethod
    def _from_semver(cls, info: semver.Version) -> "Version":
        return cls(
            major=info.major,
            minor=info.minor,
            patch=info.patch,
            pre=info.prerelease or "",
            build=info.build or "",
        )

    @property
    def is_prerelease(self) -> bool:
        """Whether the version carries a pre-release identifier."""
        return bool(self.pre)

    @property
    def release(self) -> Tuple[int, int, int]:
        """The numeric ``(major, minor, patch)`` triple."""
        return self.major, self.minor, self.patch

    def segments(self) -> List[Tuple[Severity, str, str]]:
        """Split the version into renderable pieces.

        Returns:
            ``(severity, separator, text)`` triples; pre-release and build
            segments are present only when non-empty.
        """
        parts = [
            (Severity.MAJOR, "", str(self.major)),
            (Severity.MINOR, ".", str(self.minor)),
            (Severity.PATCH, ".", str(self.patch)),
        ]
        if self.pre:
            parts.append((Severity.PRE_RELEASE, "-", self.pre))
        if self.build:
            parts.append((Severity.BUILD_METADATA, "+", self.build))
        return parts

    def __str__(self) -> str:
        return "".join(separator + text for _, separator, text in self.segments())
