"""
Version diff classification for rustydeps.

:func:`classify` names the most significant field that differs between a
declared and a latest version. Every step is an equality test, so the
result never depends on which side is newer.
"""

from __future__ import annotations

from rustydeps.models.version import SEVERITY_FIELDS, Severity, Version


def classify(declared: Version, latest: Version) -> Severity:
    """Classify the difference between two versions.

    Fields are compared in precedence order (major, minor, patch,
    pre-release, build metadata) and the first one that differs decides.
    Pre-release and build metadata are compared as opaque strings, so
    ``alpha`` and ``beta`` are merely different, not ordered.

    Args:
        declared: Version declared in the manifest.
        latest: Latest version published on the registry.

    Returns:
        The :class:`Severity` of the first differing field, or
        ``Severity.UNCHANGED`` when all fields are equal.

    Examples:
        >>> classify(Version.parse("1.0.0"), Version.parse("2.1.0"))
        <Severity.MAJOR: 'major'>
        >>> classify(Version.parse("1.2.3"), Version.parse("1.2.3"))
        <Severity.UNCHANGED: 'unchanged'>
    """
    for attribute, severity in SEVERITY_FIELDS:
        if getattr(declared, attribute) != getattr(latest, attribute):
            return severity
    return Severity.UNCHANGED
