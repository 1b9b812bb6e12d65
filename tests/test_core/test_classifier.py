"""Unit tests for rustydeps.core.classifier."""

from __future__ import annotations

import itertools

import pytest

from rustydeps.core.classifier import classify
from rustydeps.models import Severity, Version

SAMPLE_VERSIONS = [
    "0.1.0",
    "1.0.0",
    "1.0.1",
    "1.1.0",
    "2.0.0",
    "1.0.0-alpha",
    "1.0.0-beta",
    "1.0.0+build.1",
    "1.0.0-alpha+build.1",
]


@pytest.mark.unit
class TestClassify:
    """Tests for classify()."""

    @pytest.mark.parametrize(
        "declared,latest,expected",
        [
            ("1.0.0", "2.0.0", Severity.MAJOR),
            ("1.0.0", "2.1.3", Severity.MAJOR),
            ("1.0.0", "1.1.0", Severity.MINOR),
            ("1.0.0", "1.1.7", Severity.MINOR),
            ("1.0.0", "1.0.1", Severity.PATCH),
            ("1.0.0-alpha", "1.0.0-beta", Severity.PRE_RELEASE),
            ("1.0.0-alpha", "1.0.0", Severity.PRE_RELEASE),
            ("1.0.0+a", "1.0.0+b", Severity.BUILD_METADATA),
            ("1.0.0", "1.0.0+b", Severity.BUILD_METADATA),
            ("1.4.2-beta+007", "1.4.2-beta+007", Severity.UNCHANGED),
        ],
    )
    def test_first_differing_field_wins(
        self, declared: str, latest: str, expected: Severity
    ) -> None:
        """Test the most significant differing field decides the severity."""
        assert classify(Version.parse(declared), Version.parse(latest)) is expected

    def test_downgrade_is_still_classified(self) -> None:
        """Test a declared version newer than latest is not special-cased."""
        assert classify(Version.parse("3.0.0"), Version.parse("2.0.0")) is Severity.MAJOR

    def test_major_beats_pre_release(self) -> None:
        """Test a lower-precedence difference never masks a higher one."""
        assert (
            classify(Version.parse("1.0.0-alpha"), Version.parse("2.0.0-beta"))
            is Severity.MAJOR
        )

    @pytest.mark.parametrize("text", SAMPLE_VERSIONS)
    def test_reflexive(self, text: str) -> None:
        """Test a version compared with itself is UNCHANGED."""
        version = Version.parse(text)
        assert classify(version, version) is Severity.UNCHANGED

    def test_symmetric(self) -> None:
        """Test swapping the arguments never changes the severity."""
        versions = [Version.parse(text) for text in SAMPLE_VERSIONS]

        for a, b in itertools.product(versions, repeat=2):
            assert classify(a, b) is classify(b, a)

    def test_unchanged_only_for_equal_versions(self) -> None:
        """Test UNCHANGED is returned exactly when all fields match."""
        versions = [Version.parse(text) for text in SAMPLE_VERSIONS]

        for a, b in itertools.product(versions, repeat=2):
            assert (classify(a, b) is Severity.UNCHANGED) == (a == b)
