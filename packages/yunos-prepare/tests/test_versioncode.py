# SPDX-License-Identifier: MIT
"""Tests for version code derivation."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from yunos_prepare.versioncode import default_version_code


class TestDefaultVersionCode:
    """Tests for default_version_code."""

    @pytest.mark.parametrize(
        ("version", "expected"),
        [
            ("1.2.3", 10203),
            ("2.0", 20000),
            ("0.0.5", 5),
            ("1.2.3-beta", 10203),
            ("abc", 0),
            ("", 0),
            ("3", 30000),
            ("1.x.3", 10003),
            ("1.2.3.4", 10203),
            ("10.20.30-rc.1", 102030),
        ],
    )
    def test_known_values(self, version: str, expected: int) -> None:
        assert default_version_code(version) == expected

    def test_signed_component_counts_as_zero(self) -> None:
        assert default_version_code("1.+2.3") == 10003

    @given(
        major=st.integers(min_value=0, max_value=999),
        minor=st.integers(min_value=0, max_value=99),
        patch=st.integers(min_value=0, max_value=99),
    )
    def test_formula(self, major: int, minor: int, patch: int) -> None:
        """Test the weighted sum for well-formed versions."""
        version = f"{major}.{minor}.{patch}"
        assert default_version_code(version) == major * 10000 + minor * 100 + patch

    @given(
        version=st.text(alphabet="0123456789.-abc", max_size=20),
    )
    def test_never_raises(self, version: str) -> None:
        """Test that any version string produces a non-negative code."""
        assert default_version_code(version) >= 0

    @given(
        major=st.integers(min_value=0, max_value=99),
        suffix=st.text(alphabet="abcdefghij0123456789.", min_size=1, max_size=10),
    )
    def test_prerelease_ignored(self, major: int, suffix: str) -> None:
        assert default_version_code(f"{major}.1.2-{suffix}") == default_version_code(f"{major}.1.2")
