"""Test name filter tests."""

from __future__ import annotations

import pytest
from simple_unit_tester.configuration import Settings, matches_pattern


@pytest.mark.parametrize(
    ("name", "pattern", "expected"),
    [
        ("math.adds", "*.*", True),
        ("math.adds", "math.adds", True),
        ("math.adds", "math.*", True),
        ("math.adds", "*.add?", True),
        ("math.adds", "*.add", False),
        ("math.adds", "physics.*", False),
        ("math.adds", "*", True),
        ("", "*", True),
        ("", "?", False),
        ("math.a*b", "math.a*b", True),
        ("math.a[b]", "math.a[b]", True),
        ("math.ab", "math.a[b]", False),
        ("aaab", "*a*b", True),
        ("abc", "a*c*", True),
    ],
)
def test_matches_pattern(name: str, pattern: str, expected: bool) -> None:
    assert matches_pattern(name, pattern) is expected


def test_settings_match_the_qualified_test_name() -> None:
    settings = Settings(filter_tests="test_assert_is_true_succeed.*")

    assert settings.is_match_test_name("test_assert_is_true_succeed", "test_case1") is True
    assert settings.is_match_test_name("test_assert_is_false_succeed", "test_case1") is False


def test_default_filter_matches_everything() -> None:
    assert Settings().is_match_test_name("any", "test") is True
