"""Predicates of the string assertion family."""

from __future__ import annotations

import re

from simple_unit_tester.value_rendering import render_value

from .check_outcomes import CheckResult


def are_equal_ignoring_case(expected: str, actual: str) -> CheckResult:
    return CheckResult.of(
        expected.casefold() == actual.casefold(), render_value(expected), render_value(actual)
    )


def are_not_equal_ignoring_case(expected: str, actual: str) -> CheckResult:
    return CheckResult.of(
        expected.casefold() != actual.casefold(),
        f"not {render_value(expected)}",
        render_value(actual),
    )


def contains(item: str, string: str) -> CheckResult:
    return CheckResult.of(
        item in string, f"string containing {render_value(item)}", render_value(string)
    )


def does_not_contain(item: str, string: str) -> CheckResult:
    return CheckResult.of(
        item not in string, f"string not containing {render_value(item)}", render_value(string)
    )


def starts_with(prefix: str, string: str) -> CheckResult:
    return CheckResult.of(
        string.startswith(prefix),
        f"string starting with {render_value(prefix)}",
        render_value(string),
    )


def does_not_start_with(prefix: str, string: str) -> CheckResult:
    return CheckResult.of(
        not string.startswith(prefix),
        f"string not starting with {render_value(prefix)}",
        render_value(string),
    )


def ends_with(suffix: str, string: str) -> CheckResult:
    return CheckResult.of(
        string.endswith(suffix),
        f"string ending with {render_value(suffix)}",
        render_value(string),
    )


def does_not_end_with(suffix: str, string: str) -> CheckResult:
    return CheckResult.of(
        not string.endswith(suffix),
        f"string not ending with {render_value(suffix)}",
        render_value(string),
    )


def matches(pattern: str | re.Pattern[str], string: str) -> CheckResult:
    return CheckResult.of(
        re.search(pattern, string) is not None,
        f"string matching {render_value(_pattern_text(pattern))}",
        render_value(string),
    )


def does_not_match(pattern: str | re.Pattern[str], string: str) -> CheckResult:
    return CheckResult.of(
        re.search(pattern, string) is None,
        f"string not matching {render_value(_pattern_text(pattern))}",
        render_value(string),
    )


def _pattern_text(pattern: str | re.Pattern[str]) -> str:
    return pattern.pattern if isinstance(pattern, re.Pattern) else pattern
