"""Predicates of the collection assertion family."""

from __future__ import annotations

from collections import Counter
from collections.abc import Callable, Collection, Iterable
from typing import Any

from simple_unit_tester.value_rendering import EMPTY_TEXT, render_items, type_name

from .check_outcomes import CheckResult
from .general_checks import values_equal


def all_items_are_instances_of(collection: Collection, expected_type: type) -> CheckResult:
    return CheckResult.of(
        all(isinstance(item, expected_type) for item in collection),
        f"all items instance of <{type_name(expected_type)}>",
        render_items(collection),
    )


def all_items_are_not_null(collection: Collection) -> CheckResult:
    return CheckResult.of(
        all(item is not None for item in collection),
        "all items are not null",
        render_items(collection),
    )


def all_items_are_unique(collection: Collection) -> CheckResult:
    items = list(collection)
    unique = all(
        not values_equal(item, other)
        for index, item in enumerate(items)
        for other in items[index + 1 :]
    )
    return CheckResult.of(unique, "all items are unique", render_items(collection))


def are_equal(expected: Iterable, actual: Iterable) -> CheckResult:
    expected_items, actual_items = list(expected), list(actual)
    return CheckResult.of(
        _sequences_equal(expected_items, actual_items),
        render_items(expected_items),
        render_items(actual_items),
    )


def are_not_equal(expected: Iterable, actual: Iterable) -> CheckResult:
    expected_items, actual_items = list(expected), list(actual)
    return CheckResult.of(
        not _sequences_equal(expected_items, actual_items),
        f"not {render_items(expected_items)}",
        render_items(actual_items),
    )


def are_equivalent(expected: Iterable, actual: Iterable) -> CheckResult:
    expected_items, actual_items = list(expected), list(actual)
    return CheckResult.of(
        _is_equivalent(expected_items, actual_items),
        f"equivalent {render_items(expected_items)}",
        render_items(actual_items),
    )


def are_not_equivalent(expected: Iterable, actual: Iterable) -> CheckResult:
    expected_items, actual_items = list(expected), list(actual)
    return CheckResult.of(
        not _is_equivalent(expected_items, actual_items),
        f"not equivalent {render_items(expected_items)}",
        render_items(actual_items),
    )


def contains(expected: Iterable, actual: Collection) -> CheckResult:
    expected_items = list(expected)
    return CheckResult.of(
        all(item in actual for item in expected_items),
        f"contains {render_items(expected_items)}",
        render_items(actual),
    )


def does_not_contain(expected: Iterable, actual: Collection) -> CheckResult:
    expected_items = list(expected)
    return CheckResult.of(
        not all(item in actual for item in expected_items),
        f"not contains {render_items(expected_items)}",
        render_items(actual),
    )


def is_empty(collection: Collection) -> CheckResult:
    return CheckResult.of(len(collection) == 0, EMPTY_TEXT, render_items(collection))


def is_not_empty(collection: Collection) -> CheckResult:
    return CheckResult.of(len(collection) != 0, f"not {EMPTY_TEXT}", EMPTY_TEXT)


def is_ordered(collection: Iterable, key: Callable[[Any], Any] | None = None) -> CheckResult:
    items = list(collection)
    keys = [key(item) for item in items] if key else items
    ordered = all(left <= right for left, right in zip(keys, keys[1:]))
    return CheckResult.of(ordered, "<ordered>", render_items(items))


def _sequences_equal(expected: list, actual: list) -> bool:
    return len(expected) == len(actual) and all(
        values_equal(left, right) for left, right in zip(expected, actual)
    )


def _is_equivalent(expected: list, actual: list) -> bool:
    if len(expected) != len(actual):
        return False
    try:
        return Counter(expected) == Counter(actual)
    except TypeError:
        remaining = list(actual)
        for item in expected:
            match = next((index for index, other in enumerate(remaining) if other == item), None)
            if match is None:
                return False
            del remaining[match]
        return True
