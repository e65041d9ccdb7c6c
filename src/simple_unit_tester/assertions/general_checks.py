"""Predicates of the general assertion family."""

from __future__ import annotations

import math
from collections.abc import Callable, Collection
from typing import Any

from simple_unit_tester.value_rendering import (
    EMPTY_TEXT,
    render_items,
    render_type_of,
    render_value,
    type_name,
)

from .assertion_errors import OutcomeUnwind
from .check_outcomes import CheckResult

NOTHING_TEXT = "<nothing>"
NO_EXCEPTION_TEXT = "No Exception to be thrown"


def are_equal(expected: Any, actual: Any, tolerance: Any = None) -> CheckResult:
    if tolerance is not None:
        passed = _within_tolerance(expected, actual, tolerance)
    else:
        passed = values_equal(expected, actual)
    return CheckResult.of(passed, render_value(expected), render_value(actual))


def are_not_equal(expected: Any, actual: Any) -> CheckResult:
    return CheckResult.of(
        not values_equal(expected, actual),
        f"not {render_value(expected)}",
        render_value(actual),
    )


def are_same(expected: Any, actual: Any) -> CheckResult:
    return CheckResult.of(
        actual is expected, f"same as {render_value(expected)}", render_value(actual)
    )


def are_not_same(expected: Any, actual: Any) -> CheckResult:
    return CheckResult.of(
        actual is not expected, f"not same as {render_value(expected)}", render_value(actual)
    )


def is_greater(val1: Any, val2: Any) -> CheckResult:
    return CheckResult.of(val1 > val2, f"greater than {render_value(val2)}", render_value(val1))


def is_greater_or_equal(val1: Any, val2: Any) -> CheckResult:
    return CheckResult.of(
        val1 >= val2, f"greater than or equal to {render_value(val2)}", render_value(val1)
    )


def is_less(val1: Any, val2: Any) -> CheckResult:
    return CheckResult.of(val1 < val2, f"less than {render_value(val2)}", render_value(val1))


def is_less_or_equal(val1: Any, val2: Any) -> CheckResult:
    return CheckResult.of(
        val1 <= val2, f"less than or equal to {render_value(val2)}", render_value(val1)
    )


def is_true(value: Any) -> CheckResult:
    return CheckResult.of(bool(value), "True", render_value(value))


def is_false(value: Any) -> CheckResult:
    return CheckResult.of(not value, "False", render_value(value))


def is_null(value: Any) -> CheckResult:
    return CheckResult.of(value is None, "null", render_value(value))


def is_not_null(value: Any) -> CheckResult:
    return CheckResult.of(value is not None, "not null", "null")


def is_zero(value: Any) -> CheckResult:
    return CheckResult.of(value == 0, "zero", render_value(value))


def is_not_zero(value: Any) -> CheckResult:
    return CheckResult.of(value != 0, "not zero", render_value(value))


def is_positive(value: Any) -> CheckResult:
    return CheckResult.of(value > 0, "positive", render_value(value))


def is_negative(value: Any) -> CheckResult:
    return CheckResult.of(value < 0, "negative", render_value(value))


def is_nan(value: Any) -> CheckResult:
    return CheckResult.of(_is_nan(value), "NaN", render_value(value))


def is_not_nan(value: Any) -> CheckResult:
    return CheckResult.of(not _is_nan(value), "not NaN", render_value(value))


def is_instance_of(value: Any, expected_type: type) -> CheckResult:
    return CheckResult.of(
        isinstance(value, expected_type),
        f"instance of <{type_name(expected_type)}>",
        render_type_of(value),
    )


def is_not_instance_of(value: Any, expected_type: type) -> CheckResult:
    return CheckResult.of(
        not isinstance(value, expected_type),
        f"not instance of <{type_name(expected_type)}>",
        render_type_of(value),
    )


def contains(item: Any, collection: Collection) -> CheckResult:
    return CheckResult.of(
        item in collection,
        f"collection containing {_plain(item)}",
        render_items(collection),
    )


def does_not_contain(item: Any, collection: Collection) -> CheckResult:
    return CheckResult.of(
        item not in collection,
        f"collection not containing {_plain(item)}",
        render_items(collection),
    )


def is_empty(collection: Collection) -> CheckResult:
    return CheckResult.of(len(collection) == 0, "collection <empty>", render_items(collection))


def is_not_empty(collection: Collection) -> CheckResult:
    return CheckResult.of(len(collection) != 0, "collection not <empty>", EMPTY_TEXT)


def throws(
    expected_type: type[BaseException], func: Callable[[], object]
) -> tuple[CheckResult, BaseException | None]:
    """Run ``func`` and return the verdict plus the caught exception of ``expected_type``."""
    expected_text = f"<{type_name(expected_type)}>"
    try:
        func()
    except OutcomeUnwind:
        raise
    except expected_type as exc:
        return CheckResult.ok(), exc
    except Exception as exc:  # pylint: disable=broad-exception-caught
        return CheckResult.mismatch(expected_text, render_type_of(exc)), None
    return CheckResult.mismatch(expected_text, NOTHING_TEXT), None


def throws_any(func: Callable[[], object]) -> CheckResult:
    try:
        func()
    except Exception:  # pylint: disable=broad-exception-caught
        return CheckResult.ok()
    return CheckResult.mismatch("<exception>", NOTHING_TEXT)


def does_not_throw(func: Callable[[], object]) -> CheckResult:
    try:
        func()
    except Exception as exc:  # pylint: disable=broad-exception-caught
        return CheckResult.mismatch(NO_EXCEPTION_TEXT, render_type_of(exc))
    return CheckResult.ok()


def values_equal(expected: Any, actual: Any) -> bool:
    """Exact equality where two NaN floats compare equal."""
    if _is_nan(expected) and _is_nan(actual):
        return True
    return bool(actual == expected)


def _within_tolerance(expected: Any, actual: Any, tolerance: Any) -> bool:
    if _is_nan(expected) and _is_nan(actual):
        return True
    return bool(abs(expected - actual) <= tolerance)


def _is_nan(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    try:
        return math.isnan(value)
    except (TypeError, OverflowError):
        return False


def _plain(item: Any) -> str:
    if isinstance(item, str):
        return item
    return render_value(item)
