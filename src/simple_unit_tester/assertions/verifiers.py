"""Assertion verifiers for the assert, assume and valid severities.

Every family shares the same predicate logic; the severity only decides which
outcome a mismatch records and whether the test body is unwound.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Collection, Iterable
from enum import Enum
from typing import Any, NoReturn

from simple_unit_tester.outcomes import SourceLocation, TestOutcome

from . import collection_checks, general_checks, path_checks, string_checks
from .assertion_errors import AbortError, AssertionFailedError, IgnoreError
from .check_outcomes import CheckResult
from .path_checks import PathLike
from .test_context import caller_location, current_context

_LOGGER = logging.getLogger("simple_unit_tester.assertions")
_LOGGER.addHandler(logging.NullHandler())


class Severity(str, Enum):
    """What a mismatch does to the running test."""

    ASSERT = "assert"
    ASSUME = "assume"
    VALID = "valid"


class _Verifier:
    """Reports predicate results at one severity."""

    def __init__(self, severity: Severity) -> None:
        self._severity = severity

    @property
    def severity(self) -> Severity:
        return self._severity

    def succeed(self, message: str = "", *, location: SourceLocation | None = None) -> None:
        self._verify(CheckResult.ok(), message, location)

    def fail(self, message: str = "", *, location: SourceLocation | None = None) -> None:
        self._verify(CheckResult.mismatch("", ""), message, location)

    def abort(self, message: str = "", *, location: SourceLocation | None = None) -> NoReturn:
        outcome = TestOutcome.abort(message, location or caller_location())
        context = current_context()
        if context is not None:
            context.record(outcome)
        raise AbortError(outcome)

    def ignore(self, message: str = "", *, location: SourceLocation | None = None) -> NoReturn:
        outcome = TestOutcome.ignore(message, location or caller_location())
        context = current_context()
        if context is not None:
            context.record(outcome)
        raise IgnoreError(outcome)

    def _verify(
        self, check: CheckResult, message: str, location: SourceLocation | None
    ) -> None:
        context = current_context()
        if context is not None and context.is_cancelled:
            outcome = context.timeout_outcome(location or caller_location())
            context.record(outcome)
            raise AssertionFailedError(outcome)
        if check.passed:
            return

        resolved_location = location or caller_location()
        if self._severity == Severity.ASSUME:
            ignored = TestOutcome.ignore(
                message, resolved_location, expected=check.expected, actual=check.actual
            )
            if context is not None:
                context.record(ignored)
            raise IgnoreError(ignored)

        failed = TestOutcome.fail(check.expected, check.actual, message, resolved_location)
        if context is None:
            raise AssertionFailedError(failed)
        context.record(failed)
        if self._severity == Severity.ASSERT:
            raise AssertionFailedError(failed)
        _LOGGER.debug("valid check failed in %s at %s", context.full_name, resolved_location)


class GeneralVerifier(_Verifier):
    """Equality, ordering, boolean, null, numeric, type, container and exception checks."""

    def are_equal(
        self,
        expected: Any,
        actual: Any,
        message: str = "",
        *,
        tolerance: Any = None,
        location: SourceLocation | None = None,
    ) -> None:
        self._verify(general_checks.are_equal(expected, actual, tolerance), message, location)

    def are_not_equal(
        self,
        expected: Any,
        actual: Any,
        message: str = "",
        *,
        location: SourceLocation | None = None,
    ) -> None:
        self._verify(general_checks.are_not_equal(expected, actual), message, location)

    def are_same(
        self,
        expected: Any,
        actual: Any,
        message: str = "",
        *,
        location: SourceLocation | None = None,
    ) -> None:
        self._verify(general_checks.are_same(expected, actual), message, location)

    def are_not_same(
        self,
        expected: Any,
        actual: Any,
        message: str = "",
        *,
        location: SourceLocation | None = None,
    ) -> None:
        self._verify(general_checks.are_not_same(expected, actual), message, location)

    def is_greater(
        self, val1: Any, val2: Any, message: str = "", *, location: SourceLocation | None = None
    ) -> None:
        self._verify(general_checks.is_greater(val1, val2), message, location)

    def is_greater_or_equal(
        self, val1: Any, val2: Any, message: str = "", *, location: SourceLocation | None = None
    ) -> None:
        self._verify(general_checks.is_greater_or_equal(val1, val2), message, location)

    def is_less(
        self, val1: Any, val2: Any, message: str = "", *, location: SourceLocation | None = None
    ) -> None:
        self._verify(general_checks.is_less(val1, val2), message, location)

    def is_less_or_equal(
        self, val1: Any, val2: Any, message: str = "", *, location: SourceLocation | None = None
    ) -> None:
        self._verify(general_checks.is_less_or_equal(val1, val2), message, location)

    def is_true(
        self, value: Any, message: str = "", *, location: SourceLocation | None = None
    ) -> None:
        self._verify(general_checks.is_true(value), message, location)

    def is_false(
        self, value: Any, message: str = "", *, location: SourceLocation | None = None
    ) -> None:
        self._verify(general_checks.is_false(value), message, location)

    def is_null(
        self, value: Any, message: str = "", *, location: SourceLocation | None = None
    ) -> None:
        self._verify(general_checks.is_null(value), message, location)

    def is_not_null(
        self, value: Any, message: str = "", *, location: SourceLocation | None = None
    ) -> None:
        self._verify(general_checks.is_not_null(value), message, location)

    def is_zero(
        self, value: Any, message: str = "", *, location: SourceLocation | None = None
    ) -> None:
        self._verify(general_checks.is_zero(value), message, location)

    def is_not_zero(
        self, value: Any, message: str = "", *, location: SourceLocation | None = None
    ) -> None:
        self._verify(general_checks.is_not_zero(value), message, location)

    def is_positive(
        self, value: Any, message: str = "", *, location: SourceLocation | None = None
    ) -> None:
        self._verify(general_checks.is_positive(value), message, location)

    def is_negative(
        self, value: Any, message: str = "", *, location: SourceLocation | None = None
    ) -> None:
        self._verify(general_checks.is_negative(value), message, location)

    def is_nan(
        self, value: Any, message: str = "", *, location: SourceLocation | None = None
    ) -> None:
        self._verify(general_checks.is_nan(value), message, location)

    def is_not_nan(
        self, value: Any, message: str = "", *, location: SourceLocation | None = None
    ) -> None:
        self._verify(general_checks.is_not_nan(value), message, location)

    def is_instance_of(
        self,
        value: Any,
        expected_type: type,
        message: str = "",
        *,
        location: SourceLocation | None = None,
    ) -> None:
        self._verify(general_checks.is_instance_of(value, expected_type), message, location)

    def is_not_instance_of(
        self,
        value: Any,
        expected_type: type,
        message: str = "",
        *,
        location: SourceLocation | None = None,
    ) -> None:
        self._verify(general_checks.is_not_instance_of(value, expected_type), message, location)

    def contains(
        self,
        item: Any,
        collection: Collection,
        message: str = "",
        *,
        location: SourceLocation | None = None,
    ) -> None:
        self._verify(general_checks.contains(item, collection), message, location)

    def does_not_contain(
        self,
        item: Any,
        collection: Collection,
        message: str = "",
        *,
        location: SourceLocation | None = None,
    ) -> None:
        self._verify(general_checks.does_not_contain(item, collection), message, location)

    def is_empty(
        self, collection: Collection, message: str = "", *, location: SourceLocation | None = None
    ) -> None:
        self._verify(general_checks.is_empty(collection), message, location)

    def is_not_empty(
        self, collection: Collection, message: str = "", *, location: SourceLocation | None = None
    ) -> None:
        self._verify(general_checks.is_not_empty(collection), message, location)

    def throws(
        self,
        expected_type: type[BaseException],
        func: Callable[[], object],
        message: str = "",
        *,
        location: SourceLocation | None = None,
    ) -> BaseException | None:
        """Check that ``func`` raises ``expected_type`` and return the raised exception."""
        check, exception = general_checks.throws(expected_type, func)
        self._verify(check, message, location)
        return exception

    def throws_any(
        self,
        func: Callable[[], object],
        message: str = "",
        *,
        location: SourceLocation | None = None,
    ) -> None:
        self._verify(general_checks.throws_any(func), message, location)

    def does_not_throw(
        self,
        func: Callable[[], object],
        message: str = "",
        *,
        location: SourceLocation | None = None,
    ) -> None:
        self._verify(general_checks.does_not_throw(func), message, location)


class StringVerifier(_Verifier):
    """String comparison, affix and regular-expression checks."""

    def are_equal_ignoring_case(
        self,
        expected: str,
        actual: str,
        message: str = "",
        *,
        location: SourceLocation | None = None,
    ) -> None:
        self._verify(string_checks.are_equal_ignoring_case(expected, actual), message, location)

    def are_not_equal_ignoring_case(
        self,
        expected: str,
        actual: str,
        message: str = "",
        *,
        location: SourceLocation | None = None,
    ) -> None:
        self._verify(string_checks.are_not_equal_ignoring_case(expected, actual), message, location)

    def contains(
        self, item: str, string: str, message: str = "", *, location: SourceLocation | None = None
    ) -> None:
        self._verify(string_checks.contains(item, string), message, location)

    def does_not_contain(
        self, item: str, string: str, message: str = "", *, location: SourceLocation | None = None
    ) -> None:
        self._verify(string_checks.does_not_contain(item, string), message, location)

    def starts_with(
        self, prefix: str, string: str, message: str = "", *, location: SourceLocation | None = None
    ) -> None:
        self._verify(string_checks.starts_with(prefix, string), message, location)

    def does_not_start_with(
        self, prefix: str, string: str, message: str = "", *, location: SourceLocation | None = None
    ) -> None:
        self._verify(string_checks.does_not_start_with(prefix, string), message, location)

    def ends_with(
        self, suffix: str, string: str, message: str = "", *, location: SourceLocation | None = None
    ) -> None:
        self._verify(string_checks.ends_with(suffix, string), message, location)

    def does_not_end_with(
        self, suffix: str, string: str, message: str = "", *, location: SourceLocation | None = None
    ) -> None:
        self._verify(string_checks.does_not_end_with(suffix, string), message, location)

    def matches(
        self,
        pattern: str | re.Pattern[str],
        string: str,
        message: str = "",
        *,
        location: SourceLocation | None = None,
    ) -> None:
        self._verify(string_checks.matches(pattern, string), message, location)

    def does_not_match(
        self,
        pattern: str | re.Pattern[str],
        string: str,
        message: str = "",
        *,
        location: SourceLocation | None = None,
    ) -> None:
        self._verify(string_checks.does_not_match(pattern, string), message, location)


class CollectionVerifier(_Verifier):
    """Whole-collection checks."""

    def all_items_are_instances_of(
        self,
        collection: Collection,
        expected_type: type,
        message: str = "",
        *,
        location: SourceLocation | None = None,
    ) -> None:
        self._verify(
            collection_checks.all_items_are_instances_of(collection, expected_type),
            message,
            location,
        )

    def all_items_are_not_null(
        self, collection: Collection, message: str = "", *, location: SourceLocation | None = None
    ) -> None:
        self._verify(collection_checks.all_items_are_not_null(collection), message, location)

    def all_items_are_unique(
        self, collection: Collection, message: str = "", *, location: SourceLocation | None = None
    ) -> None:
        self._verify(collection_checks.all_items_are_unique(collection), message, location)

    def are_equal(
        self,
        expected: Iterable,
        actual: Iterable,
        message: str = "",
        *,
        location: SourceLocation | None = None,
    ) -> None:
        self._verify(collection_checks.are_equal(expected, actual), message, location)

    def are_not_equal(
        self,
        expected: Iterable,
        actual: Iterable,
        message: str = "",
        *,
        location: SourceLocation | None = None,
    ) -> None:
        self._verify(collection_checks.are_not_equal(expected, actual), message, location)

    def are_equivalent(
        self,
        expected: Iterable,
        actual: Iterable,
        message: str = "",
        *,
        location: SourceLocation | None = None,
    ) -> None:
        self._verify(collection_checks.are_equivalent(expected, actual), message, location)

    def are_not_equivalent(
        self,
        expected: Iterable,
        actual: Iterable,
        message: str = "",
        *,
        location: SourceLocation | None = None,
    ) -> None:
        self._verify(collection_checks.are_not_equivalent(expected, actual), message, location)

    def contains(
        self,
        expected: Iterable,
        actual: Collection,
        message: str = "",
        *,
        location: SourceLocation | None = None,
    ) -> None:
        self._verify(collection_checks.contains(expected, actual), message, location)

    def does_not_contain(
        self,
        expected: Iterable,
        actual: Collection,
        message: str = "",
        *,
        location: SourceLocation | None = None,
    ) -> None:
        self._verify(collection_checks.does_not_contain(expected, actual), message, location)

    def is_empty(
        self, collection: Collection, message: str = "", *, location: SourceLocation | None = None
    ) -> None:
        self._verify(collection_checks.is_empty(collection), message, location)

    def is_not_empty(
        self, collection: Collection, message: str = "", *, location: SourceLocation | None = None
    ) -> None:
        self._verify(collection_checks.is_not_empty(collection), message, location)

    def is_ordered(
        self,
        collection: Iterable,
        message: str = "",
        *,
        key: Callable[[Any], Any] | None = None,
        location: SourceLocation | None = None,
    ) -> None:
        self._verify(collection_checks.is_ordered(collection, key), message, location)


class FileVerifier(_Verifier):
    """File existence and content checks."""

    def exists(
        self, path: PathLike, message: str = "", *, location: SourceLocation | None = None
    ) -> None:
        self._verify(path_checks.file_exists(path), message, location)

    def does_not_exist(
        self, path: PathLike, message: str = "", *, location: SourceLocation | None = None
    ) -> None:
        self._verify(path_checks.file_does_not_exist(path), message, location)

    def are_equal(
        self,
        expected: PathLike,
        actual: PathLike,
        message: str = "",
        *,
        location: SourceLocation | None = None,
    ) -> None:
        self._verify(path_checks.files_are_equal(expected, actual), message, location)

    def are_not_equal(
        self,
        expected: PathLike,
        actual: PathLike,
        message: str = "",
        *,
        location: SourceLocation | None = None,
    ) -> None:
        self._verify(path_checks.files_are_not_equal(expected, actual), message, location)


class DirectoryVerifier(_Verifier):
    """Directory existence and identity checks."""

    def exists(
        self, path: PathLike, message: str = "", *, location: SourceLocation | None = None
    ) -> None:
        self._verify(path_checks.directory_exists(path), message, location)

    def does_not_exist(
        self, path: PathLike, message: str = "", *, location: SourceLocation | None = None
    ) -> None:
        self._verify(path_checks.directory_does_not_exist(path), message, location)

    def are_equal(
        self,
        expected: PathLike,
        actual: PathLike,
        message: str = "",
        *,
        location: SourceLocation | None = None,
    ) -> None:
        self._verify(path_checks.directories_are_equal(expected, actual), message, location)

    def are_not_equal(
        self,
        expected: PathLike,
        actual: PathLike,
        message: str = "",
        *,
        location: SourceLocation | None = None,
    ) -> None:
        self._verify(path_checks.directories_are_not_equal(expected, actual), message, location)
