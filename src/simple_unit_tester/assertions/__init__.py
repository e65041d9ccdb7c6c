"""Assertion domain exports."""

from .assertion_errors import AbortError, AssertionFailedError, IgnoreError, OutcomeUnwind
from .check_outcomes import CheckResult
from .test_context import (
    TestContext,
    TestThread,
    activate_context,
    caller_location,
    current_context,
    current_scope_failure,
    flag_scope_failure,
)
from .verifiers import (
    CollectionVerifier,
    DirectoryVerifier,
    FileVerifier,
    GeneralVerifier,
    Severity,
    StringVerifier,
)

assert_ = GeneralVerifier(Severity.ASSERT)
assume = GeneralVerifier(Severity.ASSUME)
valid = GeneralVerifier(Severity.VALID)

string_assert = StringVerifier(Severity.ASSERT)
string_assume = StringVerifier(Severity.ASSUME)
string_valid = StringVerifier(Severity.VALID)

collection_assert = CollectionVerifier(Severity.ASSERT)
collection_assume = CollectionVerifier(Severity.ASSUME)
collection_valid = CollectionVerifier(Severity.VALID)

file_assert = FileVerifier(Severity.ASSERT)
file_assume = FileVerifier(Severity.ASSUME)
file_valid = FileVerifier(Severity.VALID)

directory_assert = DirectoryVerifier(Severity.ASSERT)
directory_assume = DirectoryVerifier(Severity.ASSUME)
directory_valid = DirectoryVerifier(Severity.VALID)

__all__ = [
    "AbortError",
    "AssertionFailedError",
    "IgnoreError",
    "OutcomeUnwind",
    "CheckResult",
    "TestContext",
    "TestThread",
    "activate_context",
    "caller_location",
    "current_context",
    "current_scope_failure",
    "flag_scope_failure",
    "CollectionVerifier",
    "DirectoryVerifier",
    "FileVerifier",
    "GeneralVerifier",
    "Severity",
    "StringVerifier",
    "assert_",
    "assume",
    "valid",
    "string_assert",
    "string_assume",
    "string_valid",
    "collection_assert",
    "collection_assume",
    "collection_valid",
    "file_assert",
    "file_assume",
    "file_valid",
    "directory_assert",
    "directory_assume",
    "directory_valid",
]
