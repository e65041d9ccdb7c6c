"""Run execution domain exports."""

from .run_contracts import ClassResult, RunSummary, TestResult
from .unit_test_runner import (
    UnitTestRunner,
    build_event_listener,
    unhandled_exception_outcome,
)

__all__ = [
    "ClassResult",
    "RunSummary",
    "TestResult",
    "UnitTestRunner",
    "build_event_listener",
    "unhandled_exception_outcome",
]
