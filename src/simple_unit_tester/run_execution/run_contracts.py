"""Run execution entities."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from simple_unit_tester.outcomes import OutcomeTally, TestOutcome


@dataclass(frozen=True)
class TestResult:
    """Outcome of one test in one iteration."""

    __test__ = False

    class_name: str
    test_name: str
    outcome: TestOutcome
    duration_ms: int

    @property
    def full_name(self) -> str:
        return f"{self.class_name}.{self.test_name}"


@dataclass(frozen=True)
class ClassResult:
    """Results of one test-class execution."""

    class_name: str
    tests: tuple[TestResult, ...]
    duration_ms: int
    cleanup_outcome: TestOutcome | None = None

    @property
    def cleanup_failed(self) -> bool:
        return self.cleanup_outcome is not None and self.cleanup_outcome.counts_as_failure


@dataclass(frozen=True)
class RunSummary:
    """Results of one repeat iteration."""

    iteration: int
    classes: tuple[ClassResult, ...]
    duration_ms: int
    started_at: datetime

    @property
    def tests(self) -> tuple[TestResult, ...]:
        return tuple(test for class_result in self.classes for test in class_result.tests)

    @property
    def tally(self) -> OutcomeTally:
        return OutcomeTally.of(test.outcome for test in self.tests)

    @property
    def test_count(self) -> int:
        return len(self.tests)

    @property
    def class_count(self) -> int:
        return len(self.classes)

    @property
    def has_failures(self) -> bool:
        """Return True when a test failed or aborted or a class cleanup failed."""
        return self.tally.has_failures or any(
            class_result.cleanup_failed for class_result in self.classes
        )
