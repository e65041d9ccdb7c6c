"""Runner event argument entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from simple_unit_tester.outcomes import OutcomeTally, SourceLocation, TestOutcome


@dataclass(frozen=True)
class RunEventArgs:
    """Arguments of ``on_run_start`` and ``on_run_end``.

    ``tally`` and ``duration_ms`` are only meaningful on ``on_run_end``.
    """

    test_count: int
    class_count: int
    iteration: int = 1
    iteration_count: int = 1
    started_at: datetime | None = None
    tally: OutcomeTally = field(default_factory=OutcomeTally)
    duration_ms: int = 0


@dataclass(frozen=True)
class ClassEventArgs:
    """Arguments of ``on_class_start`` and ``on_class_end``."""

    class_name: str
    test_count: int
    duration_ms: int = 0
    cleanup_outcome: TestOutcome | None = None


@dataclass(frozen=True)
class TestEventArgs:
    """Arguments of ``on_test_start`` and ``on_test_end``."""

    __test__ = False

    class_name: str
    test_name: str
    outcome: TestOutcome | None = None
    duration_ms: int = 0
    declared_at: SourceLocation | None = None

    @property
    def full_name(self) -> str:
        return f"{self.class_name}.{self.test_name}"


@dataclass(frozen=True)
class ListTestEventArgs:
    """Arguments of ``on_list_test``."""

    class_name: str
    test_name: str

    @property
    def full_name(self) -> str:
        return f"{self.class_name}.{self.test_name}"


@dataclass(frozen=True)
class RecordedTest:
    """One ended test as kept by report writers."""

    iteration: int
    class_name: str
    test_name: str
    outcome: TestOutcome
    duration_ms: int

    @property
    def full_name(self) -> str:
        return f"{self.class_name}.{self.test_name}"
