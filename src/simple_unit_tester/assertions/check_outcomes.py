"""Result of evaluating one predicate."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CheckResult:
    """Predicate verdict with the texts shown when it does not hold."""

    passed: bool
    expected: str = ""
    actual: str = ""

    @staticmethod
    def ok() -> CheckResult:
        return CheckResult(passed=True)

    @staticmethod
    def mismatch(expected: str, actual: str) -> CheckResult:
        return CheckResult(passed=False, expected=expected, actual=actual)

    @staticmethod
    def of(passed: bool, expected: str, actual: str) -> CheckResult:
        return CheckResult(passed=passed, expected=expected, actual=actual)
