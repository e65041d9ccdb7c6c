"""Sentinels used to unwind a running test body."""

from __future__ import annotations

from simple_unit_tester.outcomes import TestOutcome


class OutcomeUnwind(BaseException):
    """Ends the current test body and carries the outcome to the runner.

    Derives from ``BaseException`` so that ``except Exception`` in user code
    cannot swallow an assertion.
    """

    def __init__(self, outcome: TestOutcome) -> None:
        super().__init__(outcome.message or outcome.expected)
        self.outcome = outcome


class AssertionFailedError(OutcomeUnwind):
    """Raised by ``assert_`` verifiers on a mismatch."""


class AbortError(OutcomeUnwind):
    """Raised by ``abort()``."""


class IgnoreError(OutcomeUnwind):
    """Raised by ``assume`` verifiers on a mismatch and by ``ignore()``."""
