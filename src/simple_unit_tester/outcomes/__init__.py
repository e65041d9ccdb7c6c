"""Outcome domain exports."""

from .test_outcomes import OutcomeKind, OutcomeTally, SourceLocation, TestOutcome

__all__ = ["OutcomeKind", "OutcomeTally", "SourceLocation", "TestOutcome"]
