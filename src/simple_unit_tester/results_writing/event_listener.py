"""Event listener protocol."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from simple_unit_tester.outcomes import OutcomeKind, TestOutcome

from .event_models import (
    ClassEventArgs,
    ListTestEventArgs,
    RecordedTest,
    RunEventArgs,
    TestEventArgs,
)

_LOGGER = logging.getLogger("simple_unit_tester.results_writing")
_LOGGER.addHandler(logging.NullHandler())


class EventListener:
    """Consumer of runner events.

    Every hook is a no-op. ``on_test_end`` dispatches to the outcome-specific
    hook so subclasses can override either level.
    """

    def on_run_start(self, args: RunEventArgs) -> None:
        pass

    def on_class_start(self, args: ClassEventArgs) -> None:
        pass

    def on_test_start(self, args: TestEventArgs) -> None:
        pass

    def on_test_end(self, args: TestEventArgs) -> None:
        kind = args.outcome.kind if args.outcome is not None else OutcomeKind.SUCCEEDED
        if kind == OutcomeKind.FAILED:
            self.on_test_failed(args)
        elif kind == OutcomeKind.ABORTED:
            self.on_test_aborted(args)
        elif kind == OutcomeKind.IGNORED:
            self.on_test_ignored(args)
        else:
            self.on_test_succeeded(args)

    def on_test_succeeded(self, args: TestEventArgs) -> None:
        pass

    def on_test_failed(self, args: TestEventArgs) -> None:
        pass

    def on_test_aborted(self, args: TestEventArgs) -> None:
        pass

    def on_test_ignored(self, args: TestEventArgs) -> None:
        pass

    def on_class_end(self, args: ClassEventArgs) -> None:
        pass

    def on_run_end(self, args: RunEventArgs) -> None:
        pass

    def on_list_test(self, args: ListTestEventArgs) -> None:
        pass


class CompositeEventListener(EventListener):
    """Forwards every event to each child listener in order.

    A child that raises is logged and skipped so the remaining children still
    receive the event.
    """

    def __init__(self, listeners: Iterable[EventListener]) -> None:
        self._listeners = tuple(listeners)

    @property
    def listeners(self) -> tuple[EventListener, ...]:
        return self._listeners

    def on_run_start(self, args: RunEventArgs) -> None:
        self._forward("on_run_start", args)

    def on_class_start(self, args: ClassEventArgs) -> None:
        self._forward("on_class_start", args)

    def on_test_start(self, args: TestEventArgs) -> None:
        self._forward("on_test_start", args)

    def on_test_end(self, args: TestEventArgs) -> None:
        self._forward("on_test_end", args)

    def on_class_end(self, args: ClassEventArgs) -> None:
        self._forward("on_class_end", args)

    def on_run_end(self, args: RunEventArgs) -> None:
        self._forward("on_run_end", args)

    def on_list_test(self, args: ListTestEventArgs) -> None:
        self._forward("on_list_test", args)

    def _forward(self, hook: str, args: object) -> None:
        for listener in self._listeners:
            try:
                getattr(listener, hook)(args)
            except Exception:  # pylint: disable=broad-exception-caught
                _LOGGER.exception("listener %s failed in %s", type(listener).__name__, hook)


class RecordingEventListener(EventListener):
    """Keeps every ended test of every iteration and reports on ``on_run_end``."""

    def __init__(self) -> None:
        self._iteration = 0
        self._records: list[RecordedTest] = []
        self._runs: list[RunEventArgs] = []

    @property
    def records(self) -> tuple[RecordedTest, ...]:
        return tuple(self._records)

    @property
    def runs(self) -> tuple[RunEventArgs, ...]:
        return tuple(self._runs)

    def on_run_start(self, args: RunEventArgs) -> None:
        self._iteration = args.iteration

    def on_test_end(self, args: TestEventArgs) -> None:
        self._records.append(
            RecordedTest(
                iteration=self._iteration,
                class_name=args.class_name,
                test_name=args.test_name,
                outcome=args.outcome or TestOutcome.succeed(),
                duration_ms=args.duration_ms,
            )
        )

    def on_run_end(self, args: RunEventArgs) -> None:
        self._runs.append(args)
        self.write_report()

    def write_report(self) -> None:
        """Persist everything recorded so far."""
