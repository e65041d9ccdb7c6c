"""Console event listener service."""

from __future__ import annotations

from typing import TextIO

import click

from simple_unit_tester.outcomes import OutcomeKind, TestOutcome

from .event_listener import EventListener
from .event_models import ListTestEventArgs, RunEventArgs, TestEventArgs

_STATUS_LABELS = {
    OutcomeKind.SUCCEEDED: ("SUCCEED", "green"),
    OutcomeKind.FAILED: ("FAILED", "red"),
    OutcomeKind.ABORTED: ("ABORTED", "magenta"),
    OutcomeKind.IGNORED: ("IGNORED", "yellow"),
}
_LABEL_WIDTH = 7


def plural(count: int, noun: str) -> str:
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"


class ConsoleEventListener(EventListener):
    """Prints runner events in the stable console format.

    ``stream`` defaults to standard output, resolved on every write. When
    ``output_color`` is set the status word is styled; click drops the styling
    on streams that are not terminals.
    """

    def __init__(
        self,
        stream: TextIO | None = None,
        *,
        show_duration: bool = True,
        output_color: bool = True,
    ) -> None:
        self._stream = stream
        self._show_duration = show_duration
        self._output_color = output_color

    def on_run_start(self, args: RunEventArgs) -> None:
        self._echo(
            f"Start {plural(args.test_count, 'test')} from {plural(args.class_count, 'test case')}"
        )
        self._echo("Run tests:")

    def on_test_end(self, args: TestEventArgs) -> None:
        outcome = args.outcome or TestOutcome.succeed()
        status = self._status(outcome.kind)
        self._echo(f"  {status} {args.full_name}{self._duration(args.duration_ms)}")
        for line in _detail_lines(outcome):
            self._echo(f"    {line}")

    def on_run_end(self, args: RunEventArgs) -> None:
        self._echo("")
        self._echo("Test results:")
        for kind in OutcomeKind:
            count = args.tally.count(kind)
            if count:
                self._echo(f"  {self._status(kind)} {plural(count, 'test')}.")
        self._echo(
            f"End {plural(args.test_count, 'test')} from {plural(args.class_count, 'test case')}"
            f" ran.{self._duration(args.duration_ms)}"
        )

    def on_list_test(self, args: ListTestEventArgs) -> None:
        self._echo(args.full_name)

    def _status(self, kind: OutcomeKind) -> str:
        label, color = _STATUS_LABELS[kind]
        padding = " " * (_LABEL_WIDTH - len(label))
        if self._output_color:
            return click.style(label, fg=color) + padding
        return label + padding

    def _duration(self, duration_ms: int) -> str:
        return f" ({duration_ms} ms total)" if self._show_duration else ""

    def _echo(self, line: str) -> None:
        click.echo(line, file=self._stream)


def _detail_lines(outcome: TestOutcome) -> list[str]:
    if outcome.kind in (OutcomeKind.SUCCEEDED, OutcomeKind.IGNORED):
        return []
    lines = []
    message = outcome.user_message or outcome.message
    if message:
        lines.append(message)
    if outcome.kind == OutcomeKind.FAILED and (outcome.expected or outcome.actual):
        lines.append(f"Expected: {outcome.expected}")
        lines.append(f"But was:  {outcome.actual}")
    if outcome.location is not None:
        lines.append(f"Stack Trace: in {outcome.location}")
    return lines

