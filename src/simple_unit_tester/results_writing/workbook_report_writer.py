"""Results workbook writer service."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import UTC, datetime
from pathlib import Path

from openpyxl import Workbook
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from simple_unit_tester.outcomes import OutcomeTally

from .event_listener import RecordingEventListener
from .event_models import RecordedTest, RunEventArgs

_LOGGER = logging.getLogger("simple_unit_tester.results_writing.workbook")
_LOGGER.addHandler(logging.NullHandler())

RESULTS_SHEET_NAME = "Results"
RUN_INFO_SHEET_NAME = "RunInfo"
RESULT_COLUMNS: tuple[str, ...] = (
    "Iteration",
    "Class",
    "Test",
    "Outcome",
    "Duration (ms)",
    "Expected",
    "Actual",
    "Message",
    "Location",
)


class WorkbookReportWriter(RecordingEventListener):
    """Writes an ``.xlsx`` results workbook at the end of every run iteration."""

    def __init__(self, output_path: Path | str) -> None:
        super().__init__()
        self._output_path = Path(output_path)

    @property
    def output_path(self) -> Path:
        return self._output_path

    def write_report(self) -> None:
        write_results_workbook(self._output_path, self.records, self.runs)
        _LOGGER.debug("results workbook written to %s", self._output_path)


def write_results_workbook(
    output_path: Path | str,
    records: Sequence[RecordedTest],
    runs: Sequence[RunEventArgs],
) -> Path:
    """Write one row per ended test plus a RunInfo sheet with the run tallies."""
    workbook = Workbook()
    sheet = workbook.active
    if sheet is None:
        raise RuntimeError("Workbook active sheet is not available.")
    assert isinstance(sheet, Worksheet)
    sheet.title = RESULTS_SHEET_NAME

    _write_header(sheet)
    for row, record in enumerate(records, start=2):
        _write_record(sheet, row, record)

    _write_run_info_sheet(workbook, records, runs)

    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(output)
    return output.resolve()


def _write_header(sheet: Worksheet) -> None:
    for column_index, name in enumerate(RESULT_COLUMNS, start=1):
        cell = sheet.cell(row=1, column=column_index, value=name)
        cell.style = "Headline 1"
        sheet.column_dimensions[get_column_letter(column_index)].width = max(
            12, min(len(name) + 6, 40)
        )
    sheet.freeze_panes = "A2"


def _write_record(sheet: Worksheet, row: int, record: RecordedTest) -> None:
    outcome = record.outcome
    values = (
        record.iteration,
        record.class_name,
        record.test_name,
        outcome.kind.value,
        record.duration_ms,
        outcome.expected or None,
        outcome.actual or None,
        outcome.user_message or outcome.message or None,
        str(outcome.location) if outcome.location is not None else None,
    )
    for column_index, value in enumerate(values, start=1):
        sheet.cell(row=row, column=column_index, value=value)


def _write_run_info_sheet(
    workbook: Workbook,
    records: Sequence[RecordedTest],
    runs: Sequence[RunEventArgs],
) -> None:
    sheet = workbook.create_sheet(RUN_INFO_SHEET_NAME)
    tally = OutcomeTally.of(record.outcome for record in records)
    started_at = runs[0].started_at if runs and runs[0].started_at else datetime.now(UTC)
    entries = (
        ("run_start", started_at.isoformat()),
        ("iterations", len(runs)),
        ("tests", runs[-1].test_count if runs else 0),
        ("test_cases", runs[-1].class_count if runs else 0),
        ("succeeded", tally.succeeded),
        ("failed", tally.failed),
        ("aborted", tally.aborted),
        ("ignored", tally.ignored),
        ("duration_ms", sum(run.duration_ms for run in runs)),
    )
    for row, (key, value) in enumerate(entries, start=1):
        sheet.cell(row=row, column=1, value=key)
        sheet.cell(row=row, column=2, value=value)
