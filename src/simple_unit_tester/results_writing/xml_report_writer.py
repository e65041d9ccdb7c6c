"""JUnit-compatible XML report writer service."""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from collections.abc import Sequence
from itertools import groupby
from pathlib import Path

from simple_unit_tester.outcomes import OutcomeKind, OutcomeTally, TestOutcome

from .event_listener import RecordingEventListener
from .event_models import RecordedTest

_LOGGER = logging.getLogger("simple_unit_tester.results_writing.xml")
_LOGGER.addHandler(logging.NullHandler())


class XmlReportWriter(RecordingEventListener):
    """Writes a ``<testsuites>`` document at the end of every run iteration."""

    def __init__(self, output_path: Path | str) -> None:
        super().__init__()
        self._output_path = Path(output_path)

    @property
    def output_path(self) -> Path:
        return self._output_path

    def write_report(self) -> None:
        write_xml_report(self._output_path, self.records)
        _LOGGER.debug("xml report written to %s", self._output_path)


def write_xml_report(output_path: Path | str, records: Sequence[RecordedTest]) -> Path:
    """Write ``records`` as JUnit XML and return the resolved output path."""
    root = build_xml_report(records)
    ET.indent(root)
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    ET.ElementTree(root).write(output, encoding="utf-8", xml_declaration=True)
    return output.resolve()


def build_xml_report(records: Sequence[RecordedTest]) -> ET.Element:
    root = ET.Element("testsuites", _suite_attributes("AllTests", records))
    for (iteration, class_name), grouped in groupby(
        records, key=lambda record: (record.iteration, record.class_name)
    ):
        suite_records = list(grouped)
        suite = ET.SubElement(root, "testsuite", _suite_attributes(class_name, suite_records))
        if iteration > 1:
            suite.set("iteration", str(iteration))
        for record in suite_records:
            _append_testcase(suite, record)
    return root


def _suite_attributes(name: str, records: Sequence[RecordedTest]) -> dict[str, str]:
    tally = OutcomeTally.of(record.outcome for record in records)
    return {
        "name": name,
        "tests": str(tally.total),
        "failures": str(tally.failed),
        "errors": str(tally.aborted),
        "skipped": str(tally.ignored),
        "time": _seconds(sum(record.duration_ms for record in records)),
    }


def _append_testcase(suite: ET.Element, record: RecordedTest) -> None:
    testcase = ET.SubElement(
        suite,
        "testcase",
        {
            "name": record.test_name,
            "classname": record.class_name,
            "time": _seconds(record.duration_ms),
        },
    )
    outcome = record.outcome
    if outcome.kind == OutcomeKind.FAILED:
        failure = ET.SubElement(testcase, "failure", {"message": _failure_message(outcome)})
        failure.text = _failure_details(outcome)
    elif outcome.kind == OutcomeKind.ABORTED:
        error = ET.SubElement(testcase, "error", {"message": outcome.message or "aborted"})
        error.text = _failure_details(outcome)
    elif outcome.kind == OutcomeKind.IGNORED:
        skipped = ET.SubElement(testcase, "skipped")
        if outcome.message:
            skipped.set("message", outcome.message)


def _failure_message(outcome: TestOutcome) -> str:
    if outcome.user_message:
        return outcome.user_message
    return f"Expected: {outcome.expected} But was: {outcome.actual}"


def _failure_details(outcome: TestOutcome) -> str:
    lines = []
    if outcome.expected or outcome.actual:
        lines.append(f"Expected: {outcome.expected}")
        lines.append(f"But was:  {outcome.actual}")
    if outcome.location is not None:
        lines.append(f"Stack Trace: in {outcome.location}")
    return "\n".join(lines)


def _seconds(duration_ms: int) -> str:
    return f"{duration_ms / 1000:.3f}"
