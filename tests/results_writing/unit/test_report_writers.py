"""XML and workbook report writer tests."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from datetime import UTC, datetime
from pathlib import Path

from openpyxl import load_workbook
from simple_unit_tester.outcomes import OutcomeTally, SourceLocation, TestOutcome
from simple_unit_tester.results_writing import (
    RecordedTest,
    RunEventArgs,
    TestEventArgs,
    WorkbookReportWriter,
    XmlReportWriter,
    build_xml_report,
    write_results_workbook,
)
from simple_unit_tester.results_writing.workbook_report_writer import RESULT_COLUMNS

_LOCATION = SourceLocation(file_path="/work/test_math.py", line_number=12)


def _records() -> list[RecordedTest]:
    return [
        RecordedTest(1, "math", "adds", TestOutcome.succeed(), 1500),
        RecordedTest(1, "math", "differs", TestOutcome.fail("not 24", "24", location=_LOCATION), 2),
        RecordedTest(1, "io", "reads", TestOutcome.abort("disk gone"), 0),
        RecordedTest(1, "io", "later", TestOutcome.ignore("not yet"), 0),
    ]


def test_xml_report_groups_tests_into_suites() -> None:
    root = build_xml_report(_records())

    assert root.tag == "testsuites"
    assert root.attrib["name"] == "AllTests"
    assert root.attrib["tests"] == "4"
    assert root.attrib["failures"] == "1"
    assert root.attrib["errors"] == "1"
    assert root.attrib["skipped"] == "1"
    assert [suite.attrib["name"] for suite in root] == ["math", "io"]
    assert root[0].attrib["time"] == "1.502"


def test_xml_report_describes_each_outcome() -> None:
    root = build_xml_report(_records())

    adds, differs = root[0]
    reads, later = root[1]
    assert list(adds) == []
    assert adds.attrib == {"name": "adds", "classname": "math", "time": "1.500"}
    failure = differs.find("failure")
    assert failure is not None
    assert failure.attrib["message"] == "Expected: not 24 But was: 24"
    assert failure.text is not None
    assert "Stack Trace: in /work/test_math.py:12" in failure.text
    error = reads.find("error")
    assert error is not None
    assert error.attrib["message"] == "disk gone"
    skipped = later.find("skipped")
    assert skipped is not None
    assert skipped.attrib["message"] == "not yet"


def test_xml_report_marks_later_iterations() -> None:
    records = [
        RecordedTest(1, "math", "adds", TestOutcome.succeed(), 0),
        RecordedTest(2, "math", "adds", TestOutcome.succeed(), 0),
    ]

    root = build_xml_report(records)

    assert len(root) == 2
    assert "iteration" not in root[0].attrib
    assert root[1].attrib["iteration"] == "2"


def test_xml_report_writer_writes_on_every_run_end(tmp_path: Path) -> None:
    output_path = tmp_path / "reports" / "tests.xml"
    writer = XmlReportWriter(output_path)

    writer.on_run_start(RunEventArgs(test_count=1, class_count=1))
    writer.on_test_end(TestEventArgs("math", "adds", TestOutcome.succeed(), 4))
    writer.on_run_end(RunEventArgs(test_count=1, class_count=1, tally=OutcomeTally(succeeded=1)))

    parsed = ET.parse(output_path).getroot()
    testcase = parsed.find("testsuite/testcase")
    assert testcase is not None
    assert testcase.attrib["name"] == "adds"
    assert output_path.read_text(encoding="utf-8").startswith("<?xml")


def test_results_workbook_has_one_row_per_test(tmp_path: Path) -> None:
    runs = [
        RunEventArgs(
            test_count=4,
            class_count=2,
            started_at=datetime(2026, 1, 1, 9, 30, tzinfo=UTC),
            tally=OutcomeTally(succeeded=1, failed=1, aborted=1, ignored=1),
            duration_ms=1502,
        )
    ]

    written = write_results_workbook(tmp_path / "results.xlsx", _records(), runs)

    workbook = load_workbook(written)
    results = workbook["Results"]
    assert tuple(cell.value for cell in results[1]) == RESULT_COLUMNS
    assert results.max_row == 5
    assert [cell.value for cell in results[3]] == [
        1,
        "math",
        "differs",
        "failed",
        2,
        "not 24",
        "24",
        None,
        "/work/test_math.py:12",
    ]
    assert results["H4"].value == "disk gone"
    run_info = {row[0].value: row[1].value for row in workbook["RunInfo"].iter_rows()}
    assert run_info["run_start"] == "2026-01-01T09:30:00+00:00"
    assert run_info["iterations"] == 1
    assert run_info["failed"] == 1
    assert run_info["duration_ms"] == 1502


def test_workbook_report_writer_accumulates_iterations(tmp_path: Path) -> None:
    output_path = tmp_path / "results.xlsx"
    writer = WorkbookReportWriter(output_path)

    for iteration in (1, 2):
        writer.on_run_start(RunEventArgs(test_count=1, class_count=1, iteration=iteration))
        writer.on_test_end(TestEventArgs("math", "adds", TestOutcome.succeed(), 1))
        writer.on_run_end(RunEventArgs(test_count=1, class_count=1, iteration=iteration))

    results = load_workbook(output_path)["Results"]
    assert [row[0].value for row in results.iter_rows(min_row=2)] == [1, 2]
    assert writer.output_path == output_path
