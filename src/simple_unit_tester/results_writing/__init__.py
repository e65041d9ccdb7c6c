"""Results writing domain exports."""

from .console_listener import ConsoleEventListener, plural
from .event_listener import CompositeEventListener, EventListener, RecordingEventListener
from .event_models import (
    ClassEventArgs,
    ListTestEventArgs,
    RecordedTest,
    RunEventArgs,
    TestEventArgs,
)
from .workbook_report_writer import WorkbookReportWriter, write_results_workbook
from .xml_report_writer import XmlReportWriter, build_xml_report, write_xml_report

__all__ = [
    "ConsoleEventListener",
    "plural",
    "CompositeEventListener",
    "EventListener",
    "RecordingEventListener",
    "ClassEventArgs",
    "ListTestEventArgs",
    "RecordedTest",
    "RunEventArgs",
    "TestEventArgs",
    "WorkbookReportWriter",
    "write_results_workbook",
    "XmlReportWriter",
    "build_xml_report",
    "write_xml_report",
]
