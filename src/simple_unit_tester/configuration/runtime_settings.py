"""Runtime settings entities."""

from __future__ import annotations

import copy
import threading
from dataclasses import dataclass

from .name_filter import matches_pattern

DEFAULT_FILTER = "*.*"
DEFAULT_XML_PATH = "tests.xml"


@dataclass
class Settings:  # pylint: disable=too-many-instance-attributes
    """Options controlling one run.

    Mutate only before the runner starts; the runner works from ``snapshot()``.
    """

    filter_tests: str = DEFAULT_FILTER
    also_run_ignored_tests: bool = False
    exit_status: int | None = None
    shuffle_tests: bool = False
    random_seed: int = 0
    repeat_tests: int = 1
    list_tests: bool = False
    output_color: bool = True
    show_duration: bool = True
    timeout_ms: int | None = None
    output_xml: bool = False
    output_xml_path: str = DEFAULT_XML_PATH
    output_workbook_path: str | None = None

    def snapshot(self) -> Settings:
        return copy.copy(self)

    def is_match_test_name(self, class_name: str, test_name: str) -> bool:
        """Return True when ``class_name.test_name`` satisfies ``filter_tests``."""
        return matches_pattern(f"{class_name}.{test_name}", self.filter_tests)

    @property
    def iteration_count(self) -> int:
        return max(self.repeat_tests, 1)


_DEFAULT_SETTINGS: Settings | None = None
_DEFAULT_LOCK = threading.Lock()


def default_settings() -> Settings:
    """Return the process-wide settings instance."""
    global _DEFAULT_SETTINGS  # pylint: disable=global-statement
    with _DEFAULT_LOCK:
        if _DEFAULT_SETTINGS is None:
            _DEFAULT_SETTINGS = Settings()
        return _DEFAULT_SETTINGS
