"""Settings scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_SETTINGS_FILENAME = "unit-tests.yaml"

_SETTINGS_SCAFFOLD_TEMPLATE = """# Run settings for simple-unit-tester.
# Every key is optional; remove the ones you do not need.
# Command line flags given to `simple-unit-tester run` override these values.

# Glob on "<class>.<test>": * matches any run of characters, ? exactly one.
filter_tests: "*.*"
also_run_ignored_tests: false
list_tests: false

# 0 or 1 runs every test once.
repeat_tests: 1
shuffle_tests: false
# 0 picks a fresh seed for every run.
random_seed: 0

# Fail a test that runs longer than this many milliseconds.
# timeout_ms: 5000

# Force the process exit code regardless of test outcomes.
# exit_status: 0

output_color: true
show_duration: true

output_xml: false
output_xml_path: "tests.xml"
# output_workbook_path: "test-results.xlsx"
"""


def build_placeholder_settings() -> str:
    """Build a commented YAML settings file holding every default value."""
    return _SETTINGS_SCAFFOLD_TEMPLATE


def write_placeholder_settings(output_path: Path | str) -> Path:
    """Write the settings scaffold to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Settings file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_settings(), encoding="utf-8")
    return destination.resolve()
