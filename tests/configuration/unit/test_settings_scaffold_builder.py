"""Settings scaffold builder tests."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml
from simple_unit_tester.configuration import (
    Settings,
    build_placeholder_settings,
    load_settings,
    write_placeholder_settings,
)


def test_build_placeholder_settings_lists_every_default() -> None:
    scaffold = build_placeholder_settings()

    parsed = yaml.safe_load(scaffold)

    assert scaffold.startswith("# Run settings for simple-unit-tester.")
    assert parsed["filter_tests"] == "*.*"
    assert parsed["repeat_tests"] == 1
    assert parsed["output_xml_path"] == "tests.xml"
    assert "# timeout_ms:" in scaffold
    assert "# exit_status:" in scaffold


def test_placeholder_settings_load_back_to_defaults(tmp_path: Path) -> None:
    output_path = tmp_path / "unit-tests.yaml"

    written_path = write_placeholder_settings(output_path)

    assert written_path == output_path.resolve()
    assert load_settings(output_path) == Settings()


def test_write_placeholder_settings_fails_when_file_exists(tmp_path: Path) -> None:
    output_path = tmp_path / "unit-tests.yaml"
    output_path.write_text("existing", encoding="utf-8")

    with pytest.raises(FileExistsError, match="already exists"):
        write_placeholder_settings(output_path)

    assert output_path.read_text(encoding="utf-8") == "existing"
