"""Settings file loader service."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import fields, replace
from pathlib import Path
from typing import Any

import yaml

from .runtime_settings import Settings


class SettingsError(Exception):
    """Raised when a settings file or value is invalid."""


def load_settings(settings_path: Path | str, base: Settings | None = None) -> Settings:
    """Load a YAML/JSON settings file and apply it on top of ``base``."""
    path = Path(settings_path)
    if not path.exists():
        raise SettingsError(f"Settings file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise SettingsError(f"Failed to parse settings file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise SettingsError("Settings root must be a mapping.")

    return apply_settings(parsed, base or Settings())


def apply_settings(values: Mapping[str, Any], base: Settings) -> Settings:
    """Validate ``values`` and return a copy of ``base`` with them applied."""
    known = {field.name for field in fields(Settings)}
    unknown = sorted(str(key) for key in values if key not in known)
    if unknown:
        raise SettingsError(f"Unknown setting(s): {', '.join(unknown)}.")
    validated = {key: _VALIDATORS[key](value, key) for key, value in values.items()}
    return replace(base, **validated)


def _require_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise SettingsError(f"{field_name} must be a string.")
    return value.strip()


def _require_non_empty_string(value: Any, field_name: str) -> str:
    stripped = _require_string(value, field_name)
    if not stripped:
        raise SettingsError(f"{field_name} must not be empty.")
    return stripped


def _optional_string(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    return _require_string(value, field_name) or None


def _require_bool(value: Any, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise SettingsError(f"{field_name} must be true or false.")
    return value


def _require_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise SettingsError(f"{field_name} must be an integer.")
    return value


def _optional_int(value: Any, field_name: str) -> int | None:
    if value is None:
        return None
    return _require_int(value, field_name)


def _require_non_negative_int(value: Any, field_name: str) -> int:
    number = _require_int(value, field_name)
    if number < 0:
        raise SettingsError(f"{field_name} must not be negative.")
    return number


def _optional_positive_int(value: Any, field_name: str) -> int | None:
    if value is None:
        return None
    number = _require_int(value, field_name)
    if number <= 0:
        raise SettingsError(f"{field_name} must be greater than zero.")
    return number


_VALIDATORS: dict[str, Callable[[Any, str], Any]] = {
    "filter_tests": _require_string,
    "also_run_ignored_tests": _require_bool,
    "exit_status": _optional_int,
    "shuffle_tests": _require_bool,
    "random_seed": _require_non_negative_int,
    "repeat_tests": _require_non_negative_int,
    "list_tests": _require_bool,
    "output_color": _require_bool,
    "show_duration": _require_bool,
    "timeout_ms": _optional_positive_int,
    "output_xml": _require_bool,
    "output_xml_path": _require_non_empty_string,
    "output_workbook_path": _optional_string,
}
