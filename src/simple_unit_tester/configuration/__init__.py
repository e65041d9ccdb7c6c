"""Configuration domain exports."""

from .loader import SettingsError, apply_settings, load_settings
from .name_filter import matches_pattern
from .runtime_settings import DEFAULT_FILTER, DEFAULT_XML_PATH, Settings, default_settings
from .settings_scaffold_builder import (
    DEFAULT_SETTINGS_FILENAME,
    build_placeholder_settings,
    write_placeholder_settings,
)

__all__ = [
    "Settings",
    "DEFAULT_FILTER",
    "DEFAULT_XML_PATH",
    "default_settings",
    "matches_pattern",
    "SettingsError",
    "apply_settings",
    "load_settings",
    "DEFAULT_SETTINGS_FILENAME",
    "build_placeholder_settings",
    "write_placeholder_settings",
]
