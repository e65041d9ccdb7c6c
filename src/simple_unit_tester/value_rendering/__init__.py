"""Value rendering exports."""

from .value_renderer import (
    EMPTY_TEXT,
    NULL_TEXT,
    UNKNOWN_TEXT,
    join_items,
    render_items,
    render_type_of,
    render_value,
    type_name,
)

__all__ = [
    "EMPTY_TEXT",
    "NULL_TEXT",
    "UNKNOWN_TEXT",
    "join_items",
    "render_items",
    "render_type_of",
    "render_value",
    "type_name",
]
