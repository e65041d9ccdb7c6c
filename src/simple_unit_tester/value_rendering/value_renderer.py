"""Rendering of arbitrary user values for failure messages.

``render_value`` is a single-dispatch function: register a renderer for a
custom type with ``@render_value.register(MyType)`` and every assertion family
picks it up, including when the value appears inside a collection.
"""

from __future__ import annotations

import builtins
from collections.abc import Collection, Iterable, Mapping
from decimal import Decimal
from functools import singledispatch

NULL_TEXT = "<null>"
UNKNOWN_TEXT = "<unknown>"
EMPTY_TEXT = "<empty>"


@singledispatch
def render_value(value: object) -> str:
    """Return the failure-message text of ``value``."""
    cls = type(value)
    if cls.__str__ is object.__str__ and cls.__repr__ is object.__repr__:
        return f"<{type_name(cls)}>"
    try:
        return str(value)
    except Exception:  # pylint: disable=broad-exception-caught
        return UNKNOWN_TEXT


@render_value.register
def _(value: str) -> str:
    if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
        return value
    return f'"{value}"'


@render_value.register(type(None))
def _render_none(_value: None) -> str:
    return NULL_TEXT


@render_value.register(bool)
@render_value.register(int)
@render_value.register(float)
@render_value.register(complex)
@render_value.register(Decimal)
def _render_number(value: object) -> str:
    return str(value)


@render_value.register(bytes)
@render_value.register(bytearray)
def _render_bytes(value: bytes | bytearray) -> str:
    return repr(value)


@render_value.register(type)
def _render_type(value: type) -> str:
    return f"<{type_name(value)}>"


@render_value.register(Mapping)
def _render_mapping(value: Mapping) -> str:
    if not value:
        return EMPTY_TEXT
    items = ", ".join(f"{render_value(key)}: {render_value(item)}" for key, item in value.items())
    return f"< {items} >"


@render_value.register(Collection)
def _render_collection(value: Collection) -> str:
    if len(value) == 0:
        return EMPTY_TEXT
    return f"< {join_items(value)} >"


def join_items(collection: Iterable) -> str:
    """Join rendered items with ``", "``; characters of a string are single-quoted."""
    if isinstance(collection, str):
        return ", ".join(f"'{char}'" for char in collection)
    return ", ".join(render_value(item) for item in collection)


def render_items(collection: Iterable) -> str:
    """Render a collection as ``< a, b >`` or ``<empty>``."""
    joined = join_items(collection)
    return f"< {joined} >" if joined else EMPTY_TEXT


def type_name(cls: type) -> str:
    """Return the display name of ``cls``; builtins use their bare name."""
    if getattr(builtins, cls.__name__, None) is cls:
        return cls.__name__
    return cls.__qualname__


def render_type_of(value: object) -> str:
    """Return ``<TypeName>`` for the dynamic type of ``value``."""
    return f"<{type_name(type(value))}>"
