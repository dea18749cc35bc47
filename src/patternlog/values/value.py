"""Renderable values attached to events and spans.

A Value is one of bool, int, float, str, or a tuple of Values. Anything
else is converted when the value is captured, so rendering never has to
deal with foreign objects.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import NamedTuple, TypeAlias, Union

Value: TypeAlias = Union[bool, int, float, str, tuple["Value", ...]]
FieldsLike: TypeAlias = Union[Mapping[str, object], Iterable[tuple[str, object]], None]

DEFAULT_QUOTE = "`"


class Field(NamedTuple):
    """Named value recorded on an event or span."""

    name: str
    value: Value


def to_value(obj: object) -> Value:
    """Capture an arbitrary object as a Value.

    Subclasses of the builtin scalars (enums, numpy-like wrappers deriving from
    them) are normalised to the builtin type. Lists and tuples become tuples,
    element by element. Everything else is captured as its repr().
    """
    match obj:
        case bool():
            return bool(obj)
        case int():
            return int(obj)
        case float():
            return float(obj)
        case str():
            return str(obj)
        case list() | tuple():
            return tuple(to_value(v) for v in obj)
        case _:
            return repr(obj)


def to_fields(fields: FieldsLike) -> tuple[Field, ...]:
    """Build an ordered field tuple. Order is kept and names are never merged."""
    if not fields:
        return ()
    items = fields.items() if isinstance(fields, Mapping) else fields
    return tuple(f if isinstance(f, Field) else Field(str(f[0]), to_value(f[1])) for f in items)


def render_value(value: Value, quote: str = DEFAULT_QUOTE) -> str:
    """Canonical text form of a value. Text is wrapped in `quote`."""
    match value:
        case str():
            return f"{quote}{value}{quote}"
        case bool():
            return "true" if value else "false"
        case int():
            return str(value)
        case float():
            return repr(value)
        case tuple():
            return f"[{','.join(render_value(v, quote) for v in value)}]"
        case _:
            return repr(value)


def render_fields(fields: Iterable[Field], quote: str = DEFAULT_QUOTE) -> str:
    """Render `name=value` pairs joined by commas."""
    return ",".join(f"{name}={render_value(value, quote)}" for name, value in fields)
