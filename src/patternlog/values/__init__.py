"""Value model shared by event fields and span arguments."""

from .value import DEFAULT_QUOTE, Field, FieldsLike, Value, render_fields, render_value, to_fields, to_value

__all__ = [
    "DEFAULT_QUOTE",
    "Field",
    "FieldsLike",
    "Value",
    "render_fields",
    "render_value",
    "to_fields",
    "to_value",
]
