"""Pattern language: compiled model, parser, and JSON codec."""

from .model import (
    DEFAULT_DATETIME_FORMAT,
    MAX_LEVEL_WIDTH,
    DatetimeOptions,
    FieldsOptions,
    LevelOptions,
    LiteralSegment,
    NoOptions,
    Pattern,
    Segment,
    SpanOptions,
    TextOptions,
    TokenKind,
    TokenOptions,
    TokenSegment,
)
from .parser import LiteralKind, Option, RawToken, compile_pattern, parse

__all__ = [
    "DEFAULT_DATETIME_FORMAT",
    "DatetimeOptions",
    "FieldsOptions",
    "LevelOptions",
    "LiteralKind",
    "LiteralSegment",
    "MAX_LEVEL_WIDTH",
    "NoOptions",
    "Option",
    "Pattern",
    "RawToken",
    "Segment",
    "SpanOptions",
    "TextOptions",
    "TokenKind",
    "TokenOptions",
    "TokenSegment",
    "compile_pattern",
    "parse",
]
