"""Compiled pattern types.

A Pattern is an immutable tuple of segments: literal text, or a token that
names an event attribute together with its validated options. Each token
kind owns a closed options schema; unknown names and wrongly typed values
are rejected by pydantic at compile time, so a compiled Pattern always
renders.

Option vocabulary:

    level     width (0..1024), alignment
    datetime  fmt
    target    -
    message   -
    fields    prefix, suffix, quote
    span      prefix, suffix, args, args_prefix, args_suffix, quote
    text      value (required)
    file      -
    line      -
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Annotated, Literal, TypeAlias, Union

from pydantic import BaseModel, ConfigDict, Field

from patternlog.values import DEFAULT_QUOTE

if TYPE_CHECKING:
    from collections.abc import Iterator

    from patternlog.runtime.event import EventSnapshot

DEFAULT_DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S.%f"
MAX_LEVEL_WIDTH = 1024

Quote = Annotated[str, Field(max_length=1)]


class TokenKind(StrEnum):
    """Event attribute a token refers to."""

    LEVEL = "level"
    DATETIME = "datetime"
    TARGET = "target"
    MESSAGE = "message"
    FIELDS = "fields"
    SPAN = "span"
    TEXT = "text"
    FILE = "file"
    LINE = "line"

    @classmethod
    def lookup(cls, name: str) -> TokenKind | None:
        """Case-insensitive lookup; None for unknown names."""
        return _KINDS.get(name.lower())

    @property
    def options_model(self) -> type[TokenOptions]:
        return _SCHEMAS[self]


# ─────────────────────────────────────────────────────────────────────────────
# Per-kind option schemas
# ─────────────────────────────────────────────────────────────────────────────


class TokenOptions(BaseModel):
    """Base for per-kind option schemas. Frozen, strict, closed."""

    model_config = ConfigDict(frozen=True, extra="forbid", strict=True)


class NoOptions(TokenOptions):
    """Tokens that accept no options (target, message, file, line)."""


class LevelOptions(TokenOptions):
    width: Annotated[int, Field(ge=0, le=MAX_LEVEL_WIDTH)] | None = None
    alignment: Literal["<", ">"] = "<"


class DatetimeOptions(TokenOptions):
    fmt: Annotated[str, Field(min_length=1)] = DEFAULT_DATETIME_FORMAT


class FieldsOptions(TokenOptions):
    prefix: str = ""
    suffix: str = ""
    quote: Quote = DEFAULT_QUOTE


class SpanOptions(TokenOptions):
    prefix: str = ""
    suffix: str = ""
    args: bool = False
    args_prefix: str = ""
    args_suffix: str = ""
    quote: Quote = DEFAULT_QUOTE


class TextOptions(TokenOptions):
    value: str


_KINDS: dict[str, TokenKind] = {k.value: k for k in TokenKind}
_SCHEMAS: dict[TokenKind, type[TokenOptions]] = {
    TokenKind.LEVEL: LevelOptions,
    TokenKind.DATETIME: DatetimeOptions,
    TokenKind.TARGET: NoOptions,
    TokenKind.MESSAGE: NoOptions,
    TokenKind.FIELDS: FieldsOptions,
    TokenKind.SPAN: SpanOptions,
    TokenKind.TEXT: TextOptions,
    TokenKind.FILE: NoOptions,
    TokenKind.LINE: NoOptions,
}


# ─────────────────────────────────────────────────────────────────────────────
# Segments & Pattern
# ─────────────────────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class LiteralSegment:
    """Text copied verbatim to the output."""

    text: str


@dataclass(frozen=True, slots=True)
class TokenSegment:
    """Placeholder for an event attribute with validated options."""

    kind: TokenKind
    options: TokenOptions

    @classmethod
    def of(cls, kind: TokenKind | str, **options: object) -> TokenSegment:
        """Build a token directly, validating options against the kind's schema."""
        kind = TokenKind(kind)
        return cls(kind, kind.options_model.model_validate(options))


Segment: TypeAlias = Union[LiteralSegment, TokenSegment]


@dataclass(frozen=True, slots=True)
class Pattern:
    """Compiled, immutable template for rendering events.

    Safe to share between threads: nothing in it is ever mutated.

    Example:
        >>> pattern = Pattern.parse("$level(width = 5, alignment = '>') $target: $message")
        >>> pattern.render(EventSnapshot(Level.INFO, "app::mod", "Hello, world!"))
        ' INFO app::mod: Hello, world!'
    """

    segments: tuple[Segment, ...] = ()
    source: str = field(default="", compare=False)

    @classmethod
    def parse(cls, text: str, *, sigil: str = "$") -> Pattern:
        """Compile pattern text. Raises PatternError on malformed input."""
        from .parser import compile_pattern
        return compile_pattern(text, sigil=sigil)

    @property
    def tokens(self) -> tuple[TokenSegment, ...]:
        return tuple(s for s in self.segments if isinstance(s, TokenSegment))

    @property
    def is_literal(self) -> bool:
        """Whether the pattern contains no tokens at all."""
        return not any(isinstance(s, TokenSegment) for s in self.segments)

    def render(self, event: EventSnapshot) -> str:
        from patternlog.runtime.renderer import render
        return render(self, event)

    def __len__(self) -> int:
        return len(self.segments)

    def __iter__(self) -> Iterator[Segment]:
        return iter(self.segments)

    def __str__(self) -> str:
        return self.source
