"""Renderer: evaluates a compiled Pattern against an EventSnapshot.

Rendering is a pure function of (pattern, event). Options were validated at
compile time, so there is no failure path here.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Protocol, runtime_checkable

from patternlog.pattern.model import (
    DatetimeOptions,
    FieldsOptions,
    LevelOptions,
    LiteralSegment,
    SpanOptions,
    TextOptions,
    TokenKind,
    TokenOptions,
)
from patternlog.values import render_fields

if TYPE_CHECKING:
    from patternlog.pattern.model import Pattern

    from .event import EventSnapshot

_Emit = Callable[[TokenOptions, "EventSnapshot", list[str]], None]


@runtime_checkable
class EventRenderer(Protocol):
    """Anything that turns an event into a line of text. Pattern satisfies this."""

    def render(self, event: EventSnapshot) -> str: ...


def render(pattern: Pattern, event: EventSnapshot) -> str:
    """Render `event` through `pattern`."""
    out: list[str] = []
    for segment in pattern.segments:
        if isinstance(segment, LiteralSegment):
            out.append(segment.text)
        else:
            _EMITTERS[segment.kind](segment.options, event, out)
    return "".join(out)


# ─────────────────────────────────────────────────────────────────────────────
# Token emitters
# ─────────────────────────────────────────────────────────────────────────────


def _level(opts: LevelOptions, event: EventSnapshot, out: list[str]) -> None:
    name = event.level.name
    if opts.width is None:
        out.append(name)
    elif opts.alignment == ">":
        out.append(name.rjust(opts.width))
    else:
        out.append(name.ljust(opts.width))


def _datetime(opts: DatetimeOptions, event: EventSnapshot, out: list[str]) -> None:
    out.append(event.timestamp.strftime(opts.fmt))


def _target(_: TokenOptions, event: EventSnapshot, out: list[str]) -> None:
    out.append(event.target)


def _message(_: TokenOptions, event: EventSnapshot, out: list[str]) -> None:
    out.append(event.message)


def _fields(opts: FieldsOptions, event: EventSnapshot, out: list[str]) -> None:
    # prefix/suffix frame a non-empty set only
    if event.fields:
        out += (opts.prefix, render_fields(event.fields, opts.quote), opts.suffix)


def _span(opts: SpanOptions, event: EventSnapshot, out: list[str]) -> None:
    for frame in event.span_chain():
        out += (opts.prefix, frame.name)
        if opts.args:
            out += (opts.args_prefix, render_fields(frame.args, opts.quote), opts.args_suffix)
        out.append(opts.suffix)


def _text(opts: TextOptions, _: EventSnapshot, out: list[str]) -> None:
    out.append(opts.value)


def _file(_: TokenOptions, event: EventSnapshot, out: list[str]) -> None:
    if event.file is not None:
        out.append(event.file)


def _line(_: TokenOptions, event: EventSnapshot, out: list[str]) -> None:
    if event.line is not None:
        out.append(str(event.line))


_EMITTERS: dict[TokenKind, _Emit] = {
    TokenKind.LEVEL: _level,  # type: ignore[dict-item]
    TokenKind.DATETIME: _datetime,  # type: ignore[dict-item]
    TokenKind.TARGET: _target,
    TokenKind.MESSAGE: _message,
    TokenKind.FIELDS: _fields,  # type: ignore[dict-item]
    TokenKind.SPAN: _span,  # type: ignore[dict-item]
    TokenKind.TEXT: _text,  # type: ignore[dict-item]
    TokenKind.FILE: _file,
    TokenKind.LINE: _line,
}
