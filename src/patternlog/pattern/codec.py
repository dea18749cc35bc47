"""JSON serialization of compiled patterns (orjson).

Lets a configuration service ship compiled patterns instead of source text.
Loading revalidates every token against its schema, so a document that
decodes is as safe to render as a freshly parsed pattern.

Document layout:
    {"source": "$level $message",
     "segments": [{"token": "level", "options": {}}, {"text": " "}, {"token": "message", "options": {}}]}
"""

from __future__ import annotations

from typing import Any

import orjson
from pydantic import ValidationError

from patternlog.foundation.errors import ErrorCode, PatternError

from .model import LiteralSegment, Pattern, Segment, TokenKind, TokenSegment
from .parser import classify_validation_error


def to_dict(pattern: Pattern) -> dict[str, Any]:
    """Plain-data form; only options that differ from their defaults are kept."""
    segments: list[dict[str, Any]] = []
    for seg in pattern.segments:
        if isinstance(seg, LiteralSegment):
            segments.append({"text": seg.text})
        else:
            segments.append({"token": seg.kind.value, "options": seg.options.model_dump(exclude_defaults=True)})
    return {"source": pattern.source, "segments": segments}


def from_dict(data: dict[str, Any]) -> Pattern:
    """Rebuild a pattern from `to_dict` output. Raises PatternError on invalid documents."""
    items = data.get("segments", []) if isinstance(data, dict) else None
    if not isinstance(items, list):
        raise PatternError.create(ErrorCode.INVALID_SYNTAX, "pattern document must be an object with a 'segments' list", 0)
    segments: list[Segment] = []
    for index, item in enumerate(items):
        match item:
            case {"text": str(text)}:
                segments.append(LiteralSegment(text))
            case {"token": str(name), **rest}:
                if (kind := TokenKind.lookup(name)) is None:
                    raise PatternError.create(ErrorCode.UNKNOWN_TOKEN, f"unknown token kind {name!r}", index)
                try:
                    options = kind.options_model.model_validate(rest.get("options") or {})
                except ValidationError as exc:
                    code, message, _ = classify_validation_error(exc, kind)
                    raise PatternError.create(code, message, index) from exc
                segments.append(TokenSegment(kind, options))
            case _:
                raise PatternError.create(ErrorCode.INVALID_SYNTAX, f"malformed segment {item!r}", index)
    return Pattern(tuple(segments), str(data.get("source", "")))


def dumps(pattern: Pattern) -> bytes:
    """Encode to JSON bytes."""
    return orjson.dumps(to_dict(pattern))


def loads(data: bytes | str) -> Pattern:
    """Decode JSON produced by `dumps`. Positions in errors are segment indexes."""
    try:
        doc = orjson.loads(data)
    except orjson.JSONDecodeError as exc:
        raise PatternError.create(ErrorCode.INVALID_SYNTAX, f"invalid pattern document: {exc}", exc.pos) from exc
    return from_dict(doc)
