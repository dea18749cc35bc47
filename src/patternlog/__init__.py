"""patternlog - pattern-driven rendering of structured log events.

A small template language decides how each logging event becomes text.
Patterns are compiled once at configuration time into immutable objects and
then rendered against event snapshots on every logging call.

Quick Start:
    >>> from patternlog import EventSnapshot, Level, Pattern
    >>>
    >>> pattern = Pattern.parse("$level(width = 5, alignment = '>') $target: $message")
    >>> pattern.render(EventSnapshot(Level.INFO, "app::mod", "Hello, world!"))
    ' INFO app::mod: Hello, world!'

Fields and spans:
    >>> event = EventSnapshot.create(
    ...     "INFO", "app", "saved",
    ...     fields={"test": "123"},
    ...     spans=[("test", {"arg": [1, "test"]})],
    ... )
    >>> Pattern.parse("$fields(prefix = '{', suffix = '}')").render(event)
    '{test=`123`}'
    >>> Pattern.parse("$span(prefix = '::', args, args_prefix = '{', args_suffix = '}')").render(event)
    '::test{arg=[1,`test`]}'

Non-raising compilation:
    >>> from patternlog import parse
    >>> parse("$unknown").unwrap_err().format()
    "unknown token kind 'unknown' at position 0\\n  $unknown\\n  ^"

Routing to appenders:
    >>> from patternlog import configure, get_logger, span, StreamAppender
    >>> configure(StreamAppender(Pattern.parse("$level $target$span(prefix = '::'): $message")))
    >>> with span("job", id=42):
    ...     get_logger("app.worker").info("started")
"""

from __future__ import annotations

__version__ = "0.1.0"

# Errors
from .foundation.errors import Err, ErrorCode, Ok, ParseError, PatternError, Result

# Configuration
from .foundation.config import PatternlogSettings, get_settings

# Values
from .values import Field, Value, to_fields, to_value

# Patterns
from .pattern import LiteralSegment, Pattern, TokenKind, TokenSegment, compile_pattern, parse

# Runtime
from .runtime import (
    Appender,
    BoundLogger,
    Dispatcher,
    EventRenderer,
    EventSnapshot,
    FirstMatchPolicy,
    Level,
    MemoryAppender,
    PatternHandler,
    Route,
    RoutingPolicy,
    RulePolicy,
    SpanArena,
    SpanFrame,
    StreamAppender,
    configure,
    configure_from_settings,
    get_dispatcher,
    get_logger,
    in_span,
    render,
    reset,
    span,
)

__all__ = [
    "__version__",
    # Errors
    "Err", "ErrorCode", "Ok", "ParseError", "PatternError", "Result",
    # Configuration
    "PatternlogSettings", "get_settings",
    # Values
    "Field", "Value", "to_fields", "to_value",
    # Patterns
    "LiteralSegment", "Pattern", "TokenKind", "TokenSegment", "compile_pattern", "parse",
    # Events & rendering
    "EventRenderer", "EventSnapshot", "Level", "SpanArena", "SpanFrame", "render",
    # Dispatch
    "Appender", "Dispatcher", "FirstMatchPolicy", "MemoryAppender", "Route", "RoutingPolicy",
    "RulePolicy", "StreamAppender",
    # Host integration
    "BoundLogger", "PatternHandler", "configure", "configure_from_settings", "get_dispatcher",
    "get_logger", "in_span", "reset", "span",
]
