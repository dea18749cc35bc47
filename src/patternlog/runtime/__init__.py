"""Runtime: event snapshots, rendering, dispatch, and host integration."""

from .dispatch import (
    Appender,
    Dispatcher,
    FirstMatchPolicy,
    MemoryAppender,
    Route,
    RoutingPolicy,
    RulePolicy,
    StreamAppender,
)
from .event import EMPTY_ARENA, EventSnapshot, Level, SpanArena, SpanFrame
from .logging import (
    BoundLogger,
    PatternHandler,
    configure,
    configure_from_settings,
    get_dispatcher,
    get_logger,
    in_span,
    reset,
    resolve_dispatcher,
    snapshot_from_record,
    span,
)
from .renderer import EventRenderer, render

__all__ = [
    # Events
    "EMPTY_ARENA", "EventSnapshot", "Level", "SpanArena", "SpanFrame",
    # Rendering
    "EventRenderer", "render",
    # Dispatch
    "Appender", "Dispatcher", "FirstMatchPolicy", "MemoryAppender", "Route", "RoutingPolicy",
    "RulePolicy", "StreamAppender",
    # Host integration
    "BoundLogger", "PatternHandler", "configure", "configure_from_settings", "get_dispatcher",
    "get_logger", "in_span", "reset", "resolve_dispatcher", "snapshot_from_record", "span",
]
