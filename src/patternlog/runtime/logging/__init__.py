"""Host integration: span stack, logger facade, and stdlib logging bridge."""

from .handler import PatternHandler, snapshot_from_record
from .logger import (
    BoundLogger,
    SpanScope,
    configure,
    configure_from_settings,
    current_spans,
    get_dispatcher,
    get_logger,
    in_span,
    now,
    reset,
    resolve_dispatcher,
    span,
)

__all__ = [
    "BoundLogger",
    "PatternHandler",
    "SpanScope",
    "configure",
    "configure_from_settings",
    "current_spans",
    "get_dispatcher",
    "get_logger",
    "in_span",
    "now",
    "reset",
    "resolve_dispatcher",
    "snapshot_from_record",
    "span",
]
