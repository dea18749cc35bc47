"""Bridge from the standard library `logging` module.

Attach PatternHandler to any stdlib logger to render its records with
patterns. Structured fields travel in `extra={"fields": {...}}`; the active
span chain is taken from the current context.

Example:
    >>> import logging
    >>> logging.getLogger().addHandler(PatternHandler())
    >>> logging.getLogger("app.db").info("connected", extra={"fields": {"pool": 4}})
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from patternlog.runtime.event import EventSnapshot, Level
from patternlog.values import to_fields

from .logger import current_spans, resolve_dispatcher

if TYPE_CHECKING:
    from patternlog.runtime.dispatch import Dispatcher

_OWN_NAMESPACE = "patternlog"
_exc_formatter = logging.Formatter()


def snapshot_from_record(record: logging.LogRecord, *, utc: bool = False) -> EventSnapshot:
    """Build an EventSnapshot from a LogRecord and the current span context."""
    message = record.getMessage()
    if record.exc_info:
        message = f"{message}\n{_exc_formatter.formatException(record.exc_info)}"
    arena, handle = current_spans()
    return EventSnapshot(
        level=Level.from_logging(record.levelno),
        target=record.name,
        message=message,
        fields=to_fields(getattr(record, "fields", None)),
        timestamp=datetime.fromtimestamp(record.created, UTC if utc else None),
        spans=arena,
        span=handle,
        file=record.pathname,
        line=record.lineno,
    )


class PatternHandler(logging.Handler):
    """logging.Handler that dispatches records through patternlog.

    Uses `dispatcher` when given, the globally configured one otherwise.
    Records from patternlog's own loggers are ignored.
    """

    def __init__(self, dispatcher: Dispatcher | None = None, level: int = logging.NOTSET, *, utc: bool = False) -> None:
        super().__init__(level)
        self.dispatcher = dispatcher
        self.utc = utc

    def emit(self, record: logging.LogRecord) -> None:
        if record.name == _OWN_NAMESPACE or record.name.startswith(_OWN_NAMESPACE + "."):
            return
        try:
            dispatcher = self.dispatcher or resolve_dispatcher()
            dispatcher.dispatch(snapshot_from_record(record, utc=self.utc))
        except Exception:
            self.handleError(record)
