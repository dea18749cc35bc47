"""Logger facade and span stack feeding the dispatcher.

Captures events the way a host instrumentation layer would: the active span
chain lives in a ContextVar (one chain per thread / asyncio task), loggers
carry bound fields, and every call builds a fresh EventSnapshot that is
rendered and written before the call returns.

Quick Start:
    >>> from patternlog import configure, get_logger, span, Pattern, StreamAppender
    >>>
    >>> # Configure (once at startup)
    >>> configure(StreamAppender(Pattern.parse("$level $target$span(prefix = '::'): $message")))
    >>>
    >>> log = get_logger("app.worker", worker=3)
    >>> with span("job", id=42):
    ...     log.info("started")
    # => INFO app.worker::job: started
"""

from __future__ import annotations

import inspect
import sys
import threading
from contextvars import ContextVar
from dataclasses import dataclass
from datetime import UTC, datetime
from functools import wraps
from typing import TYPE_CHECKING, Callable, ParamSpec, TypeVar

from patternlog.runtime.dispatch import Appender, Dispatcher, RoutingPolicy, RulePolicy
from patternlog.runtime.event import EMPTY_ARENA, EventSnapshot, Level, SpanArena
from patternlog.values import Field, to_fields, to_value

if TYPE_CHECKING:
    from types import TracebackType

    from patternlog.foundation.config import PatternlogSettings

P = ParamSpec("P")
T = TypeVar("T")

# Active span chain: (arena, innermost handle). Replaced, never mutated.
_spans: ContextVar[tuple[SpanArena, int | None]] = ContextVar("patternlog_spans", default=(EMPTY_ARENA, None))

_config_lock = threading.RLock()
_dispatcher: Dispatcher | None = None
_utc = False


# ─────────────────────────────────────────────────────────────────────────────
# Global Configuration
# ─────────────────────────────────────────────────────────────────────────────


def configure(target: Dispatcher | RoutingPolicy | Appender, *, utc: bool = False) -> Dispatcher:
    """Install the global dispatcher.

    Accepts a ready Dispatcher, any RoutingPolicy, or a single Appender (which
    then receives every event).
    """
    global _dispatcher, _utc
    match target:
        case Dispatcher():
            dispatcher = target
        case RoutingPolicy():
            dispatcher = Dispatcher(target)
        case Appender():
            dispatcher = Dispatcher(RulePolicy.single(target))
        case _:
            raise TypeError(f"Cannot configure from {type(target).__name__}: expected Dispatcher, RoutingPolicy or Appender")
    with _config_lock:
        _dispatcher, _utc = dispatcher, utc
    return dispatcher


def configure_from_settings(settings: PatternlogSettings | None = None) -> Dispatcher:
    """Build and install a stream-appender setup from PatternlogSettings.

    Raises:
        PatternError: If the configured pattern does not compile
    """
    from patternlog.foundation.config import get_settings
    from patternlog.pattern import compile_pattern
    from patternlog.runtime.dispatch import FirstMatchPolicy, Route, StreamAppender

    settings = settings or get_settings()
    output = sys.stdout if settings.output == "stdout" else sys.stderr
    appender = StreamAppender(compile_pattern(settings.pattern, sigil=settings.sigil), output=output)
    # most specific override first, catch-all last
    overrides = sorted(settings.targets.items(), key=lambda item: len(item[0]), reverse=True)
    routes = [Route((appender,), Level.parse(lvl), target) for target, lvl in overrides]
    routes.append(Route((appender,), Level.parse(settings.level)))
    return configure(FirstMatchPolicy(tuple(routes)), utc=settings.utc)


def get_dispatcher() -> Dispatcher | None:
    """Currently installed dispatcher, if any."""
    return _dispatcher


def reset() -> None:
    """Remove the global dispatcher (useful for testing)."""
    global _dispatcher, _utc
    with _config_lock:
        _dispatcher, _utc = None, False


def resolve_dispatcher() -> Dispatcher:
    """Installed dispatcher, or one built from settings on first use.

    Concurrent first calls build and install exactly one dispatcher.
    """
    if (dispatcher := _dispatcher) is not None:
        return dispatcher
    with _config_lock:
        return _dispatcher or configure_from_settings()


def now() -> datetime:
    """Timestamp for a new event (UTC when configured so, local otherwise)."""
    return datetime.now(UTC) if _utc else datetime.now()


# ─────────────────────────────────────────────────────────────────────────────
# Span Stack
# ─────────────────────────────────────────────────────────────────────────────


class SpanScope:
    """Context manager that makes a span the innermost active one.

    Example:
        >>> with span("request", path="/users"):
        ...     with span("query", table="users"):
        ...         log.info("running")  # chain: query -> request
    """

    __slots__ = ("_name", "_args", "_token", "handle")

    def __init__(self, name: str, args: tuple[Field, ...]) -> None:
        self._name, self._args = name, args
        self._token: object | None = None
        self.handle: int | None = None

    def __enter__(self) -> int:
        arena, parent = _spans.get()
        arena, self.handle = arena.push(self._name, self._args, parent)
        self._token = _spans.set((arena, self.handle))
        return self.handle

    def __exit__(self, exc_type: type[BaseException] | None, exc_val: BaseException | None,
                 exc_tb: TracebackType | None) -> None:
        if self._token is not None:
            _spans.reset(self._token)  # type: ignore[arg-type]
            self._token = None

    async def __aenter__(self) -> int:
        return self.__enter__()

    async def __aexit__(self, exc_type: type[BaseException] | None, exc_val: BaseException | None,
                        exc_tb: TracebackType | None) -> None:
        self.__exit__(exc_type, exc_val, exc_tb)


def span(name: str, **args: object) -> SpanScope:
    """Enter a span carrying `args` as its own fields."""
    return SpanScope(name, to_fields(args))


def current_spans() -> tuple[SpanArena, int | None]:
    """The active (arena, innermost handle) pair for this context."""
    return _spans.get()


def in_span(name: str | None = None, **args: object) -> Callable[[Callable[P, T]], Callable[P, T]]:
    """Decorator running the function inside a span named after it."""
    def decorator(func: Callable[P, T]) -> Callable[P, T]:
        span_name = name or func.__name__

        @wraps(func)
        def wrapper(*a: P.args, **kw: P.kwargs) -> T:
            with span(span_name, **args):
                return func(*a, **kw)

        @wraps(func)
        async def async_wrapper(*a: P.args, **kw: P.kwargs) -> T:
            async with span(span_name, **args):
                return await func(*a, **kw)  # type: ignore[misc]

        return async_wrapper if inspect.iscoroutinefunction(func) else wrapper  # type: ignore[return-value]

    return decorator


# ─────────────────────────────────────────────────────────────────────────────
# Logger
# ─────────────────────────────────────────────────────────────────────────────


@dataclass(slots=True)
class BoundLogger:
    """Logger for one target with bound fields. bind() returns a new logger.

    Bound fields come first, then call-site fields, each in the order given.

    Example:
        >>> log = get_logger("app.api", service="users")
        >>> log.info("request received", path="/users")
    """

    target: str
    fields: tuple[Field, ...] = ()
    dispatcher: Dispatcher | None = None

    def bind(self, **kw: object) -> BoundLogger:
        """New logger with additional bound fields; rebinding a name replaces its value in place."""
        merged = {f.name: f.value for f in self.fields}
        merged.update((k, to_value(v)) for k, v in kw.items())
        return BoundLogger(self.target, tuple(Field(k, v) for k, v in merged.items()), self.dispatcher)

    def unbind(self, *keys: str) -> BoundLogger:
        """New logger without the specified fields."""
        return BoundLogger(self.target, tuple(f for f in self.fields if f.name not in keys), self.dispatcher)

    def enabled(self, level: Level | str) -> bool:
        return (self.dispatcher or resolve_dispatcher()).enabled(Level.parse(level), self.target)

    def log(self, level: Level | str, message: str, **kw: object) -> None:
        self._log(Level.parse(level), message, kw)

    def trace(self, message: str, **kw: object) -> None: self._log(Level.TRACE, message, kw)
    def debug(self, message: str, **kw: object) -> None: self._log(Level.DEBUG, message, kw)
    def info(self, message: str, **kw: object) -> None: self._log(Level.INFO, message, kw)
    def warn(self, message: str, **kw: object) -> None: self._log(Level.WARN, message, kw)
    def error(self, message: str, **kw: object) -> None: self._log(Level.ERROR, message, kw)

    warning = warn

    def _log(self, level: Level, message: str, kw: dict[str, object]) -> None:
        dispatcher = self.dispatcher or resolve_dispatcher()
        if not dispatcher.enabled(level, self.target):
            return
        caller = sys._getframe(2)
        arena, handle = _spans.get()
        dispatcher.dispatch(EventSnapshot(
            level, self.target, message, self.fields + to_fields(kw), now(), arena, handle,
            caller.f_code.co_filename, caller.f_lineno,
        ))


def get_logger(target: str = "root", **fields: object) -> BoundLogger:
    """Get a logger for `target` (usually `__name__`) with optional bound fields."""
    return BoundLogger(target, to_fields(fields))
