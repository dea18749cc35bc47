"""Routing policy: which events are enabled and which appenders receive them.

`RoutingPolicy` is the interface the dispatcher needs. `RulePolicy` is a
simple default built from ordered routes; hosts with richer needs plug in
their own implementation.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from patternlog.runtime.event import Level

from .appender import Appender


@runtime_checkable
class RoutingPolicy(Protocol):
    """Per-event enabled check and appender selection."""

    def enabled(self, level: Level, target: str) -> bool: ...
    def appenders_for(self, level: Level, target: str) -> Sequence[Appender]: ...


def target_matches(prefix: str, target: str) -> bool:
    """Whether `target` is `prefix` or nested under it on a `.` or `::` boundary."""
    if not prefix or target == prefix:
        return True
    if not target.startswith(prefix):
        return False
    rest = target[len(prefix):]
    return rest.startswith(".") or rest.startswith("::")


@dataclass(frozen=True, slots=True)
class Route:
    """Sends events at or above `level` from `target` (and its children) to `appenders`.

    An empty target matches every module.
    """

    appenders: tuple[Appender, ...]
    level: Level = Level.TRACE
    target: str = ""

    def matches(self, level: Level, target: str) -> bool:
        return level >= self.level and target_matches(self.target, target)


@dataclass(frozen=True, slots=True)
class RulePolicy:
    """Ordered routes. Appenders of every matching route are returned in route order.

    Example:
        >>> console = StreamAppender(Pattern.parse("$level $target: $message"))
        >>> policy = RulePolicy((Route((console,), Level.INFO), Route((console,), Level.TRACE, "app.db")))
        >>> policy.enabled(Level.DEBUG, "app.db.pool")
        True
    """

    routes: tuple[Route, ...] = ()

    @classmethod
    def single(cls, appender: Appender, level: Level | str = Level.TRACE, target: str = "") -> RulePolicy:
        """Policy with one route to one appender."""
        return cls((Route((appender,), Level.parse(level), target),))

    def enabled(self, level: Level, target: str) -> bool:
        return any(r.matches(level, target) for r in self.routes)

    def appenders_for(self, level: Level, target: str) -> list[Appender]:
        return [a for r in self.routes if r.matches(level, target) for a in r.appenders]


@dataclass(frozen=True, slots=True)
class FirstMatchPolicy:
    """Routes by the first route whose target matches; that route's level alone decides.

    Suits per-module level overrides: list the specific targets first and a
    catch-all route last. An event is never sent through two routes.
    """

    routes: tuple[Route, ...] = ()

    def _route(self, target: str) -> Route | None:
        return next((r for r in self.routes if target_matches(r.target, target)), None)

    def enabled(self, level: Level, target: str) -> bool:
        return (r := self._route(target)) is not None and level >= r.level

    def appenders_for(self, level: Level, target: str) -> tuple[Appender, ...]:
        r = self._route(target)
        return r.appenders if r is not None and level >= r.level else ()
