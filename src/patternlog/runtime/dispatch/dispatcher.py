"""Dispatcher: glue between routing policy, patterns, and appenders."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from patternlog.runtime.renderer import render

if TYPE_CHECKING:
    from patternlog.runtime.event import EventSnapshot, Level

    from .policy import RoutingPolicy

logger = logging.getLogger("patternlog.dispatch")


@dataclass(frozen=True, slots=True)
class Dispatcher:
    """Renders each enabled event once per selected appender, in policy order.

    Appenders are neither deduplicated nor reordered; an appender listed twice
    is written twice. Exceptions from `write` propagate to the caller.
    """

    policy: RoutingPolicy

    def enabled(self, level: Level, target: str) -> bool:
        return self.policy.enabled(level, target)

    def dispatch(self, event: EventSnapshot) -> int:
        """Deliver `event`. Returns the number of appenders written to."""
        if not self.policy.enabled(event.level, event.target):
            return 0
        written = 0
        for appender in self.policy.appenders_for(event.level, event.target):
            appender.write(render(appender.pattern, event))
            written += 1
        if not written:
            logger.debug("event from %s enabled but no appenders selected", event.target)
        return written
