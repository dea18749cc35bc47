"""Routing and dispatch: appenders, routing policies, and the dispatcher."""

from .appender import Appender, MemoryAppender, StreamAppender
from .dispatcher import Dispatcher
from .policy import FirstMatchPolicy, Route, RoutingPolicy, RulePolicy, target_matches

__all__ = [
    "Appender",
    "Dispatcher",
    "FirstMatchPolicy",
    "MemoryAppender",
    "Route",
    "RoutingPolicy",
    "RulePolicy",
    "StreamAppender",
    "target_matches",
]
