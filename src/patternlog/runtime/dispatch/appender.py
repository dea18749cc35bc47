"""Appenders: destinations that receive already-rendered text.

An appender owns one compiled pattern and a sink. The dispatcher renders the
event with `appender.pattern` and hands the text to `appender.write`; the
appender is responsible for its own locking.
"""

from __future__ import annotations

import sys
import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, TextIO, runtime_checkable

if TYPE_CHECKING:
    from patternlog.pattern import Pattern


@runtime_checkable
class Appender(Protocol):
    """Capability set every destination implements."""

    @property
    def pattern(self) -> Pattern: ...

    def write(self, text: str) -> None: ...


@dataclass(slots=True)
class StreamAppender:
    """Writes one line per event to a text stream (stderr by default)."""

    pattern: Pattern
    output: TextIO = field(default_factory=lambda: sys.stderr)
    terminator: str = "\n"
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def write(self, text: str) -> None:
        with self._lock:
            self.output.write(text + self.terminator)
            self.output.flush()


@dataclass(slots=True)
class MemoryAppender:
    """Keeps rendered lines in memory. Useful for tests and capture."""

    pattern: Pattern
    lines: list[str] = field(default_factory=list)

    def write(self, text: str) -> None:
        self.lines.append(text)

    def clear(self) -> None:
        self.lines.clear()

    @property
    def text(self) -> str:
        """All captured lines joined by newlines."""
        return "\n".join(self.lines)
