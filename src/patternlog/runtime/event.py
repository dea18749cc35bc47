"""Event snapshot consumed by the renderer.

Spans live in an arena: an immutable tuple of frames where each frame points
at its parent by index. A parent must already be in the arena when a child
is pushed, so chains are acyclic by construction. The snapshot carries the
arena plus the handle of the innermost active frame.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum
from typing import TYPE_CHECKING

from patternlog.values import Field, FieldsLike, to_fields

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator


class Level(IntEnum):
    """Event severity. Rendered by member name."""

    TRACE = 5
    DEBUG = 10
    INFO = 20
    WARN = 30
    ERROR = 40

    @classmethod
    def from_logging(cls, levelno: int) -> Level:
        """Map a stdlib logging level number onto the closest level at or below it."""
        for level in _DESCENDING:
            if levelno >= level:
                return level
        return cls.TRACE

    @classmethod
    def parse(cls, name: str | int | Level) -> Level:
        """Accept a Level, a stdlib level number, or a case-insensitive name."""
        if isinstance(name, int):
            return name if isinstance(name, Level) else cls.from_logging(name)
        key = name.strip().upper()
        if (level := _ALIASES.get(key)) is None:
            raise ValueError(f"Unknown level: {name!r}. Use one of {', '.join(m.name for m in cls)}")
        return level


_DESCENDING = sorted(Level, reverse=True)
_ALIASES = {**{m.name: m for m in Level}, "WARNING": Level.WARN, "CRITICAL": Level.ERROR, "FATAL": Level.ERROR}


@dataclass(frozen=True, slots=True)
class SpanFrame:
    """One span: name, its own arguments, and the arena index of its parent."""

    name: str
    args: tuple[Field, ...] = ()
    parent: int | None = None


@dataclass(frozen=True, slots=True)
class SpanArena:
    """Immutable store of span frames addressed by integer handles.

    Example:
        >>> arena, outer = SpanArena().push("request", {"id": 7})
        >>> arena, inner = arena.push("query", parent=outer)
        >>> [f.name for f in arena.chain(inner)]
        ['query', 'request']
    """

    frames: tuple[SpanFrame, ...] = ()

    @classmethod
    def nested(cls, *spans: tuple[str, FieldsLike]) -> SpanArena:
        """Arena holding a single chain, given outermost first. Innermost handle is len - 1."""
        arena = cls()
        parent: int | None = None
        for name, args in spans:
            arena, parent = arena.push(name, args, parent)
        return arena

    def push(self, name: str, args: FieldsLike = None, parent: int | None = None) -> tuple[SpanArena, int]:
        """Return a new arena with the frame appended, and the frame's handle."""
        if parent is not None and not 0 <= parent < len(self.frames):
            raise ValueError(f"parent handle {parent} is not in the arena")
        frame = SpanFrame(name, to_fields(args), parent)
        return SpanArena((*self.frames, frame)), len(self.frames)

    def chain(self, handle: int | None) -> Iterator[SpanFrame]:
        """Walk from `handle` up to the root, innermost first."""
        while handle is not None:
            frame = self.frames[handle]
            yield frame
            handle = frame.parent

    @property
    def innermost(self) -> int | None:
        return len(self.frames) - 1 if self.frames else None

    def __len__(self) -> int:
        return len(self.frames)

    def __getitem__(self, handle: int) -> SpanFrame:
        return self.frames[handle]


EMPTY_ARENA = SpanArena()


@dataclass(frozen=True, slots=True)
class EventSnapshot:
    """Read-only view of one logging call.

    Attributes:
        level: Severity
        target: Module path the event originates from
        message: Free-form message
        fields: Ordered fields recorded on the event itself
        timestamp: When the event happened
        spans: Arena holding the active span chain
        span: Handle of the innermost active span, None outside any span
        file: Source file of the call site, if known
        line: Source line of the call site, if known
    """

    level: Level
    target: str
    message: str = ""
    fields: tuple[Field, ...] = ()
    timestamp: datetime = field(default_factory=datetime.now)
    spans: SpanArena = EMPTY_ARENA
    span: int | None = None
    file: str | None = None
    line: int | None = None

    def __post_init__(self) -> None:
        if self.span is not None and not 0 <= self.span < len(self.spans):
            raise ValueError(f"span handle {self.span} is not in the arena")

    @classmethod
    def create(
        cls,
        level: Level | str | int,
        target: str,
        message: str = "",
        *,
        fields: FieldsLike = None,
        spans: Iterable[tuple[str, FieldsLike]] = (),
        timestamp: datetime | None = None,
        file: str | None = None,
        line: int | None = None,
    ) -> EventSnapshot:
        """Convenience constructor. `spans` is a single chain given outermost first."""
        arena = SpanArena.nested(*spans)
        return cls(
            Level.parse(level), target, message, to_fields(fields),
            timestamp or datetime.now(), arena, arena.innermost, file, line,
        )

    def span_chain(self) -> Iterator[SpanFrame]:
        """Active spans, innermost first."""
        return self.spans.chain(self.span)
