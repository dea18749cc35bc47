"""Pattern compilation errors.

Every failure is detected while compiling a pattern, never while rendering.
Errors carry a machine-readable code and the offset of the offending input.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Self

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt, computed_field


class ErrorCode(StrEnum):
    """Classification of pattern compilation failures."""
    UNKNOWN_TOKEN = "UNKNOWN_TOKEN"
    UNKNOWN_OPTION = "UNKNOWN_OPTION"
    INVALID_OPTION = "INVALID_OPTION"
    MISSING_OPTION = "MISSING_OPTION"
    DUPLICATE_OPTION = "DUPLICATE_OPTION"
    UNTERMINATED_TOKEN = "UNTERMINATED_TOKEN"
    UNTERMINATED_QUOTE = "UNTERMINATED_QUOTE"
    INVALID_SYNTAX = "INVALID_SYNTAX"


class ParseError(BaseModel):
    """Structured description of why a pattern failed to compile.

    Attributes:
        code: Machine-readable classification
        message: Human-readable description
        position: Zero-based character offset into the pattern text
        pattern: The pattern text being compiled
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        json_schema_extra={
            "title": "Pattern Parse Error",
            "examples": [{
                "code": "UNKNOWN_TOKEN",
                "message": "unknown token kind 'unknown'",
                "position": 0,
                "pattern": "$unknown",
            }],
        },
    )

    code: ErrorCode
    message: Annotated[str, Field(min_length=1)]
    position: NonNegativeInt = 0
    pattern: str = Field(default="", repr=False)

    @computed_field
    @property
    def column(self) -> int:
        """One-based column within the offending line."""
        return self.position - self.pattern.rfind("\n", 0, self.position)

    @classmethod
    def create(cls, code: ErrorCode, message: str, position: int, pattern: str = "") -> Self:
        return cls(code=code, message=message, position=position, pattern=pattern)

    def format(self) -> str:
        """Message followed by the offending line with a caret under the position."""
        head = f"{self.message} at position {self.position}"
        if not self.pattern:
            return head
        start = self.pattern.rfind("\n", 0, self.position) + 1
        end = self.pattern.find("\n", self.position)
        line = self.pattern[start:end if end >= 0 else None]
        return f"{head}\n  {line}\n  {' ' * (self.position - start)}^"

    def __str__(self) -> str:
        return f"{self.message} at position {self.position}"


class PatternError(ValueError):
    """Exception wrapping a ParseError for the raising API."""

    __slots__ = ("error",)

    def __init__(self, error: ParseError) -> None:
        self.error = error
        super().__init__(str(error))

    @property
    def code(self) -> ErrorCode:
        return self.error.code

    @property
    def position(self) -> int:
        return self.error.position

    @classmethod
    def create(cls, code: ErrorCode, message: str, position: int, pattern: str = "") -> Self:
        return cls(ParseError.create(code, message, position, pattern))
