"""Pattern parser: text → Pattern.

Grammar:

    pattern  := (literal | "$$" | token)*
    token    := "$" ident [ "(" [ option ("," option)* ] ")" ]
    option   := ident [ "=" value ]
    value    := integer | 'text' | "text" | true | false

Parsing runs in two passes. The scanner splits the text into literal runs
and raw token expressions, locating each closing parenthesis while skipping
quoted regions. Validation then resolves the token kind and checks the
options against that kind's schema. Either pass fails with a positioned
ParseError; no partial pattern is ever produced.

Usage:
    >>> parse("$level $message").is_ok()
    True
    >>> parse("$unknown").unwrap_err().code
    <ErrorCode.UNKNOWN_TOKEN: 'UNKNOWN_TOKEN'>
    >>> compile_pattern("$$ $message")  # raising variant
"""

from __future__ import annotations

import logging
import string
from dataclasses import dataclass
from enum import StrEnum
from functools import lru_cache

from pydantic import ValidationError

from patternlog.foundation.errors import Err, ErrorCode, Ok, ParseError, PatternError, Result, traverse

from .model import LiteralSegment, Pattern, Segment, TokenKind, TokenSegment

logger = logging.getLogger("patternlog.pattern")

_IDENT_START = frozenset(string.ascii_letters + "_")
_DIGITS = frozenset(string.digits)
_IDENT_CHARS = _IDENT_START | _DIGITS
_QUOTES = "'\""


class LiteralKind(StrEnum):
    """Syntactic type of an option value."""

    INTEGER = "integer"
    TEXT = "text"
    CHAR = "char"
    FLAG = "flag"


@dataclass(frozen=True, slots=True)
class Option:
    """Option as written in the pattern, before schema validation."""

    name: str
    kind: LiteralKind
    value: int | str | bool
    position: int


@dataclass(frozen=True, slots=True)
class RawToken:
    """Token expression found by the scanner."""

    name: str
    position: int
    options: tuple[Option, ...] = ()


# ─────────────────────────────────────────────────────────────────────────────
# Pass 1: lexical scan
# ─────────────────────────────────────────────────────────────────────────────


class _Scanner:
    """Splits pattern text into literal runs and raw tokens."""

    __slots__ = ("text", "sigil", "pos")

    def __init__(self, text: str, sigil: str) -> None:
        self.text, self.sigil, self.pos = text, sigil, 0

    def fail(self, code: ErrorCode, message: str, position: int) -> PatternError:
        return PatternError.create(code, message, position, self.text)

    def scan(self) -> list[str | RawToken]:
        text, sigil, n = self.text, self.sigil, len(self.text)
        items: list[str | RawToken] = []
        literal: list[str] = []
        while self.pos < n:
            at = text.find(sigil, self.pos)
            if at < 0:
                literal.append(text[self.pos:])
                break
            literal.append(text[self.pos:at])
            if text.startswith(sigil, at + 1):
                literal.append(sigil)
                self.pos = at + 2
                continue
            token = self._token(at)
            if literal:
                items.append("".join(literal))
                literal.clear()
            items.append(token)
        if literal and (run := "".join(literal)):
            items.append(run)
        return [i for i in items if i != ""]

    def _token(self, at: int) -> RawToken:
        text, n = self.text, len(self.text)
        start = at + 1
        if start >= n or text[start] not in _IDENT_START:
            raise self.fail(ErrorCode.INVALID_SYNTAX, f"expected a token name after {self.sigil!r}", at)
        end = start
        while end < n and text[end] in _IDENT_CHARS:
            end += 1
        name = text[start:end]
        if end < n and text[end] == "(":
            close = self._closing_paren(at, end)
            options = _OptionReader(self, end + 1, close).read()
            self.pos = close + 1
            return RawToken(name, at, options)
        self.pos = end
        return RawToken(name, at)

    def _closing_paren(self, at: int, open_: int) -> int:
        """Index of the `)` closing the option list opened at `open_`."""
        text, p = self.text, open_ + 1
        while p < len(text):
            ch = text[p]
            if ch in _QUOTES:
                if (q := text.find(ch, p + 1)) < 0:
                    raise self.fail(ErrorCode.UNTERMINATED_QUOTE, "unterminated quoted value", p)
                p = q + 1
                continue
            if ch == ")":
                return p
            p += 1
        raise self.fail(ErrorCode.UNTERMINATED_TOKEN, "missing closing parenthesis", at)


class _OptionReader:
    """Reads `name [= value]` items between the parentheses of one token."""

    __slots__ = ("scanner", "text", "pos", "end")

    def __init__(self, scanner: _Scanner, start: int, end: int) -> None:
        self.scanner, self.text, self.pos, self.end = scanner, scanner.text, start, end

    def read(self) -> tuple[Option, ...]:
        options: list[Option] = []
        self._skip_ws()
        if self.pos >= self.end:
            return ()
        while True:
            self._skip_ws()
            at = self.pos
            name = self._ident("expected an option name")
            self._skip_ws()
            if self._peek() == "=":
                self.pos += 1
                self._skip_ws()
                kind, value = self._value()
            else:
                kind, value = LiteralKind.FLAG, True
            options.append(Option(name, kind, value, at))
            self._skip_ws()
            if self.pos >= self.end:
                return tuple(options)
            if self._peek() != ",":
                raise self.scanner.fail(ErrorCode.INVALID_SYNTAX, "expected ',' or ')'", self.pos)
            self.pos += 1

    def _peek(self) -> str:
        return self.text[self.pos] if self.pos < self.end else ""

    def _skip_ws(self) -> None:
        while self.pos < self.end and self.text[self.pos].isspace():
            self.pos += 1

    def _ident(self, expected: str) -> str:
        start = self.pos
        if not self._peek() or self._peek() not in _IDENT_START:
            raise self.scanner.fail(ErrorCode.INVALID_SYNTAX, expected, start)
        while self.pos < self.end and self.text[self.pos] in _IDENT_CHARS:
            self.pos += 1
        return self.text[start:self.pos]

    def _value(self) -> tuple[LiteralKind, int | str | bool]:
        ch, at = self._peek(), self.pos
        if ch and ch in _QUOTES:
            close = self.text.index(ch, at + 1)  # balanced by _closing_paren
            self.pos = close + 1
            value = self.text[at + 1:close]
            return (LiteralKind.CHAR if len(value) == 1 else LiteralKind.TEXT), value
        if ch in _DIGITS or (ch == "-" and self.pos + 1 < self.end and self.text[self.pos + 1] in _DIGITS):
            self.pos += 1
            while self.pos < self.end and self.text[self.pos] in _DIGITS:
                self.pos += 1
            if self._peek() and self._peek() in _IDENT_CHARS:
                raise self.scanner.fail(ErrorCode.INVALID_SYNTAX, "malformed integer", at)
            return LiteralKind.INTEGER, int(self.text[at:self.pos])
        if ch and ch in _IDENT_START:
            word = self._ident("expected an option value")
            if word in ("true", "false"):
                return LiteralKind.FLAG, word == "true"
            raise self.scanner.fail(
                ErrorCode.INVALID_SYNTAX, f"unquoted option value {word!r} (quote text values)", at)
        raise self.scanner.fail(ErrorCode.INVALID_SYNTAX, "expected an option value", at)


# ─────────────────────────────────────────────────────────────────────────────
# Pass 2: semantic validation
# ─────────────────────────────────────────────────────────────────────────────


def _validate(raw: RawToken, text: str) -> Result[TokenSegment, ParseError]:
    """Resolve the token kind and check options against its schema."""
    if (kind := TokenKind.lookup(raw.name)) is None:
        return Err(ParseError.create(ErrorCode.UNKNOWN_TOKEN, f"unknown token kind {raw.name!r}", raw.position, text))
    supplied: dict[str, int | str | bool] = {}
    positions: dict[str, int] = {}
    for opt in raw.options:
        if opt.name in supplied:
            return Err(ParseError.create(
                ErrorCode.DUPLICATE_OPTION, f"option {opt.name!r} given twice for token {kind.value!r}",
                opt.position, text))
        supplied[opt.name], positions[opt.name] = opt.value, opt.position
    try:
        options = kind.options_model.model_validate(supplied)
    except ValidationError as exc:
        code, message, name = classify_validation_error(exc, kind)
        return Err(ParseError.create(code, message, positions.get(name, raw.position), text))
    return Ok(TokenSegment(kind, options))


def classify_validation_error(exc: ValidationError, kind: TokenKind) -> tuple[ErrorCode, str, str]:
    """Map the first pydantic error to (code, message, option name)."""
    detail = exc.errors()[0]
    name = str(detail["loc"][0]) if detail["loc"] else ""
    match detail["type"]:
        case "extra_forbidden":
            return ErrorCode.UNKNOWN_OPTION, f"unknown option {name!r} for token {kind.value!r}", name
        case "missing":
            return ErrorCode.MISSING_OPTION, f"token {kind.value!r} requires option {name!r}", name
        case _:
            message = f"invalid value for option {name!r} of token {kind.value!r}: {detail['msg']}"
            return ErrorCode.INVALID_OPTION, message, name


# ─────────────────────────────────────────────────────────────────────────────
# Public API
# ─────────────────────────────────────────────────────────────────────────────


@lru_cache(maxsize=256)
def parse(text: str, *, sigil: str = "$") -> Result[Pattern, ParseError]:
    """Compile pattern text. Returns Ok(Pattern) or Err(ParseError); never raises for bad input.

    Raises:
        ValueError: If sigil is not exactly one character
    """
    if len(sigil) != 1 or sigil in _IDENT_CHARS or sigil in _QUOTES or sigil in "(),= ":
        raise ValueError(f"sigil must be a single punctuation character, got {sigil!r}")
    try:
        items = _Scanner(text, sigil).scan()
    except PatternError as e:
        return Err(e.error)

    def segment(item: str | RawToken) -> Result[Segment, ParseError]:
        return Ok(LiteralSegment(item)) if isinstance(item, str) else _validate(item, text)

    return traverse(items, segment).map(lambda segs: Pattern(tuple(segs), text))


def compile_pattern(text: str, *, sigil: str = "$") -> Pattern:
    """Compile pattern text, raising PatternError with position info on failure."""
    result = parse(text, sigil=sigil)
    if result.is_err():
        error = result.unwrap_err()
        logger.debug("pattern rejected: %s", error)
        raise PatternError(error)
    pattern = result.unwrap()
    logger.debug("compiled pattern %r into %d segments", text, len(pattern))
    return pattern
