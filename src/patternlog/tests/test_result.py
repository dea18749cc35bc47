"""Tests for the Result type backing the non-raising parser API.

Validates:
- Functor and monad laws
- Extraction
- Fail-fast traversal
"""

from __future__ import annotations

from typing import Callable

import pytest

from patternlog.foundation.errors import Err, ErrorCode, Ok, ParseError, Result, traverse


# ═════════════════════════════════════════════════════════════════════════════
# Laws
# ═════════════════════════════════════════════════════════════════════════════


def test_functor_identity() -> None:
    """Functor law: fmap id = id"""
    assert Ok(42).map(lambda x: x) == Ok(42)
    assert Err("fail").map(lambda x: x) == Err("fail")


def test_functor_composition() -> None:
    """Functor law: fmap (f . g) = fmap f . fmap g"""
    f: Callable[[int], int] = lambda x: x + 1
    g: Callable[[int], int] = lambda x: x * 2
    result: Result[int, str] = Ok(5)
    assert result.map(lambda x: f(g(x))) == result.map(g).map(f)


def test_monad_left_identity() -> None:
    """Monad law: return a >>= f = f a"""
    f: Callable[[int], Result[int, str]] = lambda x: Ok(x * 2)
    assert Ok(42).flat_map(f) == f(42)


def test_monad_associativity() -> None:
    """Monad law: (m >>= f) >>= g = m >>= (\\x -> f x >>= g)"""
    m: Result[int, str] = Ok(5)
    f: Callable[[int], Result[int, str]] = lambda x: Ok(x + 1)
    g: Callable[[int], Result[int, str]] = lambda x: Ok(x * 2) if x < 100 else Err("too big")
    assert m.flat_map(f).flat_map(g) == m.flat_map(lambda x: f(x).flat_map(g))


def test_flat_map_short_circuits_on_err() -> None:
    assert Err("first").flat_map(lambda x: Ok(x)) == Err("first")


# ═════════════════════════════════════════════════════════════════════════════
# Operational Tests
# ═════════════════════════════════════════════════════════════════════════════


def test_ok_accessors() -> None:
    result: Result[int, str] = Ok(42)
    assert result.is_ok() and not result.is_err()
    assert result.unwrap() == 42
    assert result.ok() == 42
    assert result.err() is None
    assert bool(result)


def test_err_accessors() -> None:
    result: Result[int, str] = Err("failed")
    assert result.is_err() and not result.is_ok()
    assert result.unwrap_err() == "failed"
    assert result.err() == "failed"
    assert result.ok() is None
    assert not result


def test_unwrap_on_wrong_variant_raises() -> None:
    with pytest.raises(RuntimeError, match="unwrap"):
        Err("boom").unwrap()
    with pytest.raises(RuntimeError, match="unwrap_err"):
        Ok(1).unwrap_err()


def test_unwrap_or() -> None:
    assert Err("fail").unwrap_or(10) == 10
    assert Ok(5).unwrap_or(10) == 5


def test_carries_parse_errors() -> None:
    error = ParseError.create(ErrorCode.UNKNOWN_TOKEN, "unknown token kind 'x'", 0, "$x")
    result: Result[str, ParseError] = Err(error)
    assert result.unwrap_err().code is ErrorCode.UNKNOWN_TOKEN
    assert "Err(" in repr(result)


# ═════════════════════════════════════════════════════════════════════════════
# Collection Operations
# ═════════════════════════════════════════════════════════════════════════════


def test_traverse_all_ok() -> None:
    assert traverse([1, 2, 3], Ok) == Ok([1, 2, 3])


def test_traverse_stops_at_first_err() -> None:
    seen: list[int] = []

    def check(x: int) -> Result[int, str]:
        seen.append(x)
        return Ok(x) if x > 0 else Err(f"bad {x}")

    assert traverse([1, -2, 3], check) == Err("bad -2")
    assert seen == [1, -2]
    assert traverse([1, 2], check) == Ok([1, 2])
