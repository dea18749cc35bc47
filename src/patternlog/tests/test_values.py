"""Tests for value capture and canonical text form."""

from __future__ import annotations

from enum import IntEnum

from patternlog.values import Field, render_fields, render_value, to_fields, to_value


class Color(IntEnum):
    RED = 1


class Opaque:
    def __repr__(self) -> str:
        return "<opaque>"


def test_to_value_normalises_scalars() -> None:
    assert to_value(True) is True
    assert to_value(Color.RED) == 1 and type(to_value(Color.RED)) is int
    assert to_value(2.5) == 2.5
    assert to_value("s") == "s"


def test_to_value_sequences_become_tuples() -> None:
    assert to_value([1, ["a", False]]) == (1, ("a", False))


def test_to_value_foreign_objects_use_repr() -> None:
    assert to_value(Opaque()) == "<opaque>"
    assert to_value(None) == "None"
    assert to_value({"a": 1}) == "{'a': 1}"


def test_to_fields_accepts_mapping_pairs_and_none() -> None:
    assert to_fields(None) == ()
    assert to_fields({}) == ()
    assert to_fields({"b": 1, "a": [2]}) == (Field("b", 1), Field("a", (2,)))
    assert to_fields([("x", 1), ("x", 2)]) == (Field("x", 1), Field("x", 2))


def test_render_value() -> None:
    assert render_value(True) == "true"
    assert render_value(0) == "0"
    assert render_value(0.1) == "0.1"
    assert render_value("a b") == "`a b`"
    assert render_value(()) == "[]"
    assert render_value(("x", ("y",)), quote="'") == "['x',['y']]"


def test_render_fields() -> None:
    assert render_fields(()) == ""
    assert render_fields((Field("a", 1), Field("b", "c"))) == "a=1,b=`c`"
