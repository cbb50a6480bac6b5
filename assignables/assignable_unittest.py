"""Tests for Assignable."""

from typing import Any, Callable

import pytest

from assignables.assignable import Assignable
from assignables.errors import TypeMismatchError


def test_empty_by_default() -> None:
    assert Assignable().get() is None


def test_initial_value() -> None:
    assert Assignable(10).get() == 10


def test_set_replaces_value() -> None:
    variable = Assignable("first")
    variable.set("second")
    assert variable.get() == "second"
    variable.set(None)
    assert variable.get() is None


@pytest.mark.parametrize(
    "value, getter",
    [
        (42, Assignable.get_as_int),
        ("text", Assignable.get_as_str),
        (2.5, Assignable.get_as_float),
        (True, Assignable.get_as_bool),
        (False, Assignable.get_as_bool),
        (b"\x00\x01", Assignable.get_as_bytes),
        ("c", Assignable.get_as_char),
    ],
)
def test_typed_views_round_trip(
    value: Any, getter: Callable[[Assignable], Any]
) -> None:
    variable = Assignable()
    variable.set(value)
    assert getter(variable) == value
    assert type(getter(variable)) is type(value)


@pytest.mark.parametrize(
    "value, getter",
    [
        ("42", Assignable.get_as_int),
        (42, Assignable.get_as_str),
        (1, Assignable.get_as_float),
        (1, Assignable.get_as_bool),
        ("raw", Assignable.get_as_bytes),
        (True, Assignable.get_as_int),
        ("ab", Assignable.get_as_char),
        ("", Assignable.get_as_char),
    ],
)
def test_typed_views_reject_mismatch(
    value: Any, getter: Callable[[Assignable], Any]
) -> None:
    with pytest.raises(TypeMismatchError):
        getter(Assignable(value))


def test_type_mismatch_is_a_type_error() -> None:
    with pytest.raises(TypeError) as exc_info:
        Assignable("42").get_as_int()

    assert exc_info.value.expected is int  # type: ignore[attr-defined]
    assert exc_info.value.actual == "42"  # type: ignore[attr-defined]
    assert "[str]" in str(exc_info.value)


def test_empty_cell_satisfies_every_view() -> None:
    variable = Assignable()
    assert variable.get_as_int() is None
    assert variable.get_as_str() is None
    assert variable.get_as_char() is None
    assert variable.get_as(dict) is None


def test_get_as_custom_type() -> None:
    class Point:
        pass

    point = Point()
    assert Assignable(point).get_as(Point) is point
    with pytest.raises(TypeMismatchError):
        Assignable(point).get_as(int)


def test_equality_compares_contents() -> None:
    assert Assignable(1) == Assignable(1)
    assert Assignable() == Assignable(None)
    assert Assignable(1) != Assignable(2)
    assert Assignable(1) != 1


def test_not_hashable() -> None:
    with pytest.raises(TypeError):
        hash(Assignable(1))


def test_repr() -> None:
    assert repr(Assignable("x")) == "Assignable('x')"
