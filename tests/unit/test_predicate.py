"""
Tests for predicate values and combinators.
"""
from dataclasses import dataclass

from refinery.predicate import (
    Predicate, predicate, predicate_name,
    All, Any, NoneOf, Not, If, Iff, Xor, ExactlyN, AtLeastN, AtMostN, Apply, OnField,
)
from refinery.predicates import Positive, Negative, NonZero, InRange, NonEmpty


@predicate
def Even(v):
    return v % 2 == 0


@dataclass
class Point:
    x: int
    y: int


def test_predicate_decorator_names_function():
    assert isinstance(Even, Predicate)
    assert Even.name == "Even"
    assert Even(4) is True
    assert Even(3) is False


def test_predicate_explicit_name():
    p = predicate(lambda v: v > 10, name="Big")
    assert predicate_name(p) == "Big"
    assert predicate_name(lambda v: True) == "<lambda>"


def test_all_any_not():
    pos_even = All(Positive, Even)
    assert pos_even(4)
    assert not pos_even(-4)
    assert not pos_even(3)

    neg_or_even = Any(Negative, Even)
    assert neg_or_even(-3)
    assert neg_or_even(4)
    assert not neg_or_even(3)

    assert Not(Positive)(0)
    assert not Not(Positive)(1)


def test_none_of():
    p = NoneOf(Negative, Even)
    assert p(3)
    assert not p(4)
    assert not p(-3)


def test_implication():
    # Even numbers must be positive; odd numbers are unconstrained
    p = If(Even, Positive)
    assert p(4)
    assert p(-3)
    assert not p(-4)


def test_iff_and_xor():
    assert Iff(Positive, Even)(4)
    assert Iff(Positive, Even)(-3)
    assert not Iff(Positive, Even)(3)

    assert Xor(Positive, Even)(3)
    assert Xor(Positive, Even)(-4)
    assert not Xor(Positive, Even)(4)


def test_threshold_counting():
    preds = (Positive, Even, InRange(0, 10))
    assert ExactlyN(3, *preds)(4)
    assert ExactlyN(2, *preds)(12)
    assert AtLeastN(2, *preds)(7)
    assert not AtLeastN(2, *preds)(-3)
    assert AtMostN(1, *preds)(-3)
    assert not AtMostN(1, *preds)(8)


def test_apply_projection():
    p = Apply(len, InRange(2, 4))
    assert p("abc")
    assert not p("a")


def test_on_field():
    right_half = OnField("x", Positive)
    assert right_half(Point(1, -5))
    assert not right_half(Point(-1, 5))


def test_deep_composition():
    p = All(Any(Even, Negative), Not(Xor(NonZero, Positive)), If(Even, InRange(-100, 100)))
    assert p(0)
    assert p(4)
    assert not p(5)
    assert not p(102)
    assert not p(-2)
    assert "All(" in p.name


def test_combinators_produce_fresh_identities():
    assert All(Positive, Even) is not All(Positive, Even)
    assert NonEmpty([1])
    assert not NonEmpty([])
