"""
Standard predicates used by the operations and type aliases.

This is deliberately a small set; any pure ``T -> bool`` callable works as a
predicate.
"""
import math

from .predicate import Predicate, predicate


@predicate
def Positive(v):
    return v > 0


@predicate
def Negative(v):
    return v < 0


@predicate
def NonNegative(v):
    return v >= 0


@predicate
def NonPositive(v):
    return v <= 0


@predicate
def NonZero(v):
    return v != 0


@predicate
def Finite(v):
    return math.isfinite(v)


@predicate
def Normalized(v):
    """Value in [-1, 1]."""
    return -1 <= v <= 1


@predicate
def NonEmpty(v):
    return len(v) > 0


@predicate
def Always(v):
    return True


@predicate
def Never(v):
    return False


def InRange(lo, hi) -> Predicate:
    """Closed range membership, ``lo <= v <= hi``.

    Unlike :class:`refinery.interval.Interval` this predicate takes part in no
    bound inference; each call returns a distinct predicate.
    """
    return Predicate(lambda v: lo <= v <= hi, f"InRange({lo}, {hi})")


# Known implications between the predicates above, used by widen()
IMPLICATIONS = {
    (Positive, NonZero),
    (Positive, NonNegative),
    (Negative, NonZero),
    (Negative, NonPositive),
}


def register_implication(stronger, weaker) -> None:
    """Declare that ``stronger(v)`` implies ``weaker(v)`` for every ``v``."""
    IMPLICATIONS.add((stronger, weaker))


def implies(stronger, weaker) -> bool:
    """True if the implication is trivially known or has been registered."""
    return stronger is weaker or weaker is Always or (stronger, weaker) in IMPLICATIONS
