"""
Ready-made refined types.

Signed sign-constrained integers are interval-based so that arithmetic on
them propagates bounds; NonZero cannot be a single interval and stays a plain
predicate.
"""
from .domain import DEFAULT_DOMAIN, F64, I8, I16, I32, I64, Domain, Number
from .interval import Interval
from .predicates import Finite, NonNegative, NonZero, Normalized, Positive
from .refined import Refined


def IntervalRefined(lo: Number, hi: Number, domain: Domain = DEFAULT_DOMAIN) -> type:
    """``Refined[T, Interval(lo, hi, domain)]`` with T taken from the domain."""
    return Refined[domain.python_type, Interval(lo, hi, domain)]


def _positive(d: Domain) -> type:
    return IntervalRefined(1, d.max, d)


def _negative(d: Domain) -> type:
    return IntervalRefined(d.min, -1, d)


def _non_negative(d: Domain) -> type:
    return IntervalRefined(0, d.max, d)


def _non_positive(d: Domain) -> type:
    return IntervalRefined(d.min, 0, d)


PositiveI8, PositiveI16, PositiveI32, PositiveI64 = map(_positive, (I8, I16, I32, I64))
NegativeI8, NegativeI16, NegativeI32, NegativeI64 = map(_negative, (I8, I16, I32, I64))
NonNegativeI8, NonNegativeI16, NonNegativeI32, NonNegativeI64 = map(_non_negative, (I8, I16, I32, I64))
NonPositiveI8, NonPositiveI16, NonPositiveI32, NonPositiveI64 = map(_non_positive, (I8, I16, I32, I64))

NonZeroInt = Refined[int, NonZero]

PositiveFloat = Refined[float, Positive]
NonNegativeFloat = Refined[float, NonNegative]
NonZeroFloat = Refined[float, NonZero]
FiniteFloat = Refined[float, Finite]
NormalizedFloat = Refined[float, Normalized]

# Domain types
Percentage = IntervalRefined(0, 100, I32)
Probability = IntervalRefined(0.0, 1.0, F64)
UnitFloat = Probability
ByteValue = IntervalRefined(0, 255, I32)
PortNumber = IntervalRefined(1, 65535, I32)
Natural = PositiveI32
Whole = NonNegativeI32
