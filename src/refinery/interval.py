"""
Interval predicates and bound inference.

An :class:`Interval` is a closed ``[lo, hi]`` range predicate whose bounds are
part of its identity: ``Interval(1, 3) == Interval(1, 3)`` and both hash the
same, so refined types built over them are the same type.

Bound inference works on declared bounds only, never on runtime values.
Integer domains use saturating arithmetic so that an inferred bound can never
wrap around; float domains use IEEE arithmetic where infinities are ordinary
members.
"""
import math
from functools import lru_cache
from typing import Optional, Tuple

from .domain import DEFAULT_DOMAIN, USIZE, Domain, Number


class Interval:
    """Closed range predicate over a numeric domain.

    Attributes:
        lo: Lower bound (inclusive)
        hi: Upper bound (inclusive)
        domain: Numeric domain the bounds are expressed over
    """

    __slots__ = ("lo", "hi", "domain")

    def __init__(self, lo: Number, hi: Number, domain: Domain = DEFAULT_DOMAIN):
        if domain.is_integer:
            for bound in (lo, hi):
                if isinstance(bound, bool) or not isinstance(bound, int):
                    raise TypeError(f"Integer interval bounds must be int, got {bound!r}")
                if not domain.contains(bound):
                    raise ValueError(f"Bound {bound} is outside domain {domain}")
        else:
            lo, hi = float(lo), float(hi)
            if math.isnan(lo) or math.isnan(hi):
                raise ValueError("Interval bounds must not be NaN")
        if lo > hi:
            raise ValueError(f"Interval requires lo <= hi, got [{lo}, {hi}]")
        object.__setattr__(self, "lo", lo)
        object.__setattr__(self, "hi", hi)
        object.__setattr__(self, "domain", domain)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __call__(self, value: Number) -> bool:
        return self.lo <= value <= self.hi

    @property
    def name(self) -> str:
        return repr(self)

    @property
    def width(self) -> Number:
        return self.hi - self.lo

    def _key(self) -> Tuple:
        return (type(self), self.lo, self.hi, self.domain)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Interval):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __repr__(self) -> str:
        return f"Interval[{self.lo}, {self.hi}]:{self.domain}"


class SizeInterval(Interval):
    """Closed range over a container's element count (domain ``usize``).

    The upper bound defaults to the domain maximum, i.e. "at least ``lo``".
    """

    __slots__ = ()

    def __init__(self, lo: int, hi: Optional[int] = None):
        super().__init__(lo, USIZE.max if hi is None else hi, USIZE)

    def shift(self, delta: int) -> "SizeInterval":
        """Shift both bounds by ``delta``, saturating at 0 and the domain maximum."""
        return _shift(self, delta)

    def __repr__(self) -> str:
        if self.hi == USIZE.max:
            return f"SizeInterval[{self.lo}, +inf)"
        return f"SizeInterval[{self.lo}, {self.hi}]"


def is_interval(pred) -> bool:
    """True if ``pred`` is an interval predicate."""
    return isinstance(pred, Interval)


def _result_type(a: Interval, b: Interval):
    return type(a) if type(a) is type(b) else Interval


def _build(cls, lo: Number, hi: Number, domain: Domain) -> Interval:
    if cls is SizeInterval:
        return SizeInterval(lo, hi)
    return Interval(lo, hi, domain)


def _require_same_domain(a: Interval, b: Interval) -> Domain:
    if a.domain != b.domain:
        raise TypeError(f"Cannot combine intervals over {a.domain} and {b.domain}")
    return a.domain


def _float_bounds(lo: float, hi: float) -> Tuple[float, float]:
    # inf - inf style NaNs widen to the conservative infinity
    if math.isnan(lo):
        lo = -math.inf
    if math.isnan(hi):
        hi = math.inf
    return lo, hi


def _fmul(x: float, y: float) -> float:
    if x == 0 or y == 0:
        return 0.0
    return x * y


def _combine(cls, domain: Domain, lo: Number, hi: Number) -> Interval:
    if domain.is_integer:
        return _build(cls, domain.saturate(lo), domain.saturate(hi), domain)
    lo, hi = _float_bounds(lo, hi)
    return _build(cls, lo, hi, domain)


@lru_cache(maxsize=4096)
def add(a: Interval, b: Interval) -> Interval:
    """``[a_lo + b_lo, a_hi + b_hi]``."""
    domain = _require_same_domain(a, b)
    return _combine(_result_type(a, b), domain, a.lo + b.lo, a.hi + b.hi)


@lru_cache(maxsize=4096)
def sub(a: Interval, b: Interval) -> Interval:
    """``[a_lo - b_hi, a_hi - b_lo]``."""
    domain = _require_same_domain(a, b)
    return _combine(_result_type(a, b), domain, a.lo - b.hi, a.hi - b.lo)


@lru_cache(maxsize=4096)
def mul(a: Interval, b: Interval) -> Interval:
    """Min and max of the four cross products of the bounds."""
    domain = _require_same_domain(a, b)
    if domain.is_integer:
        products = (a.lo * b.lo, a.lo * b.hi, a.hi * b.lo, a.hi * b.hi)
    else:
        products = (_fmul(a.lo, b.lo), _fmul(a.lo, b.hi),
                    _fmul(a.hi, b.lo), _fmul(a.hi, b.hi))
    return _combine(_result_type(a, b), domain, min(products), max(products))


@lru_cache(maxsize=4096)
def negate(a: Interval) -> Interval:
    """``[-hi, -lo]``; the most negative integer saturates to the most positive."""
    return _combine(type(a), a.domain, -a.hi, -a.lo)


# Same-predicate fast paths: a single cache entry per interval.

@lru_cache(maxsize=1024)
def add_self(a: Interval) -> Interval:
    return _combine(type(a), a.domain, a.lo + a.lo, a.hi + a.hi)


@lru_cache(maxsize=1024)
def sub_self(a: Interval) -> Interval:
    return _combine(type(a), a.domain, a.lo - a.hi, a.hi - a.lo)


@lru_cache(maxsize=1024)
def mul_self(a: Interval) -> Interval:
    return mul.__wrapped__(a, a)


def _shift(a: SizeInterval, delta: int) -> SizeInterval:
    return SizeInterval(USIZE.saturate(a.lo + delta), USIZE.saturate(a.hi + delta))


def is_degenerate(result: Interval, fraction: float) -> bool:
    """True when an integer interval is too wide to carry useful information.

    Widths are value counts, so ``[0, I32.max]`` is exactly half of ``I32``.
    Float intervals never degrade.
    """
    domain = result.domain
    if not domain.is_integer:
        return False
    return result.width + 1 >= fraction * (domain.range + 1)
