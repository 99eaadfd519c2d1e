"""
Tests for interval predicates and bound inference.
"""
import math

import pytest

from refinery import interval
from refinery.domain import F64, I8, I32, I64, U8, USIZE
from refinery.interval import Interval, SizeInterval, is_degenerate


def test_interval_membership():
    p = Interval(1, 3)
    assert p(1) and p(2) and p(3)
    assert not p(0)
    assert not p(4)


def test_interval_identity_is_its_bounds():
    assert Interval(1, 3) == Interval(1, 3)
    assert hash(Interval(1, 3)) == hash(Interval(1, 3))
    assert Interval(1, 3) != Interval(1, 4)
    assert Interval(1, 3, I32) != Interval(1, 3, I64)
    assert SizeInterval(1, 3) != Interval(1, 3, USIZE)


def test_interval_static_preconditions():
    with pytest.raises(ValueError):
        Interval(5, 1)
    with pytest.raises(ValueError):
        Interval(0, 300, I8)
    with pytest.raises(TypeError):
        Interval(0.5, 2)
    with pytest.raises(ValueError):
        Interval(float("nan"), 1.0, F64)
    with pytest.raises(ValueError):
        SizeInterval(-1, 3)


def test_interval_is_immutable():
    p = Interval(1, 3)
    with pytest.raises(AttributeError):
        p.lo = 0


def test_size_interval_defaults_to_unbounded():
    p = SizeInterval(5)
    assert p.hi == USIZE.max
    assert p(10 ** 6)
    assert not p(4)
    assert repr(p) == "SizeInterval[5, +inf)"


def test_add():
    assert interval.add(Interval(1, 3), Interval(2, 5)) == Interval(3, 8)


def test_sub():
    assert interval.sub(Interval(1, 3), Interval(2, 5)) == Interval(-4, 1)


def test_mul_with_sign_change():
    # Cross products: 2, -8, -3, 12
    assert interval.mul(Interval(-2, 3), Interval(-1, 4)) == Interval(-8, 12)


def test_negate():
    assert interval.negate(Interval(2, 7)) == Interval(-7, -2)


def test_add_saturates():
    assert interval.add(Interval(100, 120, I8), Interval(50, 60, I8)) == Interval(127, 127, I8)
    assert interval.sub(Interval(-100, 0, I8), Interval(0, 100, I8)) == Interval(-128, 0, I8)


def test_mul_saturates():
    assert interval.mul(Interval(-128, 127, I8), Interval(-128, 127, I8)) == Interval(-128, 127, I8)
    assert interval.mul(Interval(0, 200, U8), Interval(2, 2, U8)) == Interval(0, 255, U8)


def test_negate_most_negative_saturates():
    assert interval.negate(Interval(-128, -1, I8)) == Interval(1, 127, I8)
    assert interval.negate(Interval(I64.min, 0)) == Interval(0, I64.max)


def test_unsigned_negate_saturates_at_zero():
    assert interval.negate(Interval(1, 5, U8)) == Interval(0, 0, U8)


def test_self_fast_paths_match_generic():
    a = Interval(-3, 4)
    assert interval.add_self(a) == interval.add(a, a)
    assert interval.sub_self(a) == interval.sub(a, a)
    assert interval.mul_self(a) == interval.mul(a, a)


def test_mixed_domains_rejected():
    with pytest.raises(TypeError):
        interval.add(Interval(0, 1, I32), Interval(0, 1, I64))


def test_float_infinity_times_zero():
    unbounded = Interval(0.0, math.inf, F64)
    unit = Interval(0.0, 1.0, F64)
    assert interval.mul(unbounded, unit) == Interval(0.0, math.inf, F64)


def test_float_nan_bounds_widen():
    result = interval.add(Interval(math.inf, math.inf, F64), Interval(-math.inf, -math.inf, F64))
    assert result == Interval(-math.inf, math.inf, F64)


def test_size_interval_results_stay_size_intervals():
    result = interval.add(SizeInterval(1, 2), SizeInterval(3, 4))
    assert isinstance(result, SizeInterval)
    assert result == SizeInterval(4, 6)


def test_size_shift():
    assert SizeInterval(3, 10).shift(1) == SizeInterval(4, 11)
    assert SizeInterval(3, 10).shift(-1) == SizeInterval(2, 9)
    assert SizeInterval(0, 2).shift(-3) == SizeInterval(0, 0)
    assert SizeInterval(5).shift(1) == SizeInterval(6)


def test_degenerate_threshold():
    assert is_degenerate(Interval(0, I32.max, I32), 0.5)
    assert not is_degenerate(Interval(0, 100, I32), 0.5)
    assert not is_degenerate(Interval(-math.inf, math.inf, F64), 0.5)


def test_degenerate_boundary_is_half_the_values():
    # [0, 127] holds 128 of the 256 i8 values
    assert is_degenerate(Interval(0, 127, I8), 0.5)
    assert not is_degenerate(Interval(1, 127, I8), 0.5)
    assert is_degenerate(Interval(1, 127, I8), 0.25)
