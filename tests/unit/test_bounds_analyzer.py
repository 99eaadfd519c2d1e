"""
Tests for BoundsAnalyzer.
"""
import math

import pytest

from refinery import Interval, SizeInterval, interval
from refinery.analysis import BoundsAnalyzer
from refinery.domain import F64, I8, I32
from refinery.solver import SolverResult


@pytest.fixture
def analyzer():
    """Create a BoundsAnalyzer instance."""
    return BoundsAnalyzer()


def test_index_admissible(analyzer):
    """Every index in [0, 4] is valid for any size of at least 5."""
    result = analyzer.check_index_admissible(Interval(0, 4), SizeInterval(5))

    assert result.holds is True
    assert result.result == SolverResult.UNSAT
    assert result.solver_name == "z3"


def test_index_out_of_range(analyzer):
    """Index 5 is out of range for a size-5 container."""
    result = analyzer.check_index_admissible(Interval(0, 5), SizeInterval(5))

    assert result.holds is False
    assert result.counterexample == {'index': 5, 'size': 5}


def test_negative_index(analyzer):
    result = analyzer.check_index_admissible(Interval(-1, 0), SizeInterval(3))

    assert result.holds is False
    assert result.counterexample['index'] == -1


def test_min_size(analyzer):
    assert analyzer.check_min_size(SizeInterval(1, 3), 1).holds is True
    violated = analyzer.check_min_size(SizeInterval(0, 3), 1)
    assert violated.holds is False
    assert violated.counterexample == {'size': 0}


def test_contains(analyzer):
    assert analyzer.check_contains(Interval(0, 10), Interval(1, 3)).holds is True
    assert analyzer.check_contains(Interval(2, 10), Interval(1, 3)).holds is False


def test_contains_with_infinite_floats(analyzer):
    outer = Interval(0.0, math.inf, F64)

    assert analyzer.check_contains(outer, Interval(1.0, 2.0, F64)).holds is True
    assert analyzer.check_contains(outer, Interval(-math.inf, 2.0, F64)).holds is False


def test_contains_across_kinds(analyzer):
    """Integer and float intervals never contain each other."""
    result = analyzer.check_contains(Interval(0.0, 10.0, F64), Interval(1, 3))

    assert result.holds is False
    assert result.counterexample is None


def test_no_overflow(analyzer):
    small = Interval(0, 10, I8)
    assert analyzer.check_no_overflow("add", small, small).holds is True

    wide = Interval(0, 100, I8)
    result = analyzer.check_no_overflow("add", wide, wide)
    assert result.holds is False
    assert result.counterexample['a'] + result.counterexample['b'] > 127


def test_mul_overflow(analyzer):
    result = analyzer.check_no_overflow("mul", Interval(0, 16, I8), Interval(0, 8, I8))

    assert result.holds is False


def test_inference_is_sound(analyzer):
    """Inferred intervals enclose every in-domain result."""
    a = Interval(-2, 3, I32)
    b = Interval(-1, 4, I32)
    for op in ("add", "sub", "mul"):
        inferred = getattr(interval, op)(a, b)
        assert analyzer.check_sound(op, a, b, inferred).holds is True
    assert analyzer.check_sound("neg", a, None, interval.negate(a)).holds is True


def test_saturated_inference_is_sound(analyzer):
    """Saturation only drops results that overflow at runtime."""
    a = Interval(0, 100, I8)
    assert analyzer.check_sound("add", a, a, interval.add(a, a)).holds is True


def test_unsound_interval_detected(analyzer):
    a = Interval(1, 3)
    b = Interval(2, 5)

    result = analyzer.check_sound("add", a, b, Interval(3, 7))

    assert result.holds is False
    assert result.counterexample == {'a': 3, 'b': 5}
