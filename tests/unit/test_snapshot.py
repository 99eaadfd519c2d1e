"""
Tests for freeze(): brands, guards and frozen containers.
"""
import pytest

from refinery import Refined, Interval, SizeRefined, GuardedIndex, BrandMismatchError, ConsumedHandleError
from refinery.snapshot import mint_brand


def _frozen(items):
    return SizeRefined(list, 0)(list(items)).freeze()


def test_freeze_consumes_handle():
    c = SizeRefined(list, 0)([1, 2])
    guard, frozen = c.freeze()
    assert c.consumed
    with pytest.raises(ConsumedHandleError):
        c.append(3)
    assert guard.brand is frozen.brand


def test_guarded_access():
    guard, frozen = _frozen("abc")
    idx = guard.check(2)
    assert idx is not None
    assert idx.get() == 2
    assert frozen[idx] == "c"
    assert len(frozen) == 3
    assert list(frozen) == ["a", "b", "c"]


def test_check_bounds():
    guard, _ = _frozen([1, 2, 3])
    assert guard.check(3) is None
    assert guard.check(-1) is None
    assert guard.size() == 3


def test_empty_snapshot():
    guard, frozen = _frozen([])
    assert guard.check(0) is None
    assert list(guard.indices()) == []
    assert frozen.is_empty


def test_indices_iterates_all():
    guard, frozen = _frozen([5, 6, 7])
    assert [frozen[i] for i in guard.indices()] == [5, 6, 7]


def test_brand_isolation():
    guard_a, _ = _frozen([1, 2, 3])
    _, frozen_b = _frozen([4, 5, 6])
    with pytest.raises(BrandMismatchError):
        frozen_b[guard_a.check(0)]


def test_brands_are_unique():
    a, b = mint_brand(), mint_brand()
    assert a is not b
    assert a != b
    assert a.serial != b.serial


def test_raw_int_rejected():
    _, frozen = _frozen([1])
    with pytest.raises(TypeError):
        frozen[0]


def test_guarded_index_cannot_be_forged():
    guard, _ = _frozen([1])
    with pytest.raises(TypeError):
        GuardedIndex(guard.brand, 0)


def test_guarded_index_equality():
    guard, _ = _frozen([1, 2])
    other, _ = _frozen([1, 2])
    assert guard.check(1) == guard.check(1)
    assert hash(guard.check(1)) == hash(guard.check(1))
    assert guard.check(1) != other.check(1)
    with pytest.raises(AttributeError):
        guard.check(0)._index = 1


def test_frozen_keeps_size_predicate():
    _, frozen = SizeRefined(list, 2, 5)([1, 2]).freeze()
    assert frozen.size_predicate.lo == 2


def test_captured_state_is_immutable():
    guard, frozen = _frozen([1, 2])
    with pytest.raises(AttributeError):
        guard._size = 10 ** 6
    with pytest.raises(AttributeError):
        frozen._container = [1, 2, 3]
    assert guard.check(5) is None


def test_check_requires_integer():
    guard, frozen = _frozen([1, 2])
    with pytest.raises(TypeError):
        guard.check(1.5)
    assert frozen[guard.check(Refined[int, Interval(0, 1)](1))] == 2
