"""
Main proof API used by refined types and containers.

Obligations are pure functions of interval identities, so each result is
memoised: an obligation about a pair of types is discharged by the solver
once, the first time the pair meets.

``prove_no_overflow`` and ``prove_sound`` are also public verification
utilities; arithmetic calls ``prove_sound`` only when DEBUG logging is on.
"""
from functools import lru_cache
from typing import Optional

from .analysis.bounds_analyzer import BoundsAnalyzer
from .config import get_settings
from .errors import ProofObligationError
from .interval import Interval
from .solver.result import VerificationResult

_CACHE_SIZE = get_settings().proof_cache_size


@lru_cache(maxsize=_CACHE_SIZE)
def prove_index_admissible(index: Interval, size: Interval) -> VerificationResult:
    """Prove ``0 <= i < n`` for all ``i`` in ``index`` and ``n`` in ``size``.

    Example:
        >>> prove_index_admissible(Interval(0, 4), SizeInterval(5)).holds
        True
    """
    return BoundsAnalyzer().check_index_admissible(index, size)


@lru_cache(maxsize=_CACHE_SIZE)
def prove_min_size(size: Interval, minimum: int) -> VerificationResult:
    """Prove every size admitted by ``size`` is at least ``minimum``."""
    return BoundsAnalyzer().check_min_size(size, minimum)


@lru_cache(maxsize=_CACHE_SIZE)
def prove_contains(outer: Interval, inner: Interval) -> VerificationResult:
    """Prove ``inner`` is a subset of ``outer``."""
    return BoundsAnalyzer().check_contains(outer, inner)


@lru_cache(maxsize=_CACHE_SIZE)
def prove_no_overflow(op: str, a: Interval, b: Interval) -> VerificationResult:
    """Prove ``a op b`` never leaves the operands' domain."""
    return BoundsAnalyzer().check_no_overflow(op, a, b)


@lru_cache(maxsize=_CACHE_SIZE)
def prove_sound(op: str, a: Interval, b: Optional[Interval],
                result: Interval) -> VerificationResult:
    """Prove ``result`` encloses every representable ``a op b``."""
    return BoundsAnalyzer().check_sound(op, a, b, result)


def require_index_admissible(index: Interval, size: Interval) -> None:
    """Raise ProofObligationError unless the index interval is admissible.

    Args:
        index: Interval of the index type
        size: Size interval of the container type
    """
    result = prove_index_admissible(index, size)
    if not result.holds:
        raise ProofObligationError(f"index {index} is in range for {size}", result)


def require_min_size(size: Interval, minimum: int) -> None:
    """Raise ProofObligationError unless every admitted size is >= minimum."""
    result = prove_min_size(size, minimum)
    if not result.holds:
        raise ProofObligationError(f"{size} has at least {minimum} element(s)", result)


def clear_proof_cache() -> None:
    """Forget every memoised proof result."""
    for fn in (prove_index_admissible, prove_min_size, prove_contains,
               prove_no_overflow, prove_sound):
        fn.cache_clear()
