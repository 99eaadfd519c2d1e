"""
Arithmetic and derived operations on refined values.

Interval-typed operands go through two layers:

1. bound inference on the declared intervals (``refinery.interval``), and
2. value computation on the wrapped values: checked for integer domains
   (ArithmeticOverflow instead of wrap-around), plain IEEE for floats.

When the inferred integer interval is at least ``degrade_fraction`` of the
domain range wide, the operator returns a bare ``int`` instead of a refined
value. Floats never degrade.
"""
import logging
import math
import operator
from typing import Any, Callable, Dict, Optional, Tuple

from . import interval as interval_math
from .checker import prove_contains, prove_sound
from .config import get_settings
from .domain import Domain
from .errors import ArithmeticOverflow, ProofObligationError
from .interval import Interval, is_degenerate, is_interval
from .log import get_logger
from .predicate import predicate_name
from .predicates import Negative, NonNegative, NonZero, Normalized, Positive, implies
from .refined import Refined

_log = get_logger(__name__)

_VALUE_OPS: Dict[str, Callable[[Any, Any], Any]] = {
    "add": operator.add,
    "sub": operator.sub,
    "mul": operator.mul,
}

_INFER = {
    "add": interval_math.add,
    "sub": interval_math.sub,
    "mul": interval_math.mul,
}

_INFER_SELF = {
    "add": interval_math.add_self,
    "sub": interval_math.sub_self,
    "mul": interval_math.mul_self,
}

# (predicate, operation, value type) combinations that keep the predicate for
# same-predicate operands. Multiplication is absent: tiny positives underflow
# to 0.0 and 0.0 * inf is NaN.
PRESERVES = {
    (Positive, "add", float),
    (NonNegative, "add", float),
}


def _checked(op: str, result: Any, domain: Domain) -> Any:
    if domain.is_integer and not domain.contains(result):
        raise ArithmeticOverflow(op, result, domain)
    return result


def _trace_inference(op: str, a: Interval, b: Optional[Interval], result: Interval) -> None:
    # Costs one solver call per new operand pair, so only at DEBUG. Float
    # bounds are rounded, which exact real arithmetic would flag.
    if a.domain.is_integer and _log.isEnabledFor(logging.DEBUG):
        proof = prove_sound(op, a, b, result)
        if not proof.holds:
            _log.error("unsound inference: %s", proof)


def _wrap_interval(value_type: type, result_interval: Interval, value: Any) -> Any:
    if is_degenerate(result_interval, get_settings().degrade_fraction):
        _log.debug("degrading %r to bare %s", result_interval, value_type.__name__)
        return value
    return Refined[value_type, result_interval].trusted(value)


def _interval_binary(op: str, lhs: Refined, rhs: Refined) -> Any:
    lp, rp = type(lhs).predicate, type(rhs).predicate
    if lp == rp:
        result_interval = _INFER_SELF[op](lp)
    else:
        result_interval = _INFER[op](lp, rp)
    _trace_inference(op, lp, rp, result_interval)
    value = _checked(op, _VALUE_OPS[op](lhs.get(), rhs.get()), result_interval.domain)
    return _wrap_interval(type(lhs).value_type, result_interval, value)


def _binary(op: str, lhs: Refined, rhs: Any) -> Any:
    if not isinstance(rhs, Refined):
        return _VALUE_OPS[op](lhs.get(), rhs)
    lp, rp = type(lhs).predicate, type(rhs).predicate
    if is_interval(lp) and is_interval(rp):
        return _interval_binary(op, lhs, rhs)
    value = _VALUE_OPS[op](lhs.get(), rhs.get())
    value_type = type(lhs).value_type
    if lp is rp and (lp, op, value_type) in PRESERVES:
        return type(lhs).trusted(value)
    return value


def add(lhs: Refined, rhs: Any) -> Any:
    """``lhs + rhs`` with interval propagation.

    Returns:
        A refined value over the inferred interval, or a bare value when
        either operand is not interval-typed or the result degrades

    Raises:
        ArithmeticOverflow: Integer result does not fit the domain
    """
    return _binary("add", lhs, rhs)


def sub(lhs: Refined, rhs: Any) -> Any:
    """``lhs - rhs`` with interval propagation; see :func:`add`."""
    return _binary("sub", lhs, rhs)


def mul(lhs: Refined, rhs: Any) -> Any:
    """``lhs * rhs`` with interval propagation; see :func:`add`."""
    return _binary("mul", lhs, rhs)


def neg(value: Refined) -> Any:
    """``-value``; interval values negate their interval."""
    pred = type(value).predicate
    if not is_interval(pred):
        return -value.get()
    result_interval = interval_math.negate(pred)
    _trace_inference("neg", pred, None, result_interval)
    result = _checked("neg", -value.get(), result_interval.domain)
    return _wrap_interval(type(value).value_type, result_interval, result)


def increment(value: Refined) -> Optional[Refined]:
    """``value + 1`` under the *same* predicate, or None if it no longer holds."""
    return type(value).try_refine(value.get() + 1)


def decrement(value: Refined) -> Optional[Refined]:
    """``value - 1`` under the *same* predicate, or None if it no longer holds."""
    return type(value).try_refine(value.get() - 1)


def transform(value: Refined, func: Callable[[Any], Any], new_predicate: Any) -> Refined:
    """Map the inner value through ``func`` and check it against ``new_predicate``.

    Raises:
        RefinementViolation: If the mapped value fails ``new_predicate``
    """
    result = func(value.get())
    return Refined[type(result), new_predicate].checked(result)


def coerce_to(value: Refined, other_predicate: Any) -> Refined:
    """Re-check the same inner value against another predicate.

    Raises:
        RefinementViolation: If the value fails ``other_predicate``
    """
    return Refined[type(value).value_type, other_predicate].checked(value.get())


def try_coerce(value: Refined, other_predicate: Any) -> Optional[Refined]:
    """Like :func:`coerce_to` but returns None instead of raising."""
    return Refined[type(value).value_type, other_predicate].try_refine(value.get())


def widen(value: Refined, target_predicate: Any) -> Refined:
    """Relabel ``value`` with a weaker predicate without a runtime check.

    Allowed when the implication is registered (e.g. Positive => NonZero) or,
    for two intervals, when the solver proves the source is contained in the
    target.

    Raises:
        ProofObligationError: If the implication cannot be established
    """
    cls = type(value)
    source = cls.predicate
    target_cls = Refined[cls.value_type, target_predicate]
    if implies(source, target_predicate):
        return target_cls.trusted(value.get())
    if is_interval(source) and is_interval(target_predicate):
        result = prove_contains(target_predicate, source)
        if result.holds:
            return target_cls.trusted(value.get())
        raise ProofObligationError(f"{source!r} implies {target_predicate!r}", result)
    raise ProofObligationError(
        f"{predicate_name(source)} implies {predicate_name(target_predicate)}")


def _same_type(*values: Refined) -> type:
    cls = type(values[0])
    for v in values[1:]:
        if type(v) is not cls:
            raise TypeError(f"Expected {cls.__name__}, got {type(v).__name__}")
    return cls


def refined_min(a: Refined, b: Refined) -> Refined:
    """Smaller of two values of the same refined type."""
    cls = _same_type(a, b)
    return cls.trusted(a.get() if a.get() < b.get() else b.get())


def refined_max(a: Refined, b: Refined) -> Refined:
    """Larger of two values of the same refined type."""
    cls = _same_type(a, b)
    return cls.trusted(a.get() if a.get() > b.get() else b.get())


def refined_clamp(value: Refined, lo: Refined, hi: Refined) -> Refined:
    """Clamp ``value`` into ``[lo, hi]``; all three share one refined type."""
    cls = _same_type(value, lo, hi)
    v, l, h = value.get(), lo.get(), hi.get()
    return cls.trusted(l if v < l else (h if v > h else v))


def _unwrap(value: Any) -> Tuple[Any, Optional[Domain]]:
    if isinstance(value, Refined):
        pred = type(value).predicate
        return value.get(), pred.domain if is_interval(pred) else None
    return value, None


def refined_abs(value: Any) -> Refined:
    """Absolute value, refined as NonNegative.

    Raises:
        ArithmeticOverflow: Interval-typed integer equal to the domain minimum
        RefinementViolation: NaN input
    """
    raw, domain = _unwrap(value)
    if isinstance(raw, float):
        return Refined[float, NonNegative].checked(abs(raw))
    if domain is not None:
        _checked("abs", abs(raw), domain)
    return Refined[type(raw), NonNegative].trusted(abs(raw))


def square(value: Any) -> Refined:
    """``value * value``, refined as NonNegative.

    Raises:
        ArithmeticOverflow: Interval-typed integer square leaves its domain
        RefinementViolation: NaN input
    """
    raw, domain = _unwrap(value)
    if isinstance(raw, float):
        return Refined[float, NonNegative].checked(raw * raw)
    if domain is not None:
        _checked("square", raw * raw, domain)
    return Refined[type(raw), NonNegative].trusted(raw * raw)


def _excludes_zero(pred: Any) -> bool:
    if is_interval(pred):
        return pred.lo > 0 or pred.hi < 0
    return pred is NonZero or pred is Positive or pred is Negative


def _non_negative(pred: Any) -> bool:
    if is_interval(pred):
        return pred.lo >= 0
    return pred is NonNegative or pred is Positive


def _require(value: Any, check: Callable[[Any], bool], what: str) -> Any:
    if not isinstance(value, Refined) or not check(type(value).predicate):
        raise TypeError(f"Expected a refined value that is provably {what}, got {value!r}")
    return value.get()


def safe_divide(numerator: Any, denominator: Refined) -> Any:
    """Division by a value whose type excludes zero."""
    d = _require(denominator, _excludes_zero, "non-zero")
    n, _ = _unwrap(numerator)
    return n / d


def safe_modulo(numerator: Any, divisor: Refined) -> int:
    """Integer modulo by a value whose type excludes zero."""
    d = _require(divisor, _excludes_zero, "non-zero")
    n, _ = _unwrap(numerator)
    return n % d


def safe_reciprocal(value: Refined) -> float:
    return 1.0 / _require(value, _excludes_zero, "non-zero")


def safe_sqrt(value: Refined) -> Refined:
    """Square root; Positive input stays Positive, otherwise NonNegative."""
    raw = _require(value, _non_negative, "non-negative")
    pred = type(value).predicate
    keep = Positive if (pred is Positive or (is_interval(pred) and pred.lo > 0)) else NonNegative
    return Refined[float, keep].trusted(math.sqrt(raw))


def safe_log(value: Refined) -> float:
    def positive(pred):
        return pred is Positive or (is_interval(pred) and pred.lo > 0)
    return math.log(_require(value, positive, "positive"))


def _normalized(pred: Any) -> bool:
    if is_interval(pred):
        return pred.lo >= -1 and pred.hi <= 1
    return pred is Normalized


def safe_asin(value: Refined) -> float:
    return math.asin(_require(value, _normalized, "within [-1, 1]"))


def safe_acos(value: Refined) -> float:
    return math.acos(_require(value, _normalized, "within [-1, 1]"))
