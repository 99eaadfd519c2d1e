"""
Predicate values and the composition algebra.

A predicate is a pure ``T -> bool`` callable. Predicates are compared by
identity: two predicates are the same only if they are the same object. The
combinators below always return a fresh predicate, so ``All(P, Q)`` built
twice yields two distinct refinements.
"""
from operator import attrgetter
from typing import Callable, Optional


class Predicate:
    """A named, pure boolean function.

    Attributes:
        fn: The underlying callable
        name: Display name used in diagnostics
    """

    __slots__ = ("fn", "name")

    def __init__(self, fn: Callable[[object], bool], name: Optional[str] = None):
        self.fn = fn
        self.name = name or getattr(fn, "__name__", None) or repr(fn)

    def __call__(self, value: object) -> bool:
        return bool(self.fn(value))

    def __repr__(self) -> str:
        return self.name


def predicate(fn: Optional[Callable[[object], bool]] = None, *, name: Optional[str] = None):
    """Wrap a function as a :class:`Predicate`; usable as a decorator.

    Example:
        >>> @predicate
        ... def Even(v):
        ...     return v % 2 == 0
    """
    if fn is None:
        return lambda f: Predicate(f, name)
    return Predicate(fn, name)


def predicate_name(pred: object) -> str:
    """Best-effort display name for any predicate-like callable."""
    name = getattr(pred, "name", None)
    if isinstance(name, str):
        return name
    return getattr(pred, "__name__", None) or repr(pred)


def _names(preds) -> str:
    return ", ".join(predicate_name(p) for p in preds)


def All(*preds) -> Predicate:
    """Conjunction: every predicate holds."""
    return Predicate(lambda v: all(p(v) for p in preds), f"All({_names(preds)})")


def Any(*preds) -> Predicate:
    """Disjunction: at least one predicate holds."""
    return Predicate(lambda v: any(p(v) for p in preds), f"Any({_names(preds)})")


def NoneOf(*preds) -> Predicate:
    """No predicate holds."""
    return Predicate(lambda v: not any(p(v) for p in preds), f"NoneOf({_names(preds)})")


def Not(pred) -> Predicate:
    """Negation."""
    return Predicate(lambda v: not pred(v), f"Not({predicate_name(pred)})")


def If(condition, consequence) -> Predicate:
    """Material implication: ``condition(v)`` implies ``consequence(v)``."""
    return Predicate(lambda v: (not condition(v)) or bool(consequence(v)),
                     f"If({_names((condition, consequence))})")


def Iff(p1, p2) -> Predicate:
    """Biconditional: both predicates have the same truth value."""
    return Predicate(lambda v: bool(p1(v)) == bool(p2(v)), f"Iff({_names((p1, p2))})")


def Xor(p1, p2) -> Predicate:
    """Exclusive or: exactly one of the two predicates holds."""
    return Predicate(lambda v: bool(p1(v)) != bool(p2(v)), f"Xor({_names((p1, p2))})")


def _count(preds, value) -> int:
    return sum(1 for p in preds if p(value))


def ExactlyN(n: int, *preds) -> Predicate:
    """Exactly ``n`` of the predicates hold."""
    return Predicate(lambda v: _count(preds, v) == n, f"ExactlyN({n}, {_names(preds)})")


def AtLeastN(n: int, *preds) -> Predicate:
    """At least ``n`` of the predicates hold."""
    return Predicate(lambda v: _count(preds, v) >= n, f"AtLeastN({n}, {_names(preds)})")


def AtMostN(n: int, *preds) -> Predicate:
    """At most ``n`` of the predicates hold."""
    return Predicate(lambda v: _count(preds, v) <= n, f"AtMostN({n}, {_names(preds)})")


def Apply(projection: Callable[[object], object], pred) -> Predicate:
    """Predicate over a derived value: ``pred(projection(v))``."""
    proj_name = getattr(projection, "__name__", repr(projection))
    return Predicate(lambda v: pred(projection(v)),
                     f"Apply({proj_name}, {predicate_name(pred)})")


def OnField(field: str, pred) -> Predicate:
    """Predicate over a named attribute (dotted paths allowed)."""
    getter = attrgetter(field)
    return Predicate(lambda v: pred(getter(v)), f"OnField({field}, {predicate_name(pred)})")
