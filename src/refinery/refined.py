"""
Core ``Refined[T, P]`` wrapper.

``Refined[int, Positive]`` builds (once, then caches) a subclass whose
``value_type`` is ``int`` and whose ``predicate`` is ``Positive``. The
predicate lives on the class; every instance stores exactly one slot, the
value itself, and is immutable once built.

Construction modes:

* ``R.verified(literal)`` evaluates the predicate on a literal constant and
  raises VerificationError on failure. Meant for module-level constants so a
  violation surfaces when the module is imported.
* ``R(value)`` / ``R.checked(value)`` evaluates the predicate and raises
  RefinementViolation on failure.
* ``R.trusted(value)`` performs no check; the caller guarantees the
  invariant and every downstream operation assumes it.
"""
import copy
from typing import Any, Dict, Optional, Tuple

from .errors import RefinementViolation, VerificationError
from .interval import is_interval
from .predicate import predicate_name

_LITERAL_TYPES = (bool, int, float, complex, str, bytes, type(None))

_type_cache: Dict[Tuple[type, Any], type] = {}


def _is_literal(value: Any) -> bool:
    if isinstance(value, (tuple, frozenset)):
        return all(_is_literal(v) for v in value)
    return type(value) in _LITERAL_TYPES


class Refined:
    """A value of ``value_type`` guaranteed to satisfy ``predicate``.

    Attributes:
        value_type: Underlying Python type (class attribute)
        predicate: The invariant (class attribute)
    """

    __slots__ = ("_value",)

    value_type: type = object
    predicate: Any = None

    def __class_getitem__(cls, params) -> type:
        if cls.predicate is not None:
            raise TypeError(f"{cls.__name__} is already parameterized")
        if not isinstance(params, tuple) or len(params) != 2:
            raise TypeError("Refined[...] takes exactly two parameters: Refined[T, Predicate]")
        value_type, pred = params
        if not isinstance(value_type, type):
            raise TypeError(f"Refined value type must be a class, got {value_type!r}")
        if not callable(pred):
            raise TypeError(f"Refined predicate must be callable, got {pred!r}")
        if is_interval(pred) and not issubclass(value_type, pred.domain.python_type):
            raise TypeError(
                f"{pred!r} constrains {pred.domain.python_type.__name__} values, "
                f"not {value_type.__name__}")

        key = (value_type, pred)
        refined_cls = _type_cache.get(key)
        if refined_cls is None:
            name = f"{cls.__name__}[{value_type.__name__}, {predicate_name(pred)}]"
            refined_cls = type(name, (cls,), {
                "__slots__": (),
                "__module__": cls.__module__,
                "value_type": value_type,
                "predicate": pred,
            })
            refined_cls = _type_cache.setdefault(key, refined_cls)
        return refined_cls

    # Construction

    @classmethod
    def _admits(cls, value: Any) -> bool:
        if not isinstance(value, cls.value_type):
            return False
        # bool is an int subclass but never a member of an integer range
        pred = cls.predicate
        return not (isinstance(value, bool) and is_interval(pred) and pred.domain.is_integer)

    def __new__(cls, value: Any):
        return cls.checked(value)

    @classmethod
    def _make(cls, value: Any) -> "Refined":
        if cls.predicate is None:
            raise TypeError("Refined must be parameterized: Refined[T, Predicate]")
        obj = object.__new__(cls)
        object.__setattr__(obj, "_value", value)
        return obj

    @classmethod
    def checked(cls, value: Any) -> "Refined":
        """Construct after evaluating the predicate.

        Raises:
            RefinementViolation: If ``value`` is not a ``value_type`` instance
                or the predicate is false for it
        """
        if cls.predicate is None:
            raise TypeError("Refined must be parameterized: Refined[T, Predicate]")
        if not cls._admits(value):
            raise RefinementViolation(
                value, predicate_name(cls.predicate),
                f"Refinement violation: expected {cls.value_type.__name__}, got {type(value).__name__} {value!r}")
        if not cls.predicate(value):
            raise RefinementViolation(value, predicate_name(cls.predicate))
        return cls._make(value)

    @classmethod
    def verified(cls, value: Any) -> "Refined":
        """Construct from a literal constant, rejecting it if the predicate fails.

        Raises:
            VerificationError: If ``value`` is not a literal or fails the predicate
        """
        name = predicate_name(cls.predicate)
        if not _is_literal(value):
            raise VerificationError(
                value, name,
                f"Verified construction needs a literal value, got {type(value).__name__}; "
                "use checked() for runtime values")
        if not cls._admits(value):
            raise VerificationError(
                value, name, f"Expected a {cls.value_type.__name__} literal, got {type(value).__name__}")
        if not cls.predicate(value):
            raise VerificationError(value, name)
        return cls._make(value)

    @classmethod
    def trusted(cls, value: Any) -> "Refined":
        """Construct without evaluating the predicate.

        The caller guarantees the invariant; nothing downstream re-checks it.
        """
        return cls._make(value)

    @classmethod
    def try_refine(cls, value: Any) -> Optional["Refined"]:
        """Construct if the predicate holds, else return None."""
        if cls._admits(value) and cls.predicate(value):
            return cls._make(value)
        return None

    @classmethod
    def is_valid(cls, candidate: Any) -> bool:
        """Whether ``candidate`` satisfies the predicate, without constructing."""
        return cls._admits(candidate) and bool(cls.predicate(candidate))

    # Access

    def get(self) -> Any:
        """Borrow the underlying value."""
        return self._value

    def release(self) -> Any:
        """Return the bare underlying value."""
        return self._value

    into_inner = release

    @property
    def value(self) -> Any:
        return self._value

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return type(self)._make(copy.deepcopy(self._value, memo))

    def __reduce__(self):
        raise TypeError(f"{type(self).__name__} does not support serialization")

    # Comparison delegates to the underlying value

    def __eq__(self, other) -> bool:
        if isinstance(other, Refined):
            other = other._value
        return self._value == other

    def __ne__(self, other) -> bool:
        if isinstance(other, Refined):
            other = other._value
        return self._value != other

    def __lt__(self, other) -> bool:
        if isinstance(other, Refined):
            other = other._value
        return self._value < other

    def __le__(self, other) -> bool:
        if isinstance(other, Refined):
            other = other._value
        return self._value <= other

    def __gt__(self, other) -> bool:
        if isinstance(other, Refined):
            other = other._value
        return self._value > other

    def __ge__(self, other) -> bool:
        if isinstance(other, Refined):
            other = other._value
        return self._value >= other

    def __hash__(self) -> int:
        return hash(self._value)

    # Conversion to the bare type

    def __bool__(self) -> bool:
        return bool(self._value)

    def __int__(self) -> int:
        return int(self._value)

    def __float__(self) -> float:
        return float(self._value)

    def __index__(self) -> int:
        import operator
        return operator.index(self._value)

    def __str__(self) -> str:
        return str(self._value)

    def __format__(self, format_spec: str) -> str:
        return format(self._value, format_spec)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._value!r})"

    # Arithmetic, see refinery.operations

    def __add__(self, other):
        from . import operations
        return operations.add(self, other)

    def __radd__(self, other):
        return other + self._value

    def __sub__(self, other):
        from . import operations
        return operations.sub(self, other)

    def __rsub__(self, other):
        return other - self._value

    def __mul__(self, other):
        from . import operations
        return operations.mul(self, other)

    def __rmul__(self, other):
        return other * self._value

    def __truediv__(self, other):
        if isinstance(other, Refined):
            other = other._value
        return self._value / other

    def __rtruediv__(self, other):
        return other / self._value

    def __floordiv__(self, other):
        if isinstance(other, Refined):
            other = other._value
        return self._value // other

    def __rfloordiv__(self, other):
        return other // self._value

    def __mod__(self, other):
        if isinstance(other, Refined):
            other = other._value
        return self._value % other

    def __rmod__(self, other):
        return other % self._value

    def __neg__(self):
        from . import operations
        return operations.neg(self)

    def __pos__(self):
        return self

    def __abs__(self):
        from . import operations
        return operations.refined_abs(self)


def refine(pred: Any, value: Any) -> Refined:
    """Checked construction with the value type taken from ``value``.

    Raises:
        RefinementViolation: If the predicate is false for ``value``
    """
    return Refined[type(value), pred].checked(value)


def try_refine(pred: Any, value: Any) -> Optional[Refined]:
    """Like :func:`refine` but returns None instead of raising."""
    return Refined[type(value), pred].try_refine(value)


def assume_refined(pred: Any, value: Any) -> Refined:
    """Trusted construction with the value type taken from ``value``."""
    return Refined[type(value), pred].trusted(value)


def is_refined(obj: Any) -> bool:
    """True for instances (or parameterized classes) of Refined."""
    if isinstance(obj, type):
        return issubclass(obj, Refined) and obj.predicate is not None
    return isinstance(obj, Refined)


def same_predicate(a: Any, b: Any) -> bool:
    """True if two refined values or types share value type and predicate."""
    ta = a if isinstance(a, type) else type(a)
    tb = b if isinstance(b, type) else type(b)
    return ta.value_type is tb.value_type and (
        ta.predicate is tb.predicate or
        (is_interval(ta.predicate) and ta.predicate == tb.predicate))
