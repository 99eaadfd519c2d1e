"""
Size-constrained container wrapper.

``RefinedContainer[list, SizeInterval(3, 10)]`` wraps a list whose length is
known to lie in ``[3, 10]``. Capabilities are decided once, when the class is
built:

* ``first()`` / ``last()`` exist only if the solver proves ``lo >= 1``;
* ``append`` / ``extend`` / ``append_container`` exist only if the container
  type has ``append``;
* ``remove_last`` needs both of the above plus ``pop``.

Every size-changing operation consumes the handle it is called on and
returns a new handle whose size interval is shifted by the exact delta. A
consumed handle raises ConsumedHandleError on any further use.
"""
from collections.abc import Sized
from typing import Any, Dict, Iterator, Optional, Tuple

from . import interval as interval_math
from .checker import prove_min_size, require_index_admissible
from .errors import ConsumedHandleError, ProofObligationError, RefinementViolation, VerificationError
from .interval import SizeInterval, is_interval
from .predicate import predicate_name
from .refined import Refined, _is_literal
from .snapshot import FrozenContainer, SnapshotGuard, mint_brand

_CONSUMED = object()

_type_cache: Dict[Tuple[type, Any], type] = {}


class RefinedContainer:
    """A container whose length always satisfies ``size_predicate``.

    Attributes:
        container_type: Wrapped container class (class attribute)
        size_predicate: Predicate over ``len(container)`` (class attribute)
    """

    __slots__ = ("_container",)

    container_type: type = object
    size_predicate: Any = None

    def __class_getitem__(cls, params) -> type:
        if cls.size_predicate is not None:
            raise TypeError(f"{cls.__name__} is already parameterized")
        if not isinstance(params, tuple) or len(params) != 2:
            raise TypeError("RefinedContainer[...] takes two parameters: RefinedContainer[C, SizePredicate]")
        container_type, size_pred = params
        if not isinstance(container_type, type) or not hasattr(container_type, "__len__"):
            raise TypeError(f"{container_type!r} is not a sized container type")
        if not callable(size_pred):
            raise TypeError(f"Size predicate must be callable, got {size_pred!r}")

        key = (container_type, size_pred)
        refined_cls = _type_cache.get(key)
        if refined_cls is None:
            bases = _capabilities(container_type, size_pred) + (cls,)
            name = f"{cls.__name__}[{container_type.__name__}, {predicate_name(size_pred)}]"
            refined_cls = type(name, bases, {
                "__slots__": (),
                "__module__": cls.__module__,
                "container_type": container_type,
                "size_predicate": size_pred,
            })
            refined_cls = _type_cache.setdefault(key, refined_cls)
        return refined_cls

    # Construction

    def __new__(cls, container: Any):
        return cls.checked(container)

    @classmethod
    def _make(cls, container: Any) -> "RefinedContainer":
        if cls.size_predicate is None:
            raise TypeError("RefinedContainer must be parameterized: RefinedContainer[C, SizePredicate]")
        if not isinstance(container, cls.container_type):
            raise TypeError(f"Expected {cls.container_type.__name__}, got {type(container).__name__}")
        obj = object.__new__(cls)
        object.__setattr__(obj, "_container", container)
        return obj

    @classmethod
    def checked(cls, container: Any) -> "RefinedContainer":
        """Wrap ``container`` after checking its length against the size predicate.

        Ownership passes to the wrapper; callers must not mutate ``container``
        through other references afterwards.

        Raises:
            RefinementViolation: If the size predicate is false for ``len(container)``
        """
        if cls.size_predicate is None:
            raise TypeError("RefinedContainer must be parameterized: RefinedContainer[C, SizePredicate]")
        size = len(container)
        if not cls.size_predicate(size):
            raise RefinementViolation(
                size, predicate_name(cls.size_predicate),
                f"Size refinement violation: size {size} does not satisfy "
                f"{predicate_name(cls.size_predicate)}")
        return cls._make(container)

    @classmethod
    def verified(cls, container: Any) -> "RefinedContainer":
        """Wrap a literal container (tuple, str, bytes, frozenset).

        Raises:
            VerificationError: Non-literal container or failing size predicate
        """
        name = predicate_name(cls.size_predicate)
        if not _is_literal(container) or not isinstance(container, (tuple, frozenset, str, bytes)):
            raise VerificationError(
                container, name,
                "Verified construction needs a literal container; use checked()")
        if not cls.size_predicate(len(container)):
            raise VerificationError(len(container), name)
        return cls._make(container)

    @classmethod
    def trusted(cls, container: Any) -> "RefinedContainer":
        """Wrap without checking; the caller guarantees the size predicate."""
        return cls._make(container)

    @classmethod
    def try_refine(cls, container: Any) -> Optional["RefinedContainer"]:
        if cls.size_predicate(len(container)):
            return cls._make(container)
        return None

    # Ownership

    def _live(self) -> Any:
        container = self._container
        if container is _CONSUMED:
            raise ConsumedHandleError(f"{type(self).__name__} handle was already consumed")
        return container

    def _consume(self) -> Any:
        container = self._live()
        object.__setattr__(self, "_container", _CONSUMED)
        return container

    def _rewrap(self, container: Any, size_pred: Any) -> "RefinedContainer":
        return RefinedContainer[type(self).container_type, size_pred].trusted(container)

    @property
    def consumed(self) -> bool:
        return self._container is _CONSUMED

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    # Always available

    def get(self) -> Any:
        """Borrow the underlying container (read only by contract)."""
        return self._live()

    def release(self) -> Any:
        """Consume the handle and return the bare container."""
        return self._consume()

    def __len__(self) -> int:
        return len(self._live())

    @property
    def is_empty(self) -> bool:
        return len(self._live()) == 0

    def __iter__(self) -> Iterator:
        return iter(self._live())

    def __contains__(self, item) -> bool:
        return item in self._live()

    def __eq__(self, other) -> bool:
        if isinstance(other, RefinedContainer):
            other = other._live()
        return self._live() == other

    __hash__ = None

    def __repr__(self) -> str:
        if self.consumed:
            return f"{type(self).__name__}(<consumed>)"
        return f"{type(self).__name__}({self._container!r})"

    def __getitem__(self, index):
        """Slice access, or static indexing with a refined interval index.

        A refined index is accepted only if the solver proves every value of
        its interval is below every admitted size. Plain integers are
        rejected; use :meth:`freeze` for runtime-checked access.

        Raises:
            ProofObligationError: Index interval not provably in range
            TypeError: Unsupported index type
        """
        if isinstance(index, slice):
            return self._live()[index]
        if isinstance(index, Refined) and is_interval(type(index).predicate):
            index_interval = type(index).predicate
            if not index_interval.domain.is_integer:
                raise TypeError(f"Index interval must be integral, got {index_interval!r}")
            size_pred = type(self).size_predicate
            if not is_interval(size_pred):
                raise ProofObligationError(
                    f"index {index_interval!r} is in range for {predicate_name(size_pred)}")
            require_index_admissible(index_interval, size_pred)
            return self._live()[index.get()]
        raise TypeError(
            "RefinedContainer indices must be slices or interval-refined integers; "
            "use freeze() for checked runtime indexing")

    def freeze(self) -> Tuple[SnapshotGuard, FrozenContainer]:
        """Consume the handle and capture its length under a fresh brand.

        Returns:
            Tuple of (guard, frozen container) sharing one brand
        """
        container = self._consume()
        brand = mint_brand()
        return (SnapshotGuard(brand, len(container)),
                FrozenContainer(brand, container, type(self).size_predicate))


class _NonEmptyAccess:
    """Element access gated on a proven size lower bound of at least one."""

    __slots__ = ()

    def first(self) -> Any:
        return self._live()[0]

    def last(self) -> Any:
        return self._live()[-1]


def _append_all(container: Any, items: Any) -> None:
    # A failing element leaves the container as it was
    added = 0
    try:
        for item in items:
            container.append(item)
            added += 1
    except Exception:
        if hasattr(container, "pop"):
            for _ in range(added):
                container.pop()
        raise


class _Growable:
    """Mutations that add elements and shift the size interval upwards.

    The handle is consumed only once the underlying mutation has succeeded.
    """

    __slots__ = ()

    def append(self, value: Any) -> RefinedContainer:
        """Append one element: ``[lo, hi] -> [lo + 1, hi + 1]``."""
        self._live().append(value)
        return self._rewrap(self._consume(), type(self).size_predicate.shift(1))

    def extend(self, batch: Any) -> RefinedContainer:
        """Append a batch of known length N: ``[lo, hi] -> [lo + N, hi + N]``."""
        if isinstance(batch, RefinedContainer):
            raise TypeError("Use append_container() to append a RefinedContainer")
        if not isinstance(batch, Sized):
            raise TypeError(f"Batch length must be known up front, got {type(batch).__name__}")
        # Snapshot first: the batch may be the wrapped container itself
        items = list(batch)
        _append_all(self._live(), items)
        return self._rewrap(self._consume(), type(self).size_predicate.shift(len(items)))

    def append_container(self, other: RefinedContainer) -> RefinedContainer:
        """Append and consume another size-refined container.

        The result interval is the saturating sum of both size intervals.
        """
        if not isinstance(other, RefinedContainer):
            raise TypeError(f"Expected a RefinedContainer, got {type(other).__name__}")
        if other is self:
            raise ValueError("Cannot append a container to itself")
        other_pred = type(other).size_predicate
        if not isinstance(other_pred, SizeInterval):
            raise TypeError(f"Expected a SizeInterval-refined container, got {type(other).__name__}")
        _append_all(self._live(), list(other.get()))
        other.release()
        return self._rewrap(self._consume(), interval_math.add(type(self).size_predicate, other_pred))


class _Shrinkable:
    """Mutation that removes the last element; needs a lower bound >= 1."""

    __slots__ = ()

    def remove_last(self) -> RefinedContainer:
        """Remove the last element: ``[lo, hi] -> [lo - 1, hi - 1]`` (floor 0)."""
        self._live().pop()
        return self._rewrap(self._consume(), type(self).size_predicate.shift(-1))


def _capabilities(container_type: type, size_pred: Any) -> Tuple[type, ...]:
    if not isinstance(size_pred, SizeInterval):
        return ()
    mixins = []
    non_empty = prove_min_size(size_pred, 1).holds
    growable = hasattr(container_type, "append")
    if non_empty:
        mixins.append(_NonEmptyAccess)
        if growable and hasattr(container_type, "pop"):
            mixins.append(_Shrinkable)
    if growable:
        mixins.append(_Growable)
    return tuple(mixins)


SizeConstrainedContainer = RefinedContainer


def SizeRefined(container_type: type, lo: int, hi: Optional[int] = None) -> type:
    """``RefinedContainer[container_type, SizeInterval(lo, hi)]``."""
    return RefinedContainer[container_type, SizeInterval(lo, hi)]


def NonEmptyContainer(container_type: type) -> type:
    """Container type with at least one element."""
    return RefinedContainer[container_type, SizeInterval(1)]
