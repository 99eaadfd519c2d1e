"""
Snapshot guards: branded, runtime-checked indexing of frozen containers.

``freeze()`` captures a container's length and mints a fresh :class:`Brand`.
The guard turns raw integers into :class:`GuardedIndex` values tagged with
that brand; the frozen container only accepts indices carrying its own
brand, so an index validated against one snapshot can never be used on
another.
"""
import itertools
import operator
from typing import Any, Iterator, Optional

from .errors import BrandMismatchError

_serials = itertools.count(1)

# Only this module can mint guarded indices
_MINT = object()


class Brand:
    """Unforgeable per-freeze identity; equality is object identity."""

    __slots__ = ("serial",)

    def __init__(self, serial: int):
        self.serial = serial

    def __repr__(self) -> str:
        return f"Brand#{self.serial}"


def mint_brand() -> Brand:
    """Create a new brand with a process-wide unique serial number."""
    return Brand(next(_serials))


class GuardedIndex:
    """An index proven ``< `` its snapshot's length, tagged with the snapshot brand."""

    __slots__ = ("_brand", "_index")

    def __init__(self, brand: Brand, index: int, _token: Any = None):
        if _token is not _MINT:
            raise TypeError("GuardedIndex values are created by SnapshotGuard.check()")
        object.__setattr__(self, "_brand", brand)
        object.__setattr__(self, "_index", index)

    def __setattr__(self, name, value):
        raise AttributeError("GuardedIndex is immutable")

    @property
    def brand(self) -> Brand:
        return self._brand

    def get(self) -> int:
        return self._index

    def __eq__(self, other) -> bool:
        if not isinstance(other, GuardedIndex):
            return NotImplemented
        return self._brand is other._brand and self._index == other._index

    def __hash__(self) -> int:
        return hash((id(self._brand), self._index))

    def __repr__(self) -> str:
        return f"GuardedIndex({self._index}, {self._brand!r})"


class SnapshotGuard:
    """Capability that validates raw indices against a captured length.

    The guard holds only the brand and the length, never the storage.
    """

    __slots__ = ("_brand", "_size")

    def __init__(self, brand: Brand, size: int):
        object.__setattr__(self, "_brand", brand)
        object.__setattr__(self, "_size", size)

    def __setattr__(self, name, value):
        raise AttributeError("SnapshotGuard is immutable")

    @property
    def brand(self) -> Brand:
        return self._brand

    def size(self) -> int:
        return self._size

    def check(self, index: int) -> Optional[GuardedIndex]:
        """Return a branded index if ``0 <= index < size``, else None.

        Raises:
            TypeError: ``index`` is not an integer
        """
        index = operator.index(index)
        if 0 <= index < self._size:
            return GuardedIndex(self._brand, index, _MINT)
        return None

    def indices(self) -> Iterator[GuardedIndex]:
        """Every valid branded index, in order."""
        for i in range(self._size):
            yield GuardedIndex(self._brand, i, _MINT)

    def __repr__(self) -> str:
        return f"SnapshotGuard(size={self._size}, {self._brand!r})"


class FrozenContainer:
    """Read-only owner of a frozen container's storage.

    Attributes:
        size_predicate: Size predicate the container had when frozen
    """

    __slots__ = ("_brand", "_container", "size_predicate")

    def __init__(self, brand: Brand, container: Any, size_predicate: Any = None):
        object.__setattr__(self, "_brand", brand)
        object.__setattr__(self, "_container", container)
        object.__setattr__(self, "size_predicate", size_predicate)

    def __setattr__(self, name, value):
        raise AttributeError("FrozenContainer is immutable")

    @property
    def brand(self) -> Brand:
        return self._brand

    def __getitem__(self, index: GuardedIndex) -> Any:
        """Element at a guarded index of this container's brand.

        Raises:
            BrandMismatchError: Index minted by another snapshot's guard
            TypeError: Index is not a GuardedIndex
        """
        if not isinstance(index, GuardedIndex):
            raise TypeError(
                f"FrozenContainer indices must come from its SnapshotGuard, got {type(index).__name__}")
        if index.brand is not self._brand:
            raise BrandMismatchError(
                f"Index from {index.brand!r} used on container of {self._brand!r}")
        return self._container[index.get()]

    def __len__(self) -> int:
        return len(self._container)

    @property
    def is_empty(self) -> bool:
        return len(self._container) == 0

    def __iter__(self) -> Iterator:
        return iter(self._container)

    def __repr__(self) -> str:
        return f"FrozenContainer({self._container!r}, {self._brand!r})"
