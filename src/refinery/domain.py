"""
Numeric domains that interval bounds are expressed over.

Python integers are unbounded, so each interval names the fixed-width domain
whose representable range governs saturation, overflow checks and the
degrade threshold.
"""
from dataclasses import dataclass
from typing import Union

Number = Union[int, float]


@dataclass(frozen=True)
class IntDomain:
    """Fixed-width two's complement (or unsigned) integer domain."""
    name: str
    bits: int
    signed: bool

    @property
    def python_type(self) -> type:
        return int

    @property
    def is_integer(self) -> bool:
        return True

    @property
    def min(self) -> int:
        return -(1 << (self.bits - 1)) if self.signed else 0

    @property
    def max(self) -> int:
        return (1 << (self.bits - 1)) - 1 if self.signed else (1 << self.bits) - 1

    @property
    def range(self) -> int:
        """Distance between the domain extremes."""
        return self.max - self.min

    def contains(self, value: Number) -> bool:
        return self.min <= value <= self.max

    def saturate(self, value: int) -> int:
        """Clamp ``value`` to the domain extremes."""
        if value < self.min:
            return self.min
        if value > self.max:
            return self.max
        return value

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class FloatDomain:
    """IEEE 754 double precision domain; infinities are members."""
    name: str = "f64"

    @property
    def python_type(self) -> type:
        return float

    @property
    def is_integer(self) -> bool:
        return False

    @property
    def min(self) -> float:
        return float("-inf")

    @property
    def max(self) -> float:
        return float("inf")

    def contains(self, value: Number) -> bool:
        return value == value

    def saturate(self, value: float) -> float:
        return value

    def __str__(self) -> str:
        return self.name


Domain = Union[IntDomain, FloatDomain]

I8 = IntDomain("i8", 8, True)
I16 = IntDomain("i16", 16, True)
I32 = IntDomain("i32", 32, True)
I64 = IntDomain("i64", 64, True)
U8 = IntDomain("u8", 8, False)
U16 = IntDomain("u16", 16, False)
U32 = IntDomain("u32", 32, False)
U64 = IntDomain("u64", 64, False)
USIZE = IntDomain("usize", 64, False)
F64 = FloatDomain()

DEFAULT_DOMAIN = I64
