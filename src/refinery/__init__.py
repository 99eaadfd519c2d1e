"""
Refinement types for Python.

Attach a predicate to a value's type so that every constructed value is
guaranteed to satisfy it, propagate interval bounds through arithmetic, and
track container sizes through mutations with solver-checked indexing.
"""

__version__ = "0.1.0"

from .errors import (
    RefineryError,
    RefinementViolation,
    VerificationError,
    ArithmeticOverflow,
    ProofObligationError,
    ConsumedHandleError,
    BrandMismatchError,
)
from .config import Settings, configure, get_settings
from .predicate import (
    Predicate,
    predicate,
    All,
    Any,
    NoneOf,
    Not,
    If,
    Iff,
    Xor,
    ExactlyN,
    AtLeastN,
    AtMostN,
    Apply,
    OnField,
)
from .domain import I8, I16, I32, I64, U8, U16, U32, U64, USIZE, F64
from .interval import Interval, SizeInterval
from .refined import Refined, refine, try_refine, assume_refined, is_refined
from .operations import (
    increment,
    decrement,
    transform,
    coerce_to,
    try_coerce,
    widen,
    refined_min,
    refined_max,
    refined_clamp,
    safe_divide,
)
from .container import (
    RefinedContainer,
    SizeConstrainedContainer,
    SizeRefined,
    NonEmptyContainer,
)
from .snapshot import SnapshotGuard, FrozenContainer, GuardedIndex, Brand

ConstrainedValue = Refined

__all__ = [
    "RefineryError",
    "RefinementViolation",
    "VerificationError",
    "ArithmeticOverflow",
    "ProofObligationError",
    "ConsumedHandleError",
    "BrandMismatchError",
    "Settings",
    "configure",
    "get_settings",
    "Predicate",
    "predicate",
    "All",
    "Any",
    "NoneOf",
    "Not",
    "If",
    "Iff",
    "Xor",
    "ExactlyN",
    "AtLeastN",
    "AtMostN",
    "Apply",
    "OnField",
    "I8", "I16", "I32", "I64", "U8", "U16", "U32", "U64", "USIZE", "F64",
    "Interval",
    "SizeInterval",
    "Refined",
    "ConstrainedValue",
    "refine",
    "try_refine",
    "assume_refined",
    "is_refined",
    "increment",
    "decrement",
    "transform",
    "coerce_to",
    "try_coerce",
    "widen",
    "refined_min",
    "refined_max",
    "refined_clamp",
    "safe_divide",
    "RefinedContainer",
    "SizeConstrainedContainer",
    "SizeRefined",
    "NonEmptyContainer",
    "SnapshotGuard",
    "FrozenContainer",
    "GuardedIndex",
    "Brand",
]
