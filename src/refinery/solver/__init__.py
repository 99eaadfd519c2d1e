"""Solver layer used to discharge interval proof obligations."""

from .base import SolverBackend
from .result import VerificationResult, SolverResult
from .z3_solver import Z3Solver

__all__ = [
    "SolverBackend",
    "VerificationResult",
    "SolverResult",
    "Z3Solver",
]
