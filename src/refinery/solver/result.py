"""
Proof result types.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Dict, Any


class SolverResult(Enum):
    """Result from SMT solver check."""
    SAT = "sat"
    UNSAT = "unsat"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class VerificationResult:
    """Outcome of discharging one proof obligation.

    The solver is always asked for a *violation* of the claim, so an UNSAT
    answer means the claim holds.

    Attributes:
        holds: True if no violation exists (unsat)
        counterexample: Bound values exhibiting a violation (sat case)
        solver_time_ms: Time taken by solver in milliseconds
        solver_name: Name of the solver backend used
        result: Raw solver result (SAT/UNSAT/UNKNOWN)
        obligation: Statement that was checked
    """
    holds: bool
    counterexample: Optional[Dict[str, Any]] = None
    solver_time_ms: float = 0.0
    solver_name: str = "unknown"
    result: SolverResult = SolverResult.UNKNOWN
    obligation: str = ""

    def __bool__(self) -> bool:
        return self.holds

    def __str__(self) -> str:
        what = f"{self.obligation}: " if self.obligation else ""
        if self.holds:
            return f"{what}proved ({self.solver_name}, {self.solver_time_ms:.2f}ms)"
        if self.result == SolverResult.UNKNOWN:
            return f"{what}unknown ({self.solver_name}, {self.solver_time_ms:.2f}ms)"
        cex_str = ", ".join(f"{k}={v}" for k, v in sorted((self.counterexample or {}).items()))
        return f"{what}violated: {cex_str} ({self.solver_name}, {self.solver_time_ms:.2f}ms)"
