"""
Abstract interface for the solvers that discharge proof obligations.
"""
from typing import Protocol, Any, Optional, Dict
from .result import VerificationResult


class SolverBackend(Protocol):
    """Protocol for solver backends used by the bounds analyzer.

    Obligations are phrased as "assert the premises, assert the negated
    claim, check": UNSAT means the claim is proven.
    """

    def add_constraint(self, constraint: Any) -> None:
        """Assert a boolean constraint."""
        ...

    def check_sat(self, obligation: str = "") -> VerificationResult:
        """Check satisfiability of the asserted constraints.

        Args:
            obligation: Label recorded on the returned result

        Returns:
            VerificationResult; holds=True when unsat
        """
        ...

    def get_model(self) -> Optional[Dict[str, Any]]:
        """Variable assignments for the last satisfiable check, or None."""
        ...

    def push(self) -> None:
        """Open a new assertion scope."""
        ...

    def pop(self) -> None:
        """Discard the most recent assertion scope."""
        ...

    def reset(self) -> None:
        """Clear all assertions."""
        ...
