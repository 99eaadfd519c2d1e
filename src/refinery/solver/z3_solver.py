"""
Z3 solver backend.
"""
import time
from typing import Any, Optional, Dict
import z3

from .result import VerificationResult, SolverResult


class Z3Solver:
    """Z3 solver backend wrapper.

    Each instance owns one ``z3.Solver``; instances are not shared between
    threads.
    """

    def __init__(self, timeout_ms: Optional[int] = None):
        """Initialize Z3 solver instance.

        Args:
            timeout_ms: Optional per-check timeout handed to Z3
        """
        self.solver = z3.Solver()
        if timeout_ms is not None:
            self.solver.set("timeout", timeout_ms)
        self._last_model: Optional[Dict[str, Any]] = None

    def add_constraint(self, constraint: Any) -> None:
        """Add a Z3 constraint to the solver.

        Args:
            constraint: Z3 boolean expression
        """
        self.solver.add(constraint)

    def check_sat(self, obligation: str = "") -> VerificationResult:
        """Check satisfiability of constraints.

        Args:
            obligation: Label recorded on the returned result

        Returns:
            VerificationResult with status and optional counterexample
        """
        start_time = time.time()
        result = self.solver.check()
        elapsed_ms = (time.time() - start_time) * 1000

        if result == z3.sat:
            self._last_model = self._extract_model(self.solver.model())
            return VerificationResult(
                holds=False,
                counterexample=self._last_model,
                solver_time_ms=elapsed_ms,
                solver_name="z3",
                result=SolverResult.SAT,
                obligation=obligation,
            )
        self._last_model = None
        if result == z3.unsat:
            return VerificationResult(
                holds=True,
                solver_time_ms=elapsed_ms,
                solver_name="z3",
                result=SolverResult.UNSAT,
                obligation=obligation,
            )
        return VerificationResult(
            holds=False,
            solver_time_ms=elapsed_ms,
            solver_name="z3",
            result=SolverResult.UNKNOWN,
            obligation=obligation,
        )

    def get_model(self) -> Optional[Dict[str, Any]]:
        """Model of the last satisfiable check.

        Returns:
            Dictionary mapping variable names to their values, or None
        """
        return self._last_model

    @staticmethod
    def _extract_model(model: Any) -> Dict[str, Any]:
        result = {}
        for decl in model:
            name = decl.name()
            value = model[decl]

            # Convert Z3 values to Python types
            if z3.is_int_value(value) or z3.is_bv_value(value):
                result[name] = value.as_long()
            elif z3.is_rational_value(value):
                result[name] = value.numerator_as_long() / value.denominator_as_long()
            elif z3.is_true(value):
                result[name] = True
            elif z3.is_false(value):
                result[name] = False
            else:
                result[name] = str(value)
        return result

    def push(self) -> None:
        """Push a new assertion scope."""
        self.solver.push()

    def pop(self) -> None:
        """Pop the most recent assertion scope."""
        self.solver.pop()

    def reset(self) -> None:
        """Reset solver state."""
        self.solver.reset()
        self._last_model = None
