"""
Proof obligations over interval bounds.

Every check asserts the premises (operand interval membership), asserts the
negation of the claim and asks the solver for a witness. SAT means the claim
is violated and the model is a counterexample; UNSAT means it is proven.
"""
import operator
from typing import Any, Callable, Dict, Optional

from ..interval import Interval
from ..log import get_logger
from ..solver.result import VerificationResult
from ..solver.z3_solver import Z3Solver
from ..translator.interval_translator import IntervalTranslator

_log = get_logger(__name__)

BINARY_OPS: Dict[str, Callable[[Any, Any], Any]] = {
    "add": operator.add,
    "sub": operator.sub,
    "mul": operator.mul,
}


class BoundsAnalyzer:
    """Analyzer for interval proof obligations.

    Provides analysis for:
    - Index admissibility: 0 <= i < n for every i in the index interval and
      every n in the size interval
    - Minimum size: every n in the size interval is >= a given minimum
    - Containment: every member of one interval is a member of another
    - Overflow: a op b stays within the operands' domain
    - Soundness: an inferred interval contains every in-domain result
    """

    def __init__(self, solver_backend: Optional[Any] = None):
        """Initialize bounds analyzer.

        Args:
            solver_backend: SMT solver backend (defaults to Z3Solver)
        """
        self.solver = solver_backend or Z3Solver()
        self.translator = IntervalTranslator()

    def _discharge(self, obligation: str) -> VerificationResult:
        result = self.solver.check_sat(obligation)
        _log.debug("%s", result)
        return result

    def check_index_admissible(self, index: Interval, size: Interval) -> VerificationResult:
        """Check that any index in ``index`` is a valid position for any size in ``size``.

        Args:
            index: Interval of the index type
            size: Size interval of the container type

        Returns:
            VerificationResult; holds=True if no out-of-range index exists
        """
        self.solver.reset()

        i, i_bounds = self.translator.translate_interval("index", index)
        n, n_bounds = self.translator.translate_interval("size", size)
        self.solver.add_constraint(i_bounds)
        self.solver.add_constraint(n_bounds)

        import z3
        self.solver.add_constraint(z3.Or(i < 0, i >= n))

        return self._discharge(f"0 <= {index} < {size}")

    def check_min_size(self, size: Interval, minimum: int) -> VerificationResult:
        """Check that every size admitted by ``size`` is at least ``minimum``.

        Args:
            size: Size interval of the container type
            minimum: Required lower bound

        Returns:
            VerificationResult indicating whether the capability is provable
        """
        self.solver.reset()

        n, n_bounds = self.translator.translate_interval("size", size)
        self.solver.add_constraint(n_bounds)
        self.solver.add_constraint(n < minimum)

        return self._discharge(f"{size} >= {minimum}")

    def check_contains(self, outer: Interval, inner: Interval) -> VerificationResult:
        """Check that every member of ``inner`` is a member of ``outer``.

        Args:
            outer: Candidate enclosing interval
            inner: Interval whose members are tested

        Returns:
            VerificationResult; holds=True if inner is a subset of outer
        """
        self.solver.reset()

        if outer.domain.is_integer != inner.domain.is_integer:
            return VerificationResult(holds=False, solver_name="z3",
                                      obligation=f"{inner} within {outer}")

        v, v_bounds = self.translator.translate_interval("value", inner)
        self.solver.add_constraint(v_bounds)

        import z3
        self.solver.add_constraint(z3.Not(self.translator.create_bounds_constraint(v, outer.lo, outer.hi)))

        return self._discharge(f"{inner} within {outer}")

    def check_no_overflow(self, op: str, a: Interval, b: Interval) -> VerificationResult:
        """Check that ``a op b`` can never leave the operands' domain.

        Args:
            op: One of 'add', 'sub', 'mul'
            a: Left operand interval
            b: Right operand interval

        Returns:
            VerificationResult; holds=False with operand witnesses if overflow is possible
        """
        self.solver.reset()

        x, x_bounds = self.translator.translate_interval("a", a)
        y, y_bounds = self.translator.translate_interval("b", b)
        self.solver.add_constraint(x_bounds)
        self.solver.add_constraint(y_bounds)

        import z3
        value = BINARY_OPS[op](x, y)
        self.solver.add_constraint(z3.Not(self.translator.domain_constraint(value, a.domain)))

        return self._discharge(f"{a} {op} {b} fits {a.domain}")

    def check_sound(self, op: str, a: Interval, b: Optional[Interval],
                    result: Interval) -> VerificationResult:
        """Check that ``result`` contains every representable ``a op b``.

        Args:
            op: One of 'add', 'sub', 'mul', 'neg' (``b`` is ignored for 'neg')
            a: Left operand interval
            b: Right operand interval
            result: Inferred interval to verify

        Returns:
            VerificationResult; holds=True if the inference is sound
        """
        self.solver.reset()

        x, x_bounds = self.translator.translate_interval("a", a)
        self.solver.add_constraint(x_bounds)
        if op == "neg":
            value = -x
        else:
            y, y_bounds = self.translator.translate_interval("b", b)
            self.solver.add_constraint(y_bounds)
            value = BINARY_OPS[op](x, y)

        import z3
        # Results that overflow are rejected at runtime, so only in-domain ones count
        self.solver.add_constraint(self.translator.domain_constraint(value, a.domain))
        self.solver.add_constraint(z3.Not(self.translator.create_bounds_constraint(value, result.lo, result.hi)))

        return self._discharge(f"{op}({a}, {b}) within {result}")
