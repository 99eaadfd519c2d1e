"""
Interval translator from refinery domains to SMT terms.
"""
import math
from typing import Any, Tuple
import z3

from ..domain import Domain
from ..interval import Interval


class IntervalTranslator:
    """Translates intervals and domains to Z3 terms.

    Mapping:
        integer domain -> Int (mathematical integer, domain range as constraint)
        float domain   -> Real (infinite bounds leave that side unconstrained)

    Values are modelled as unbounded mathematical numbers so that the
    analyzer can talk about results that overflow a domain.
    """

    def translate_var(self, name: str, domain: Domain) -> Any:
        """Create a Z3 variable for a value of ``domain``.

        Args:
            name: Variable name
            domain: Numeric domain

        Returns:
            Z3 Int or Real variable
        """
        if domain.is_integer:
            return z3.Int(name)
        return z3.Real(name)

    def create_bounds_constraint(self, var: Any, lo: Any, hi: Any) -> Any:
        """Create ``lo <= var <= hi``; infinite float bounds are dropped.

        Args:
            var: Z3 variable or expression
            lo: Lower bound (inclusive)
            hi: Upper bound (inclusive)

        Returns:
            Z3 constraint expression
        """
        parts = []
        if not (isinstance(lo, float) and math.isinf(lo)):
            parts.append(var >= lo)
        if not (isinstance(hi, float) and math.isinf(hi)):
            parts.append(var <= hi)
        if not parts:
            return z3.BoolVal(True)
        return z3.And(*parts)

    def translate_interval(self, name: str, interval: Interval) -> Tuple[Any, Any]:
        """Translate an interval to a variable and its membership constraint.

        Args:
            name: Variable name
            interval: Interval predicate

        Returns:
            Tuple of (Z3 variable, constraint)
        """
        var = self.translate_var(name, interval.domain)
        return var, self.create_bounds_constraint(var, interval.lo, interval.hi)

    def domain_constraint(self, expr: Any, domain: Domain) -> Any:
        """Constraint that ``expr`` is representable in ``domain``."""
        if domain.is_integer:
            return self.create_bounds_constraint(expr, domain.min, domain.max)
        return z3.BoolVal(True)
