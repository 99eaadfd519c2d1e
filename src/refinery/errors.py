"""
Error taxonomy for refined values, interval arithmetic and containers.

Expected, frequent failures (try_* constructors, increment at a boundary,
guard checks) return ``None`` instead of raising.
"""
from typing import Any, Optional


class RefineryError(Exception):
    """Base class for all refinery errors."""


class RefinementViolation(RefineryError, ValueError):
    """A checked construction, coercion or transform found the predicate false.

    Attributes:
        value: The rejected value
        predicate_name: Display name of the predicate, if known
    """

    def __init__(self, value: Any, predicate_name: Optional[str] = None,
                 message: Optional[str] = None):
        self.value = value
        self.predicate_name = predicate_name
        if message is None:
            message = "Refinement violation: %r does not satisfy %s" % (
                value, predicate_name or "predicate")
        super().__init__(message)


class VerificationError(RefinementViolation):
    """Verified-mode construction was rejected.

    Raised either because the predicate is false for the literal, or because
    the value is not a literal and verified construction is unavailable.
    """


class ArithmeticOverflow(RefineryError, OverflowError):
    """Checked integer arithmetic left the representable domain.

    Attributes:
        operation: Operator name ('add', 'sub', 'mul', 'neg', ...)
        result: The true mathematical result
        domain: The numeric domain that could not hold it
    """

    def __init__(self, operation: str, result: Any, domain: Any):
        self.operation = operation
        self.result = result
        self.domain = domain
        super().__init__(
            f"Arithmetic overflow in {operation}: {result} does not fit {domain}")


class ProofObligationError(RefineryError, TypeError):
    """A static capability or admissibility proof could not be discharged.

    Attributes:
        obligation: Human readable statement of what had to be proven
        verification: The solver VerificationResult, when a solver was used
    """

    def __init__(self, obligation: str, verification: Any = None):
        self.obligation = obligation
        self.verification = verification
        msg = f"Cannot prove: {obligation}"
        if verification is not None and verification.counterexample:
            cex = ", ".join(f"{k}={v}" for k, v in sorted(verification.counterexample.items()))
            msg += f" (counterexample: {cex})"
        super().__init__(msg)


class ConsumedHandleError(RefineryError, RuntimeError):
    """A container handle was used after a mutation or freeze consumed it."""


class BrandMismatchError(RefineryError, LookupError):
    """A guarded index was presented to a frozen container of another brand."""
