"""
Verification for Fractional Core.

This module implements the tolerance-based equality check between an
evaluated expression and an expected value. It is a binary
accept/reject model: an expression either verifies or it does not.

Acceptance requirement:
    |evaluate(text) - expected| < tolerance

The default tolerance of 1e-4 absorbs floating round-off on the
trigonometric and logarithmic paths while still rejecting genuinely
wrong values. It is a default, never a hidden constant: every function
here takes ``tolerance`` as an argument.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional

from .errors import ExpressionError
from .evaluation import evaluate

log = logging.getLogger(__name__)


# =============================================================================
# CONFIGURATION CONSTANTS
# =============================================================================

DEFAULT_TOLERANCE = 1e-4


def _validate_tolerance(tolerance: float) -> None:
    if not (tolerance > 0 and math.isfinite(tolerance)):
        raise ValueError(f"tolerance must be a positive finite number, got {tolerance}")


# =============================================================================
# VERIFICATION
# =============================================================================

@dataclass(frozen=True)
class VerificationResult:
    """
    Outcome of checking one expression against an expected value.

    Exposes:
    - value: the evaluated result, or None if evaluation failed
    - delta: |value - expected|, or None if evaluation failed
    - error: the evaluation error message, if any
    """
    text: str
    expected: float
    tolerance: float
    value: Optional[float] = None
    delta: Optional[float] = None
    error: Optional[str] = None

    @property
    def passed(self) -> bool:
        return self.delta is not None and self.delta < self.tolerance

    def __bool__(self) -> bool:
        return self.passed


def check(
    text: str,
    expected: float,
    tolerance: float = DEFAULT_TOLERANCE,
) -> VerificationResult:
    """
    Evaluate ``text`` and compare it with ``expected``.

    Evaluation failures are captured in the result rather than raised,
    so callers can report why an expression did not verify.
    """
    _validate_tolerance(tolerance)
    try:
        value = evaluate(text)
    except ExpressionError as e:
        log.debug("expression %r failed to evaluate: %s", text, e)
        return VerificationResult(
            text=text,
            expected=expected,
            tolerance=tolerance,
            error=str(e),
        )

    return VerificationResult(
        text=text,
        expected=expected,
        tolerance=tolerance,
        value=value,
        delta=abs(value - expected),
    )


def verify(
    text: str,
    expected: float,
    tolerance: float = DEFAULT_TOLERANCE,
) -> bool:
    """
    Check that ``text`` evaluates to ``expected`` within ``tolerance``.

    Returns False for expressions that fail to evaluate.
    """
    return check(text, expected, tolerance).passed


def is_valid_expression(text: str) -> bool:
    """True if ``text`` parses and evaluates to a finite number."""
    try:
        evaluate(text)
    except ExpressionError:
        return False
    return True


def are_equivalent(
    first: str,
    second: str,
    tolerance: float = DEFAULT_TOLERANCE,
) -> bool:
    """
    True if both expressions evaluate and agree within ``tolerance``.

    This is the diversity relation: syntactically distinct notation,
    the same value.
    """
    _validate_tolerance(tolerance)
    try:
        return abs(evaluate(first) - evaluate(second)) < tolerance
    except ExpressionError:
        return False
