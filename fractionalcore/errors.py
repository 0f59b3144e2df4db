"""
Error taxonomy for Fractional Core.

Every failure in the core is local, typed and recoverable. Nothing is
retried and nothing is silently coerced: a caller always learns WHICH
rule was broken through the ``code`` attribute.

Families:
    ExpressionError: the evaluator rejected a piece of notation
    GenerationError: the diversity generator could not satisfy a request
    CodecError: encoding or decoding a grid failed
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorCode(Enum):
    """
    Stable identifiers for every failure the core can report.

    E1-E3: expression evaluation
    G1-G2: expression generation
    C1-C3: grid encoding and decoding
    """
    E1_PARSE = "parse_error"
    E2_INVALID_EXPRESSION = "invalid_expression"
    E3_DIVISION_BY_ZERO = "division_by_zero"
    G1_INSUFFICIENT_DIVERSITY = "insufficient_diversity"
    G2_SEARCH_EXHAUSTED = "search_exhausted"
    C1_ENCODE = "encode_error"
    C2_DECODE = "decode_error"
    C3_AMBIGUOUS_CELL = "ambiguous_cell"


class FractionalCoreError(Exception):
    """Base class for all typed failures raised by the core."""

    code: ErrorCode = ErrorCode.E2_INVALID_EXPRESSION

    def __init__(self, reason: str, code: Optional[ErrorCode] = None):
        if code is not None:
            self.code = code
        self.reason = reason
        super().__init__(f"[{self.code.value}] {reason}")


# =============================================================================
# EXPRESSION ERRORS
# =============================================================================

class ExpressionError(FractionalCoreError):
    """Raised when a textual expression cannot be evaluated."""

    def __init__(self, reason: str, text: Optional[str] = None, position: Optional[int] = None):
        self.text = text
        self.position = position
        super().__init__(reason)


class ParseError(ExpressionError):
    """Malformed syntax: unbalanced brackets, dangling operators, empty input."""
    code = ErrorCode.E1_PARSE


class InvalidExpressionError(ExpressionError):
    """Unknown token or operator, or an operation outside its domain."""
    code = ErrorCode.E2_INVALID_EXPRESSION


class NumericOverflowError(InvalidExpressionError):
    """The expression evaluated to a non-finite number."""


class DivisionByZeroError(ExpressionError, ZeroDivisionError):
    """Division (or reciprocal) by zero."""
    code = ErrorCode.E3_DIVISION_BY_ZERO


# =============================================================================
# GENERATION ERRORS
# =============================================================================

class GenerationError(FractionalCoreError):
    """Raised when the diversity generator cannot satisfy a request."""

    def __init__(self, reason: str, target: float, produced: int, requested: int):
        self.target = target
        self.produced = produced
        self.requested = requested
        super().__init__(reason)


class InsufficientDiversityError(GenerationError):
    """Every template was tried and fewer than ``requested`` expressions verified."""
    code = ErrorCode.G1_INSUFFICIENT_DIVERSITY


class SearchExhaustedError(GenerationError):
    """The bounded synthesis budget ran out before the request was satisfied."""
    code = ErrorCode.G2_SEARCH_EXHAUSTED


# =============================================================================
# CODEC ERRORS
# =============================================================================

class CodecError(FractionalCoreError):
    """Raised when a grid cannot be produced or read back."""


class EncodeError(CodecError):
    """Input text (or layout) cannot be represented as an 8-bit grid."""
    code = ErrorCode.C1_ENCODE


class DecodeError(CodecError):
    """The grid is structurally invalid, e.g. misaligned bit length."""
    code = ErrorCode.C2_DECODE


class AmbiguousCellError(DecodeError):
    """
    A non-zero cell failed verification against 1.

    This signals tampering or corruption. The decoder never guesses
    the bit, so the position of the offending cell is reported.
    """
    code = ErrorCode.C3_AMBIGUOUS_CELL

    def __init__(self, reason: str, row: int, column: int, cell: str):
        self.row = row
        self.column = column
        self.cell = cell
        super().__init__(reason)
