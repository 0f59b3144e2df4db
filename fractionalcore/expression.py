"""
Expression: the canonical value object of Fractional Core.

An Expression is a textual mathematical formula paired with a pure
evaluation function. Once created it never changes.

Expression kinds:
    UNITY       - predefined catalog expression equal to 1
    ZERO        - predefined catalog expression equal to 0
    ADVANCED    - predefined catalog expression equal to 1, using
                  trigonometric, logarithmic or constant notation
    SYNTHESIZED - produced on demand by the diversity generator
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional

from .evaluation import evaluate


class ExpressionKind(Enum):
    """The value class an expression belongs to."""
    UNITY = "unity"
    ZERO = "zero"
    ADVANCED = "advanced"
    SYNTHESIZED = "synthesized"


# Catalog kinds carry a known nominal value
NOMINAL_VALUES = {
    ExpressionKind.UNITY: 1.0,
    ExpressionKind.ZERO: 0.0,
    ExpressionKind.ADVANCED: 1.0,
}

# The literal written for every 0-bit in a grid
ZERO_CELL = "0"

_WHITESPACE = re.compile(r"\s")


class ExpressionDefinitionError(ValueError):
    """Raised when an Expression is constructed with malformed fields."""
    pass


@dataclass(frozen=True)
class Expression:
    """
    A formula and the function that evaluates it.

    Equality and hashing use ``text`` and ``kind`` only, so two
    expressions with the same notation are the same expression no
    matter how their evaluators were built.

    Invariants enforced:
    1. text must be non-empty and contain no whitespace (grid cells
       are whitespace-separated in the text form)
    2. text must not be the literal "0", which is reserved for zero bits
    3. kind must be an ExpressionKind
    """
    text: str
    kind: ExpressionKind
    evaluator: Callable[[], float] = field(compare=False, repr=False)
    note: Optional[str] = field(default=None, compare=False)

    def __post_init__(self):
        if not self.text:
            raise ExpressionDefinitionError("expression text is required")
        if _WHITESPACE.search(self.text):
            raise ExpressionDefinitionError(
                f"expression text must not contain whitespace: {self.text!r}"
            )
        if self.text == ZERO_CELL:
            raise ExpressionDefinitionError(
                'the literal "0" is reserved for zero cells'
            )
        if not isinstance(self.kind, ExpressionKind):
            raise ExpressionDefinitionError(
                f"kind must be ExpressionKind, got {type(self.kind)}"
            )

    def evaluate(self) -> float:
        """Evaluate the expression to a float."""
        return float(self.evaluator())

    @property
    def nominal_value(self) -> Optional[float]:
        """The value the catalog promises for this kind, if any."""
        return NOMINAL_VALUES.get(self.kind)

    def __str__(self) -> str:
        return self.text


def create_catalog_expression(
    text: str,
    kind: ExpressionKind,
    evaluator: Callable[[], float],
    note: Optional[str] = None,
) -> Expression:
    """
    Factory for predefined catalog entries.

    Catalog entries carry their own hand-written evaluator so the
    evaluator grammar can be checked against an independent value.
    """
    if kind == ExpressionKind.SYNTHESIZED:
        raise ExpressionDefinitionError("catalog entries cannot be SYNTHESIZED")
    return Expression(text=text, kind=kind, evaluator=evaluator, note=note)


def create_synthesized(text: str, note: Optional[str] = None) -> Expression:
    """
    Factory for expressions built by the diversity generator.

    The evaluator is the authoritative grammar itself.
    """
    return Expression(
        text=text,
        kind=ExpressionKind.SYNTHESIZED,
        evaluator=lambda: evaluate(text),
        note=note,
    )
