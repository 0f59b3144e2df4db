"""
Expression Catalog: the single registry of predefined expressions.

Every module that needs a literal expression draws it from here. No
other module re-declares expression tables.

The catalog is built once at import time and is read-only afterwards,
so concurrent readers need no synchronisation.

Pools:
    UNITY     - elementary arithmetic equal to 1
    ZERO      - expressions equal to 0
    ADVANCED  - trigonometric, logarithmic and constant identities equal to 1

Each entry pairs its text with a hand-written evaluator. The text is
also valid input for the evaluator grammar and both must agree.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, Optional

from .expression import Expression, ExpressionKind, create_catalog_expression

PHI = (1 + math.sqrt(5)) / 2


# =============================================================================
# POOL DEFINITIONS
# =============================================================================

def _unity(text: str, evaluator, note: Optional[str] = None) -> Expression:
    return create_catalog_expression(text, ExpressionKind.UNITY, evaluator, note)


def _zero(text: str, evaluator, note: Optional[str] = None) -> Expression:
    return create_catalog_expression(text, ExpressionKind.ZERO, evaluator, note)


def _advanced(text: str, evaluator, note: Optional[str] = None) -> Expression:
    return create_catalog_expression(text, ExpressionKind.ADVANCED, evaluator, note)


UNITY_EXPRESSIONS: tuple[Expression, ...] = (
    _unity("√1", lambda: math.sqrt(1)),
    _unity("0!", lambda: math.factorial(0), "empty product"),
    _unity("|−1|", lambda: abs(-1)),
    _unity("7^0", lambda: 7 ** 0, "any non-zero number to the power 0"),
    _unity("(2+2)/4", lambda: (2 + 2) / 4),
    _unity("1/1", lambda: 1 / 1),
    _unity("2-1", lambda: 2 - 1),
    _unity("√4/2", lambda: math.sqrt(4) / 2),
    _unity("(3-1)/2", lambda: (3 - 1) / 2),
    _unity("√9/3", lambda: math.sqrt(9) / 3),
    _unity("0.25*4", lambda: 0.25 * 4),
    _unity("0.1*10", lambda: 0.1 * 10),
    _unity("√16/4", lambda: math.sqrt(16) / 4),
    _unity("√25/5", lambda: math.sqrt(25) / 5),
    _unity("(6-4)/2", lambda: (6 - 4) / 2),
    _unity("√36/6", lambda: math.sqrt(36) / 6),
)

ZERO_EXPRESSIONS: tuple[Expression, ...] = (
    _zero("sin(0)", lambda: math.sin(0)),
    _zero("ln(1)", lambda: math.log(1)),
    _zero("1-1", lambda: 1 - 1),
    _zero("0*1000", lambda: 0 * 1000, "zero times anything"),
    _zero("0/42", lambda: 0 / 42),
    _zero("tan(0)", lambda: math.tan(0)),
    _zero("sin(π)", lambda: math.sin(math.pi)),
    _zero("log(1)", lambda: math.log10(1)),
    _zero("e^0-1", lambda: math.e ** 0 - 1),
    _zero("0^1", lambda: 0 ** 1),
    _zero("√0", lambda: math.sqrt(0)),
    _zero("5-5", lambda: 5 - 5),
    _zero("0!-1", lambda: math.factorial(0) - 1),
    _zero("cos(π/2)", lambda: math.cos(math.pi / 2)),
)

ADVANCED_EXPRESSIONS: tuple[Expression, ...] = (
    _advanced(
        "sin²(π/5)+cos²(π/5)",
        lambda: math.sin(math.pi / 5) ** 2 + math.cos(math.pi / 5) ** 2,
        "Pythagorean identity",
    ),
    _advanced("e^(ln(1))", lambda: math.exp(math.log(1)), "exponential undoes ln"),
    _advanced("ln(e)", lambda: math.log(math.e)),
    _advanced("cos(0)", lambda: math.cos(0)),
    _advanced("tan(π/4)", lambda: math.tan(math.pi / 4)),
    _advanced("sin(π/2)", lambda: math.sin(math.pi / 2)),
    _advanced("cos(2*π)", lambda: math.cos(2 * math.pi), "full turn"),
    _advanced("log(10)", lambda: math.log10(10)),
    _advanced("log₂(8)/3", lambda: math.log2(8) / 3),
    _advanced("∛27/3", lambda: 27 ** (1 / 3) / 3),
    _advanced("φ^2-φ", lambda: PHI ** 2 - PHI, "golden ratio satisfies φ² = φ + 1"),
    _advanced("2!-1!", lambda: math.factorial(2) - math.factorial(1)),
)


# =============================================================================
# CATALOG
# =============================================================================

class CatalogError(ValueError):
    """Raised when the catalog is assembled from inconsistent pools."""
    pass


@dataclass(frozen=True)
class ExpressionCatalog:
    """
    Read-only registry of predefined expressions grouped by value class.

    Texts are unique across all pools, so ``find`` is unambiguous.
    """
    unity: tuple[Expression, ...]
    zero: tuple[Expression, ...]
    advanced: tuple[Expression, ...]

    def __post_init__(self):
        seen: set[str] = set()
        for expression in self:
            if expression.text in seen:
                raise CatalogError(f"duplicate catalog text: {expression.text!r}")
            seen.add(expression.text)

    def __iter__(self) -> Iterator[Expression]:
        yield from self.unity
        yield from self.zero
        yield from self.advanced

    def __len__(self) -> int:
        return len(self.unity) + len(self.zero) + len(self.advanced)

    def __contains__(self, text: object) -> bool:
        return isinstance(text, str) and self.find(text) is not None

    def pool(self, kind: ExpressionKind) -> tuple[Expression, ...]:
        """Return the pool for a value class."""
        pools = {
            ExpressionKind.UNITY: self.unity,
            ExpressionKind.ZERO: self.zero,
            ExpressionKind.ADVANCED: self.advanced,
        }
        if kind not in pools:
            raise KeyError(f"the catalog has no {kind.value} pool")
        return pools[kind]

    def pool_for_target(self, target: float, include_advanced: bool = True) -> tuple[Expression, ...]:
        """
        Catalog expressions whose nominal value is exactly ``target``.

        Only 1 and 0 have catalog pools; any other target yields ().
        """
        if target == 1:
            return self.unity + self.advanced if include_advanced else self.unity
        if target == 0:
            return self.zero
        return ()

    def identity_pool(self) -> tuple[Expression, ...]:
        """Expressions eligible for identity sets: unity, then advanced."""
        return self.unity + self.advanced

    def find(self, text: str) -> Optional[Expression]:
        """Look up a catalog entry by its exact text."""
        for expression in self:
            if expression.text == text:
                return expression
        return None


CATALOG = ExpressionCatalog(
    unity=UNITY_EXPRESSIONS,
    zero=ZERO_EXPRESSIONS,
    advanced=ADVANCED_EXPRESSIONS,
)
