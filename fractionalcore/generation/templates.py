"""
Synthesis Templates for the Diversity Generator.

Each template family turns a target value into candidate notation.
Families are independent and yield lazily; none of them verifies its
own output. Verification and uniqueness belong to the generator.

Families (in search order):
    - Parametric forms: t, t-1+1, t*2/2, √(t²), t^1
    - Factorial ratio:  t!/(t-1)!           integers 1 <= t <= 20
    - Neutral forms:    t+0, t*1, t/1, (t), |t|, t*π/π, t*e/e
    - Products:         a*b                 integers, a <= √|t|
    - Sums:             a+b                 integers

Every step of every family spends one unit of the shared SearchBudget,
including divisor probes that produce no candidate. This is what makes
the search terminate regardless of target magnitude.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterator, Optional

from ..errors import SearchExhaustedError


# =============================================================================
# CONFIGURATION CONSTANTS
# =============================================================================

# Factorial ratios are only offered up to this target
FACTORIAL_RATIO_LIMIT = 20

# Integers up to this magnitude are written without a decimal point
EXACT_INTEGER_LIMIT = 10 ** 15


# =============================================================================
# SEARCH BUDGET
# =============================================================================

@dataclass
class SearchBudget:
    """
    Bounded attempt counter shared by all template families.

    ``spend`` raises SearchExhaustedError once ``limit`` attempts have
    been made, so no family can loop unboundedly.
    """
    limit: int
    target: float
    requested: int
    spent: int = 0
    produced: int = 0

    def spend(self) -> None:
        if self.spent >= self.limit:
            raise SearchExhaustedError(
                f"synthesis budget of {self.limit} attempts exhausted for target "
                f"{self.target} with {self.produced}/{self.requested} expressions",
                target=self.target,
                produced=self.produced,
                requested=self.requested,
            )
        self.spent += 1


@dataclass(frozen=True)
class Candidate:
    """Unverified notation proposed by a template family."""
    text: str
    family: str


# =============================================================================
# NUMBER FORMATTING
# =============================================================================

def format_number(value: float) -> str:
    """
    Render a float as a literal the evaluator accepts.

    The grammar has no scientific notation, so large and tiny values
    are expanded positionally. The text always reads back as ``value``.
    """
    if value == int(value) and abs(value) < EXACT_INTEGER_LIMIT:
        return str(int(value))
    text = repr(value)
    if "e" in text or "E" in text:
        text = format(Decimal(text), "f")
    return text


def format_operand(value: float) -> str:
    """Render ``value`` so it can sit on either side of an operator."""
    text = format_number(value)
    return f"({text})" if value < 0 else text


def _as_integer(value: float) -> Optional[int]:
    if math.isfinite(value) and value == int(value):
        return int(value)
    return None


# =============================================================================
# TEMPLATE FAMILIES
# =============================================================================

def parametric_forms(target: float, budget: SearchBudget) -> Iterator[Candidate]:
    """The five forms every target gets."""
    literal = format_number(target)
    operand = format_operand(target)
    forms = (
        literal,
        f"{operand}-1+1",
        f"{operand}*2/2",
        f"√({operand}²)",
        f"{operand}^1",
    )
    for text in forms:
        budget.spend()
        yield Candidate(text, "parametric")


def factorial_ratio(
    target: float,
    budget: SearchBudget,
    limit: int = FACTORIAL_RATIO_LIMIT,
) -> Iterator[Candidate]:
    """t!/(t-1)! for small positive integers; larger t would overflow."""
    n = _as_integer(target)
    if n is None or not 1 <= n <= limit:
        return
    budget.spend()
    yield Candidate(f"{n}!/{n - 1}!", "factorial_ratio")


def neutral_forms(target: float, budget: SearchBudget) -> Iterator[Candidate]:
    """Forms that wrap the target in an identity operation."""
    literal = format_number(target)
    operand = format_operand(target)
    forms = [
        f"{operand}+0",
        f"{operand}*1",
        f"{operand}/1",
        f"({literal})",
        f"{operand}*π/π",
        f"{operand}*e/e",
    ]
    if target >= 0:
        forms.append(f"|{literal}|")
    for text in forms:
        budget.spend()
        yield Candidate(text, "neutral")


def product_decompositions(target: float, budget: SearchBudget) -> Iterator[Candidate]:
    """a*b with integer factors; the sign rides on the second factor."""
    n = _as_integer(target)
    if n is None or abs(n) < 4:
        return
    magnitude = abs(n)
    for a in range(2, math.isqrt(magnitude) + 1):
        budget.spend()
        if magnitude % a == 0:
            yield Candidate(f"{a}*{format_operand(n // a)}", "product")


def sum_decompositions(target: float, budget: SearchBudget) -> Iterator[Candidate]:
    """a+b with integer summands, a counting up from 1."""
    n = _as_integer(target)
    if n is None:
        return
    upper = n // 2 if n >= 2 else max(1, -n)
    for a in range(1, upper + 1):
        budget.spend()
        yield Candidate(f"{a}+{format_operand(n - a)}", "sum")


TEMPLATE_FAMILIES = (
    parametric_forms,
    factorial_ratio,
    neutral_forms,
    product_decompositions,
    sum_decompositions,
)


def iter_candidates(target: float, budget: SearchBudget) -> Iterator[Candidate]:
    """All template families, in search order."""
    for family in TEMPLATE_FAMILIES:
        yield from family(target, budget)
