"""
Diversity Generator for Fractional Core.

Given a target value and a minimum count, produce that many textually
distinct expressions which all verify against the target.

Search order:
    1. Catalog pool, when the target is exactly 1 or 0
    2. Synthesis templates (see templates.py), in family order

Every candidate, catalog or synthesized, passes through the verifier
before it is accepted. Candidates that overflow, evaluate to a
non-finite number or miss the target are dropped.

The search is bounded by MAX_SYNTHESIS_ATTEMPTS and terminates
deterministically for any finite target.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from functools import lru_cache

from ..catalog import CATALOG
from ..errors import InsufficientDiversityError
from ..expression import ZERO_CELL, Expression, create_synthesized
from ..verification import DEFAULT_TOLERANCE, check
from .templates import SearchBudget, iter_candidates

log = logging.getLogger(__name__)


# =============================================================================
# CONFIGURATION CONSTANTS
# =============================================================================

DEFAULT_MIN_COUNT = 5
MAX_SYNTHESIS_ATTEMPTS = 100 * 100


# =============================================================================
# GENERATION RESULT
# =============================================================================

@dataclass(frozen=True)
class GenerationResult:
    """
    Complete result of one generation request.

    Exposes:
    - expressions: the accepted expressions, in search order
    - from_catalog: how many came from the catalog pool
    - attempts: synthesis budget spent
    - rejected: candidates dropped by verification or uniqueness
    """
    target: float
    expressions: tuple[Expression, ...]
    from_catalog: int
    attempts: int
    rejected: int

    @property
    def synthesized(self) -> int:
        return len(self.expressions) - self.from_catalog


# =============================================================================
# GENERATOR
# =============================================================================

def generate_expressions(
    target: float,
    min_count: int = DEFAULT_MIN_COUNT,
    *,
    tolerance: float = DEFAULT_TOLERANCE,
    include_advanced: bool = True,
    max_attempts: int = MAX_SYNTHESIS_ATTEMPTS,
) -> list[Expression]:
    """
    Produce ``min_count`` distinct expressions that verify against ``target``.

    Raises:
        InsufficientDiversityError: If every template was tried and too
            few expressions verified
        SearchExhaustedError: If the attempt budget ran out first
    """
    result = synthesize(
        target,
        min_count,
        tolerance=tolerance,
        include_advanced=include_advanced,
        max_attempts=max_attempts,
    )
    return list(result.expressions)


def synthesize(
    target: float,
    min_count: int = DEFAULT_MIN_COUNT,
    *,
    tolerance: float = DEFAULT_TOLERANCE,
    include_advanced: bool = True,
    max_attempts: int = MAX_SYNTHESIS_ATTEMPTS,
) -> GenerationResult:
    """
    Run the generation search and report how it went.

    Results are memoised per argument tuple; every input fully
    determines the output.
    """
    if isinstance(target, bool) or not isinstance(target, (int, float)):
        raise TypeError(f"target must be a number, got {type(target).__name__}")
    if not math.isfinite(target):
        raise ValueError(f"target must be finite, got {target}")
    if min_count < 1:
        raise ValueError(f"min_count must be at least 1, got {min_count}")
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")

    return _search(float(target), min_count, tolerance, include_advanced, max_attempts)


@lru_cache(maxsize=256)
def _search(
    target: float,
    min_count: int,
    tolerance: float,
    include_advanced: bool,
    max_attempts: int,
) -> GenerationResult:
    accepted: list[Expression] = []
    seen: set[str] = {ZERO_CELL}
    rejected = 0

    # Stage 1: catalog pool
    for expression in CATALOG.pool_for_target(target, include_advanced):
        if len(accepted) == min_count:
            break
        if expression.text in seen or not check(expression.text, target, tolerance):
            rejected += 1
            continue
        seen.add(expression.text)
        accepted.append(expression)

    from_catalog = len(accepted)

    # Stage 2: synthesis
    budget = SearchBudget(
        limit=max_attempts,
        target=target,
        requested=min_count,
        produced=len(accepted),
    )
    if len(accepted) < min_count:
        for candidate in iter_candidates(target, budget):
            if candidate.text in seen:
                rejected += 1
                continue
            seen.add(candidate.text)

            outcome = check(candidate.text, target, tolerance)
            if not outcome.passed:
                log.debug(
                    "rejected %s candidate %r for %s: %s",
                    candidate.family,
                    candidate.text,
                    target,
                    outcome.error or f"off by {outcome.delta}",
                )
                rejected += 1
                continue

            accepted.append(create_synthesized(candidate.text, note=candidate.family))
            budget.produced = len(accepted)
            if len(accepted) == min_count:
                break

    if len(accepted) < min_count:
        raise InsufficientDiversityError(
            f"only {len(accepted)} of {min_count} distinct expressions verify "
            f"against {target}",
            target=target,
            produced=len(accepted),
            requested=min_count,
        )

    log.debug(
        "generated %d expressions for %s (%d catalog, %d attempts, %d rejected)",
        len(accepted),
        target,
        from_catalog,
        budget.spent,
        rejected,
    )
    return GenerationResult(
        target=target,
        expressions=tuple(accepted),
        from_catalog=from_catalog,
        attempts=budget.spent,
        rejected=rejected,
    )
