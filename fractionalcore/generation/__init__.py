# Generation package for Fractional Core
"""
Diversity generation: many distinct expressions, one target value.

Every returned expression is verified, textually unique and produced
by a bounded search.
"""

from .generator import (
    DEFAULT_MIN_COUNT,
    MAX_SYNTHESIS_ATTEMPTS,
    GenerationResult,
    generate_expressions,
    synthesize,
)

__all__ = [
    "DEFAULT_MIN_COUNT",
    "MAX_SYNTHESIS_ATTEMPTS",
    "GenerationResult",
    "generate_expressions",
    "synthesize",
]
