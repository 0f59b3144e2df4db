"""
Identity Deriver for Fractional Core.

Derives a reproducible sequence of catalog expressions from a name.
The same (name, size) always yields the same sequence on every
platform: the selection uses a fixed linear congruential generator,
never a system random source.

Algorithm:
    seed  = sum of the character codes of name
    seed  = (seed * 9301 + 49297) mod 233280     (per element)
    index = seed mod len(pool)

The pool is the catalog's unity expressions followed by its advanced
expressions.
"""

from __future__ import annotations

from typing import Iterator, Optional, Sequence

from .catalog import CATALOG
from .expression import Expression


# =============================================================================
# CONFIGURATION CONSTANTS
# =============================================================================

DEFAULT_IDENTITY_SIZE = 16

LCG_MULTIPLIER = 9301
LCG_INCREMENT = 49297
LCG_MODULUS = 233280


def identity_seed(name: str) -> int:
    """The starting seed for a name: the sum of its character codes."""
    return sum(ord(char) for char in name)


def _lcg(seed: int) -> Iterator[int]:
    while True:
        seed = (seed * LCG_MULTIPLIER + LCG_INCREMENT) % LCG_MODULUS
        yield seed


def generate_identity_set(
    name: str,
    size: int = DEFAULT_IDENTITY_SIZE,
    pool: Optional[Sequence[Expression]] = None,
) -> list[Expression]:
    """
    Select ``size`` expressions from the catalog, seeded by ``name``.

    Entries may repeat; the sequence, not the set, is the identity.
    A fresh list is returned on every call.
    """
    if not isinstance(name, str):
        raise TypeError(f"name must be str, got {type(name).__name__}")
    if size < 0:
        raise ValueError(f"size must be non-negative, got {size}")

    candidates = tuple(pool) if pool is not None else CATALOG.identity_pool()
    if not candidates:
        raise ValueError("identity pool is empty")

    selection: list[Expression] = []
    for _, seed in zip(range(size), _lcg(identity_seed(name))):
        selection.append(candidates[seed % len(candidates)])
    return selection
