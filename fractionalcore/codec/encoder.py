"""
Encoder for Fractional Core.

Pipeline:
    1. Text -> bit string, 8 bits per character (U+0000..U+00FF)
    2. Each 1-bit -> the next expression from a diversity pool for 1,
       cycling so consecutive 1-bits differ whenever the pool allows
       Each 0-bit -> the literal "0"
    3. Cells -> fixed-width rows; the last row keeps the remainder

Encoding is a pure function of its arguments. Configuration travels
with each call; there is no encoder state between calls.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..catalog import CATALOG
from ..errors import EncodeError
from ..expression import ZERO_CELL
from ..generation import generate_expressions
from ..verification import DEFAULT_TOLERANCE
from .grid import DEFAULT_GRID_WIDTH, Grid

log = logging.getLogger(__name__)


# =============================================================================
# CONFIGURATION CONSTANTS
# =============================================================================

BITS_PER_CHAR = 8
MAX_CHAR_CODE = (1 << BITS_PER_CHAR) - 1


@dataclass(frozen=True)
class EncodingOptions:
    """
    Per-call encoder configuration.

    pool_size defaults to the size of the catalog pool for 1 (unity,
    plus advanced when ``include_advanced`` is set).
    """
    width: int = DEFAULT_GRID_WIDTH
    include_advanced: bool = False
    pool_size: Optional[int] = None
    tolerance: float = DEFAULT_TOLERANCE

    def __post_init__(self):
        if self.width < 1:
            raise EncodeError(f"grid width must be at least 1, got {self.width}")
        if self.pool_size is not None and self.pool_size < 1:
            raise EncodeError(f"pool_size must be at least 1, got {self.pool_size}")

    def resolved_pool_size(self) -> int:
        if self.pool_size is not None:
            return self.pool_size
        return len(CATALOG.pool_for_target(1, self.include_advanced))


# =============================================================================
# BIT CONVERSION
# =============================================================================

def text_to_bits(text: str) -> str:
    """
    Concatenate the 8-bit representation of every character.

    Raises:
        EncodeError: If a character lies outside U+0000..U+00FF
    """
    bits = []
    for position, char in enumerate(text):
        code = ord(char)
        if code > MAX_CHAR_CODE:
            raise EncodeError(
                f"character {char!r} (U+{code:04X}) at position {position} "
                f"does not fit in {BITS_PER_CHAR} bits"
            )
        bits.append(format(code, f"0{BITS_PER_CHAR}b"))
    return "".join(bits)


# =============================================================================
# ENCODING
# =============================================================================

def encode(
    text: str,
    width: int = DEFAULT_GRID_WIDTH,
    include_advanced: bool = False,
    *,
    options: Optional[EncodingOptions] = None,
) -> Grid:
    """
    Encode ``text`` as a grid of expressions.

    Args:
        text: Characters in U+0000..U+00FF
        width: Cells per row
        include_advanced: Also draw 1-bits from the advanced catalog pool
        options: Full configuration; overrides ``width`` and
            ``include_advanced`` when given

    Returns:
        Grid with exactly 8 * len(text) cells

    Raises:
        EncodeError: On characters outside the 8-bit domain or bad layout
    """
    if not isinstance(text, str):
        raise EncodeError(f"text must be str, got {type(text).__name__}")
    if options is None:
        options = EncodingOptions(width=width, include_advanced=include_advanced)

    bits = text_to_bits(text)

    pool = generate_expressions(
        1,
        options.resolved_pool_size(),
        tolerance=options.tolerance,
        include_advanced=options.include_advanced,
    )

    cells: list[str] = []
    next_expression = 0
    for bit in bits:
        if bit == "1":
            cells.append(pool[next_expression % len(pool)].text)
            next_expression += 1
        else:
            cells.append(ZERO_CELL)

    log.debug(
        "encoded %d characters into %d cells (%d expressions from a pool of %d)",
        len(text),
        len(cells),
        next_expression,
        len(pool),
    )
    return Grid.from_cells(cells, options.width)
