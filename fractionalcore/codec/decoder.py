"""
Decoder for Fractional Core.

Decoding is the trust boundary. Every non-zero cell must verify
against 1; a cell that does not is reported as AmbiguousCellError with
its position. There is no "best effort" mode: a grid either decodes
exactly or it fails.

Pipeline:
    1. Flatten rows; the cell count must be a multiple of 8
    2. "0" -> bit 0, verified expression -> bit 1
    3. Bytes -> characters
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Union

from ..errors import AmbiguousCellError, DecodeError
from ..expression import ZERO_CELL, Expression
from ..verification import DEFAULT_TOLERANCE, check
from .encoder import BITS_PER_CHAR
from .grid import Grid

log = logging.getLogger(__name__)

Cell = Union[str, Expression]
GridLike = Union[Grid, Iterable[Iterable[Cell]]]


@dataclass(frozen=True)
class DecodeReport:
    """
    Result of decoding one grid.

    ``verified_cells`` counts the expression cells that were checked,
    replacing any process-wide verification counter.
    """
    text: str
    bits: str
    verified_cells: int

    @property
    def byte_count(self) -> int:
        return len(self.bits) // BITS_PER_CHAR


def bits_to_text(bits: str) -> str:
    """Group bits into bytes and convert each byte to a character."""
    if len(bits) % BITS_PER_CHAR:
        raise DecodeError(
            f"bit length {len(bits)} is not a multiple of {BITS_PER_CHAR}"
        )
    return "".join(
        chr(int(bits[start:start + BITS_PER_CHAR], 2))
        for start in range(0, len(bits), BITS_PER_CHAR)
    )


def _flatten(grid: GridLike) -> list[tuple[int, int, str]]:
    """Return (row, column, text) for every cell, in reading order."""
    if isinstance(grid, (str, bytes)):
        raise DecodeError("grid must be a sequence of rows, not a string")
    cells: list[tuple[int, int, str]] = []
    try:
        for row_index, row in enumerate(grid):
            if isinstance(row, (str, bytes)):
                raise DecodeError(f"row {row_index} must be a sequence of cells")
            for column, cell in enumerate(row):
                if isinstance(cell, Expression):
                    cell = cell.text
                if not isinstance(cell, str):
                    raise DecodeError(
                        f"cell ({row_index}, {column}) must be str, "
                        f"got {type(cell).__name__}"
                    )
                cells.append((row_index, column, cell))
    except TypeError as e:
        raise DecodeError(f"grid is not a sequence of rows: {e}") from e
    return cells


def decode_with_report(
    grid: GridLike,
    tolerance: float = DEFAULT_TOLERANCE,
) -> DecodeReport:
    """
    Decode a grid and report what was verified.

    Raises:
        DecodeError: If the cell count is not a multiple of 8 or the
            grid is malformed
        AmbiguousCellError: If a non-zero cell does not verify against 1
    """
    cells = _flatten(grid)
    if len(cells) % BITS_PER_CHAR:
        raise DecodeError(
            f"grid holds {len(cells)} cells, not a multiple of {BITS_PER_CHAR}"
        )

    bits: list[str] = []
    verified = 0
    for row, column, cell in cells:
        if cell == ZERO_CELL:
            bits.append("0")
            continue

        outcome = check(cell, 1, tolerance)
        if not outcome.passed:
            reason = outcome.error or f"evaluates to {outcome.value}, not 1"
            log.warning("ambiguous cell %r at (%d, %d): %s", cell, row, column, reason)
            raise AmbiguousCellError(
                f"cell {cell!r} at row {row}, column {column} does not verify: {reason}",
                row=row,
                column=column,
                cell=cell,
            )
        bits.append("1")
        verified += 1

    bit_string = "".join(bits)
    text = bits_to_text(bit_string)
    log.debug("decoded %d cells into %d characters", len(cells), len(text))
    return DecodeReport(text=text, bits=bit_string, verified_cells=verified)


def decode(grid: GridLike, tolerance: float = DEFAULT_TOLERANCE) -> str:
    """
    Decode a grid back to text.

    Round-trip contract: decode(encode(s)) == s for every s in
    U+0000..U+00FF.
    """
    return decode_with_report(grid, tolerance).text
