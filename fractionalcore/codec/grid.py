"""
Grid: the 2-D arrangement of an encoded bit sequence.

A grid is an ordered sequence of rows; each cell is either the literal
"0" or the text of an expression equal to 1.

Layout invariants:
    - every row except the last holds exactly ``width`` cells
    - the last row holds the remaining 1..width cells; it is never
      padded and never truncated, so the flattened cell count always
      equals the encoded bit count
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Sequence

from ..errors import DecodeError, EncodeError
from ..expression import ZERO_CELL


# =============================================================================
# CONFIGURATION CONSTANTS
# =============================================================================

DEFAULT_GRID_WIDTH = 8


@dataclass(frozen=True)
class Grid:
    """
    An immutable grid of cells.

    Structural properties (``bit_string``) read a cell as 1 whenever it
    is not the literal "0". They do not verify anything; decoding does.
    """
    rows: tuple[tuple[str, ...], ...]
    width: int = DEFAULT_GRID_WIDTH

    def __post_init__(self):
        if self.width < 1:
            raise EncodeError(f"grid width must be at least 1, got {self.width}")
        last = len(self.rows) - 1
        for index, row in enumerate(self.rows):
            if not row:
                raise DecodeError(f"row {index} is empty")
            if index < last and len(row) != self.width:
                raise DecodeError(
                    f"row {index} has {len(row)} cells, expected {self.width}"
                )
            if len(row) > self.width:
                raise DecodeError(
                    f"row {index} has {len(row)} cells, more than width {self.width}"
                )
            for cell in row:
                if not isinstance(cell, str) or not cell:
                    raise DecodeError(f"row {index} holds an invalid cell: {cell!r}")

    # -- construction ---------------------------------------------------------

    @classmethod
    def from_cells(cls, cells: Sequence[str], width: int = DEFAULT_GRID_WIDTH) -> Grid:
        """Reshape a flat cell sequence into rows of ``width``."""
        if width < 1:
            raise EncodeError(f"grid width must be at least 1, got {width}")
        rows = tuple(
            tuple(cells[start:start + width])
            for start in range(0, len(cells), width)
        )
        return cls(rows=rows, width=width)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[str]]) -> Grid:
        """Build a grid from nested sequences; the first row sets the width."""
        materialised = tuple(tuple(row) for row in rows)
        width = len(materialised[0]) if materialised and materialised[0] else DEFAULT_GRID_WIDTH
        return cls(rows=materialised, width=width)

    @classmethod
    def from_text(cls, text: str) -> Grid:
        """
        Parse the text form: one row per line, cells separated by
        whitespace. Blank lines are ignored.
        """
        rows = [line.split() for line in text.splitlines() if line.strip()]
        return cls.from_rows(rows)

    # -- views ----------------------------------------------------------------

    def __iter__(self) -> Iterator[tuple[str, ...]]:
        return iter(self.rows)

    def __len__(self) -> int:
        return len(self.rows)

    def __getitem__(self, index: int) -> tuple[str, ...]:
        return self.rows[index]

    @property
    def cells(self) -> tuple[str, ...]:
        """All cells, row by row."""
        return tuple(cell for row in self.rows for cell in row)

    @property
    def cell_count(self) -> int:
        return sum(len(row) for row in self.rows)

    @property
    def bit_string(self) -> str:
        return "".join("0" if cell == ZERO_CELL else "1" for cell in self.cells)

    def to_lists(self) -> list[list[str]]:
        """Plain nested lists, the interchange form of a grid."""
        return [list(row) for row in self.rows]

    def to_text(self, align: bool = True) -> str:
        """
        Render one row per line.

        With ``align`` the columns are padded to a common width for
        reading; ``from_text`` accepts both forms.
        """
        if not self.rows:
            return ""
        if not align:
            return "\n".join(" ".join(row) for row in self.rows)
        column = max(len(cell) for cell in self.cells)
        return "\n".join(
            "  ".join(cell.rjust(column) for cell in row).rstrip()
            for row in self.rows
        )
