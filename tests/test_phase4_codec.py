"""
Tests for Phase 4: Encode/Decode Codec.

These tests verify:
1. The grid layout: 8 cells per character, fixed width, partial last row
2. decode(encode(s)) == s over the 8-bit domain
3. Decoding is a trust boundary: any non-verifying cell fails with its position
4. The text form of a grid reads back to the same grid
"""

import logging

import pytest

from fractionalcore.catalog import CATALOG
from fractionalcore.codec import (
    DecodeReport,
    EncodingOptions,
    Grid,
    bits_to_text,
    decode,
    decode_with_report,
    encode,
    text_to_bits,
)
from fractionalcore.errors import AmbiguousCellError, DecodeError, EncodeError


FC_ROWS = (
    ("0", "√1", "0", "0", "0", "0!", "|−1|", "0"),
    ("0", "7^0", "0", "0", "0", "0", "(2+2)/4", "1/1"),
)


# =============================================================================
# BIT CONVERSION TESTS
# =============================================================================

class TestBits:
    """Test the text <-> bit string layer."""

    def test_text_to_bits(self):
        """Each character becomes its 8-bit code, most significant bit first."""
        assert text_to_bits("FC") == "0100011001000011"
        assert text_to_bits("") == ""

    def test_bits_to_text(self):
        """Bytes read back as characters."""
        assert bits_to_text("0100011001000011") == "FC"

    def test_latin1_upper_bound(self):
        """U+00FF is the last encodable character."""
        assert text_to_bits("ÿ") == "11111111"

    def test_wide_character_rejected(self):
        """Characters beyond U+00FF do not fit in a byte."""
        with pytest.raises(EncodeError, match="U\\+20AC"):
            text_to_bits("€")

    def test_misaligned_bits_rejected(self):
        """A bit string must hold whole bytes."""
        with pytest.raises(DecodeError, match="multiple of 8"):
            bits_to_text("0100")


# =============================================================================
# ENCODE TESTS
# =============================================================================

class TestEncode:
    """Test text -> grid encoding."""

    def test_fc_grid(self):
        """ "FC" encodes to two rows of eight, 1-bits drawn from the unity pool."""
        grid = encode("FC")
        assert grid.rows == FC_ROWS
        assert grid.width == 8
        assert grid.bit_string == "0100011001000011"

    def test_cell_count(self):
        """The grid always holds 8 cells per character."""
        for text in ("", "A", "Hello", "x" * 13):
            assert encode(text).cell_count == 8 * len(text)

    def test_partial_last_row(self):
        """Width 12 leaves the remainder on a short last row, never padded."""
        grid = encode("FC", width=12)
        assert [len(row) for row in grid] == [12, 4]
        assert grid.cell_count == 16
        assert decode(grid) == "FC"

    def test_empty_text(self):
        """Empty text encodes to an empty grid."""
        grid = encode("")
        assert len(grid) == 0
        assert decode(grid) == ""

    def test_pool_cycles(self):
        """Consecutive 1-bits differ; the pool repeats after it is used up."""
        cells = encode("ÿÿÿ").cells
        assert len(cells) == 24
        assert all(first != second for first, second in zip(cells, cells[1:]))
        assert cells[16] == cells[0]

    def test_advanced_pool(self):
        """include_advanced extends the 1-bit pool with the advanced catalog."""
        cells = encode("ÿÿÿÿ", include_advanced=True).cells
        assert cells[16] == CATALOG.advanced[0].text
        assert cells[28] == cells[0]

    def test_options_pool_size(self):
        """EncodingOptions can narrow the pool."""
        grid = encode("ÿ", options=EncodingOptions(pool_size=2))
        assert grid.cells == ("√1", "0!") * 4

    def test_options_override_arguments(self):
        """When options are given, they set the width."""
        grid = encode("FC", width=3, options=EncodingOptions(width=16))
        assert len(grid) == 1
        assert grid.width == 16

    def test_invalid_width(self):
        """Width must be at least 1."""
        with pytest.raises(EncodeError, match="width"):
            encode("A", width=0)

    def test_wide_character(self):
        """Encoding fails on the first character outside the 8-bit domain."""
        with pytest.raises(EncodeError, match="position 1"):
            encode("a€")

    def test_non_string(self):
        """Only text can be encoded."""
        with pytest.raises(EncodeError, match="must be str"):
            encode(b"FC")

    def test_encoding_is_deterministic(self):
        """Equal inputs give equal grids."""
        assert encode("Fractional") == encode("Fractional")


# =============================================================================
# DECODE TESTS
# =============================================================================

class TestDecode:
    """Test grid -> text decoding."""

    def test_round_trip_printable_ascii(self):
        """Every printable ASCII character survives a round trip."""
        text = "".join(chr(code) for code in range(32, 127))
        assert decode(encode(text)) == text

    def test_round_trip_latin1_edges(self):
        """Control and high Latin-1 characters survive a round trip."""
        text = "\x00\x7f\x80é\xff"
        assert decode(encode(text, include_advanced=True)) == text

    def test_decode_plain_lists(self):
        """A list of lists of strings is a grid."""
        assert decode([list(row) for row in FC_ROWS]) == "FC"

    def test_decode_expression_cells(self):
        """Cells may be Expression objects as well as their text."""
        unity = CATALOG.unity[3]
        row = [unity if bit == "1" else "0" for bit in text_to_bits("A")]
        assert decode([row]) == "A"

    def test_decode_report(self):
        """The report counts every verified expression cell."""
        report = decode_with_report(encode("FC"))
        assert isinstance(report, DecodeReport)
        assert report.text == "FC"
        assert report.bits == "0100011001000011"
        assert report.verified_cells == 6
        assert report.byte_count == 2

    def test_tampered_cell(self):
        """A cell equal to 2 is reported with its row and column."""
        rows = encode("FC").to_lists()
        rows[1][1] = "2-0"
        with pytest.raises(AmbiguousCellError) as info:
            decode(rows)
        assert (info.value.row, info.value.column, info.value.cell) == (1, 1, "2-0")

    def test_unparseable_cell(self):
        """A cell that does not evaluate is ambiguous, not skipped."""
        rows = encode("FC").to_lists()
        rows[0][5] = "1/0"
        with pytest.raises(AmbiguousCellError, match="division_by_zero"):
            decode(rows)

    def test_zero_valued_expression_is_not_a_zero_cell(self):
        """Only the literal "0" is a 0-bit; "1-1" must verify against 1."""
        rows = encode("FC").to_lists()
        rows[0][0] = "1-1"
        with pytest.raises(AmbiguousCellError):
            decode(rows)

    def test_ambiguous_cell_is_logged(self, caplog):
        """The failure is logged as a warning before it is raised."""
        caplog.set_level(logging.WARNING, logger="fractionalcore.codec.decoder")
        rows = encode("FC").to_lists()
        rows[1][7] = "garbage"
        with pytest.raises(AmbiguousCellError):
            decode(rows)
        assert any("ambiguous cell" in r.getMessage() for r in caplog.records)

    def test_tolerance_is_per_call(self):
        """A loose tolerance accepts a near-1 cell; the default does not."""
        rows = [["0", "0", "0", "0", "0", "0", "0", "1.001"]]
        with pytest.raises(AmbiguousCellError):
            decode(rows)
        assert decode(rows, tolerance=0.01) == "\x01"

    def test_misaligned_grid(self):
        """Seven cells cannot form a byte."""
        with pytest.raises(DecodeError, match="multiple of 8") as info:
            decode([["0"] * 7])
        assert not isinstance(info.value, AmbiguousCellError)

    def test_string_is_not_a_grid(self):
        """A bare string is rejected rather than read character by character."""
        with pytest.raises(DecodeError, match="not a string"):
            decode("00000000")

    def test_non_string_cell(self):
        """Cells must be text or Expression objects."""
        with pytest.raises(DecodeError, match="must be str"):
            decode([[0] * 8])

    def test_non_iterable_grid(self):
        """Something that is not a sequence of rows is a DecodeError."""
        with pytest.raises(DecodeError, match="not a sequence"):
            decode([1, 2])


# =============================================================================
# GRID TESTS
# =============================================================================

class TestGrid:
    """Test the Grid value type and its text form."""

    def test_rows_must_be_full_except_last(self):
        """Only the last row may be short."""
        with pytest.raises(DecodeError, match="expected 8"):
            Grid(rows=(("0",) * 4, ("0",) * 4), width=8)

    def test_rows_cannot_exceed_width(self):
        """No row is longer than the width."""
        with pytest.raises(DecodeError, match="more than width"):
            Grid.from_rows([["0"] * 8, ["0"] * 9])

    def test_cells_cannot_be_empty(self):
        """Empty strings are not cells."""
        with pytest.raises(DecodeError, match="invalid cell"):
            Grid.from_rows([["0", ""]])

    def test_indexing(self):
        """Rows are indexable and iterable."""
        grid = Grid(rows=FC_ROWS)
        assert grid[1][1] == "7^0"
        assert list(grid) == list(FC_ROWS)

    def test_text_form_round_trip(self):
        """to_text() output parses back to the same grid."""
        grid = encode("FC", width=12, include_advanced=True)
        assert Grid.from_text(grid.to_text()) == grid
        assert Grid.from_text(grid.to_text(align=False)) == grid

    def test_aligned_text(self):
        """Aligned output pads columns to the widest cell."""
        lines = Grid(rows=FC_ROWS).to_text().splitlines()
        assert len(lines) == 2
        assert lines[0].split() == list(FC_ROWS[0])
        assert lines[1].endswith("(2+2)/4      1/1")

    def test_from_text_ignores_blank_lines(self):
        """Blank lines around the grid are skipped."""
        text = "\n" + Grid(rows=FC_ROWS).to_text(align=False) + "\n\n"
        assert decode(Grid.from_text(text)) == "FC"
