"""
Tests for Phase 6: Command-Line Interface.

These tests verify:
1. Every command prints its result and returns 0
2. Typed failures print an ERROR line and return 1
3. The encode output is valid decode input
"""

import io
import logging

import pytest

from fractionalcore.cli.main import (
    create_parser,
    format_expression_row,
    format_value,
    main,
)
from fractionalcore.expression import create_synthesized


# =============================================================================
# FORMATTING TESTS
# =============================================================================

class TestFormatting:
    """Test output helpers."""

    def test_format_value(self):
        """Round-off noise is hidden; integral values print bare."""
        assert format_value(0.9999999999999999) == "1"
        assert format_value(14.0) == "14"
        assert format_value(0.5) == "0.5"

    def test_format_expression_row(self):
        """Rows show index, text and kind with any note."""
        row = format_expression_row(3, create_synthesized("6*2/2", note="parametric"))
        assert row.startswith("  3. 6*2/2")
        assert row.endswith("[synthesized/parametric]")


# =============================================================================
# COMMAND TESTS
# =============================================================================

class TestCommands:
    """Test each CLI command end to end."""

    def test_no_command_prints_help(self, capsys):
        """Running without a command shows usage."""
        assert main([]) == 0
        assert "usage: fractional-core" in capsys.readouterr().out

    def test_encode(self, capsys):
        """encode prints the grid text form."""
        assert main(["encode", "FC", "--compact"]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines == [
            "0 √1 0 0 0 0! |−1| 0",
            "0 7^0 0 0 0 0 (2+2)/4 1/1",
        ]

    def test_encode_width(self, capsys):
        """--width sets the cells per row."""
        assert main(["encode", "FC", "--width", "4"]) == 0
        assert len(capsys.readouterr().out.splitlines()) == 4

    def test_encode_rejects_wide_characters(self, capsys):
        """Characters outside the 8-bit domain are an error."""
        assert main(["encode", "€"]) == 1
        out = capsys.readouterr().out
        assert out.startswith("ERROR: Encoding failed")
        assert "encode_error" in out

    def test_encode_then_decode(self, capsys, tmp_path):
        """encode output decodes back to the input."""
        assert main(["encode", "Hi there", "--advanced"]) == 0
        grid_file = tmp_path / "grid.txt"
        grid_file.write_text(capsys.readouterr().out, encoding="utf-8")

        assert main(["decode", str(grid_file), "--report"]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == "Hi there"
        assert "  Characters:     8" in lines

    def test_decode_from_stdin(self, capsys, monkeypatch):
        """decode reads stdin when no file is given."""
        monkeypatch.setattr("sys.stdin", io.StringIO("0 √1 0 0 0 0! |−1| 0\n"))
        assert main(["decode"]) == 0
        assert capsys.readouterr().out == "F\n"

    def test_decode_tampered(self, capsys, tmp_path):
        """A tampered cell fails with its position."""
        grid_file = tmp_path / "grid.txt"
        grid_file.write_text("0 √1 0 0 0 2-0 |−1| 0\n", encoding="utf-8")
        assert main(["decode", str(grid_file)]) == 1
        out = capsys.readouterr().out
        assert "ERROR: Decoding failed" in out
        assert "row 0, column 5" in out

    def test_decode_missing_file(self, capsys, tmp_path):
        """An unreadable file is reported, not raised."""
        assert main(["decode", str(tmp_path / "missing.txt")]) == 1
        assert "ERROR: Could not read grid" in capsys.readouterr().out

    def test_evaluate(self, capsys):
        """evaluate prints the value."""
        assert main(["evaluate", "2+3*4"]) == 0
        assert capsys.readouterr().out.strip() == "14"

    def test_evaluate_invalid(self, capsys):
        """Unknown notation is an error."""
        assert main(["evaluate", "undefined"]) == 1
        assert "invalid_expression" in capsys.readouterr().out

    def test_verify_pass(self, capsys):
        """A verifying expression prints PASS."""
        assert main(["verify", "√2", "1.41421", "--tolerance", "1e-5"]) == 0
        assert capsys.readouterr().out.startswith("PASS: √2")

    def test_verify_fail(self, capsys):
        """A wrong value prints FAIL and the delta."""
        assert main(["verify", "√2", "1.41421", "--tolerance", "1e-6"]) == 1
        out = capsys.readouterr().out
        assert out.startswith("FAIL: √2")
        assert "off by" in out

    def test_verify_fail_on_error(self, capsys):
        """An unevaluable expression reports the evaluation error."""
        assert main(["verify", "1/0", "1"]) == 1
        assert "division_by_zero" in capsys.readouterr().out

    def test_verify_bad_tolerance(self, capsys):
        """A non-positive tolerance is rejected."""
        assert main(["verify", "1", "1", "--tolerance", "0"]) == 1
        assert "ERROR: Invalid tolerance" in capsys.readouterr().out

    def test_generate(self, capsys):
        """generate lists numbered expressions and counts."""
        assert main(["generate", "6", "--count", "3"]) == 0
        out = capsys.readouterr().out
        assert "  1. 6 " in out
        assert "6-1+1" in out
        assert "Synthesized: 3" in out

    def test_generate_insufficient(self, capsys):
        """A request that cannot be met is an error."""
        assert main(["generate", "0.5", "--count", "50"]) == 1
        assert "insufficient_diversity" in capsys.readouterr().out

    def test_identity(self, capsys):
        """identity prints one numbered row per expression."""
        assert main(["identity", "Alice", "--size", "2"]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert len(lines) == 2
        assert "log(10)" in lines[0]

    def test_catalog(self, capsys):
        """catalog lists all entries, or one kind."""
        assert main(["catalog"]) == 0
        assert "Total: 42 expressions" in capsys.readouterr().out

        assert main(["catalog", "--kind", "zero"]) == 0
        out = capsys.readouterr().out
        assert "Total: 14 expressions" in out
        assert "sin(π)" in out

    def test_catalog_rejects_unknown_kind(self):
        """Only catalog kinds are accepted."""
        with pytest.raises(SystemExit):
            create_parser().parse_args(["catalog", "--kind", "synthesized"])

    def test_verbose_enables_debug_logging(self, capsys, monkeypatch):
        """--verbose configures DEBUG logging."""
        calls = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
        assert main(["--verbose", "evaluate", "1"]) == 0
        assert calls and calls[0]["level"] == logging.DEBUG
