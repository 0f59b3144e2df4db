"""
Fractional Core CLI: Expression Diversity Codec.

Commands:
    fractional-core encode <text>          Encode text as an expression grid
    fractional-core decode [file]          Verify and decode a grid (stdin by default)
    fractional-core evaluate <expr>        Evaluate one expression
    fractional-core verify <expr> <value>  Check an expression against a value
    fractional-core generate <value>       Generate diverse expressions for a value
    fractional-core identity <name>        Derive the identity set for a name
    fractional-core catalog                List the predefined expressions

The grid printed by ``encode`` is the text form that ``decode`` reads:
one row per line, cells separated by whitespace.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

from ..catalog import CATALOG
from ..codec import DEFAULT_GRID_WIDTH, EncodingOptions, Grid, decode_with_report, encode
from ..errors import FractionalCoreError
from ..evaluation import evaluate
from ..expression import Expression, ExpressionKind
from ..generation import DEFAULT_MIN_COUNT, synthesize
from ..identity import DEFAULT_IDENTITY_SIZE, generate_identity_set
from ..verification import DEFAULT_TOLERANCE, check


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


# =============================================================================
# OUTPUT FORMATTING
# =============================================================================

def format_value(value: float) -> str:
    """Format an evaluated number for display."""
    return f"{value:.12g}"


def format_expression_row(index: int, expression: Expression) -> str:
    """Format one expression as a numbered listing row."""
    label = expression.kind.value
    if expression.note:
        label = f"{label}/{expression.note}"
    return f"{index:>3}. {expression.text:<28} [{label}]"


def format_error(action: str, error: Exception) -> str:
    """Format a failure in the CLI's error style."""
    return f"ERROR: {action}\nReason: {error}"


# =============================================================================
# CLI COMMANDS
# =============================================================================

def cmd_encode(args: argparse.Namespace) -> int:
    """Encode text as an expression grid."""
    try:
        options = EncodingOptions(
            width=args.width,
            include_advanced=args.advanced,
            tolerance=args.tolerance,
        )
        grid = encode(args.text, options=options)
    except (FractionalCoreError, ValueError) as e:
        print(format_error("Encoding failed", e))
        return 1

    print(grid.to_text(align=not args.compact))
    return 0


def cmd_decode(args: argparse.Namespace) -> int:
    """Verify and decode a grid."""
    try:
        if args.file is None:
            source = sys.stdin.read()
        else:
            with open(args.file, "r", encoding="utf-8") as fh:
                source = fh.read()
    except OSError as e:
        print(format_error("Could not read grid", e))
        return 1

    try:
        report = decode_with_report(Grid.from_text(source), args.tolerance)
    except FractionalCoreError as e:
        print(format_error("Decoding failed", e))
        return 1

    print(report.text)
    if args.report:
        print()
        print("DECODE REPORT:")
        print(f"  Characters:     {len(report.text)}")
        print(f"  Cells:          {len(report.bits)}")
        print(f"  Verified cells: {report.verified_cells}")
    return 0


def cmd_evaluate(args: argparse.Namespace) -> int:
    """Evaluate one expression."""
    try:
        value = evaluate(args.expression)
    except FractionalCoreError as e:
        print(format_error(f"Cannot evaluate {args.expression!r}", e))
        return 1

    print(format_value(value))
    return 0


def cmd_verify(args: argparse.Namespace) -> int:
    """Check an expression against an expected value."""
    try:
        outcome = check(args.expression, args.expected, args.tolerance)
    except ValueError as e:
        print(format_error("Invalid tolerance", e))
        return 1

    if outcome.passed:
        print(f"PASS: {args.expression} = {format_value(outcome.value)}")
        return 0

    print(f"FAIL: {args.expression} != {format_value(args.expected)}")
    if outcome.error:
        print(f"Reason: {outcome.error}")
    else:
        print(f"Reason: evaluates to {format_value(outcome.value)} "
              f"(off by {outcome.delta:.3g}, tolerance {args.tolerance:g})")
    return 1


def cmd_generate(args: argparse.Namespace) -> int:
    """Generate diverse expressions for a value."""
    try:
        result = synthesize(
            args.target,
            args.count,
            tolerance=args.tolerance,
            include_advanced=args.include_advanced,
        )
    except (FractionalCoreError, ValueError) as e:
        print(format_error(f"Generation failed for {format_value(args.target)}", e))
        return 1

    print(f"Expressions equal to {format_value(args.target)}")
    print("=" * 50)
    for index, expression in enumerate(result.expressions, start=1):
        print(format_expression_row(index, expression))
    print()
    print(f"Catalog: {result.from_catalog}  Synthesized: {result.synthesized}  "
          f"Attempts: {result.attempts}  Rejected: {result.rejected}")
    return 0


def cmd_identity(args: argparse.Namespace) -> int:
    """Derive the identity set for a name."""
    try:
        identity = generate_identity_set(args.name, args.size)
    except ValueError as e:
        print(format_error("Identity derivation failed", e))
        return 1

    for index, expression in enumerate(identity, start=1):
        print(format_expression_row(index, expression))
    return 0


def cmd_catalog(args: argparse.Namespace) -> int:
    """List the predefined expressions."""
    if args.kind is None:
        expressions = list(CATALOG)
    else:
        expressions = list(CATALOG.pool(ExpressionKind(args.kind)))

    for index, expression in enumerate(expressions, start=1):
        print(format_expression_row(index, expression))
    print()
    print(f"Total: {len(expressions)} expressions")
    return 0


# =============================================================================
# MAIN ENTRY POINT
# =============================================================================

def create_parser() -> argparse.ArgumentParser:
    """Create the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="fractional-core",
        description="Fractional Core: encode data as verified mathematical expressions",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log debug output to stderr",
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
    )

    # Encode command
    encode_parser = subparsers.add_parser(
        "encode",
        help="Encode text as an expression grid",
    )
    encode_parser.add_argument("text", help="Text to encode (U+0000..U+00FF)")
    encode_parser.add_argument(
        "--width",
        type=int,
        default=DEFAULT_GRID_WIDTH,
        help=f"Cells per row (default: {DEFAULT_GRID_WIDTH})",
    )
    encode_parser.add_argument(
        "--advanced",
        action="store_true",
        help="Also use the advanced (trigonometric, logarithmic) expressions",
    )
    encode_parser.add_argument(
        "--compact",
        action="store_true",
        help="Separate cells with single spaces instead of aligning columns",
    )
    encode_parser.add_argument(
        "--tolerance",
        type=float,
        default=DEFAULT_TOLERANCE,
        help=f"Verification tolerance (default: {DEFAULT_TOLERANCE})",
    )
    encode_parser.set_defaults(func=cmd_encode)

    # Decode command
    decode_parser = subparsers.add_parser(
        "decode",
        help="Verify and decode a grid",
    )
    decode_parser.add_argument(
        "file",
        nargs="?",
        help="File holding the grid text (default: stdin)",
    )
    decode_parser.add_argument(
        "--report",
        action="store_true",
        help="Print a verification summary after the text",
    )
    decode_parser.add_argument(
        "--tolerance",
        type=float,
        default=DEFAULT_TOLERANCE,
        help=f"Verification tolerance (default: {DEFAULT_TOLERANCE})",
    )
    decode_parser.set_defaults(func=cmd_decode)

    # Evaluate command
    evaluate_parser = subparsers.add_parser(
        "evaluate",
        help="Evaluate one expression",
    )
    evaluate_parser.add_argument("expression", help="Expression text, e.g. '√16/4'")
    evaluate_parser.set_defaults(func=cmd_evaluate)

    # Verify command
    verify_parser = subparsers.add_parser(
        "verify",
        help="Check an expression against an expected value",
    )
    verify_parser.add_argument("expression", help="Expression text")
    verify_parser.add_argument("expected", type=float, help="Expected value")
    verify_parser.add_argument(
        "--tolerance",
        type=float,
        default=DEFAULT_TOLERANCE,
        help=f"Verification tolerance (default: {DEFAULT_TOLERANCE})",
    )
    verify_parser.set_defaults(func=cmd_verify)

    # Generate command
    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate diverse expressions for a value",
    )
    generate_parser.add_argument("target", type=float, help="Target value")
    generate_parser.add_argument(
        "--count",
        type=int,
        default=DEFAULT_MIN_COUNT,
        help=f"Number of distinct expressions (default: {DEFAULT_MIN_COUNT})",
    )
    generate_parser.add_argument(
        "--no-advanced",
        dest="include_advanced",
        action="store_false",
        help="Leave the advanced expressions out of the catalog pool",
    )
    generate_parser.add_argument(
        "--tolerance",
        type=float,
        default=DEFAULT_TOLERANCE,
        help=f"Verification tolerance (default: {DEFAULT_TOLERANCE})",
    )
    generate_parser.set_defaults(func=cmd_generate)

    # Identity command
    identity_parser = subparsers.add_parser(
        "identity",
        help="Derive the identity set for a name",
    )
    identity_parser.add_argument("name", help="Name to seed the selection")
    identity_parser.add_argument(
        "--size",
        type=int,
        default=DEFAULT_IDENTITY_SIZE,
        help=f"Number of expressions (default: {DEFAULT_IDENTITY_SIZE})",
    )
    identity_parser.set_defaults(func=cmd_identity)

    # Catalog command
    catalog_parser = subparsers.add_parser(
        "catalog",
        help="List the predefined expressions",
    )
    catalog_parser.add_argument(
        "--kind",
        choices=[
            ExpressionKind.UNITY.value,
            ExpressionKind.ZERO.value,
            ExpressionKind.ADVANCED.value,
        ],
        help="Only list one value class",
    )
    catalog_parser.set_defaults(func=cmd_catalog)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format=LOG_FORMAT)

    if args.command is None:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
