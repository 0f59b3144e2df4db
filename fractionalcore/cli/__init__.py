# CLI package for Fractional Core
"""
Command-line interface for encoding, decoding and inspecting expressions.

Commands:
    fractional-core encode    Encode text as an expression grid
    fractional-core decode    Verify and decode a grid
    fractional-core evaluate  Evaluate one expression
    fractional-core verify    Check an expression against a value
    fractional-core generate  Generate diverse expressions for a value
    fractional-core identity  Derive the identity set for a name
    fractional-core catalog   List the predefined expressions
"""
