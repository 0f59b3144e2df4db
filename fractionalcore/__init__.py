# Fractional Core
# Expression Diversity Codec

"""
Core property: binary data is written as a grid of diverse mathematical
expressions that each evaluate to 0 or 1. Reading it back requires
evaluating mathematics, and every expression is verified on the way in
and on the way out.

This is not a cryptographic primitive. It offers no confidentiality and
no hardness guarantee; its only property is verifiable mathematical
equivalence.
"""

__version__ = "0.1.0"

from .catalog import CATALOG, ExpressionCatalog
from .codec import Grid, decode, encode
from .errors import (
    AmbiguousCellError,
    DecodeError,
    DivisionByZeroError,
    EncodeError,
    FractionalCoreError,
    InsufficientDiversityError,
    InvalidExpressionError,
    ParseError,
    SearchExhaustedError,
)
from .evaluation import evaluate
from .expression import Expression, ExpressionKind
from .generation import generate_expressions
from .identity import generate_identity_set
from .verification import are_equivalent, is_valid_expression, verify

__all__ = [
    "CATALOG",
    "ExpressionCatalog",
    "Expression",
    "ExpressionKind",
    "Grid",
    "evaluate",
    "verify",
    "is_valid_expression",
    "are_equivalent",
    "generate_expressions",
    "encode",
    "decode",
    "generate_identity_set",
    "FractionalCoreError",
    "ParseError",
    "InvalidExpressionError",
    "DivisionByZeroError",
    "InsufficientDiversityError",
    "SearchExhaustedError",
    "EncodeError",
    "DecodeError",
    "AmbiguousCellError",
]
