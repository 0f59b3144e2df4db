# Evaluation package for Fractional Core
"""
Tokenizer and evaluator for the bounded expression grammar.

Usage:
    from fractionalcore.evaluation import evaluate

    evaluate("√16/4")      # 1.0
    evaluate("sin²(π/5)+cos²(π/5)")  # 1.0 (within round-off)
"""

from .evaluator import evaluate
from .lexer import Token, TokenKind, tokenize

__all__ = ["evaluate", "tokenize", "Token", "TokenKind"]
