"""
Tokenizer for the Fractional Core expression grammar.

The lexer accepts a closed alphabet. Any character or identifier it
does not recognise is an InvalidExpressionError: nothing is skipped,
guessed or coerced.

Accepted notation:
    numbers     12, 0.25, .5
    constants   π, e, φ
    operators   + - * / ^ !   (also × · ÷ and the minus sign −)
    grouping    ( ) and |x| for absolute value
    roots       √x, ∛x, ∜x, ⁿ√x (superscript index)
    powers      x², x³ (superscript exponent)
    functions   sin cos tan ln log sqrt, with optional squared form
                (sin²) and subscript base for log (log₂)
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..errors import InvalidExpressionError, ParseError


class TokenKind(Enum):
    NUMBER = "number"
    CONSTANT = "constant"
    OPERATOR = "operator"
    FACTORIAL = "factorial"
    SUPERSCRIPT = "superscript"
    LPAREN = "lparen"
    RPAREN = "rparen"
    BAR = "bar"
    ROOT = "root"
    FUNCTION = "function"
    END = "end"


@dataclass(frozen=True)
class Token:
    """
    A lexical unit with its source position.

    ``value`` holds the numeric payload: the literal for NUMBER, the
    pre-computed float for CONSTANT, the exponent for SUPERSCRIPT and
    the index for ROOT. FUNCTION tokens may carry a ``power`` (sin²)
    and a ``base`` (log₂).
    """
    kind: TokenKind
    text: str
    position: int
    value: Optional[float] = None
    power: Optional[int] = None
    base: Optional[float] = None


# =============================================================================
# ALPHABET
# =============================================================================

CONSTANTS = {
    "π": math.pi,
    "e": math.e,
    "φ": (1 + math.sqrt(5)) / 2,
}

FUNCTIONS = frozenset({"sin", "cos", "tan", "ln", "log", "sqrt"})

OPERATORS = {
    "+": "+",
    "-": "-",
    "−": "-",
    "*": "*",
    "×": "*",
    "·": "*",
    "/": "/",
    "÷": "/",
    "^": "^",
}

ROOT_SIGNS = {"√": 2, "∛": 3, "∜": 4}

SUPERSCRIPT_DIGITS = str.maketrans("⁰¹²³⁴⁵⁶⁷⁸⁹", "0123456789")
SUBSCRIPT_DIGITS = str.maketrans("₀₁₂₃₄₅₆₇₈₉", "0123456789")

_NUMBER = re.compile(r"[0-9]+(?:\.[0-9]+)?|\.[0-9]+")
_WORD = re.compile(r"[A-Za-z]+")
_SUPERSCRIPT_RUN = re.compile(r"[⁰¹²³⁴⁵⁶⁷⁸⁹]+")
_SUBSCRIPT_RUN = re.compile(r"[₀₁₂₃₄₅₆₇₈₉]+")


# =============================================================================
# TOKENIZER
# =============================================================================

def tokenize(text: str) -> list[Token]:
    """
    Split ``text`` into tokens, ending with a single END token.

    Raises:
        ParseError: If the text is empty or a superscript is dangling
        InvalidExpressionError: On any unknown character or identifier
    """
    if not text or not text.strip():
        raise ParseError("empty expression", text=text, position=0)

    tokens: list[Token] = []
    pos = 0
    length = len(text)

    while pos < length:
        ch = text[pos]

        if ch.isspace():
            pos += 1
            continue

        match = _NUMBER.match(text, pos)
        if match:
            tokens.append(Token(TokenKind.NUMBER, match.group(), pos, float(match.group())))
            pos = match.end()
            continue

        match = _SUPERSCRIPT_RUN.match(text, pos)
        if match:
            digits = int(match.group().translate(SUPERSCRIPT_DIGITS))
            end = match.end()
            # ⁵√32 is a fifth root; any other superscript is an exponent
            if end < length and text[end] == "√":
                tokens.append(Token(TokenKind.ROOT, text[pos:end + 1], pos, float(digits)))
                pos = end + 1
            else:
                if not tokens:
                    raise ParseError(
                        f"superscript {match.group()!r} has no operand",
                        text=text,
                        position=pos,
                    )
                tokens.append(Token(TokenKind.SUPERSCRIPT, match.group(), pos, float(digits)))
                pos = end
            continue

        match = _WORD.match(text, pos)
        if match:
            pos = _read_word(text, match, tokens)
            continue

        if ch in CONSTANTS:
            tokens.append(Token(TokenKind.CONSTANT, ch, pos, CONSTANTS[ch]))
        elif ch in OPERATORS:
            tokens.append(Token(TokenKind.OPERATOR, OPERATORS[ch], pos))
        elif ch in ROOT_SIGNS:
            tokens.append(Token(TokenKind.ROOT, ch, pos, float(ROOT_SIGNS[ch])))
        elif ch == "!":
            tokens.append(Token(TokenKind.FACTORIAL, ch, pos))
        elif ch == "(":
            tokens.append(Token(TokenKind.LPAREN, ch, pos))
        elif ch == ")":
            tokens.append(Token(TokenKind.RPAREN, ch, pos))
        elif ch == "|":
            tokens.append(Token(TokenKind.BAR, ch, pos))
        else:
            raise InvalidExpressionError(
                f"unknown symbol {ch!r} at position {pos}",
                text=text,
                position=pos,
            )
        pos += 1

    tokens.append(Token(TokenKind.END, "", length))
    return tokens


def _read_word(text: str, match: re.Match, tokens: list[Token]) -> int:
    """Emit a constant or function token for an alphabetic run."""
    word = match.group()
    start = match.start()
    pos = match.end()

    if word in CONSTANTS:
        tokens.append(Token(TokenKind.CONSTANT, word, start, CONSTANTS[word]))
        return pos

    if word not in FUNCTIONS:
        raise InvalidExpressionError(
            f"unknown identifier {word!r} at position {start}",
            text=text,
            position=start,
        )

    base: Optional[float] = None
    power: Optional[int] = None

    if word == "log":
        sub = _SUBSCRIPT_RUN.match(text, pos)
        if sub:
            base = float(sub.group().translate(SUBSCRIPT_DIGITS))
            pos = sub.end()

    sup = _SUPERSCRIPT_RUN.match(text, pos)
    if sup:
        power = int(sup.group().translate(SUPERSCRIPT_DIGITS))
        pos = sup.end()

    tokens.append(Token(
        TokenKind.FUNCTION,
        word,
        start,
        power=power,
        base=base,
    ))
    return pos
