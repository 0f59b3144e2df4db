"""
Expression Evaluator for Fractional Core.

One authoritative grammar, evaluated by recursive descent. The
evaluator fails closed: input it does not understand raises a typed
error, it is never coerced to 0 or NaN.

Grammar (lowest to highest precedence):
    expression := term (("+" | "-") term)*
    term       := signed (("*" | "/") signed)*
    signed     := "-" signed | power
    power      := postfix ("^" signed)?            right associative
    postfix    := primary ("!" | superscript)*
    primary    := number | constant
                | "(" expression ")"
                | "|" expression "|"
                | function "(" expression ")"
                | root postfix

Unary minus binds looser than "^", so -2^2 is -4. A root applies to
the postfix operand that follows it, so √16/4 is 1 and √(3²) is 3.
There is no implicit multiplication and no unary plus: "2π" and
"1++1" are ParseErrors.
"""

from __future__ import annotations

import math
from contextlib import contextmanager
from typing import Iterator, Optional

from ..errors import (
    DivisionByZeroError,
    InvalidExpressionError,
    NumericOverflowError,
    ParseError,
)
from .lexer import Token, TokenKind, tokenize


# =============================================================================
# CONFIGURATION CONSTANTS
# =============================================================================

# Deepest allowed nesting of groups, roots and signs
MAX_NESTING_DEPTH = 64

# math.factorial(171) no longer fits in a float
MAX_FACTORIAL_OPERAND = 170

# How close to an integer a factorial operand must be
INTEGER_EPSILON = 1e-9

TRIG_FUNCTIONS = {
    "sin": math.sin,
    "cos": math.cos,
    "tan": math.tan,
}


# =============================================================================
# PUBLIC API
# =============================================================================

def evaluate(text: str) -> float:
    """
    Evaluate a textual expression to a float.

    Raises:
        ParseError: On malformed syntax
        InvalidExpressionError: On unknown tokens, domain violations or
            non-finite results
        DivisionByZeroError: On division by zero
    """
    if not isinstance(text, str):
        raise TypeError(f"expression must be str, got {type(text).__name__}")
    return _Parser(text, tokenize(text)).parse()


# =============================================================================
# PARSER
# =============================================================================

class _Parser:
    """Single-use recursive-descent evaluator over a token list."""

    def __init__(self, text: str, tokens: list[Token]):
        self.text = text
        self.tokens = tokens
        self.index = 0
        self.depth = 0

    # -- token helpers --------------------------------------------------------

    @property
    def current(self) -> Token:
        return self.tokens[self.index]

    def _advance(self) -> Token:
        token = self.tokens[self.index]
        if token.kind != TokenKind.END:
            self.index += 1
        return token

    def _is_operator(self, *symbols: str) -> bool:
        token = self.current
        return token.kind == TokenKind.OPERATOR and token.text in symbols

    def _expect(self, kind: TokenKind, description: str) -> Token:
        token = self.current
        if token.kind != kind:
            raise self._unexpected(token, expected=description)
        return self._advance()

    def _unexpected(self, token: Token, expected: str) -> ParseError:
        found = "end of input" if token.kind == TokenKind.END else repr(token.text)
        return ParseError(
            f"expected {expected} at position {token.position}, found {found}",
            text=self.text,
            position=token.position,
        )

    @contextmanager
    def _nested(self) -> Iterator[None]:
        self.depth += 1
        if self.depth > MAX_NESTING_DEPTH:
            raise ParseError(
                f"expression nests deeper than {MAX_NESTING_DEPTH} levels",
                text=self.text,
                position=self.current.position,
            )
        try:
            yield
        finally:
            self.depth -= 1

    def _checked(self, value: float, operation: str) -> float:
        if math.isnan(value) or math.isinf(value):
            raise NumericOverflowError(
                f"{operation} produced a non-finite result",
                text=self.text,
            )
        return value

    # -- grammar --------------------------------------------------------------

    def parse(self) -> float:
        value = self._expression()
        if self.current.kind != TokenKind.END:
            raise self._unexpected(self.current, expected="an operator or end of input")
        return value

    def _expression(self) -> float:
        value = self._term()
        while self._is_operator("+", "-"):
            op = self._advance().text
            right = self._term()
            value = value + right if op == "+" else value - right
            value = self._checked(value, "addition" if op == "+" else "subtraction")
        return value

    def _term(self) -> float:
        value = self._signed()
        while self._is_operator("*", "/"):
            token = self._advance()
            right = self._signed()
            if token.text == "*":
                value = self._checked(value * right, "multiplication")
            else:
                if right == 0:
                    raise DivisionByZeroError(
                        f"division by zero at position {token.position}",
                        text=self.text,
                        position=token.position,
                    )
                value = self._checked(value / right, "division")
        return value

    def _signed(self) -> float:
        if self._is_operator("-"):
            self._advance()
            with self._nested():
                operand = self._signed()
            return -operand
        return self._power()

    def _power(self) -> float:
        base = self._postfix()
        if self._is_operator("^"):
            self._advance()
            with self._nested():
                exponent = self._signed()
            return self._raise(base, exponent)
        return base

    def _postfix(self) -> float:
        value = self._primary()
        while self.current.kind in (TokenKind.FACTORIAL, TokenKind.SUPERSCRIPT):
            token = self._advance()
            if token.kind == TokenKind.FACTORIAL:
                value = self._factorial(value)
            else:
                value = self._raise(value, token.value)
        return value

    def _primary(self) -> float:
        token = self.current

        if token.kind in (TokenKind.NUMBER, TokenKind.CONSTANT):
            self._advance()
            return self._checked(token.value, f"literal {token.text}")

        if token.kind == TokenKind.LPAREN:
            self._advance()
            with self._nested():
                value = self._expression()
            self._expect(TokenKind.RPAREN, "')'")
            return value

        if token.kind == TokenKind.BAR:
            self._advance()
            with self._nested():
                value = self._expression()
            self._expect(TokenKind.BAR, "closing '|'")
            return abs(value)

        if token.kind == TokenKind.FUNCTION:
            return self._function()

        if token.kind == TokenKind.ROOT:
            self._advance()
            with self._nested():
                radicand = self._postfix()
            return self._root(radicand, int(token.value))

        raise self._unexpected(token, expected="a number, constant, function or '('")

    def _function(self) -> float:
        token = self._advance()
        self._expect(TokenKind.LPAREN, f"'(' after {token.text}")
        with self._nested():
            argument = self._expression()
        self._expect(TokenKind.RPAREN, "')'")

        name = token.text
        if name in TRIG_FUNCTIONS:
            value = TRIG_FUNCTIONS[name](argument)
        elif name == "sqrt":
            value = self._root(argument, 2)
        else:
            value = self._logarithm(name, argument, token.base)

        if token.power is not None:
            value = self._raise(value, token.power)
        return self._checked(value, name)

    # -- operations -----------------------------------------------------------

    def _raise(self, base: float, exponent: float) -> float:
        if base == 0 and exponent < 0:
            raise DivisionByZeroError(
                "zero raised to a negative power",
                text=self.text,
            )
        try:
            value = math.pow(base, exponent)
        except OverflowError as e:
            raise NumericOverflowError(
                f"power {base}^{exponent} overflows",
                text=self.text,
            ) from e
        except ValueError as e:
            raise InvalidExpressionError(
                f"power {base}^{exponent} is not a real number",
                text=self.text,
            ) from e
        return self._checked(value, "power")

    def _root(self, radicand: float, index: int) -> float:
        if index < 2:
            raise InvalidExpressionError(
                f"root index must be at least 2, got {index}",
                text=self.text,
            )
        if radicand < 0:
            if index % 2 == 0:
                raise InvalidExpressionError(
                    f"even root of negative number {radicand}",
                    text=self.text,
                )
            return -self._root(-radicand, index)
        if index == 2:
            return math.sqrt(radicand)
        return self._checked(radicand ** (1.0 / index), "root")

    def _factorial(self, operand: float) -> float:
        nearest = round(operand)
        if operand < 0 or abs(operand - nearest) > INTEGER_EPSILON:
            raise InvalidExpressionError(
                f"factorial requires a non-negative integer, got {operand}",
                text=self.text,
            )
        if nearest > MAX_FACTORIAL_OPERAND:
            raise NumericOverflowError(
                f"{int(nearest)}! overflows a float",
                text=self.text,
            )
        return float(math.factorial(int(nearest)))

    def _logarithm(self, name: str, argument: float, base: Optional[float]) -> float:
        if argument <= 0:
            raise InvalidExpressionError(
                f"{name} of non-positive number {argument}",
                text=self.text,
            )
        if name == "ln":
            return math.log(argument)
        if base is None:
            return math.log10(argument)
        if base <= 0 or base == 1:
            raise InvalidExpressionError(
                f"invalid logarithm base {base}",
                text=self.text,
            )
        return math.log(argument, base)
