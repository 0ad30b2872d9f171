"""Lexical scanner turning an expression string into infix tokens."""
from fractions import Fraction
from typing import Dict, List

import numpy as np

from arithmetic_evaluator.common.errors import InvalidNumberError
from arithmetic_evaluator.common.tokens import (
    NumberToken,
    Operator,
    OperatorToken,
    Parenthesis,
    ParenthesisToken,
    Token,
)

DIGITS = frozenset("0123456789")
DECIMAL_SEPARATORS = frozenset(".,")

# Every recognised non-numeric symbol, ":" being an alias for division
SYMBOLS: Dict[str, Token] = {
    "+": OperatorToken(operator=Operator.ADD),
    "-": OperatorToken(operator=Operator.SUBTRACT),
    "*": OperatorToken(operator=Operator.MULTIPLY),
    "/": OperatorToken(operator=Operator.DIVIDE),
    ":": OperatorToken(operator=Operator.DIVIDE),
    "^": OperatorToken(operator=Operator.POWER),
    "(": ParenthesisToken(parenthesis=Parenthesis.LEFT),
    ")": ParenthesisToken(parenthesis=Parenthesis.RIGHT),
}


def _round_to_float32(exact: Fraction) -> np.float32:
    """
    Round a non-negative rational to the nearest float32, ties to even.

    Going through a double first can round twice; the neighbours of that first guess
    are compared against the exact value to undo it.
    """
    with np.errstate(over="ignore"):
        guess = np.float32(float(exact))
    if not np.isfinite(guess):
        return guess

    candidates = [
        np.nextafter(guess, np.float32(0)),
        guess,
        np.nextafter(guess, np.float32(np.inf)),
    ]
    return min(
        (c for c in candidates if np.isfinite(c)),
        key=lambda c: (abs(Fraction(float(c)) - exact), int(c.view(np.uint32)) & 1),
    )


def parse_number(lexeme: str) -> NumberToken:
    """
    Convert a numeric lexeme into a NumberToken.

    Both "." and "," are accepted as the decimal separator. The value is the
    correctly rounded single-precision value of the decimal literal.

    :param str lexeme: Run of digits and decimal separators

    :return: Number token holding the single-precision value
    :rtype: NumberToken
    :raises InvalidNumberError: If the lexeme is malformed or overflows single precision
    """
    try:
        value = _round_to_float32(Fraction(lexeme.replace(",", ".")))
    except ValueError as exc:
        raise InvalidNumberError(f"Invalid number in expression: {lexeme!r}") from exc
    except OverflowError as exc:
        raise InvalidNumberError(f"Number out of range: {lexeme!r}") from exc

    if not np.isfinite(value):
        raise InvalidNumberError(f"Number out of range: {lexeme!r}")

    return NumberToken(value=float(value))


def tokenize(expr: str) -> List[Token]:
    """
    Split an arithmetic expression into tokens.

    Digits and decimal separators accumulate into a number; any other character ends
    the pending number. Characters outside the alphabet, whitespace included, are skipped.

    :param str expr: Arithmetic expression as a string

    :return: List of tokens in infix order
    :rtype: List[Token]
    :raises InvalidNumberError: If a numeric lexeme does not parse
    """
    tokens: List[Token] = []
    buffer: List[str] = []

    for char in expr:
        if char in DIGITS or char in DECIMAL_SEPARATORS:
            buffer.append(char)
            continue

        if buffer:
            tokens.append(parse_number("".join(buffer)))
            buffer.clear()

        symbol = SYMBOLS.get(char)
        if symbol is not None:
            tokens.append(symbol)

    if buffer:
        tokens.append(parse_number("".join(buffer)))

    return tokens
