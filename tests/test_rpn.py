"""Test the RPN evaluator."""
import numpy as np
import pytest

from arithmetic_evaluator.common.errors import InvalidExpressionError
from arithmetic_evaluator.common.rpn import evaluate_rpn
from arithmetic_evaluator.common.tokens import (
    NumberToken,
    Operator,
    OperatorToken,
    Parenthesis,
    ParenthesisToken,
)


def num(value):
    return NumberToken(value=value)


def op(operator):
    return OperatorToken(operator=Operator(operator))


@pytest.mark.parametrize("tokens,expected", [
    ([num(42)], 42.0),
    ([num(2), num(3), op("+")], 5.0),
    ([num(10), num(4), op("-")], 6.0),
    ([num(3), num(5), op("*")], 15.0),
    ([num(8), num(2), op("/")], 4.0),
    ([num(2), num(10), op("^")], 1024.0),
    ([num(3), num(4), num(2), op("*"), op("+")], 11.0),
])
def test_evaluate_rpn_valid(tokens, expected):
    """evaluate_rpn reduces valid sequences to their value."""
    assert evaluate_rpn(tokens) == expected


def test_evaluate_rpn_operand_order():
    """The first popped value is the right operand."""
    assert evaluate_rpn([num(1), num(2), op("-")]) == -1.0
    assert evaluate_rpn([num(1), num(4), op("/")]) == 0.25
    assert evaluate_rpn([num(2), num(3), op("^")]) == 8.0


def test_evaluate_rpn_returns_float32():
    """Results are single-precision scalars."""
    result = evaluate_rpn([num(1), num(3), op("/")])
    assert isinstance(result, np.float32)
    assert result == np.float32(1) / np.float32(3)


def test_division_by_zero_follows_ieee():
    """Division by zero yields infinity or nan instead of an error."""
    assert evaluate_rpn([num(1), num(0), op("/")]) == np.inf
    assert evaluate_rpn([num(-1), num(0), op("/")]) == -np.inf
    assert np.isnan(evaluate_rpn([num(0), num(0), op("/")]))


def test_invalid_power_is_nan():
    """A fractional power of a negative base is nan."""
    assert np.isnan(evaluate_rpn([num(-8), num(0.5), op("^")]))


def test_overflow_is_infinite():
    """Results beyond single precision overflow to infinity."""
    assert evaluate_rpn([num(1e30), num(1e30), op("*")]) == np.inf


@pytest.mark.parametrize("tokens", [
    [],                                # Nothing to evaluate
    [op("+")],                         # No operands
    [num(1), op("+")],                 # One operand only
    [num(1), num(2)],                  # Remaining operands
    [num(1), num(2), num(3), op("+")], # Remaining operands after reduction
    [num(1), ParenthesisToken(parenthesis=Parenthesis.LEFT)],
    [ParenthesisToken(parenthesis=Parenthesis.RIGHT)],
])
def test_evaluate_rpn_invalid(tokens):
    """Malformed sequences raise InvalidExpressionError."""
    with pytest.raises(InvalidExpressionError):
        evaluate_rpn(tokens)
