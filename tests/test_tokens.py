"""Test the token model and its operator tables."""
import numpy as np
from pydantic import TypeAdapter, ValidationError
import pytest

from arithmetic_evaluator.common.tokens import (
    ASSOCIATIVITY,
    OPERATIONS,
    PRECEDENCE,
    Associativity,
    NumberToken,
    Operator,
    OperatorToken,
    Parenthesis,
    ParenthesisToken,
    Token,
)


@pytest.mark.parametrize("operator,precedence,associativity", [
    (Operator.ADD, 1, Associativity.LEFT),
    (Operator.SUBTRACT, 1, Associativity.LEFT),
    (Operator.MULTIPLY, 2, Associativity.LEFT),
    (Operator.DIVIDE, 2, Associativity.LEFT),
    (Operator.POWER, 3, Associativity.RIGHT),
])
def test_operator_attributes(operator, precedence, associativity):
    """Each operator carries its precedence and associativity."""
    token = OperatorToken(operator=operator)
    assert PRECEDENCE[operator] == token.precedence == precedence
    assert ASSOCIATIVITY[operator] is token.associativity is associativity


def test_tables_cover_every_operator():
    """Every operator has an entry in each table."""
    for table in (PRECEDENCE, ASSOCIATIVITY, OPERATIONS):
        assert set(table) == set(Operator)


def test_operations_stay_in_single_precision():
    """Operator functions return float32 scalars for float32 operands."""
    for fn in OPERATIONS.values():
        assert isinstance(fn(np.float32(2), np.float32(3)), np.float32)


def test_token_str():
    """Tokens render as their symbol or number."""
    assert str(NumberToken(value=4)) == "4.0"
    assert str(OperatorToken(operator=Operator.POWER)) == "^"
    assert str(ParenthesisToken(parenthesis=Parenthesis.LEFT)) == "("


@pytest.mark.parametrize("value", [float("inf"), float("-inf"), float("nan")])
def test_number_token_rejects_non_finite(value):
    """A number token only holds finite values."""
    with pytest.raises(ValidationError):
        NumberToken(value=value)


def test_tokens_are_frozen():
    """Tokens cannot be mutated once created."""
    token = NumberToken(value=1.0)
    with pytest.raises(ValidationError):
        token.value = 2.0


def test_tokens_compare_by_value():
    """Two tokens built from the same data are equal."""
    assert OperatorToken(operator=Operator.ADD) == OperatorToken(operator=Operator.ADD)
    assert OperatorToken(operator=Operator.ADD) != OperatorToken(operator=Operator.SUBTRACT)
    assert NumberToken(value=1.0) != OperatorToken(operator=Operator.ADD)


@pytest.mark.parametrize("data,expected", [
    ({"kind": "number", "value": 2.5}, NumberToken(value=2.5)),
    ({"kind": "operator", "operator": "*"}, OperatorToken(operator=Operator.MULTIPLY)),
    ({"kind": "parenthesis", "parenthesis": ")"}, ParenthesisToken(parenthesis=Parenthesis.RIGHT)),
])
def test_token_union_discriminates_on_kind(data, expected):
    """The Token union picks the variant named by its kind."""
    assert TypeAdapter(Token).validate_python(data) == expected
