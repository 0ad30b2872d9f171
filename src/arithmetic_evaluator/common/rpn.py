"""Stack-based evaluation of Reverse Polish Notation token sequences."""
from typing import List

import numpy as np

from arithmetic_evaluator.common.errors import InvalidExpressionError
from arithmetic_evaluator.common.tokens import OPERATIONS, NumberToken, OperatorToken, Token


def evaluate_rpn(tokens: List[Token]) -> np.float32:
    """
    Reduce an RPN token sequence to a single-precision scalar.

    Division by zero, overflow and invalid powers follow IEEE 754 (inf or nan) and are not errors.

    :param List[Token] tokens: Tokens in RPN order

    :return: Computed result
    :rtype: np.float32
    :raises InvalidExpressionError: On operand underflow, a parenthesis token,
        or when the sequence does not leave exactly one value
    """
    stack: List[np.float32] = []

    with np.errstate(divide="ignore", over="ignore", under="ignore", invalid="ignore"):
        for token in tokens:
            if isinstance(token, NumberToken):
                stack.append(np.float32(token.value))

            elif isinstance(token, OperatorToken):
                # Operator requires two operands
                if len(stack) < 2:
                    raise InvalidExpressionError(
                        f"Invalid expression (not enough operands for {token})"
                    )
                right = stack.pop()
                left = stack.pop()
                stack.append(np.float32(OPERATIONS[token.operator](left, right)))

            else:
                raise InvalidExpressionError(f"Invalid expression (unexpected {token})")

    if not stack:
        raise InvalidExpressionError("Invalid expression (nothing to evaluate)")
    if len(stack) > 1:
        raise InvalidExpressionError(
            f"Invalid expression (remaining operands: {len(stack)})"
        )

    return stack[0]
