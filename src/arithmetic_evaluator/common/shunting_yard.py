"""Infix to Reverse Polish Notation conversion."""
from typing import List

from arithmetic_evaluator.common.errors import MismatchedParenthesesError
from arithmetic_evaluator.common.tokens import (
    Associativity,
    NumberToken,
    OperatorToken,
    Parenthesis,
    ParenthesisToken,
    Token,
)


def _yields_to(incoming: OperatorToken, top: Token) -> bool:
    """
    Tell whether the operator on top of the stack must be output before pushing incoming.

    :param OperatorToken incoming: Operator being read
    :param Token top: Current top of the operator stack

    :return: True if top has to be popped first
    :rtype: bool
    """
    if not isinstance(top, OperatorToken):
        return False
    if incoming.associativity is Associativity.LEFT:
        return incoming.precedence <= top.precedence
    return incoming.precedence < top.precedence


def to_rpn(tokens: List[Token]) -> List[Token]:
    """
    Convert infix tokens into Reverse Polish Notation (RPN) using the Shunting-yard algorithm.

    Operators wait on a stack until an operator of lower precedence (or equal precedence,
    for left-associative ones) arrives; parentheses only group and are dropped from the output.

    Examples:
        - Infix: 3 + 4 * 2
        - RPN: 3 4 2 * +

    :param List[Token] tokens: Tokens in infix order

    :return: Tokens in RPN order
    :rtype: List[Token]
    :raises MismatchedParenthesesError: If a parenthesis has no counterpart
    """
    output: List[Token] = []
    stack: List[Token] = []

    for token in tokens:
        if isinstance(token, NumberToken):
            output.append(token)

        elif isinstance(token, OperatorToken):
            while stack and _yields_to(token, stack[-1]):
                output.append(stack.pop())
            stack.append(token)

        elif token.parenthesis is Parenthesis.LEFT:
            stack.append(token)

        else:
            # Unwind down to the matching left parenthesis, which is discarded
            while True:
                if not stack:
                    raise MismatchedParenthesesError("Mismatched parentheses: unexpected ')'")
                popped = stack.pop()
                if isinstance(popped, ParenthesisToken):
                    break
                output.append(popped)

    # Drain remaining operators, top of the stack first
    while stack:
        popped = stack.pop()
        if isinstance(popped, ParenthesisToken):
            raise MismatchedParenthesesError("Mismatched parentheses: unclosed '('")
        output.append(popped)

    return output
