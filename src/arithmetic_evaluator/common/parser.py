"""Parse and evaluate arithmetic expressions safely."""
from typing import List

import numpy as np

from arithmetic_evaluator.common.logger import logger
from arithmetic_evaluator.common.rpn import evaluate_rpn
from arithmetic_evaluator.common.scanner import tokenize
from arithmetic_evaluator.common.shunting_yard import to_rpn
from arithmetic_evaluator.common.tokens import Token


def _render(tokens: List[Token]) -> str:
    return " ".join(str(token) for token in tokens)


def evaluate(expr: str) -> np.float32:
    """
    Evaluate an arithmetic expression safely.

    Design constraints:
        - No eval(), no dynamic code execution
        - Single-precision arithmetic, deterministic for a given input

    Algorithm:
        1. Scan the string into tokens
        2. Convert to Reverse Polish Notation (RPN) using Shunting-yard
        3. Evaluate RPN using a stack

    :param str expr: Arithmetic expression string

    :return: Computed result
    :rtype: np.float32
    :raises EvaluationError: If the expression is invalid or malformed
    """
    tokens: List[Token] = tokenize(expr)
    logger.debug(f"🔤 Tokens for {expr!r}: {_render(tokens)}")

    rpn: List[Token] = to_rpn(tokens)
    logger.debug(f"🔁 RPN for {expr!r}: {_render(rpn)}")

    return evaluate_rpn(rpn)


def format_result(value: float) -> str:
    """
    Render a result in its shortest single-precision form (e.g. 4.0, 1e-06, inf).

    :param float value: Result of an evaluation

    :return: Decimal representation
    :rtype: str
    """
    return str(np.float32(value))
