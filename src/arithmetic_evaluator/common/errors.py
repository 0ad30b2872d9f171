"""Exceptions raised while evaluating an arithmetic expression."""


class EvaluationError(ValueError):
    """Base class for every failure of the evaluation pipeline."""


class NoExpressionError(EvaluationError):
    """No expression was given to evaluate."""


class InvalidNumberError(EvaluationError):
    """A numeric lexeme could not be parsed as a finite single-precision scalar."""


class MismatchedParenthesesError(EvaluationError):
    """A parenthesis has no matching counterpart."""


class InvalidExpressionError(EvaluationError):
    """The postfix sequence does not reduce to exactly one value."""
