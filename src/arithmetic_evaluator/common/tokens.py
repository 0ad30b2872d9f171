"""Token vocabulary shared by the scanner, the shunting-yard converter and the RPN evaluator."""
from enum import Enum
from typing import Annotated, Callable, Literal, Union

import numpy as np
from pydantic import BaseModel, ConfigDict, Field


class Operator(str, Enum):
    """Binary operators, valued by their canonical symbol."""

    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"
    POWER = "^"


class Parenthesis(str, Enum):
    """Grouping symbols."""

    LEFT = "("
    RIGHT = ")"


class Associativity(Enum):
    """Tie-break rule between adjacent operators of equal precedence."""

    LEFT = "left"
    RIGHT = "right"


# Type alias for operator functions (taking two float32 scalars, returning a float32 scalar)
OperatorFn = Callable[[np.float32, np.float32], np.float32]

# Order of operations: higher binds tighter
PRECEDENCE: dict[Operator, int] = {
    Operator.ADD: 1,
    Operator.SUBTRACT: 1,
    Operator.MULTIPLY: 2,
    Operator.DIVIDE: 2,
    Operator.POWER: 3,
}

ASSOCIATIVITY: dict[Operator, Associativity] = {
    Operator.ADD: Associativity.LEFT,
    Operator.SUBTRACT: Associativity.LEFT,
    Operator.MULTIPLY: Associativity.LEFT,
    Operator.DIVIDE: Associativity.LEFT,
    Operator.POWER: Associativity.RIGHT,
}

# numpy ufuncs keep float32 operands in single precision
OPERATIONS: dict[Operator, OperatorFn] = {
    Operator.ADD: np.add,
    Operator.SUBTRACT: np.subtract,
    Operator.MULTIPLY: np.multiply,
    Operator.DIVIDE: np.true_divide,
    Operator.POWER: np.power,
}


class NumberToken(BaseModel):
    """A numeric literal, holding a finite value representable in single precision."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["number"] = "number"
    value: float = Field(..., allow_inf_nan=False, description="Literal value")

    def __str__(self) -> str:
        return str(np.float32(self.value))


class OperatorToken(BaseModel):
    """One of the five binary operators."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["operator"] = "operator"
    operator: Operator = Field(..., description="Operator kind")

    @property
    def precedence(self) -> int:
        return PRECEDENCE[self.operator]

    @property
    def associativity(self) -> Associativity:
        return ASSOCIATIVITY[self.operator]

    def __str__(self) -> str:
        return self.operator.value


class ParenthesisToken(BaseModel):
    """A left or right parenthesis."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["parenthesis"] = "parenthesis"
    parenthesis: Parenthesis = Field(..., description="Parenthesis side")

    def __str__(self) -> str:
        return self.parenthesis.value


Token = Annotated[
    Union[NumberToken, OperatorToken, ParenthesisToken],
    Field(discriminator="kind"),
]
