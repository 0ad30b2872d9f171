"""Pydantic models for batch evaluation requests and outcomes."""
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from arithmetic_evaluator.common.parser import format_result


class EvaluationRequest(BaseModel):
    """A single expression read from an input file."""

    expression: str = Field(..., description="Arithmetic expression as a string")
    line: int = Field(..., ge=1, description="Line number in the input file")

    @field_validator("expression")
    def expression_must_not_be_empty(cls, v: str) -> str:
        """Ensure that the expression is not empty."""
        if not v.strip():
            raise ValueError("Expression cannot be empty")
        return v


class EvaluationOutcome(BaseModel):
    """Result, or error message, of an evaluated expression."""

    line: int = Field(..., ge=1, description="Line number in the input file")
    expression: str = Field(..., description="Original arithmetic expression")
    result: Optional[float] = Field(default=None, description="Evaluated numeric result")
    error: Optional[str] = Field(default=None, description="Reason the evaluation failed")

    @property
    def succeeded(self) -> bool:
        return self.error is None

    def render(self) -> str:
        """
        Format the outcome as one line of the results file.

        :return: "<expression> = <result>" or "<expression> -> ERROR: <error>"
        :rtype: str
        """
        if self.succeeded:
            return f"{self.expression} = {format_result(self.result)}"
        return f"{self.expression} -> ERROR: {self.error}"
