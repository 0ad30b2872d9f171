"""Worker process for evaluating arithmetic expressions."""
from multiprocessing.connection import Connection
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from arithmetic_evaluator.common.errors import EvaluationError
from arithmetic_evaluator.common.logger import logger
from arithmetic_evaluator.common.models import EvaluationOutcome, EvaluationRequest
from arithmetic_evaluator.common.parser import evaluate


class WorkerProcess(BaseModel):
    """
    Worker process responsible for evaluating a single arithmetic expression.

    Lifecycle:
        - Spawned by the batch evaluator
        - Receives one expression only
        - Sends the outcome (result or error) through a Pipe
        - Terminates immediately after computation
    """

    # Make the Pydantic instance immutable (read-only)
    # Allow arbitrary types like multiprocessing.Connection
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    conn: Connection = Field(..., description="Connection object for sending outcomes back")
    request: EvaluationRequest = Field(..., description="Expression to evaluate and its line")

    def compute(self) -> EvaluationOutcome:
        """
        Evaluate the expression, turning evaluation failures into an error outcome.

        :return: Outcome holding either the result or the error message
        :rtype: EvaluationOutcome
        """
        try:
            result = evaluate(self.request.expression)
        except EvaluationError as exc:
            logger.error(
                f"👷❌ Worker failed on line {self.request.line}: {exc}\n"
                f"Invalid arithmetic expression, could not evaluate: {self.request.expression!r}"
            )
            return EvaluationOutcome(
                line=self.request.line,
                expression=self.request.expression,
                error=str(exc),
            )

        return EvaluationOutcome(
            line=self.request.line,
            expression=self.request.expression,
            result=float(result),
        )

    def run(self) -> None:
        """
        Evaluate the arithmetic expression and send the outcome through the pipe.

        :return: None
        """
        logger.info(f"👷🏁 Worker started on line {self.request.line}: {self.request.expression}")

        outcome: Optional[EvaluationOutcome] = None
        try:
            outcome = self.compute()
            self.conn.send(outcome.model_dump())
        finally:
            # Always close the connection
            self.conn.close()

            if outcome is not None and outcome.succeeded:
                logger.info(f"👷✅ Worker finished on line {self.request.line}: {outcome.result}")
