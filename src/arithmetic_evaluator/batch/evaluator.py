"""Evaluate a batch of arithmetic expressions using worker processes."""
from multiprocessing import Pipe, Process, cpu_count
from multiprocessing.connection import Connection, wait
from pathlib import Path
from typing import List, TextIO, Tuple

from pydantic import BaseModel, ConfigDict, Field

from arithmetic_evaluator.batch.worker import WorkerProcess
from arithmetic_evaluator.common.logger import logger
from arithmetic_evaluator.common.models import EvaluationOutcome, EvaluationRequest

ActiveWorker = Tuple[Process, Connection, EvaluationRequest]


def build_output_path(input_path: Path) -> Path:
    """
    Construct the results file path next to the input file.

    - Preserves the original folder
    - Replaces dots in extensions with underscores
    - Appends '_results.txt' at the end

    Examples
    --------
    input: resources/operations.7z
    output: resources/operations_7z_results.txt

    :param Path input_path: Path to the input file
    :return: Path to the output file
    """
    suffixes = "".join(input_path.suffixes)
    stem = input_path.name[: len(input_path.name) - len(suffixes)]
    suffix_safe = suffixes.replace(".", "_")
    return input_path.with_name(f"{stem}{suffix_safe}_results.txt")


class BatchEvaluator(BaseModel):
    """
    Evaluate many expressions concurrently, one process per expression.

    Features:
        - Spawns one worker process per expression.
        - Writes outcomes to disk as soon as a worker finishes.
        - Ensures each worker is joined immediately after finishing.
        - Keeps at most max_workers processes alive at once.
    """

    model_config = ConfigDict(frozen=True)

    output_file: Path = Field(..., description="Path to write evaluation results")
    max_workers: int = Field(default_factory=cpu_count, ge=1, description="Maximum concurrent workers")

    def _spawn_worker(self, request: EvaluationRequest) -> ActiveWorker:
        """
        Spawn a WorkerProcess for the given request and return its process and pipe.

        :param EvaluationRequest request: Expression and its line number

        :return: Tuple of (Process, parent pipe, request)
        :rtype: ActiveWorker
        """
        parent_conn, child_conn = Pipe(duplex=False)
        worker = WorkerProcess(conn=child_conn, request=request)
        process = Process(target=worker.run)
        process.start()
        # The child owns the sending end now; closing ours lets recv() see EOF if it dies
        child_conn.close()
        return process, parent_conn, request

    @staticmethod
    def _receive_outcome(
        pipe_conn: Connection, request: EvaluationRequest
    ) -> EvaluationOutcome:
        try:
            payload = pipe_conn.recv()
        except EOFError:
            logger.error(f"👷💥 Worker exited without a result on line {request.line}")
            return EvaluationOutcome(
                line=request.line,
                expression=request.expression,
                error="Worker exited without a result",
            )
        finally:
            pipe_conn.close()
        return EvaluationOutcome.model_validate(payload)

    def _collect_finished_workers(
        self, active_workers: List[ActiveWorker], f_out: TextIO
    ) -> List[EvaluationOutcome]:
        """
        Block until at least one worker has reported, then write every available outcome.

        Finished workers are removed from active_workers.

        :param list active_workers: List of (Process, Connection, EvaluationRequest) tuples
        :param TextIO f_out: Open file handle for writing results

        :return: Outcomes collected during this call
        :rtype: List[EvaluationOutcome]
        """
        ready = wait([pipe_conn for _, pipe_conn, _ in active_workers])
        outcomes: List[EvaluationOutcome] = []

        # Iterate in reverse to safely remove finished workers while iterating
        for i in reversed(range(len(active_workers))):
            proc, pipe_conn, request = active_workers[i]
            if pipe_conn not in ready:
                continue

            outcome = self._receive_outcome(pipe_conn, request)
            proc.join()
            active_workers.pop(i)

            # Write output immediately
            f_out.write(outcome.render() + "\n")
            f_out.flush()
            outcomes.append(outcome)

        return outcomes

    def run(self, expressions: List[str]) -> int:
        """
        Evaluate every expression and write one result line per expression to output_file.

        Steps:
            1. Spawn worker processes, respecting max_workers.
            2. Write each outcome as soon as its worker finishes.
            3. Wait for the remaining workers.

        :param List[str] expressions: Expressions in input order, line numbers start at 1

        :return: Number of expressions that failed to evaluate
        :rtype: int
        """
        logger.info(f"🧮 Evaluating {len(expressions)} expressions with up to {self.max_workers} workers")

        active_workers: List[ActiveWorker] = []
        outcomes: List[EvaluationOutcome] = []

        with self.output_file.open("w", encoding="utf-8") as f_out:
            for line_number, expr in enumerate(expressions, start=1):
                # Wait until a worker slot is available
                while len(active_workers) >= self.max_workers:
                    outcomes.extend(self._collect_finished_workers(active_workers, f_out))

                request = EvaluationRequest(expression=expr, line=line_number)
                active_workers.append(self._spawn_worker(request))

            # Collect remaining active workers
            while active_workers:
                outcomes.extend(self._collect_finished_workers(active_workers, f_out))

        failures = sum(1 for outcome in outcomes if not outcome.succeeded)
        logger.info(f"📝 Results written to {self.output_file} ({failures} failed)")
        return failures
