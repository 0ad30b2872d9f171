"""
Command-line entry points.

- arithmetic-evaluator EXPRESSION: evaluate one expression and print the result
- arithmetic-evaluator-batch FILE: evaluate every line of a text file or archive
  with worker processes and write the results next to it
"""

import argparse
from pathlib import Path
import sys
from typing import List, Optional

from pydantic import BaseModel, FilePath, ValidationError

from arithmetic_evaluator.batch.evaluator import BatchEvaluator, build_output_path
from arithmetic_evaluator.common.errors import EvaluationError, NoExpressionError
from arithmetic_evaluator.common.logger import logger
from arithmetic_evaluator.common.parser import evaluate, format_result
from arithmetic_evaluator.common.sources import read_source, split_expressions


class BatchCliArgs(BaseModel):
    """
    Pydantic model used to validate the batch CLI arguments.

    Attributes
    ----------
    file_path : FilePath
        Path to the file containing arithmetic expressions.
    """

    file_path: FilePath


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse the single-expression command-line arguments.

    The expression is optional here so that a missing one is reported by run().

    :param argv: Arguments without the program name, sys.argv[1:] when None
    :return: Parsed arguments, expression is None when omitted
    :rtype: argparse.Namespace
    """
    parser = argparse.ArgumentParser(
        prog="arithmetic-evaluator",
        description="Evaluate an infix arithmetic expression (+ - * / : ^ and parentheses)",
    )
    parser.add_argument("expression", nargs="?", help="Expression to evaluate, e.g. '2*(3+4)-5'")
    return parser.parse_args(argv)


def parse_batch_args(argv: Optional[List[str]] = None) -> BatchCliArgs:
    """
    Parse and validate the batch command-line arguments.

    :param argv: Arguments without the program name, sys.argv[1:] when None
    :return: Validated CLI arguments
    :rtype: BatchCliArgs
    """
    parser = argparse.ArgumentParser(
        prog="arithmetic-evaluator-batch",
        description="Evaluate one arithmetic expression per line of a text file or archive",
    )
    parser.add_argument(
        "file_path",
        help="Path to the .txt, .zip, .tar.xz or .7z file containing expressions",
    )
    args = parser.parse_args(argv)

    try:
        return BatchCliArgs(file_path=args.file_path)
    except ValidationError as exc:
        parser.error(str(exc))


def run(expression: Optional[str]) -> str:
    """
    Evaluate an expression and return its printable result.

    :param expression: Expression given on the command line, None when missing
    :return: Textual result
    :rtype: str
    :raises EvaluationError: If the expression is missing or cannot be evaluated
    """
    if expression is None:
        raise NoExpressionError("No expression provided")
    return format_result(evaluate(expression))


def main(argv: Optional[List[str]] = None) -> int:
    """
    Evaluate the expression given on the command line.

    The result goes to stdout; on failure a short diagnostic goes to stderr.

    :return: Process exit status, 0 on success and 1 on evaluation failure
    """
    args = parse_args(argv)

    try:
        output = run(args.expression)
    except EvaluationError as exc:
        logger.debug(f"❌ Evaluation failed: {exc!r}")
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(output)
    return 0


def batch_main(argv: Optional[List[str]] = None) -> int:
    """
    Evaluate every expression of the input file and write them to '<input>_results.txt'.

    :return: Process exit status, 0 when every line evaluated and 1 otherwise
    """
    cli_args = parse_batch_args(argv)
    input_path: Path = Path(cli_args.file_path)
    output_path: Path = build_output_path(input_path)

    try:
        expressions = split_expressions(read_source(input_path))
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    failures = BatchEvaluator(output_file=output_path).run(expressions)
    print(output_path)
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
