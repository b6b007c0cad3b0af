"""
Command Line Interface
======================
Local front end for browsing prices and running an estimate.

Example:
    llm-cost models
    llm-cost estimate --model "GPT-4o mini" --input-text "Hello there" --users 1000
"""

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

import structlog
from tabulate import tabulate

from cost_estimator import __version__
from cost_estimator.config import settings
from cost_estimator.core.session import EstimationSession
from cost_estimator.exceptions import UnknownModelError
from cost_estimator.logging import configure_logging

logger = structlog.get_logger()

TABLE_HEADERS = (
    "Model",
    "Provider",
    "Input Price (per 1K tokens)",
    "Output Price (per 1K tokens)",
    "Context Window",
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="llm-cost",
        description="Estimate the cost of running an LLM-backed application.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("models", help="Show the pricing table")

    estimate = subparsers.add_parser("estimate", help="Estimate total cost")
    estimate.add_argument("--model", help=f"Model name (default: {settings.default_model})")
    input_group = estimate.add_mutually_exclusive_group()
    input_group.add_argument("--input-text", help="Example input text")
    input_group.add_argument("--input-file", type=Path, help="File with example input text")
    output_group = estimate.add_mutually_exclusive_group()
    output_group.add_argument("--output-text", help="Example output text")
    output_group.add_argument("--output-file", type=Path, help="File with example output text")
    estimate.add_argument("--input-tokens", help="Input token count, overrides the example text")
    estimate.add_argument("--output-tokens", help="Output token count, overrides the example text")
    estimate.add_argument("--users", help="Number of users")

    return parser


def _read_text(text: Optional[str], path: Optional[Path]) -> Optional[str]:
    if path is not None:
        return path.read_text(encoding="utf-8")
    return text


def cmd_models(session: EstimationSession) -> int:
    table = [
        (row.model, row.provider, row.input_price, row.output_price, row.context_window)
        for row in session.catalog.pricing_table()
    ]
    print(tabulate(table, headers=TABLE_HEADERS, tablefmt="github", disable_numparse=True))
    return 0


def cmd_estimate(session: EstimationSession, args: argparse.Namespace) -> int:
    if args.model:
        try:
            session.set_model(args.model)
        except UnknownModelError as e:
            print(f"error: {e}. Run 'llm-cost models' to list models.", file=sys.stderr)
            return 2

    try:
        input_text = _read_text(args.input_text, args.input_file)
        output_text = _read_text(args.output_text, args.output_file)
    except OSError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    with session.batch():
        if input_text is not None:
            session.set_example_input(input_text)
        if output_text is not None:
            session.set_example_output(output_text)
        if args.input_tokens is not None:
            session.set_token_count_directly("input", args.input_tokens)
        if args.output_tokens is not None:
            session.set_token_count_directly("output", args.output_tokens)
        if args.users is not None:
            session.set_user_count(args.users)

    estimate = session.estimate()
    for line in estimate.summary_lines():
        print(line)
    if not estimate.fits_context_window:
        print(
            f"Warning: {estimate.total_tokens} tokens exceed the "
            f"{estimate.context_window:,} token context window"
        )
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the command line interface."""
    configure_logging()
    args = build_parser().parse_args(argv)
    session = EstimationSession()
    logger.debug("Running command", command=args.command, model=session.selected_model)

    if args.command == "models":
        return cmd_models(session)
    return cmd_estimate(session, args)


if __name__ == "__main__":
    sys.exit(main())
