"""
Kemeny CLI - compute a Kemeny ranking from a margin file.

Usage:
    kemeny [FILE]                      - Rank candidates (stdin if no FILE)
    kemeny FILE --workers 4            - Spread the search over 4 processes
    kemeny FILE --explain              - Also list the pairs the ranking overrules
    kemeny FILE --list-permutations    - Print every permutation in search order

Output goes to stdout; logging goes to stderr.
Exit codes: 0 on success, 1 on an input error, 2 on bad arguments.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

from .pipeline import (
    PipelineResult,
    load_matrix_from_source,
    run_pipeline_from_source,
)
from ..domain import InputError, SearchResult
from ..ranking.permutations import iter_permutations
from ..ranking.search import DEFAULT_WORKERS


logger = logging.getLogger(__name__)


# =============================================================================
# OUTPUT FORMATTING
# =============================================================================

def format_result(result: SearchResult) -> str:
    """Two lines: the ranking, then its penalty."""
    return f"ranking = {result.format_ranking()}\nscore   = {result.score}"


def format_disagreements(result: PipelineResult) -> str:
    lines = ["disagreements:"]
    disagreements = result.get_disagreements()
    if not disagreements:
        lines.append("  (none)")
    for earlier, later, margin in disagreements:
        lines.append(f"  {later} over {earlier}: {margin}")
    lines.append(f"search position = {result.search_position}")
    return "\n".join(lines)


def format_error(error: InputError) -> str:
    return f"FATAL ERROR:\n  {error.message}"


def format_permutation_row(index: int, perm: tuple[int, ...]) -> str:
    return f"{index:>5}: " + " ".join(str(c) for c in perm)


# =============================================================================
# CLI COMMANDS
# =============================================================================

def cmd_rank(args: argparse.Namespace) -> int:
    """Find and print the Kemeny ranking."""
    try:
        result = run_pipeline_from_source(args.file, workers=args.workers)
    except InputError as e:
        logger.debug("Input rejected: %s", e)
        print(format_error(e))
        return 1

    print(format_result(result.search))
    if args.explain:
        print(format_disagreements(result))
    return 0


def cmd_list_permutations(args: argparse.Namespace) -> int:
    """Print every permutation of the candidates in enumeration order."""
    try:
        matrix = load_matrix_from_source(args.file)
    except InputError as e:
        print(format_error(e))
        return 1

    for index, perm in enumerate(iter_permutations(matrix.size)):
        print(format_permutation_row(index, perm))
    return 0


# =============================================================================
# MAIN ENTRY POINT
# =============================================================================

def positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def create_parser() -> argparse.ArgumentParser:
    """Create the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="kemeny",
        description="Exact Kemeny ranking from pairwise preference margins",
    )
    parser.add_argument(
        "file",
        nargs="?",
        default=None,
        help="Input file (reads standard input if omitted)",
    )
    parser.add_argument(
        "-w", "--workers",
        type=positive_int,
        default=DEFAULT_WORKERS,
        help="Worker processes for the search (default: %(default)s)",
    )
    parser.add_argument(
        "--explain",
        action="store_true",
        help="List the pairwise margins the ranking disagrees with",
    )
    parser.add_argument(
        "--list-permutations",
        action="store_true",
        help="Print every permutation in search order instead of ranking",
    )

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log progress to stderr",
    )
    verbosity.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Only log errors",
    )
    return parser


def configure_logging(args: argparse.Namespace) -> None:
    if args.verbose:
        level = logging.INFO
    elif args.quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)
    configure_logging(args)

    if args.list_permutations:
        return cmd_list_permutations(args)
    return cmd_rank(args)


if __name__ == "__main__":
    sys.exit(main())
