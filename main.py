# main.py

"""Entry point for the SnackBar catalog command line."""

import argparse
import asyncio
import logging
import sys

from snackbar.config.logging_config import setup_logging

logger = logging.getLogger("snackbar.main")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="snackbar",
        description="Search Open Food Facts and find allergen-friendly alternatives.",
    )
    parser.add_argument(
        "query",
        nargs="?",
        default=None,
        help="Search query (at least 2 characters).",
    )
    parser.add_argument(
        "-c",
        "--code",
        default=None,
        help="Look up a single product by its barcode instead of searching.",
    )
    parser.add_argument(
        "-a",
        "--alternatives",
        action="store_true",
        default=False,
        help="With --code: also suggest allergen-friendly alternatives.",
    )
    parser.add_argument(
        "-n",
        "--page-size",
        type=int,
        default=None,
        dest="page_size",
        help="Maximum number of search results.",
    )
    parser.add_argument(
        "-l",
        "--limit",
        type=int,
        default=None,
        help="Maximum number of alternatives (default: 4).",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=["json", "table"],
        default="json",
        dest="output_format",
        help="Output format (default: json).",
    )
    parser.add_argument(
        "--health",
        action="store_true",
        default=False,
        help="Run a connectivity health check on the catalog.",
    )
    return parser


def main() -> None:
    """Route to health check, product lookup or search."""
    log_file = setup_logging()
    logger.info("snackbar starting, log file: %s", log_file)

    parser = _build_parser()
    args = parser.parse_args()

    from snackbar.cli.runner import cli_product, cli_search, run_health_check

    if args.health:
        exit_code = asyncio.run(run_health_check())
    elif args.code is not None:
        exit_code = asyncio.run(
            cli_product(
                code=args.code,
                output_format=args.output_format,
                with_alternatives=args.alternatives,
                limit=args.limit,
            )
        )
    elif args.query is not None:
        exit_code = asyncio.run(
            cli_search(
                query=args.query,
                page_size=args.page_size,
                output_format=args.output_format,
            )
        )
    else:
        parser.print_help(sys.stderr)
        exit_code = 2
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
