# main.py

"""Entry point for the catalogue command-line client."""

import argparse
import asyncio
import logging
import sys

from catalogue.config.logging_config import setup_logging
from catalogue.config.settings import Settings

logger = logging.getLogger("catalogue.main")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="catalogue",
        description="Browse the remote product catalogue.",
        epilog=f"Catalogue server: {Settings.BASE_URL}",
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
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Echo debug logging to stderr.",
    )
    parser.add_argument(
        "--health",
        action="store_true",
        default=False,
        help="Probe the list and detail endpoints and exit.",
    )

    commands = parser.add_subparsers(dest="command")
    commands.add_parser("list", help="Print every product in the feed.")
    show = commands.add_parser(
        "show", help="Print one product with its full details."
    )
    show.add_argument("product_id", help="ID of the product to show.")
    return parser


def main() -> None:
    """Route to the requested CLI command."""
    parser = _build_parser()
    args = parser.parse_args()

    log_file = setup_logging(verbose=args.verbose)
    logger.info("catalogue starting, log file: %s", log_file)

    from catalogue.cli import runner

    if args.health:
        exit_code = asyncio.run(runner.run_health_check())
    elif args.command == "show":
        exit_code = asyncio.run(
            runner.cli_show(args.product_id, args.output_format)
        )
    elif args.command == "list":
        exit_code = asyncio.run(runner.cli_list(args.output_format))
    else:
        parser.print_help(sys.stderr)
        exit_code = 2

    logger.info("catalogue exiting with code %d", exit_code)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
