# main.py

"""Entry point for the listing_matcher batch reconciliation."""

import argparse
import logging
import sys
from pathlib import Path

from src.config.logging_config import setup_logging
from src.config.settings import Settings

logger = logging.getLogger("listing_matcher.main")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    currencies = ", ".join(sorted(Settings.CURRENCY_MULTIPLIERS))

    parser = argparse.ArgumentParser(
        prog="listing_matcher",
        description="Match marketplace listings to catalog products.",
        epilog=f"Supported currencies: {currencies}",
    )
    parser.add_argument(
        "-p",
        "--products",
        type=Path,
        default=Settings.DATA_DIR / Settings.PRODUCTS_FILE,
        help="JSON-lines catalog file (default: data/products.txt).",
    )
    parser.add_argument(
        "-l",
        "--listings",
        type=Path,
        default=Settings.DATA_DIR / Settings.LISTINGS_FILE,
        help="JSON-lines listings file (default: data/listings.txt).",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Results file (default: results/results.txt).",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=["jsonl", "table"],
        default="jsonl",
        dest="output_format",
        help="Also print a match table with 'table' (default: jsonl).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Show INFO log messages on the console.",
    )
    return parser


def main() -> None:
    """Parse arguments, run one reconciliation and exit."""
    from src.cli.runner import run_reconciliation

    parser = _build_parser()
    args = parser.parse_args()

    log_file = setup_logging(
        logging.INFO if args.verbose else logging.WARNING
    )
    logger.info("listing_matcher starting, log file: %s", log_file)

    exit_code = run_reconciliation(
        products_path=args.products,
        listings_path=args.listings,
        output_path=args.output,
        output_format=args.output_format,
    )
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
