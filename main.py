# main.py

"""Entry point for the offer_ledger command line."""

import argparse
import logging
import sys
from pathlib import Path

from src.config.logging_config import setup_logging
from src.config.settings import Settings
from src.models.offer_entry import parse_id

logger = logging.getLogger("offer_ledger.main")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="offer_ledger",
        description="Record and query product offers across stores.",
    )
    parser.add_argument(
        "--db",
        default=None,
        dest="db_path",
        type=Path,
        help=f"SQLite database path (default: {Settings.DB_PATH}).",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    add = commands.add_parser(
        "add", help="Record a new offer with the dates as given.",
    )
    add.add_argument("product_id", help="Product id.")
    add.add_argument("shop_id", help="Shop id.")
    add.add_argument("price", type=float, help="Offer price.")
    add.add_argument(
        "--date-from",
        default=None,
        dest="date_from",
        help="Effective date (YYYY-MM-DD).",
    )
    add.add_argument(
        "--date-to",
        default=None,
        dest="date_to",
        help="End date (YYYY-MM-DD); omit for open-ended.",
    )

    restock = commands.add_parser(
        "restock", help="Record an offer effective from today.",
    )
    restock.add_argument("product_id", type=parse_id, help="Product id.")
    restock.add_argument("store_id", type=parse_id, help="Store id.")
    restock.add_argument("price", type=float, help="Offer price.")
    restock.add_argument(
        "--date-to",
        default=None,
        dest="date_to",
        help="End date (YYYY-MM-DD); omit for open-ended.",
    )

    listing = commands.add_parser(
        "list", help="List all offers for a product.",
    )
    listing.add_argument("product_id", type=parse_id, help="Product id.")
    listing.add_argument(
        "-f",
        "--format",
        choices=Settings.OUTPUT_FORMATS,
        default=Settings.DEFAULT_OUTPUT_FORMAT,
        dest="output_format",
        help="Output format (default: json).",
    )
    return parser


def main() -> None:
    """Dispatch the requested sub-command and exit with its status."""
    log_file = setup_logging()
    logger.info("offer_ledger starting, log file: %s", log_file)

    args = _build_parser().parse_args()

    from src.cli.runner import run_add, run_list, run_restock

    if args.command == "add":
        exit_code = run_add(
            args.product_id,
            args.shop_id,
            args.price,
            args.date_from,
            args.date_to,
            db_path=args.db_path,
        )
    elif args.command == "restock":
        exit_code = run_restock(
            args.product_id,
            args.store_id,
            args.price,
            args.date_to,
            db_path=args.db_path,
        )
    else:
        exit_code = run_list(
            args.product_id,
            args.output_format,
            db_path=args.db_path,
        )
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
