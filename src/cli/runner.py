# src/cli/runner.py

"""Headless CLI commands over the offer recorder."""

import json
import logging
import math
import sys
from datetime import date, datetime
from pathlib import Path

from rich.console import Console
from rich.table import Table

from src.config.settings import Settings
from src.models.offer_entry import OfferEntry, record_to_entry
from src.models.offer_record import OfferRecord
from src.services.offer_recorder import OfferRecorder
from src.storage.offer_db import OfferDB

logger = logging.getLogger("offer_ledger.cli")

# Stderr console for status messages so stdout stays clean for JSON
_err = Console(stderr=True)


def parse_date(value: str | None) -> date | None:
    """Parse a ``YYYY-MM-DD`` CLI argument; ``None`` passes through.

    Raises ``ValueError`` on malformed input.
    """
    if value is None:
        return None
    return datetime.strptime(value, Settings.DATE_FORMAT).date()


def check_price(price: float) -> float:
    """Reject NaN and infinite prices; return *price* unchanged."""
    if not math.isfinite(price):
        msg = f"Price must be a finite number, got {price}"
        raise ValueError(msg)
    return price


def _fmt_date(value: date | None) -> str | None:
    return value.strftime(Settings.DATE_FORMAT) if value else None


def _entry_to_dict(entry: OfferEntry) -> dict[str, object]:
    """Serialise an entry to a plain dict for JSON output."""
    return {
        "id": entry.id,
        "productId": entry.product_id,
        "shopId": entry.shop_id,
        "price": entry.price,
        "dateFrom": _fmt_date(entry.date_from),
        "dateTo": _fmt_date(entry.date_to),
    }


def _records_to_dicts(
    records: list[OfferRecord],
) -> list[dict[str, object]]:
    """Serialise a record list to plain dicts for JSON output."""
    return [
        {
            "id": r.id,
            "productId": r.product_id,
            "storeId": r.store_id,
            "price": r.price,
            "dateFrom": _fmt_date(r.date_from),
            "dateTo": _fmt_date(r.date_to),
            "withdrawn": r.withdrawn,
        }
        for r in records
    ]


def _print_table(product_id: int, records: list[OfferRecord]) -> None:
    """Render a Rich table of offers to stdout."""
    table = Table(
        title=f"Offers for product {product_id}",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("ID", style="dim", justify="right")
    table.add_column("Store", style="magenta", justify="right")
    table.add_column("Price", justify="right", style="green")
    table.add_column("From")
    table.add_column("To")
    table.add_column("Withdrawn", justify="center")

    for r in records:
        table.add_row(
            str(r.id),
            str(r.store_id),
            f"{r.price:,.2f}",
            _fmt_date(r.date_from) or "—",
            _fmt_date(r.date_to) or "—",
            "yes" if r.withdrawn else "no",
        )

    Console().print(table)


def _dump_json(payload: object) -> None:
    json.dump(payload, sys.stdout, ensure_ascii=False, indent=2)
    sys.stdout.write("\n")


def run_add(
    product_id: str,
    shop_id: str,
    price: float,
    date_from: str | None,
    date_to: str | None,
    db_path: Path | None = None,
) -> int:
    """Record a new offer entry and print it as JSON (0=ok, 1=fail)."""
    try:
        entry = OfferEntry(
            product_id=product_id,
            shop_id=shop_id,
            price=check_price(price),
            date_from=parse_date(date_from),
            date_to=parse_date(date_to),
        )
    except ValueError as exc:
        logger.error("Bad argument: %s", exc)
        _err.print(f"[red]Invalid input: {exc}[/red]")
        return 1

    db = OfferDB(db_path)
    try:
        recorder = OfferRecorder(db)
        try:
            recorder.record_new_entry(entry)
        except ValueError as exc:
            logger.error("Rejected entry %s: %s", entry, exc)
            _err.print(f"[red]Invalid id: {exc}[/red]")
            return 1
    finally:
        db.close()

    _err.print(f"[green]✓ Recorded offer {entry.id}[/green]")
    _dump_json(_entry_to_dict(entry))
    return 0


def run_restock(
    product_id: int,
    store_id: int,
    price: float,
    date_to: str | None,
    db_path: Path | None = None,
) -> int:
    """Record an offer effective from today (0=ok, 1=fail)."""
    try:
        record = OfferRecord(
            product_id=product_id,
            store_id=store_id,
            price=check_price(price),
            date_to=parse_date(date_to),
        )
    except ValueError as exc:
        logger.error("Bad argument: %s", exc)
        _err.print(f"[red]Invalid input: {exc}[/red]")
        return 1

    db = OfferDB(db_path)
    try:
        error = OfferRecorder(db).record_existing_record(record)
    finally:
        db.close()

    if error is not None:
        _err.print(
            f"[yellow]Saved without date normalisation: {error}[/yellow]"
        )
    _err.print(f"[green]✓ Recorded offer {record.id}[/green]")
    _dump_json(_entry_to_dict(record_to_entry(record)))
    return 0


def run_list(
    product_id: int,
    output_format: str = Settings.DEFAULT_OUTPUT_FORMAT,
    db_path: Path | None = None,
) -> int:
    """Print every offer for a product (0=found, 1=none)."""
    db = OfferDB(db_path)
    try:
        records = OfferRecorder(db).find_by_product(product_id)
    finally:
        db.close()

    if not records:
        _err.print(
            f"[yellow]No offers for product {product_id}.[/yellow]"
        )
        return 1

    if output_format == "table":
        _print_table(product_id, records)
    else:
        _dump_json(_records_to_dicts(records))
    return 0
