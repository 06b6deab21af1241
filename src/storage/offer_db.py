# src/storage/offer_db.py

"""SQLite-backed offer store."""

import logging
import sqlite3
from datetime import date
from pathlib import Path
from typing import Any

from src.config.settings import Settings
from src.models.offer_record import OfferRecord
from src.storage.offer_store import OfferStore

logger = logging.getLogger("offer_ledger.store")

_SCHEMA = """\
CREATE TABLE IF NOT EXISTS offers (
    id         INTEGER PRIMARY KEY AUTOINCREMENT,
    product_id INTEGER NOT NULL,
    store_id   INTEGER NOT NULL,
    price      REAL    NOT NULL,
    date_from  TEXT,
    date_to    TEXT,
    withdrawn  INTEGER NOT NULL DEFAULT 0
);

CREATE INDEX IF NOT EXISTS idx_offers_product
    ON offers(product_id);
"""

_COLUMNS = (
    "id, product_id, store_id, price, date_from, date_to, withdrawn"
)


def _to_text(value: date | None) -> str | None:
    """Serialise an optional calendar date as ISO text."""
    return value.isoformat() if value is not None else None


def _to_date(value: str | None) -> date | None:
    """Parse optional ISO text back into a calendar date."""
    return date.fromisoformat(value) if value else None


def _row_to_record(row: tuple[Any, ...]) -> OfferRecord:
    return OfferRecord(
        id=row[0],
        product_id=row[1],
        store_id=row[2],
        price=row[3],
        date_from=_to_date(row[4]),
        date_to=_to_date(row[5]),
        withdrawn=bool(row[6]),
    )


class OfferDB(OfferStore):
    """SQLite store for product offer records."""

    def __init__(
        self, db_path: Path | None = None,
    ) -> None:
        path = db_path or Settings.DB_PATH
        path.parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(
            str(path), check_same_thread=False,
        )
        try:
            self._conn.execute("PRAGMA journal_mode=WAL")
            self._conn.executescript(_SCHEMA)
        except sqlite3.Error:
            self._conn.close()
            raise
        logger.debug("OfferDB opened at %s", path)

    def close(self) -> None:
        """Close the database connection."""
        self._conn.close()

    # ── Writing ──────────────────────────────────────────

    def save(self, record: OfferRecord) -> OfferRecord:
        """Insert a new record or update an existing one by id.

        New rows get their generated id written onto *record*.
        Raises ``LookupError`` when updating an id that is not stored.
        """
        values = (
            record.product_id,
            record.store_id,
            record.price,
            _to_text(record.date_from),
            _to_text(record.date_to),
            int(record.withdrawn),
        )

        if record.id is None:
            cur = self._conn.execute(
                "INSERT INTO offers "
                "(product_id, store_id, price, date_from, date_to, withdrawn) "
                "VALUES (?, ?, ?, ?, ?, ?)",
                values,
            )
            self._conn.commit()
            record.id = cur.lastrowid
            logger.info(
                "Inserted offer %s (product=%d, store=%d, price=%.2f)",
                record.id,
                record.product_id,
                record.store_id,
                record.price,
            )
            return record

        cur = self._conn.execute(
            "UPDATE offers SET product_id = ?, store_id = ?, price = ?, "
            "date_from = ?, date_to = ?, withdrawn = ? "
            "WHERE id = ?",
            (*values, record.id),
        )
        if cur.rowcount == 0:
            self._conn.rollback()
            msg = f"No offer with id {record.id}"
            raise LookupError(msg)
        self._conn.commit()
        logger.info("Updated offer %s", record.id)
        return record

    # ── Querying ─────────────────────────────────────────

    def find_by_product_id(self, product_id: int) -> list[OfferRecord]:
        """Return all offers for a product in insertion order."""
        rows = self._conn.execute(
            f"SELECT {_COLUMNS} FROM offers "
            "WHERE product_id = ? ORDER BY id ASC",
            (product_id,),
        ).fetchall()
        logger.debug(
            "Found %d offers for product %d", len(rows), product_id,
        )
        return [_row_to_record(r) for r in rows]
