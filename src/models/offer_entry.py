# src/models/offer_entry.py

"""Transport-facing offer entry and its mapping to/from OfferRecord."""

import re
from dataclasses import dataclass
from datetime import date

from src.models.offer_record import OfferRecord

# Signed ASCII decimal, no padding or digit separators
_ID_RE = re.compile(r"[+-]?[0-9]+")

# Ids must fit a signed 64-bit SQLite INTEGER
_MIN_ID = -(2**63)
_MAX_ID = 2**63 - 1


@dataclass
class OfferEntry:
    """Loosely-typed offer exchanged with external callers.

    Ids travel as text; ``id`` stays ``None`` until the entry has
    been persisted.
    """

    product_id: str
    shop_id: str
    price: float
    date_from: date | None = None
    date_to: date | None = None
    id: str | None = None


def parse_id(text: str) -> int:
    """Parse a signed 64-bit decimal id.

    Raises ``ValueError`` for anything else, including padded text,
    underscores, non-ASCII digits and out-of-range values.
    """
    if _ID_RE.fullmatch(text) is None:
        msg = f"Not an integer id: {text!r}"
        raise ValueError(msg)
    value = int(text)
    if not _MIN_ID <= value <= _MAX_ID:
        msg = f"Id out of 64-bit range: {text}"
        raise ValueError(msg)
    return value


def entry_to_record(entry: OfferEntry) -> OfferRecord:
    """Build a fresh (unsaved, active) OfferRecord from an entry.

    Raises ``ValueError`` if ``product_id`` or ``shop_id`` is not
    accepted by :func:`parse_id`.
    """
    return OfferRecord(
        product_id=parse_id(entry.product_id),
        store_id=parse_id(entry.shop_id),
        price=entry.price,
        date_from=entry.date_from,
        date_to=entry.date_to,
        withdrawn=False,
    )


def record_to_entry(record: OfferRecord) -> OfferEntry:
    """Convert a stored record back to its transport shape."""
    return OfferEntry(
        product_id=str(record.product_id),
        shop_id=str(record.store_id),
        price=record.price,
        date_from=record.date_from,
        date_to=record.date_to,
        id=str(record.id) if record.id is not None else None,
    )
