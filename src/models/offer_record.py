# src/models/offer_record.py

"""Storage-side offer record: a product offered by a store over a date window."""

from dataclasses import dataclass
from datetime import date


@dataclass
class OfferRecord:
    """One historical or current association between a product and a store."""

    product_id: int
    store_id: int
    price: float
    date_from: date | None = None
    date_to: date | None = None  # None = open-ended
    withdrawn: bool = False
    id: int | None = None  # assigned by the store on creation
