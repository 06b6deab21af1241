# src/storage/offer_store.py

"""Storage contract the offer service depends on."""

from abc import ABC, abstractmethod

from src.models.offer_record import OfferRecord


class OfferStore(ABC):
    """Persistence abstraction for offer records."""

    @abstractmethod
    def save(self, record: OfferRecord) -> OfferRecord:
        """Insert or update *record*; return it with ``id`` populated."""

    @abstractmethod
    def find_by_product_id(self, product_id: int) -> list[OfferRecord]:
        """Return every offer record for *product_id*."""
