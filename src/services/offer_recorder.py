# src/services/offer_recorder.py

"""Records product offers and looks them up by product."""

import logging
from collections.abc import Callable
from datetime import datetime

from src.models.offer_entry import OfferEntry, entry_to_record
from src.models.offer_record import OfferRecord
from src.storage.offer_store import OfferStore

logger = logging.getLogger("offer_ledger.recorder")


class OfferRecorder:
    """Normalizes offer records and hands them to an OfferStore.

    The recorder holds no state between calls beyond the store and
    the clock it was built with.
    """

    def __init__(
        self,
        store: OfferStore,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._store = store
        self._clock = clock

    def record_existing_record(
        self, record: OfferRecord,
    ) -> Exception | None:
        """Mark *record* active, stamp it effective today and save it.

        ``date_from`` is overwritten with today's calendar date.  If
        today cannot be computed the record is saved with its old
        ``date_from`` and the error is logged and returned instead of
        raised.  Store failures propagate.
        """
        record.withdrawn = False

        error: Exception | None = None
        try:
            record.date_from = self._clock().date()
        except Exception as exc:
            logger.warning(
                "Could not normalise date_from for product %s "
                "(store %s); keeping %s",
                record.product_id,
                record.store_id,
                record.date_from,
                exc_info=True,
            )
            error = exc

        self._store.save(record)
        return error

    def record_new_entry(self, entry: OfferEntry) -> OfferEntry:
        """Persist a new offer from a transport entry.

        Dates are stored exactly as supplied.  The generated id is
        written back onto *entry*, which is returned.  Raises
        ``ValueError`` (before anything is saved) when the product or
        shop id is not numeric.
        """
        record = entry_to_record(entry)
        record.withdrawn = False

        saved = self._store.save(record)
        entry.id = str(saved.id)

        logger.info(
            "Recorded offer %s: product=%s shop=%s price=%.2f",
            entry.id,
            entry.product_id,
            entry.shop_id,
            entry.price,
        )
        return entry

    def find_by_product(self, product_id: int) -> list[OfferRecord]:
        """Return all offer records for *product_id* as stored."""
        return self._store.find_by_product_id(product_id)
