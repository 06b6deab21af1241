# tests/test_offer_recorder.py

"""Tests for OfferRecorder normalisation and delegation."""

import tempfile
import unittest
from datetime import date, datetime
from pathlib import Path
from unittest.mock import MagicMock

from src.models.offer_entry import OfferEntry
from src.models.offer_record import OfferRecord
from src.services.offer_recorder import OfferRecorder
from src.storage.offer_db import OfferDB
from src.storage.offer_store import OfferStore

_NOW = datetime(2026, 10, 19, 17, 45, 12)


class FakeStore(OfferStore):
    """In-memory store recording every save call."""

    def __init__(self) -> None:
        self.saved: list[OfferRecord] = []
        self._next_id = 1

    def save(self, record: OfferRecord) -> OfferRecord:
        """Assign a sequential id to new records and keep a copy."""
        if record.id is None:
            record.id = self._next_id
            self._next_id += 1
        self.saved.append(record)
        return record

    def find_by_product_id(self, product_id: int) -> list[OfferRecord]:
        """Filter saved records by product."""
        return [r for r in self.saved if r.product_id == product_id]


def _broken_clock() -> datetime:
    """Simulate a clock failure."""
    msg = "clock unavailable"
    raise RuntimeError(msg)


class TestRecordExistingRecord(unittest.TestCase):
    """Existing-record path: withdrawn reset and date_from = today."""

    def setUp(self) -> None:
        self.store = FakeStore()
        self.recorder = OfferRecorder(self.store, clock=lambda: _NOW)

    def test_resets_withdrawn(self) -> None:
        """A withdrawn record is saved as active."""
        record = OfferRecord(
            product_id=1, store_id=2, price=5.0, withdrawn=True,
        )
        self.recorder.record_existing_record(record)
        self.assertFalse(self.store.saved[0].withdrawn)

    def test_overwrites_date_from_with_today(self) -> None:
        """Caller-supplied date_from is replaced by today's date."""
        record = OfferRecord(
            product_id=1,
            store_id=2,
            price=5.0,
            date_from=date(2020, 1, 1),
            date_to=date(2027, 1, 1),
        )
        error = self.recorder.record_existing_record(record)
        self.assertIsNone(error)
        self.assertEqual(self.store.saved[0].date_from, date(2026, 10, 19))
        self.assertEqual(self.store.saved[0].date_to, date(2027, 1, 1))

    def test_date_from_has_no_time_component(self) -> None:
        """The stored value is a plain date, not a datetime."""
        record = OfferRecord(product_id=1, store_id=2, price=5.0)
        self.recorder.record_existing_record(record)
        self.assertNotIsInstance(
            self.store.saved[0].date_from, datetime,
        )

    def test_clock_failure_still_persists(self) -> None:
        """A broken clock is logged and returned, the save still happens."""
        recorder = OfferRecorder(self.store, clock=_broken_clock)
        record = OfferRecord(
            product_id=1,
            store_id=2,
            price=5.0,
            date_from=date(2020, 1, 1),
            withdrawn=True,
        )
        with self.assertLogs("offer_ledger.recorder", level="WARNING"):
            error = recorder.record_existing_record(record)

        self.assertIsInstance(error, RuntimeError)
        self.assertEqual(len(self.store.saved), 1)
        self.assertEqual(self.store.saved[0].date_from, date(2020, 1, 1))
        self.assertFalse(self.store.saved[0].withdrawn)

    def test_store_failure_propagates(self) -> None:
        """Persistence errors are not swallowed."""
        store = MagicMock(spec=OfferStore)
        store.save.side_effect = OSError("disk full")
        recorder = OfferRecorder(store, clock=lambda: _NOW)
        with self.assertRaises(OSError):
            recorder.record_existing_record(
                OfferRecord(product_id=1, store_id=2, price=5.0),
            )


class TestRecordNewEntry(unittest.TestCase):
    """New-entry path: parse ids, keep dates, write id back."""

    def setUp(self) -> None:
        self.store = FakeStore()
        self.recorder = OfferRecorder(self.store, clock=lambda: _NOW)

    def test_returns_same_entry_with_id(self) -> None:
        """The input entry is returned carrying the stored id."""
        entry = OfferEntry(product_id="7", shop_id="3", price=1.99)
        result = self.recorder.record_new_entry(entry)
        self.assertIs(result, entry)
        self.assertEqual(result.id, str(self.store.saved[0].id))
        self.assertTrue(result.id)

    def test_dates_are_kept_as_supplied(self) -> None:
        """No date normalisation on this path."""
        entry = OfferEntry(
            product_id="7",
            shop_id="3",
            price=1.99,
            date_from=date(2020, 5, 1),
            date_to=date(2020, 6, 1),
        )
        self.recorder.record_new_entry(entry)
        saved = self.store.saved[0]
        self.assertEqual(saved.date_from, date(2020, 5, 1))
        self.assertEqual(saved.date_to, date(2020, 6, 1))
        self.assertFalse(saved.withdrawn)

    def test_non_numeric_product_id_saves_nothing(self) -> None:
        """A bad product id raises and nothing is persisted."""
        entry = OfferEntry(product_id="abc", shop_id="3", price=1.99)
        with self.assertRaises(ValueError):
            self.recorder.record_new_entry(entry)
        self.assertEqual(self.store.saved, [])
        self.assertIsNone(entry.id)

    def test_non_numeric_shop_id_saves_nothing(self) -> None:
        """A bad shop id raises and nothing is persisted."""
        entry = OfferEntry(product_id="7", shop_id="", price=1.99)
        with self.assertRaises(ValueError):
            self.recorder.record_new_entry(entry)
        self.assertEqual(self.store.saved, [])


class TestFindByProduct(unittest.TestCase):
    """Read path delegates straight to the store."""

    def test_delegates_to_store(self) -> None:
        """The store's result is returned unchanged."""
        records = [OfferRecord(product_id=9, store_id=1, price=1.0, id=1)]
        store = MagicMock(spec=OfferStore)
        store.find_by_product_id.return_value = records
        result = OfferRecorder(store).find_by_product(9)
        store.find_by_product_id.assert_called_once_with(9)
        self.assertIs(result, records)


class TestRecorderWithSqlite(unittest.TestCase):
    """End-to-end behaviour against the SQLite store."""

    def setUp(self) -> None:
        self.tmp_dir = tempfile.mkdtemp()
        self.db = OfferDB(db_path=Path(self.tmp_dir) / "offers.db")
        self.recorder = OfferRecorder(self.db, clock=lambda: _NOW)

    def tearDown(self) -> None:
        self.db.close()

    def test_new_entry_then_find(self) -> None:
        """A recorded entry is visible through find_by_product."""
        d1, d2 = date(2026, 1, 1), date(2026, 12, 31)
        entry = OfferEntry(
            product_id="7",
            shop_id="3",
            price=1.99,
            date_from=d1,
            date_to=d2,
        )
        result = self.recorder.record_new_entry(entry)

        self.assertIsNotNone(result.id)
        self.assertEqual(result.product_id, "7")
        self.assertEqual(result.shop_id, "3")
        self.assertEqual(result.date_from, d1)
        self.assertEqual(result.date_to, d2)

        rows = self.recorder.find_by_product(7)
        self.assertEqual(len(rows), 1)
        self.assertEqual(str(rows[0].id), result.id)
        self.assertEqual(rows[0].store_id, 3)
        self.assertEqual(rows[0].price, 1.99)
        self.assertFalse(rows[0].withdrawn)

    def test_find_returns_only_requested_product(self) -> None:
        """Records for other products are excluded."""
        self.recorder.record_new_entry(
            OfferEntry(product_id="42", shop_id="1", price=1.0),
        )
        self.recorder.record_existing_record(
            OfferRecord(product_id=42, store_id=2, price=2.0),
        )
        self.recorder.record_new_entry(
            OfferEntry(product_id="41", shop_id="1", price=3.0),
        )

        rows = self.recorder.find_by_product(42)
        self.assertEqual(len(rows), 2)
        self.assertEqual({r.product_id for r in rows}, {42})

    def test_out_of_range_id_fails_before_save(self) -> None:
        """An oversized id is a parse error; nothing reaches the table."""
        entry = OfferEntry(
            product_id="99999999999999999999", shop_id="3", price=1.0,
        )
        with self.assertRaises(ValueError):
            self.recorder.record_new_entry(entry)
        self.assertIsNone(entry.id)
        self.assertEqual(self.recorder.find_by_product(3), [])

    def test_existing_record_stored_with_today(self) -> None:
        """date_from is persisted as today's date."""
        self.recorder.record_existing_record(
            OfferRecord(
                product_id=5,
                store_id=1,
                price=2.0,
                date_from=date(2001, 1, 1),
                withdrawn=True,
            ),
        )
        stored = self.recorder.find_by_product(5)[0]
        self.assertEqual(stored.date_from, date(2026, 10, 19))
        self.assertFalse(stored.withdrawn)


if __name__ == "__main__":
    unittest.main()
