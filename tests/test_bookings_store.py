from concurrent.futures import ThreadPoolExecutor

import pytest

from bookings_store import BookingsStore
from errors import StoreError


def make_store(tmp_path):
    return BookingsStore(str(tmp_path / "bookings.db"))


def test_add_find_update(tmp_path):
    store = make_store(tmp_path)
    a = store.add({"cabinId": "c1", "userId": "u1", "date": "2099-01-01", "time": "09:00", "status": "confirmed"})
    store.add({"cabinId": "c2", "userId": "u2", "date": "2099-01-01", "time": "09:15", "status": "confirmed"})
    b = store.add({"cabinId": "c3", "userId": "u1", "date": "2099-01-02", "time": "10:00", "status": "confirmed", "meta": {"guests": 2}})

    mine = store.find(userId="u1")
    assert [x["id"] for x in mine] == [a, b]
    assert mine[1]["meta"] == {"guests": 2}

    updated = store.update(a, {"status": "cancelled"})
    assert updated["status"] == "cancelled"
    assert store.get(a)["status"] == "cancelled"


def test_update_unknown_id(tmp_path):
    store = make_store(tmp_path)
    assert store.update("bkg_missing", {"status": "cancelled"}) is None
    assert store.get("bkg_missing") is None


def test_bad_field_raises_store_error(tmp_path):
    store = make_store(tmp_path)
    with pytest.raises(StoreError):
        store.find(colour="red")


def test_unreachable_database(tmp_path):
    with pytest.raises(StoreError):
        BookingsStore(str(tmp_path / "missing" / "bookings.db"))


def test_reset(tmp_path):
    store = make_store(tmp_path)
    store.add({"cabinId": "c1", "userId": "u1"})
    store.reset()
    assert store.find() == []


def test_concurrent_updates_report_their_own_result(tmp_path):
    store = make_store(tmp_path)
    ids = [store.add({"cabinId": "c1", "userId": "u1", "status": "confirmed"}) for _ in range(20)]

    def cancel_existing():
        return [store.update(i, {"status": "cancelled"}) for i in ids]

    def cancel_missing():
        return [store.update("bkg_missing", {"status": "cancelled"}) for _ in ids]

    with ThreadPoolExecutor(max_workers=2) as pool:
        real = pool.submit(cancel_existing)
        missing = pool.submit(cancel_missing)
        real_results, missing_results = real.result(), missing.result()

    assert all(r is not None and r["status"] == "cancelled" for r in real_results)
    assert missing_results == [None] * len(ids)
