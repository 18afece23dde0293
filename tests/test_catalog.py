import threading
import time
from datetime import timedelta

import pytest

from nongkrongr.services import catalog as catalog_module
from nongkrongr.services.catalog import CafeCatalog


def test_snapshot_loads_lazily(seeded):
    catalog = CafeCatalog()
    assert catalog.needs_refresh()
    cafes = catalog.snapshot(seeded)
    assert [c.id for c in cafes] == ["cafe-kopi", "cafe-rooftop", "cafe-warung"]
    assert not catalog.needs_refresh()
    assert catalog.refreshed_at is not None


def test_snapshot_reports_amenity_and_thumbnail(seeded):
    cafe = CafeCatalog().snapshot(seeded)[0]
    assert [a.id for a in cafe.amenities] == ["outlet", "wifi"]
    assert cafe.thumbnail_url == ""


def test_concurrent_refresh_is_skipped(seeded):
    catalog = CafeCatalog()
    catalog.refresh(seeded)
    catalog._lock.acquire()
    try:
        assert catalog.refresh(seeded) is False
        assert catalog.needs_refresh()
    finally:
        catalog._lock.release()
    assert catalog.refresh(seeded) is True
    assert not catalog.needs_refresh()


def test_expired_snapshot_needs_refresh(seeded):
    catalog = CafeCatalog(ttl_seconds=60)
    catalog.refresh(seeded)
    assert not catalog.needs_refresh()
    catalog.refreshed_at -= timedelta(seconds=61)
    assert catalog.needs_refresh()


class BrokenSession:
    def execute(self, *args, **kwargs):
        raise RuntimeError("database is down")


def test_failed_refresh_keeps_previous_snapshot(seeded):
    catalog = CafeCatalog()
    catalog.refresh(seeded)
    assert catalog.refresh(BrokenSession()) is False
    assert catalog.error == "database is down"
    assert len(catalog.cafes) == 3
    assert not catalog.loading


def test_snapshot_raises_when_load_fails():
    with pytest.raises(RuntimeError):
        CafeCatalog().snapshot(BrokenSession())


def test_invalidate_and_reset(seeded):
    catalog = CafeCatalog()
    catalog.refresh(seeded)
    catalog.invalidate()
    assert catalog.needs_refresh()
    catalog.reset()
    assert catalog.cafes == []
    assert catalog.refreshed_at is None


def test_refresh_skipped_during_load_leaves_snapshot_stale(seeded, monkeypatch):
    catalog = CafeCatalog()
    real_load = catalog_module.load_cafes
    skipped = []

    def load_with_concurrent_mutation(db):
        cafes = real_load(db)
        # a mutation committing while this load runs asks for its own refresh
        skipped.append(catalog.refresh(db))
        return cafes

    monkeypatch.setattr(catalog_module, "load_cafes", load_with_concurrent_mutation)
    assert catalog.refresh(seeded) is True
    assert skipped == [False]
    assert catalog.needs_refresh()


def test_concurrent_first_reader_waits_for_running_load(seeded, monkeypatch):
    catalog = CafeCatalog()
    real_load = catalog_module.load_cafes
    loaded = threading.Event()
    release = threading.Event()

    def slow_load(db):
        cafes = real_load(db)
        loaded.set()
        release.wait(timeout=5)
        return cafes

    monkeypatch.setattr(catalog_module, "load_cafes", slow_load)
    results = {}

    def read(name, db):
        results[name] = catalog.snapshot(db)

    first = threading.Thread(target=read, args=("first", seeded))
    first.start()
    assert loaded.wait(timeout=5)

    # the second reader must not touch the database while the first load runs
    second = threading.Thread(target=read, args=("second", BrokenSession()))
    second.start()
    time.sleep(0.05)
    release.set()
    first.join(timeout=5)
    second.join(timeout=5)

    assert len(results["first"]) == 3
    assert len(results["second"]) == 3
