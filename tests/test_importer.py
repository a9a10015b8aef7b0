from __future__ import annotations

import asyncio
import unittest

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from cricket_hub.cache import TTLCache
from cricket_hub.db import Base
from cricket_hub.fixtures.adapters import adapt_live_matches
from cricket_hub.fixtures.cricapi_client import CricApiQuotaExceeded
from cricket_hub.fixtures.importer import import_fixtures, import_live_fixtures
from cricket_hub.store import SqlDocumentStore, StoreError


def _memory_store() -> SqlDocumentStore:
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    return SqlDocumentStore(sessionmaker(bind=engine, autocommit=False, autoflush=False))


def _envelope(status_started: bool = False) -> dict:
    return {
        "status": "success",
        "data": [
            {
                "id": "m1",
                "name": "England vs India, 1st Test",
                "matchType": "test",
                "venue": "Headingley",
                "dateTimeGMT": "2026-06-20T10:00:00",
                "teams": ["England", "India"],
                "matchStarted": status_started,
            },
            {
                "id": "m2",
                "name": "Sydney Sixers vs Perth Scorchers",
                "matchType": "t20",
                "teams": ["Sydney Sixers", "Perth Scorchers"],
            },
        ],
    }


class ImportFixturesTests(unittest.TestCase):
    def setUp(self) -> None:
        self.store = _memory_store()

    def test_first_run_inserts_second_run_skips(self) -> None:
        fixtures = adapt_live_matches(_envelope()["data"])

        first = import_fixtures(self.store, fixtures)
        second = import_fixtures(self.store, fixtures)

        self.assertEqual((2, 2, 0, 0, 0), (first.total_fetched, first.inserted, first.updated, first.skipped, first.errors))
        self.assertEqual((0, 0, 2), (second.inserted, second.updated, second.skipped))
        self.assertEqual(2, self.store.count("fixtures"))

    def test_changed_status_updates_in_place(self) -> None:
        import_fixtures(self.store, adapt_live_matches(_envelope()["data"]))

        result = import_fixtures(self.store, adapt_live_matches(_envelope(status_started=True)["data"]))

        self.assertEqual((1, 1), (result.updated, result.skipped))
        self.assertEqual("live", self.store.select_one("fixtures", match_id="m1")["status"])

    def test_row_failures_are_counted_not_raised(self) -> None:
        class _BrokenStore:
            def select_one(self, collection, **filters):
                raise StoreError("down")

        with self.assertLogs("cricket_hub.fixtures.importer", level="ERROR"):
            result = import_fixtures(_BrokenStore(), adapt_live_matches(_envelope()["data"]))

        self.assertEqual(2, result.errors)


class ImportLiveFixturesTests(unittest.TestCase):
    def test_import_busts_fixture_feed(self) -> None:
        store = _memory_store()
        cache = TTLCache()
        cache.set("fixtures:feed", "stale")
        cache.set("home-feed", [])

        result = asyncio.run(import_live_fixtures(store, cache, "k", fetcher=lambda key: _envelope()))

        self.assertEqual(2, result.inserted)
        self.assertEqual(["home-feed"], cache.keys())

    def test_api_errors_propagate(self) -> None:
        def _fetcher(key):
            raise CricApiQuotaExceeded("quota")

        with self.assertRaises(CricApiQuotaExceeded):
            asyncio.run(import_live_fixtures(_memory_store(), TTLCache(), "k", fetcher=_fetcher))


if __name__ == "__main__":
    unittest.main()
