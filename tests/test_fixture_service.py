from __future__ import annotations

import asyncio
import unittest
from datetime import datetime

from cricket_hub.cache import TTLCache
from cricket_hub.fixtures.cricapi_client import CricApiError, CricApiQuotaExceeded, CricApiUnavailable
from cricket_hub.fixtures.service import load_fixture_feed

MANUAL_ROWS = [
    {
        "id": "row-1",
        "match_id": "MATCH_1",
        "team1": "Sydney Sixers",
        "team2": "Perth Scorchers",
        "venue": "SCG",
        "match_date": datetime(2026, 1, 2, 8, 0),
        "status": "upcoming",
        "tournament": "Big Bash League",
    },
    {
        "id": "row-2",
        "match_id": "MATCH_2",
        "team1": "India",
        "team2": "England",
        "venue": "Eden Gardens",
        "match_date": datetime(2026, 1, 5, 4, 0),
        "status": "upcoming",
        "tournament": "England tour of India",
    },
]

LIVE_ENVELOPE = {
    "status": "success",
    "data": [
        {
            "id": "dom",
            "name": "Mumbai Indians vs Chennai Super Kings",
            "matchType": "t20",
            "teams": ["Mumbai Indians", "Chennai Super Kings"],
            "matchStarted": True,
        },
        {
            "id": "intl",
            "name": "India vs Australia - T20I Series",
            "matchType": "t20i",
            "teams": ["India", "Australia"],
        },
    ],
    "info": {"hitsToday": 5, "hitsLimit": 100},
}


class _ManualStore:
    def __init__(self, rows=None) -> None:
        self.rows = rows or []
        self.calls = 0

    def select(self, collection, **kwargs):
        self.calls += 1
        assert collection == "fixtures"
        return [dict(row) for row in self.rows]


class _Fetcher:
    def __init__(self, envelope=None, error: Exception | None = None) -> None:
        self.envelope = envelope
        self.error = error
        self.keys: list = []

    def __call__(self, api_key):
        self.keys.append(api_key)
        if self.error is not None:
            raise self.error
        return self.envelope


class LoadFixtureFeedTests(unittest.TestCase):
    def setUp(self) -> None:
        self.cache = TTLCache()
        self.store = _ManualStore(MANUAL_ROWS)

    def _load(self, fetcher, **kwargs):
        return asyncio.run(load_fixture_feed(self.store, self.cache, "key", fetcher=fetcher, **kwargs))

    def test_live_feed_is_tagged_sorted_and_cached(self) -> None:
        fetcher = _Fetcher(LIVE_ENVELOPE)

        feed = self._load(fetcher)

        self.assertEqual("success", feed.status)
        self.assertEqual(["intl", "dom"], [fixture.id for fixture in feed.data])
        self.assertEqual([True, False], [fixture.is_international for fixture in feed.data])
        self.assertEqual(100, feed.info["hitsLimit"])
        self.assertEqual(["key"], fetcher.keys)
        self.assertEqual(60, self.cache.entry("fixtures:feed").ttl)
        self.assertEqual(0, self.store.calls)

    def test_cached_feed_is_reused_until_refresh(self) -> None:
        fetcher = _Fetcher(LIVE_ENVELOPE)

        self._load(fetcher)
        self._load(fetcher)
        self._load(fetcher, refresh=True)

        self.assertEqual(2, len(fetcher.keys))

    def test_quota_exhaustion_falls_back_to_manual_fixtures(self) -> None:
        fetcher = _Fetcher(error=CricApiQuotaExceeded("quota"))

        feed = self._load(fetcher)

        self.assertEqual("manual", feed.status)
        self.assertEqual(["MATCH_2", "MATCH_1"], [fixture.id for fixture in feed.data])
        self.assertTrue(all(fixture.source == "manual" for fixture in feed.data))

    def test_unavailable_api_falls_back_to_manual_fixtures(self) -> None:
        feed = self._load(_Fetcher(error=CricApiUnavailable("no key")))

        self.assertEqual("manual", feed.status)
        self.assertEqual(1, self.store.calls)

    def test_other_api_errors_propagate(self) -> None:
        with self.assertRaises(CricApiError):
            self._load(_Fetcher(error=CricApiError("bad key", status=401)))

        self.assertEqual(0, len(self.cache))

    def test_limit_trims_response_not_cache(self) -> None:
        feed = self._load(_Fetcher(LIVE_ENVELOPE), limit=1)

        self.assertEqual(["intl"], [fixture.id for fixture in feed.data])
        self.assertEqual(2, len(self.cache.get("fixtures:feed").data))

    def test_custom_ttl(self) -> None:
        self._load(_Fetcher(LIVE_ENVELOPE), ttl=300)

        self.assertEqual(300, self.cache.entry("fixtures:feed").ttl)


if __name__ == "__main__":
    unittest.main()
