"""Fixture feed: live API first, curated fixtures when the API cannot serve."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable

from cricket_hub.cache import TTLCache
from cricket_hub.content.keys import FIXTURES_FEED_KEY, FIXTURES_FEED_TTL
from cricket_hub.fixtures.adapters import adapt_live_matches, adapt_manual_rows
from cricket_hub.fixtures.classifier import sort_fixtures, tag_fixtures
from cricket_hub.fixtures.cricapi_client import (
    CricApiQuotaExceeded,
    CricApiUnavailable,
    fetch_current_matches,
    quota_info,
)
from cricket_hub.fixtures.schema import Fixture, FixtureFeed

logger = logging.getLogger(__name__)


async def load_manual_fixtures(store) -> list[Fixture]:
    rows = await asyncio.to_thread(store.select, "fixtures", order_by="match_date")
    logger.info("Manual fixtures fetched: %s", len(rows))
    return adapt_manual_rows(rows)


async def _fetch_feed(
    store,
    api_key: str | None,
    fetcher: Callable[[str | None], dict[str, Any]],
) -> FixtureFeed:
    try:
        envelope = await asyncio.to_thread(fetcher, api_key)
    except CricApiQuotaExceeded:
        logger.warning("CricAPI quota exceeded, falling back to manual fixtures.")
        return FixtureFeed(status="manual", data=await load_manual_fixtures(store))
    except CricApiUnavailable as exc:
        logger.warning("CricAPI unavailable (%s), falling back to manual fixtures.", exc)
        return FixtureFeed(status="manual", data=await load_manual_fixtures(store))

    fixtures = adapt_live_matches(envelope.get("data") or [])
    return FixtureFeed(status="success", data=fixtures, info=quota_info(envelope))


async def load_fixture_feed(
    store,
    cache: TTLCache,
    api_key: str | None,
    *,
    limit: int | None = None,
    refresh: bool = False,
    ttl: float = FIXTURES_FEED_TTL,
    fetcher: Callable[[str | None], dict[str, Any]] = fetch_current_matches,
) -> FixtureFeed:
    """Return tagged, sorted fixtures; other CricAPI errors propagate."""
    feed = None if refresh else cache.get(FIXTURES_FEED_KEY)
    if feed is None:
        feed = await _fetch_feed(store, api_key, fetcher)
        feed.data = sort_fixtures(tag_fixtures(feed.data))
        cache.set(FIXTURES_FEED_KEY, feed, ttl)
        logger.info(
            "Fixture feed built source=%s fixtures=%s international=%s",
            feed.status,
            len(feed.data),
            sum(1 for fixture in feed.data if fixture.is_international),
        )

    if limit is not None:
        return feed.model_copy(update={"data": feed.data[:limit]})
    return feed
