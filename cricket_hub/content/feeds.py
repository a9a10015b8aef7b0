"""Read-through helpers for posts and rankings.

Each helper checks the cache, issues one store query on a miss, and writes the
result back under the key from ``cricket_hub.content.keys``. Store errors are
not caught here; they reach the caller unchanged.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from cricket_hub.cache import TTLCache
from cricket_hub.content.keys import (
    HOME_FEED_KEY,
    HOME_FEED_TTL,
    POST_DETAIL_TTL,
    POST_LIST_TTL,
    POST_TYPES,
    RANKING_CATEGORIES,
    RANKING_FORMATS,
    RANKINGS_TTL,
    all_rankings_key,
    post_key,
    posts_key,
    rankings_key,
)
from cricket_hub.content.text import make_excerpt

logger = logging.getLogger(__name__)

HOME_FEED_LIMIT = 20
REFRESH_LIMIT = 20

_SUMMARY_COLUMNS = (
    "id",
    "title",
    "slug",
    "content",
    "category",
    "type",
    "thumbnail_url",
    "created_at",
    "is_published",
)


def _check_choice(name: str, value: str | None, choices: tuple[str, ...]) -> None:
    if value is not None and value not in choices:
        raise ValueError(f"{name} must be one of {', '.join(choices)}; got {value!r}")


def _to_summary(row: dict[str, Any]) -> dict[str, Any]:
    return {
        "id": row.get("id"),
        "title": row.get("title"),
        "slug": row.get("slug"),
        "excerpt": make_excerpt(row.get("content")),
        "category": row.get("category"),
        "type": row.get("type"),
        "thumbnail_url": row.get("thumbnail_url"),
        "created_at": row.get("created_at"),
    }


async def _select_published_posts(
    store,
    *,
    post_type: str | None,
    limit: int,
    category: str | None = None,
    search: str | None = None,
) -> list[dict[str, Any]]:
    filters: dict[str, Any] = {"is_published": True}
    if post_type:
        filters["type"] = post_type
    if category:
        filters["category"] = category
    rows = await asyncio.to_thread(
        store.select,
        "posts",
        filters=filters,
        search=search or None,
        search_fields=("title", "content"),
        order_by="created_at",
        descending=True,
        limit=limit,
        columns=_SUMMARY_COLUMNS,
    )
    return [_to_summary(row) for row in rows]


async def fetch_posts(
    store,
    cache: TTLCache,
    post_type: str | None = None,
    limit: int = 20,
    category: str | None = None,
    search: str | None = None,
) -> list[dict[str, Any]]:
    _check_choice("type", post_type, POST_TYPES)
    key = posts_key(post_type, limit, category, search)
    cached = cache.get(key)
    if cached is not None:
        logger.debug("Cache hit key=%s", key)
        return cached

    logger.debug("Cache miss key=%s", key)
    posts = await _select_published_posts(
        store,
        post_type=post_type,
        limit=limit,
        category=category,
        search=search,
    )
    cache.set(key, posts, POST_LIST_TTL)
    return posts


async def fetch_full_post(store, cache: TTLCache, slug: str) -> dict[str, Any] | None:
    key = post_key(slug)
    cached = cache.get(key)
    if cached is not None:
        logger.debug("Cache hit key=%s", key)
        return cached

    row = await asyncio.to_thread(store.select_one, "posts", slug=slug, is_published=True)
    if row is None:
        return None
    post = dict(row)
    post["excerpt"] = make_excerpt(post.get("content"))
    post["tags"] = list(post.get("tags") or [])
    cache.set(key, post, POST_DETAIL_TTL)
    return post


async def fetch_rankings(
    store,
    cache: TTLCache,
    fmt: str,
    category: str,
    limit: int = 10,
) -> list[dict[str, Any]]:
    _check_choice("format", fmt, RANKING_FORMATS)
    _check_choice("category", category, RANKING_CATEGORIES)
    key = rankings_key(fmt, category, limit)
    cached = cache.get(key)
    if cached is not None:
        logger.debug("Cache hit key=%s", key)
        return cached

    rankings = await asyncio.to_thread(
        store.select,
        "icc_rankings",
        filters={"format": fmt, "category": category},
        order_by="rank",
        limit=limit,
    )
    cache.set(key, rankings, RANKINGS_TTL)
    return rankings


async def fetch_all_rankings_for_category(
    store,
    cache: TTLCache,
    category: str,
) -> dict[str, list[dict[str, Any]]]:
    """One query for every format of a category, grouped by format."""
    _check_choice("category", category, RANKING_CATEGORIES)
    key = all_rankings_key(category)
    cached = cache.get(key)
    if cached is not None:
        return cached

    rows = await asyncio.to_thread(
        store.select,
        "icc_rankings",
        filters={"category": category},
        order_by="rank",
    )
    grouped = {fmt: [row for row in rows if row.get("format") == fmt] for fmt in RANKING_FORMATS}
    cache.set(key, grouped, RANKINGS_TTL)
    return grouped


async def fetch_home_feed(store, cache: TTLCache) -> list[dict[str, Any]]:
    cached = cache.get(HOME_FEED_KEY)
    if cached is not None:
        logger.debug("Cache hit key=%s", HOME_FEED_KEY)
        return cached

    posts = await _select_published_posts(store, post_type=None, limit=HOME_FEED_LIMIT)
    cache.set(HOME_FEED_KEY, posts, HOME_FEED_TTL)
    return posts


async def force_refresh_posts(
    store,
    cache: TTLCache,
    post_type: str | None = None,
) -> list[dict[str, Any]]:
    """Skip the cache read but still store the fresh list under the usual key."""
    _check_choice("type", post_type, POST_TYPES)
    logger.info("Force refreshing posts type=%s", post_type or "all")
    posts = await _select_published_posts(store, post_type=post_type, limit=REFRESH_LIMIT)
    cache.set(posts_key(post_type, REFRESH_LIMIT), posts, POST_LIST_TTL)
    logger.info("Force refresh completed: %s posts", len(posts))
    return posts


def invalidate_post_caches(cache: TTLCache, post_type: str | None = None) -> int:
    if post_type:
        removed = cache.invalidate(f"posts:{post_type}:")
        # Unfiltered lists may contain a post of any type.
        removed += cache.invalidate("posts:all:")
    else:
        removed = cache.invalidate("posts:")
    removed += cache.invalidate(HOME_FEED_KEY)
    logger.info("Invalidated %s post cache entries type=%s", removed, post_type or "all")
    return removed


def invalidate_ranking_caches(cache: TTLCache) -> int:
    removed = cache.invalidate("rankings:")
    removed += cache.invalidate("all-rankings:")
    logger.info("Invalidated %s ranking cache entries", removed)
    return removed


def clear_all_caches(cache: TTLCache) -> None:
    logger.info("Clearing all caches (%s entries)", len(cache))
    cache.clear()


async def preload_critical_data(store, cache: TTLCache) -> None:
    try:
        await fetch_home_feed(store, cache)
        await fetch_all_rankings_for_category(store, cache, "team")
    except Exception:
        logger.exception("Failed to preload critical data.")
        return
    logger.info("Critical data preloaded")
