"""Back-office write paths.

Every write busts the cache entries that could contain the changed row, using
the substring convention from ``cricket_hub.content.keys``.
"""

from __future__ import annotations

import asyncio
import logging
import time
from datetime import datetime, timezone
from typing import Any

from cricket_hub.cache import TTLCache
from cricket_hub.content.feeds import invalidate_post_caches, invalidate_ranking_caches
from cricket_hub.content.keys import post_key
from cricket_hub.content.text import generate_slug, parse_tags
from cricket_hub.schemas import ManualFixtureIn, PostIn, RankingIn
from cricket_hub.store import StoreConflict

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def invalidate_fixture_caches(cache: TTLCache) -> int:
    removed = cache.invalidate("fixtures:")
    logger.info("Invalidated %s fixture cache entries", removed)
    return removed


def _bust_post(cache: TTLCache, post: dict[str, Any] | None) -> None:
    if not post:
        return
    invalidate_post_caches(cache, post.get("type"))
    if post.get("slug"):
        cache.delete(post_key(post["slug"]))


async def save_post(
    store,
    cache: TTLCache,
    payload: PostIn,
    post_id: str | None = None,
) -> dict[str, Any]:
    slug = generate_slug(payload.title)
    if not slug.strip("-"):
        raise ValueError(f"Title {payload.title!r} does not produce a usable slug")
    now = _utcnow()
    values: dict[str, Any] = {
        "title": payload.title,
        "slug": slug,
        "content": payload.content,
        "category": payload.category,
        "type": payload.type,
        "tags": parse_tags(payload.tags),
        "thumbnail_url": payload.thumbnail_url or None,
        "is_published": payload.is_published,
        "author_id": payload.author_id,
        "updated_at": now,
        "published_at": now if payload.is_published else None,
    }

    previous = None
    if post_id is None:
        values["created_at"] = now
        try:
            saved = await asyncio.to_thread(store.insert, "posts", values)
        except StoreConflict as exc:
            raise StoreConflict(f"A post with slug {slug!r} already exists") from exc
        logger.info("Inserted post id=%s slug=%s", saved.get("id"), saved.get("slug"))
    else:
        previous = await asyncio.to_thread(store.select_one, "posts", id=post_id)
        if previous is None:
            raise LookupError(f"Post {post_id} not found")
        try:
            await asyncio.to_thread(store.update, "posts", {"id": post_id}, values)
        except StoreConflict as exc:
            raise StoreConflict(f"A post with slug {slug!r} already exists") from exc
        saved = {**previous, **values}
        logger.info("Updated post id=%s slug=%s", post_id, saved.get("slug"))

    _bust_post(cache, previous)
    _bust_post(cache, saved)
    return saved


async def delete_posts(store, cache: TTLCache, ids: list[str]) -> int:
    doomed = []
    for post_id in ids:
        row = await asyncio.to_thread(store.select_one, "posts", id=post_id)
        if row is not None:
            doomed.append(row)
    deleted = await asyncio.to_thread(store.delete, "posts", ids)
    for row in doomed:
        _bust_post(cache, row)
    logger.info("Deleted %s post(s)", deleted)
    return deleted


async def toggle_publish(store, cache: TTLCache, post_id: str) -> dict[str, Any]:
    post = await asyncio.to_thread(store.select_one, "posts", id=post_id)
    if post is None:
        raise LookupError(f"Post {post_id} not found")
    publish = not post.get("is_published")
    values = {
        "is_published": publish,
        "published_at": _utcnow() if publish else None,
    }
    await asyncio.to_thread(store.update, "posts", {"id": post_id}, values)
    updated = {**post, **values}
    _bust_post(cache, updated)
    logger.info("Post id=%s is_published=%s", post_id, publish)
    return updated


async def save_ranking(
    store,
    cache: TTLCache,
    payload: RankingIn,
    ranking_id: str | None = None,
) -> dict[str, Any]:
    values = payload.model_dump()
    values["updated_at"] = _utcnow()
    if ranking_id is None:
        saved = await asyncio.to_thread(store.insert, "icc_rankings", values)
    else:
        updated = await asyncio.to_thread(store.update, "icc_rankings", {"id": ranking_id}, values)
        if not updated:
            raise LookupError(f"Ranking {ranking_id} not found")
        saved = {"id": ranking_id, **values}
    invalidate_ranking_caches(cache)
    return saved


async def delete_ranking(store, cache: TTLCache, ranking_id: str) -> int:
    deleted = await asyncio.to_thread(store.delete, "icc_rankings", [ranking_id])
    if not deleted:
        raise LookupError(f"Ranking {ranking_id} not found")
    invalidate_ranking_caches(cache)
    return deleted


def _generated_match_id() -> str:
    return f"MATCH_{int(time.time() * 1000)}"


async def save_manual_fixture(
    store,
    cache: TTLCache,
    payload: ManualFixtureIn,
    fixture_id: str | None = None,
) -> dict[str, Any]:
    values = payload.model_dump()
    if fixture_id is None:
        values["match_id"] = values.get("match_id") or _generated_match_id()
        saved = await asyncio.to_thread(store.insert, "fixtures", values)
        logger.info("Inserted manual fixture match_id=%s", saved.get("match_id"))
    else:
        if not values.get("match_id"):
            values.pop("match_id")
        updated = await asyncio.to_thread(store.update, "fixtures", {"id": fixture_id}, values)
        if not updated:
            raise LookupError(f"Fixture {fixture_id} not found")
        saved = {"id": fixture_id, **values}
    invalidate_fixture_caches(cache)
    return saved


async def set_manual_fixture_status(store, cache: TTLCache, fixture_id: str, status: str) -> None:
    updated = await asyncio.to_thread(
        store.update, "fixtures", {"id": fixture_id}, {"status": status}
    )
    if not updated:
        raise LookupError(f"Fixture {fixture_id} not found")
    invalidate_fixture_caches(cache)


async def delete_manual_fixture(store, cache: TTLCache, fixture_id: str) -> int:
    deleted = await asyncio.to_thread(store.delete, "fixtures", [fixture_id])
    if not deleted:
        raise LookupError(f"Fixture {fixture_id} not found")
    invalidate_fixture_caches(cache)
    return deleted
