"""Copy live API matches into the curated fixtures collection."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable

from cricket_hub.cache import TTLCache
from cricket_hub.content.publishing import invalidate_fixture_caches
from cricket_hub.fixtures.adapters import adapt_live_matches, to_manual_row
from cricket_hub.fixtures.cricapi_client import fetch_current_matches
from cricket_hub.fixtures.schema import Fixture

logger = logging.getLogger(__name__)

_COMPARED_FIELDS = ("team1", "team2", "venue", "match_date", "status", "tournament", "match_type")


@dataclass
class ImportResult:
    total_fetched: int = 0
    inserted: int = 0
    updated: int = 0
    skipped: int = 0
    errors: int = 0


def _as_utc(value: Any) -> Any:
    if isinstance(value, datetime) and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _row_changed(existing: dict[str, Any], values: dict[str, Any]) -> bool:
    return any(
        _as_utc(existing.get(name)) != _as_utc(values.get(name)) for name in _COMPARED_FIELDS
    )


def _import_fixture(store, fixture: Fixture, result: ImportResult) -> None:
    values = to_manual_row(fixture)
    existing = store.select_one("fixtures", match_id=values["match_id"])
    if existing is not None and not _row_changed(existing, values):
        result.skipped += 1
        logger.info("Skipped unchanged fixture match_id=%s", values["match_id"])
        return
    store.upsert("fixtures", values, key="match_id")
    if existing is None:
        result.inserted += 1
        logger.info("Inserted fixture match_id=%s", values["match_id"])
    else:
        result.updated += 1
        logger.info("Updated fixture match_id=%s", values["match_id"])


def import_fixtures(store, fixtures: list[Fixture]) -> ImportResult:
    result = ImportResult(total_fetched=len(fixtures))
    for fixture in fixtures:
        try:
            _import_fixture(store, fixture, result)
        except Exception:
            result.errors += 1
            logger.exception("Failed importing fixture match_id=%s", fixture.id)
    return result


async def import_live_fixtures(
    store,
    cache: TTLCache,
    api_key: str | None,
    *,
    fetcher: Callable[[str | None], dict[str, Any]] = fetch_current_matches,
) -> ImportResult:
    """Fetch the live feed and upsert every match by ``match_id``.

    CricAPI errors propagate; an import never falls back to the curated data it
    is about to overwrite.
    """
    envelope = await asyncio.to_thread(fetcher, api_key)
    fixtures = adapt_live_matches(envelope.get("data") or [])
    result = await asyncio.to_thread(import_fixtures, store, fixtures)
    invalidate_fixture_caches(cache)
    return result
