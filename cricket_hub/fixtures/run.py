"""CLI entrypoint for importing live matches into the curated fixtures."""

from __future__ import annotations

import argparse
import asyncio
import logging

from cricket_hub.cache import TTLCache
from cricket_hub.db import Base, SessionLocal, engine
from cricket_hub.fixtures.cricapi_client import CricApiError
from cricket_hub.fixtures.importer import import_live_fixtures
from cricket_hub.settings import load_settings_snapshot, resolve_cricapi_key
from cricket_hub.store import SqlDocumentStore


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Import CricAPI current matches into the curated fixtures collection.",
    )
    parser.add_argument(
        "--api-key",
        type=str,
        default=None,
        help="CricAPI key (default: stored setting, then CRICAPI_KEY).",
    )
    return parser.parse_args()


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    args = _parse_args()
    Base.metadata.create_all(bind=engine)
    api_key = args.api_key or resolve_cricapi_key(load_settings_snapshot(SessionLocal))

    logging.info("Starting fixture import")
    try:
        result = asyncio.run(
            import_live_fixtures(SqlDocumentStore(SessionLocal), TTLCache(), api_key)
        )
    except CricApiError as exc:
        logging.error("CricAPI error: %s", exc)
        raise SystemExit(1)
    logging.info(
        "Done: fetched=%s inserted=%s updated=%s skipped=%s errors=%s",
        result.total_fetched,
        result.inserted,
        result.updated,
        result.skipped,
        result.errors,
    )


if __name__ == "__main__":
    main()
