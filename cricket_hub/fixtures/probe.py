"""Quick probe for CricAPI availability and quota."""

from __future__ import annotations

import argparse
import logging
import os

from cricket_hub.fixtures.adapters import adapt_live_matches
from cricket_hub.fixtures.classifier import is_international_match
from cricket_hub.fixtures.cricapi_client import CricApiError, fetch_current_matches, quota_info


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Probe CricAPI current matches and print match count and quota.",
    )
    parser.add_argument(
        "--api-key",
        type=str,
        default=os.getenv("CRICAPI_KEY"),
        help="CricAPI key (default: CRICAPI_KEY).",
    )
    parser.add_argument(
        "--offset",
        type=int,
        default=0,
        help="Row offset for paging (default: 0).",
    )
    return parser.parse_args()


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    args = _parse_args()

    try:
        payload = fetch_current_matches(args.api_key, args.offset)
    except CricApiError as exc:
        logging.error("CricAPI error: %s", exc)
        if exc.body:
            logging.error("Details: %s", exc.body)
        raise SystemExit(1)

    fixtures = adapt_live_matches(payload.get("data") or [])
    info = quota_info(payload)
    logging.info(
        "Fetched %s matches (%s international) hitsToday=%s hitsLimit=%s",
        len(fixtures),
        sum(1 for fixture in fixtures if is_international_match(fixture)),
        info.get("hitsToday"),
        info.get("hitsLimit"),
    )


if __name__ == "__main__":
    main()
