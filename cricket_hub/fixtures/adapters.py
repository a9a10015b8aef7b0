"""Map live API matches and curated rows onto the canonical Fixture."""

from __future__ import annotations

import logging
from datetime import date, datetime, time, timezone
from typing import Any, Iterable

from pydantic import ValidationError

from cricket_hub.fixtures.schema import Fixture, InningScore, LiveMatch, ManualFixtureRow

logger = logging.getLogger(__name__)


def _parse_datetime(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    if isinstance(value, str) and value.strip():
        try:
            # The live API sends GMT without an offset; Fixture pins naive values to UTC.
            return datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return None
    return None


def live_status(match_started: bool, match_ended: bool) -> str:
    if match_ended:
        return "completed"
    if match_started:
        return "live"
    return "upcoming"


def normalize_manual_status(value: str | None) -> str:
    state = (value or "").strip().lower()
    if "live" in state:
        return "live"
    if "complet" in state or "result" in state:
        return "completed"
    return "upcoming"


def from_live_match(raw: dict[str, Any]) -> Fixture | None:
    try:
        match = LiveMatch.model_validate(raw)
    except ValidationError as exc:
        logger.warning("Skipping malformed live match id=%s: %s", raw.get("id"), exc)
        return None
    if not match.id:
        return None

    scores = [
        InningScore(
            runs=entry.r or 0,
            wickets=entry.w or 0,
            overs=entry.o or 0,
            inning=entry.inning or "",
        )
        for entry in match.score or []
    ]
    return Fixture(
        id=match.id,
        name=match.name or "",
        match_type=match.matchType or "",
        status=live_status(bool(match.matchStarted), bool(match.matchEnded)),
        venue=match.venue or "",
        date=_parse_datetime(match.dateTimeGMT) or _parse_datetime(match.date),
        teams=[team for team in (match.teams or []) if team][:2],
        score=scores,
        series_id=match.series_id,
        source="live",
    )


def from_manual_row(raw: dict[str, Any]) -> Fixture:
    row = ManualFixtureRow.model_validate(raw)
    teams = [team.strip() for team in (row.team1, row.team2) if team and team.strip()]
    name = (row.tournament or "").strip() or " vs ".join(teams)
    return Fixture(
        id=row.match_id or row.id or "",
        name=name,
        match_type=row.match_type or "",
        status=normalize_manual_status(row.status),
        venue=row.venue or "",
        date=_parse_datetime(row.match_date),
        teams=teams,
        series_id=None,
        source="manual",
    )


def adapt_live_matches(matches: Iterable[dict[str, Any]]) -> list[Fixture]:
    fixtures: list[Fixture] = []
    seen: set[str] = set()
    for raw in matches:
        if not isinstance(raw, dict):
            continue
        fixture = from_live_match(raw)
        if fixture is None or fixture.id in seen:
            continue
        seen.add(fixture.id)
        fixtures.append(fixture)
    return fixtures


def adapt_manual_rows(rows: Iterable[dict[str, Any]]) -> list[Fixture]:
    return [from_manual_row(row) for row in rows]


def to_manual_row(fixture: Fixture) -> dict[str, Any]:
    """Curated-collection values for a fixture (used when importing live matches)."""
    teams = list(fixture.teams) + ["", ""]
    return {
        "match_id": fixture.id,
        "team1": teams[0],
        "team2": teams[1],
        "venue": fixture.venue,
        "match_date": fixture.date,
        "status": fixture.status,
        "tournament": fixture.name,
        "match_type": fixture.match_type or None,
    }
