"""International vs domestic fixture classification."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any, Iterable

from cricket_hub.fixtures.keywords import (
    COUNTRY_TEAMS,
    DOMESTIC_LEAGUE_KEYWORDS,
    INTERNATIONAL_FORMATS,
    INTERNATIONAL_KEYWORDS,
    VS_MARKERS,
)
from cricket_hub.fixtures.schema import Fixture

_STATUS_ORDER = {"live": 0, "upcoming": 1, "completed": 2}
_FAR_FUTURE = datetime.max.replace(tzinfo=timezone.utc)


def _field(fixture: Any, *names: str) -> Any:
    for name in names:
        if isinstance(fixture, Mapping):
            value = fixture.get(name)
        else:
            value = getattr(fixture, name, None)
        if value is not None:
            return value
    return None


def _text(value: Any) -> str:
    return value.lower() if isinstance(value, str) else ""


def _teams(value: Any) -> list[str]:
    if not isinstance(value, (list, tuple)):
        return []
    return [team.strip().lower() for team in value if isinstance(team, str) and team.strip()]


def _contains_any(haystacks: Iterable[str], needles: Iterable[str]) -> bool:
    texts = list(haystacks)
    return any(needle in text for needle in needles for text in texts)


def _is_country_team(team: str) -> bool:
    if team in COUNTRY_TEAMS:
        return True
    # "Ind" or "India Wom" still read as a national side; "Mumbai Indians" does not.
    if any(team in country for country in COUNTRY_TEAMS):
        return True
    return any(word in COUNTRY_TEAMS for word in team.split(" ") if word)


def is_international_match(fixture: Any) -> bool:
    """Guess whether *fixture* is international (True) or domestic/unknown (False).

    Domestic league evidence wins over everything else. Accepts a ``Fixture``
    or any mapping/object with ``name``, ``match_type``/``matchType``,
    ``venue`` and ``teams``; missing fields count as empty.
    """
    name = _text(_field(fixture, "name"))
    match_type = _text(_field(fixture, "match_type", "matchType"))
    venue = _text(_field(fixture, "venue"))

    if _contains_any((name, match_type, venue), DOMESTIC_LEAGUE_KEYWORDS):
        return False

    has_country_teams = any(_is_country_team(team) for team in _teams(_field(fixture, "teams")))
    has_international_keywords = _contains_any((name, match_type), INTERNATIONAL_KEYWORDS)
    has_vs_in_name = _contains_any((name,), VS_MARKERS)
    is_test_odi_t20 = _contains_any((match_type, name), INTERNATIONAL_FORMATS)

    return has_country_teams or has_international_keywords or (has_vs_in_name and is_test_odi_t20)


def tag_fixtures(fixtures: list[Fixture]) -> list[Fixture]:
    for fixture in fixtures:
        fixture.is_international = is_international_match(fixture)
    return fixtures


def sort_fixtures(fixtures: list[Fixture]) -> list[Fixture]:
    """International first, then live/upcoming/completed, then kick-off time."""
    return sorted(
        fixtures,
        key=lambda fixture: (
            not fixture.is_international,
            _STATUS_ORDER.get(fixture.status, len(_STATUS_ORDER)),
            fixture.date or _FAR_FUTURE,
        ),
    )
