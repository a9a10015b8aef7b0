"""Keyword data used by the international/domestic fixture classifier.

Extend these collections to teach the classifier new leagues, tournaments or
teams; the matching code in ``classifier.py`` reads them as-is. All entries
are lower case.
"""

from __future__ import annotations

from cricket_hub.fixtures.countries import CRICKET_COUNTRIES

# Franchise and first-class competitions. Any hit in name, match type or venue
# marks the fixture domestic, whatever the teams are.
DOMESTIC_LEAGUE_KEYWORDS: frozenset[str] = frozenset(
    {
        "ipl",
        "indian premier league",
        "big bash",
        "bbl",
        "wbbl",
        "psl",
        "pakistan super league",
        "cpl",
        "caribbean premier league",
        "the hundred",
        "sa20",
        "ilt20",
        "major league cricket",
        "lanka premier league",
        "bangladesh premier league",
        "bpl",
        "lpl",
        "t20 blast",
        "vitality blast",
        "county championship",
        "one-day cup",
        "ranji trophy",
        "duleep trophy",
        "vijay hazare",
        "syed mushtaq ali",
        "irani cup",
        "sheffield shield",
        "marsh cup",
        "super smash",
        "plunket shield",
        "ford trophy",
        "csa t20 challenge",
        "quaid-e-azam",
        "national t20 cup",
        "abu dhabi t10",
        "global t20",
        "women's premier league",
    }
)

# World events, ICC competitions and bilateral-series wording.
INTERNATIONAL_KEYWORDS: frozenset[str] = frozenset(
    {
        "world cup",
        "icc",
        "champions trophy",
        "world test championship",
        "wtc",
        "asia cup",
        "ashes",
        "border-gavaskar",
        "border gavaskar",
        "tour of",
        "test series",
        "odi series",
        "t20i series",
        "tri-series",
        "tri series",
        "triangular series",
        "bilateral",
        "qualifier",
    }
)

# Only counted together with a "vs" in the fixture name.
INTERNATIONAL_FORMATS: tuple[str, ...] = ("test", "odi", "t20i", "t20 international")

VS_MARKERS: tuple[str, ...] = (" vs ", " v ")

COUNTRY_ABBREVIATIONS: dict[str, tuple[str, ...]] = {
    "india": ("ind",),
    "australia": ("aus",),
    "england": ("eng",),
    "south africa": ("sa", "rsa"),
    "new zealand": ("nz",),
    "pakistan": ("pak",),
    "sri lanka": ("sl",),
    "bangladesh": ("ban", "bd"),
    "west indies": ("wi",),
    "afghanistan": ("afg",),
    "zimbabwe": ("zim",),
    "ireland": ("ire",),
    "netherlands": ("ned",),
    "scotland": ("sco",),
    "oman": ("oma",),
    "nepal": ("nep",),
    "namibia": ("nam",),
    "united arab emirates": ("uae",),
    "hong kong": ("hk",),
    "papua new guinea": ("png",),
    "united states": ("usa", "united states of america"),
    "canada": ("can",),
}

# Appended to every country name and abbreviation: "india women", "aus a", ...
TEAM_VARIANT_SUFFIXES: tuple[str, ...] = (
    "women",
    "a",
    "u19",
    "under-19",
    "under 19",
    "women u19",
    "emerging",
    "xi",
)


def _build_country_teams() -> frozenset[str]:
    bases: set[str] = {name.lower() for name, _ in CRICKET_COUNTRIES}
    for abbreviations in COUNTRY_ABBREVIATIONS.values():
        bases.update(abbreviations)
    teams = set(bases)
    for base in bases:
        teams.update(f"{base} {suffix}" for suffix in TEAM_VARIANT_SUFFIXES)
    return frozenset(teams)


COUNTRY_TEAMS: frozenset[str] = _build_country_teams()
