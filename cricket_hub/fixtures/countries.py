"""Cricket-playing countries with their flag emoji."""

from __future__ import annotations

DEFAULT_FLAG = "🏏"

# (name, flag)
CRICKET_COUNTRIES: tuple[tuple[str, str], ...] = (
    ("India", "🇮🇳"),
    ("Australia", "🇦🇺"),
    ("England", "🇬🇧"),
    ("South Africa", "🇿🇦"),
    ("New Zealand", "🇳🇿"),
    ("Pakistan", "🇵🇰"),
    ("Sri Lanka", "🇱🇰"),
    ("Bangladesh", "🇧🇩"),
    ("West Indies", "🇧🇧"),  # Barbados stands in for the West Indies
    ("Afghanistan", "🇦🇫"),
    ("Zimbabwe", "🇿🇼"),
    ("Ireland", "🇮🇪"),
    ("Netherlands", "🇳🇱"),
    ("Scotland", "🏴"),
    ("Oman", "🇴🇲"),
    ("Nepal", "🇳🇵"),
    ("Namibia", "🇳🇦"),
    ("United Arab Emirates", "🇦🇪"),
    ("Hong Kong", "🇭🇰"),
    ("Papua New Guinea", "🇵🇬"),
    ("United States", "🇺🇸"),
    ("Canada", "🇨🇦"),
    ("Bermuda", "🇧🇲"),
    ("Kenya", "🇰🇪"),
    ("Uganda", "🇺🇬"),
    ("Malaysia", "🇲🇾"),
    ("Qatar", "🇶🇦"),
    ("Jersey", "🇯🇪"),
    ("Singapore", "🇸🇬"),
    ("Italy", "🇮🇹"),
)

_BY_NAME = {name.lower(): flag for name, flag in CRICKET_COUNTRIES}


def flag_for_team(team_name: str | None) -> str:
    """Return the flag for a country name, or the bat-and-ball fallback."""
    if not team_name:
        return DEFAULT_FLAG
    return _BY_NAME.get(team_name.strip().lower(), DEFAULT_FLAG)
