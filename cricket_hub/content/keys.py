"""Cache key convention and TTL tiers.

Every key is ``<resource>:<param1>:<param2>:...`` with ``all`` standing in for
an absent filter. Write paths invalidate by substring, so a new key must keep
its resource name as the leading segment:

    posts:<type|all>:<limit>:<category|all>:<search|all>
    post:<slug>
    rankings:<format>:<category>:<limit>
    all-rankings:<category>
    home-feed
    fixtures:feed
"""

from __future__ import annotations

POST_TYPES = ("news", "blog", "feature")
RANKING_FORMATS = ("test", "odi", "t20")
RANKING_CATEGORIES = ("team", "batter", "bowler", "allrounder")

# Seconds. Shorter for aggregate, high-traffic views; longer for slow-moving data.
HOME_FEED_TTL = 2 * 60
POST_LIST_TTL = 3 * 60
POST_DETAIL_TTL = 10 * 60
RANKINGS_TTL = 15 * 60
FIXTURES_FEED_TTL = 60

HOME_FEED_KEY = "home-feed"
FIXTURES_FEED_KEY = "fixtures:feed"


def _part(value) -> str:
    if value is None or value == "":
        return "all"
    return str(value)


def posts_key(
    post_type: str | None = None,
    limit: int = 20,
    category: str | None = None,
    search: str | None = None,
) -> str:
    return f"posts:{_part(post_type)}:{limit}:{_part(category)}:{_part(search)}"


def post_key(slug: str) -> str:
    return f"post:{slug}"


def rankings_key(fmt: str, category: str, limit: int = 10) -> str:
    return f"rankings:{fmt}:{category}:{limit}"


def all_rankings_key(category: str) -> str:
    return f"all-rankings:{category}"
