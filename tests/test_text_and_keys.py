from __future__ import annotations

import unittest

from cricket_hub.content.keys import all_rankings_key, post_key, posts_key, rankings_key
from cricket_hub.content.text import generate_slug, make_excerpt, parse_tags
from cricket_hub.fixtures.countries import DEFAULT_FLAG, flag_for_team


class TextHelperTests(unittest.TestCase):
    def test_generate_slug(self) -> None:
        self.assertEqual("india-vs-england-day-1", generate_slug("India vs. England -- Day 1"))
        self.assertEqual("kohlis-100th-test", generate_slug("Kohli's 100th Test"))

    def test_make_excerpt_strips_tags_and_truncates(self) -> None:
        self.assertEqual("Hello world", make_excerpt("<h1>Hello</h1> <b>world</b>"))
        self.assertEqual("abc", make_excerpt("<p>abcdef</p>", length=3))
        self.assertEqual("", make_excerpt(None))

    def test_parse_tags(self) -> None:
        self.assertEqual(["ashes", "england"], parse_tags(" ashes, ,england,"))
        self.assertEqual(["a"], parse_tags(["a", " ", ""]))
        self.assertEqual([], parse_tags(None))


class CacheKeyTests(unittest.TestCase):
    def test_absent_filters_read_all(self) -> None:
        self.assertEqual("posts:all:20:all:all", posts_key())
        self.assertEqual("posts:news:5:domestic:kohli", posts_key("news", 5, "domestic", "kohli"))
        self.assertEqual("posts:blog:20:all:all", posts_key("blog", search=""))

    def test_other_resources(self) -> None:
        self.assertEqual("post:ashes-preview", post_key("ashes-preview"))
        self.assertEqual("rankings:odi:batter:10", rankings_key("odi", "batter"))
        self.assertEqual("all-rankings:bowler", all_rankings_key("bowler"))


class CountryFlagTests(unittest.TestCase):
    def test_flags_by_team_name(self) -> None:
        self.assertEqual("🇮🇳", flag_for_team(" India "))
        self.assertEqual("🇿🇦", flag_for_team("south africa"))
        self.assertEqual(DEFAULT_FLAG, flag_for_team(None))
        self.assertEqual(DEFAULT_FLAG, flag_for_team("Mumbai Indians"))


if __name__ == "__main__":
    unittest.main()
