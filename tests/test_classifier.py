from __future__ import annotations

import unittest
from datetime import datetime, timezone
from types import SimpleNamespace

from cricket_hub.fixtures.classifier import is_international_match, sort_fixtures, tag_fixtures
from cricket_hub.fixtures.keywords import (
    COUNTRY_TEAMS,
    DOMESTIC_LEAGUE_KEYWORDS,
    INTERNATIONAL_FORMATS,
    INTERNATIONAL_KEYWORDS,
)
from cricket_hub.fixtures.schema import Fixture


class IsInternationalMatchTests(unittest.TestCase):
    def test_national_sides_in_t20i_series_are_international(self) -> None:
        fixture = {
            "name": "India vs Australia - T20I Series",
            "matchType": "T20I",
            "teams": ["India", "Australia"],
        }

        self.assertTrue(is_international_match(fixture))

    def test_franchise_sides_without_international_signals_are_domestic(self) -> None:
        fixture = {
            "name": "Mumbai Indians vs Chennai Super Kings",
            "matchType": "T20",
            "teams": ["Mumbai Indians", "Chennai Super Kings"],
        }

        self.assertFalse(is_international_match(fixture))

    def test_domestic_keyword_beats_national_teams(self) -> None:
        fixture = {
            "name": "India vs Australia - IPL Exhibition",
            "matchType": "T20I",
            "teams": ["India", "Australia"],
        }

        self.assertFalse(is_international_match(fixture))

    def test_domestic_keyword_in_match_type_or_venue_is_case_insensitive(self) -> None:
        in_type = {"name": "England vs Pakistan", "matchType": "IPL", "teams": ["England", "Pakistan"]}
        in_venue = {
            "name": "New Zealand vs Sri Lanka",
            "matchType": "odi",
            "venue": "Big Bash Oval",
            "teams": ["New Zealand", "Sri Lanka"],
        }

        self.assertFalse(is_international_match(in_type))
        self.assertFalse(is_international_match(in_venue))

    def test_team_variants_abbreviations_and_words_match_the_roster(self) -> None:
        cases = [
            ["India Women", "Club XI"],
            ["Ind", "Club XI"],
            ["Pakistan Shaheens", "Club XI"],
            ["SA", "Club XI"],
            ["Australia A", "Club XI"],
        ]
        for teams in cases:
            with self.subTest(teams=teams):
                self.assertTrue(is_international_match({"name": "Warm-up", "teams": teams}))

    def test_international_tournament_keyword_is_enough(self) -> None:
        fixture = {"name": "ICC Women's Championship", "teams": ["Alpha", "Beta"]}

        self.assertTrue(is_international_match(fixture))

    def test_vs_name_needs_an_international_format(self) -> None:
        odi = {"name": "Alpha XI vs Beta XI", "matchType": "odi", "teams": ["Alpha XI", "Beta XI"]}
        exhibition = dict(odi, matchType="exhibition")

        self.assertTrue(is_international_match(odi))
        self.assertFalse(is_international_match(exhibition))

    def test_short_v_marker_with_test_in_name(self) -> None:
        fixture = {"name": "Alpha v Beta, 1st Test", "teams": ["Alpha", "Beta"]}

        self.assertTrue(is_international_match(fixture))

    def test_missing_and_malformed_fields_default_to_false(self) -> None:
        self.assertFalse(is_international_match({}))
        self.assertFalse(is_international_match({"name": None, "teams": None, "venue": 7}))
        self.assertFalse(is_international_match({"teams": [None, 3, "  "]}))
        self.assertFalse(is_international_match(SimpleNamespace()))

    def test_accepts_canonical_fixture(self) -> None:
        fixture = Fixture(id="1", name="Eng v Ind", match_type="Test", teams=["England", "India"])

        self.assertTrue(is_international_match(fixture))

    def test_same_input_gives_same_answer(self) -> None:
        fixture = {"name": "Alpha XI vs Beta XI", "matchType": "odi", "teams": []}

        self.assertEqual(is_international_match(fixture), is_international_match(fixture))


class KeywordDataTests(unittest.TestCase):
    def test_keyword_collections_are_lower_case(self) -> None:
        for collection in (
            DOMESTIC_LEAGUE_KEYWORDS,
            INTERNATIONAL_KEYWORDS,
            INTERNATIONAL_FORMATS,
            COUNTRY_TEAMS,
        ):
            for keyword in collection:
                self.assertEqual(keyword, keyword.lower())

    def test_country_roster_includes_variants(self) -> None:
        for team in ("india", "india women", "aus a", "west indies u19", "nz"):
            self.assertIn(team, COUNTRY_TEAMS)
        self.assertNotIn("mumbai indians", COUNTRY_TEAMS)


class SortFixturesTests(unittest.TestCase):
    def test_international_first_then_status_then_date(self) -> None:
        early = datetime(2026, 3, 1, tzinfo=timezone.utc)
        late = datetime(2026, 3, 2, tzinfo=timezone.utc)
        fixtures = tag_fixtures(
            [
                Fixture(id="dom", name="Big Bash League", teams=["Sixers", "Stars"], status="live"),
                Fixture(id="intl-done", name="Ashes", teams=["England", "Australia"], status="completed"),
                Fixture(id="intl-late", name="Asia Cup", teams=["India", "Pakistan"], date=late),
                Fixture(id="intl-early", name="Asia Cup", teams=["Sri Lanka", "Bangladesh"], date=early),
                Fixture(id="intl-live", name="Asia Cup", teams=["Nepal", "Oman"], status="live"),
            ]
        )

        ordered = [fixture.id for fixture in sort_fixtures(fixtures)]

        self.assertEqual(["intl-live", "intl-early", "intl-late", "intl-done", "dom"], ordered)
        self.assertFalse(fixtures[0].is_international)


if __name__ == "__main__":
    unittest.main()
