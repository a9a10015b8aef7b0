from __future__ import annotations

import unittest
from datetime import datetime, timezone

from cricket_hub.fixtures.adapters import (
    adapt_live_matches,
    from_live_match,
    from_manual_row,
    live_status,
    normalize_manual_status,
    to_manual_row,
)


def _live_match(**overrides) -> dict:
    raw = {
        "id": "a1b2",
        "name": "India vs Australia, 2nd T20I",
        "matchType": "t20",
        "status": "India won by 6 wickets",
        "venue": "Wankhede Stadium, Mumbai",
        "date": "2026-03-14",
        "dateTimeGMT": "2026-03-14T13:30:00",
        "teams": ["India", "Australia"],
        "score": [
            {"r": 182, "w": 7, "o": 20, "inning": "Australia Inning 1"},
            {"r": 185, "w": 4, "o": 19.2, "inning": "India Inning 1"},
        ],
        "series_id": "s-99",
        "fantasyEnabled": True,
        "matchStarted": True,
        "matchEnded": True,
    }
    raw.update(overrides)
    return raw


class LiveAdapterTests(unittest.TestCase):
    def test_maps_fields_onto_fixture(self) -> None:
        fixture = from_live_match(_live_match())

        self.assertEqual("a1b2", fixture.id)
        self.assertEqual("completed", fixture.status)
        self.assertEqual(datetime(2026, 3, 14, 13, 30, tzinfo=timezone.utc), fixture.date)
        self.assertEqual(["India", "Australia"], fixture.teams)
        self.assertEqual(185, fixture.score[1].runs)
        self.assertEqual(19.2, fixture.score[1].overs)
        self.assertEqual("live", fixture.source)

    def test_status_comes_from_started_and_ended_flags(self) -> None:
        self.assertEqual("upcoming", live_status(False, False))
        self.assertEqual("live", live_status(True, False))
        self.assertEqual("completed", live_status(True, True))

    def test_falls_back_to_date_when_gmt_is_missing_or_bad(self) -> None:
        fixture = from_live_match(_live_match(dateTimeGMT="not a date"))

        self.assertEqual(datetime(2026, 3, 14, tzinfo=timezone.utc), fixture.date)

    def test_malformed_or_idless_matches_are_skipped(self) -> None:
        self.assertIsNone(from_live_match({"name": "No id"}))
        self.assertIsNone(from_live_match(_live_match(score="lots")))

    def test_null_flags_and_null_list_entries_are_tolerated(self) -> None:
        matches = [
            _live_match(id="m1"),
            _live_match(id="m2", matchStarted=None, matchEnded=None),
            _live_match(id="m3", score=[None, {"r": 40, "w": 1, "o": 6, "inning": "India Inning 1"}]),
            _live_match(id="m4", teams=["India", None]),
        ]

        fixtures = adapt_live_matches(matches)

        self.assertEqual(["m1", "m2", "m3", "m4"], [fixture.id for fixture in fixtures])
        self.assertEqual("upcoming", fixtures[1].status)
        self.assertEqual([40], [inning.runs for inning in fixtures[2].score])
        self.assertEqual(["India"], fixtures[3].teams)

    def test_adapt_deduplicates_and_ignores_non_objects(self) -> None:
        matches = [_live_match(), _live_match(name="dup"), "junk", _live_match(id="c3")]

        fixtures = adapt_live_matches(matches)

        self.assertEqual(["a1b2", "c3"], [fixture.id for fixture in fixtures])
        self.assertEqual("India vs Australia, 2nd T20I", fixtures[0].name)


class ManualAdapterTests(unittest.TestCase):
    def test_row_becomes_manual_fixture(self) -> None:
        fixture = from_manual_row(
            {
                "id": "row-1",
                "match_id": "MATCH_1700000000000",
                "team1": "England",
                "team2": "South Africa",
                "venue": "Lord's",
                "match_date": datetime(2026, 6, 1, 10, 0),
                "status": "Live",
                "tournament": "South Africa tour of England",
            }
        )

        self.assertEqual("MATCH_1700000000000", fixture.id)
        self.assertEqual("South Africa tour of England", fixture.name)
        self.assertEqual("live", fixture.status)
        self.assertEqual(["England", "South Africa"], fixture.teams)
        self.assertEqual(timezone.utc, fixture.date.tzinfo)
        self.assertEqual("manual", fixture.source)

    def test_name_falls_back_to_team_pairing(self) -> None:
        fixture = from_manual_row({"id": "row-2", "team1": "Nepal", "team2": "Oman", "tournament": ""})

        self.assertEqual("row-2", fixture.id)
        self.assertEqual("Nepal vs Oman", fixture.name)

    def test_status_normalization(self) -> None:
        self.assertEqual("completed", normalize_manual_status("Completed"))
        self.assertEqual("completed", normalize_manual_status("Result declared"))
        self.assertEqual("upcoming", normalize_manual_status(None))
        self.assertEqual("upcoming", normalize_manual_status("scheduled"))

    def test_to_manual_row_keeps_match_id_and_teams(self) -> None:
        fixture = from_live_match(_live_match(teams=["India"]))

        row = to_manual_row(fixture)

        self.assertEqual("a1b2", row["match_id"])
        self.assertEqual(("India", ""), (row["team1"], row["team2"]))
        self.assertEqual("India vs Australia, 2nd T20I", row["tournament"])
        self.assertEqual("t20", row["match_type"])


if __name__ == "__main__":
    unittest.main()
