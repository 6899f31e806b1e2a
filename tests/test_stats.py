"""Tests for the Navetane statistics and their publication."""

from __future__ import annotations

import unittest
from unittest.mock import patch

from google.api_core.exceptions import ServiceUnavailable
from mockfirestore import MockFirestore

from portail.errors import NotFoundError, ValidationError
from portail.navetane.models import PreliminaryMatchPatch
from portail.navetane.services import NavetaneService, publish_navetane
from portail.stats.models import empty_stats, make_player_rank, make_stats_match, normalize_stats
from portail.stats.services import (
    STATS_VIEW,
    StatsService,
    get_stats_page_data,
    publish_stats,
)
from tests.conftest import patch_mockfirestore


def _without_timestamp(doc):
    return {k: v for k, v in doc.items() if k != "lastPublished"}


class StatsServiceTestCase(unittest.TestCase):
    def setUp(self) -> None:
        patch_mockfirestore()
        self.db = MockFirestore()

    def _ranking(self, key):
        return StatsService.get_admin_stats(self.db)[key]

    def test_missing_draft_reads_as_empty(self) -> None:
        self.assertEqual(StatsService.get_admin_stats(self.db), empty_stats())

    def test_normalize_drops_bad_lists(self) -> None:
        stats = normalize_stats({"ballonDor": "oops", "lastResults": [{"teamA": "A"}, 3]})
        self.assertEqual(stats["ballonDor"], [])
        self.assertEqual(stats["lastResults"], [{"teamA": "A"}])
        self.assertEqual(stats["upcomingMatches"], [])

    def test_add_player_ranks_in_order(self) -> None:
        StatsService.add_player(self.db, "ballonDor", make_player_rank("Moussa", "t1", 12))
        added = StatsService.add_player(self.db, "ballonDor", make_player_rank(" Ibou ", "", 8))

        self.assertEqual(added["rank"], 2)
        self.assertEqual(
            self._ranking("ballonDor"),
            [
                {"rank": 1, "name": "Moussa", "teamId": "t1", "points": 12},
                {"rank": 2, "name": "Ibou", "teamId": "", "points": 8},
            ],
        )
        self.assertEqual(self._ranking("goldenBoy"), [])

    def test_remove_player_moves_the_others_up(self) -> None:
        for name in ("A", "B", "C"):
            StatsService.add_player(self.db, "topScorersCoupe", make_player_rank(name))

        StatsService.remove_player(self.db, "topScorersCoupe", 2)

        ranking = self._ranking("topScorersCoupe")
        self.assertEqual([(p["rank"], p["name"]) for p in ranking], [(1, "A"), (2, "C")])

    def test_player_errors(self) -> None:
        with self.assertRaises(ValidationError):
            StatsService.add_player(self.db, "palmares", make_player_rank("A"))
        with self.assertRaises(ValidationError):
            StatsService.add_player(self.db, "ballonDor", make_player_rank(" "))
        with self.assertRaises(ValidationError):
            StatsService.add_player(self.db, "ballonDor", {"name": "A", "points": -1})
        with self.assertRaises(NotFoundError):
            StatsService.remove_player(self.db, "ballonDor", 1)

    def test_add_and_remove_matches(self) -> None:
        StatsService.add_match(self.db, "lastResults", make_stats_match("Jamono", "Diaraf", 2, 1))
        StatsService.add_match(
            self.db,
            "upcomingMatches",
            make_stats_match("Zénith", "Jamono", date="Samedi", stadium=" Stade Municipal ", poule=""),
        )

        stats = StatsService.get_admin_stats(self.db)
        self.assertEqual(
            stats["lastResults"], [{"teamA": "Jamono", "teamB": "Diaraf", "scoreA": 2, "scoreB": 1}]
        )
        self.assertEqual(
            stats["upcomingMatches"],
            [{"teamA": "Zénith", "teamB": "Jamono", "date": "Samedi", "stadium": "Stade Municipal"}],
        )

        StatsService.remove_match(self.db, "lastResults", 0)
        self.assertEqual(StatsService.get_admin_stats(self.db)["lastResults"], [])

    def test_match_errors(self) -> None:
        with self.assertRaises(ValidationError):
            StatsService.add_match(self.db, "results", make_stats_match("A", "B"))
        with self.assertRaises(ValidationError):
            StatsService.add_match(self.db, "lastResults", make_stats_match("A", " "))
        with self.assertRaises(ValidationError):
            StatsService.add_match(self.db, "lastResults", make_stats_match("A", "B", -1, 0))
        with self.assertRaises(NotFoundError):
            StatsService.remove_match(self.db, "upcomingMatches", 0)

    def test_save_stats_renumbers_rankings(self) -> None:
        stats = empty_stats()
        stats["goldenBoy"] = [{"rank": 7, "name": "A"}, {"rank": 3, "name": "B"}]
        StatsService.save_stats(self.db, stats)
        self.assertEqual([p["rank"] for p in self._ranking("goldenBoy")], [1, 2])


class PublishStatsTestCase(unittest.TestCase):
    def setUp(self) -> None:
        patch_mockfirestore()
        self.db = MockFirestore()
        self.db.collection("teams").document("t1").set({"name": "Jamono", "logoUrl": "l1"})
        self.db.collection("teams").document("t2").set({"name": "Diaraf", "logoUrl": "l2"})

        StatsService.add_player(self.db, "ballonDor", make_player_rank("Moussa", "t1", 12))
        StatsService.add_player(self.db, "ballonDor", make_player_rank("Ibou", "deleted", 8))
        StatsService.add_match(self.db, "lastResults", make_stats_match("Diaraf", "Ghost FC", 1, 0))

    def _public(self):
        return self.db.collection("navetane_stats").document("public_view").get().to_dict()

    def test_publish_resolves_player_teams_by_id(self) -> None:
        publish_stats(self.db)

        first, second = self._public()["ballonDor"]
        self.assertEqual(first["teamName"], "Jamono")
        self.assertEqual(first["teamLogoUrl"], "l1")
        self.assertIsNone(second["teamName"])
        self.assertIsNone(second["teamLogoUrl"])
        self.assertEqual(second["teamId"], "deleted")

    def test_publish_resolves_match_logos_by_name(self) -> None:
        publish_stats(self.db)

        match = self._public()["lastResults"][0]
        self.assertEqual(match["teamALogoUrl"], "l2")
        self.assertEqual(match["teamBLogoUrl"], "")
        self.assertEqual(match["teamB"], "Ghost FC")

    def test_draft_lives_beside_the_public_view(self) -> None:
        public_ref = self.db.collection("navetane_stats").document("public_view")
        self.assertFalse(public_ref.get().exists)
        publish_stats(self.db)

        draft = self.db.collection("navetane_stats").document("admin_data").get().to_dict()
        self.assertNotIn("teamName", draft["ballonDor"][0])
        self.assertIn("lastPublished", self._public())

    def test_publish_is_idempotent(self) -> None:
        publish_stats(self.db)
        first = _without_timestamp(self._public())
        publish_stats(self.db)
        self.assertEqual(_without_timestamp(self._public()), first)

    def test_failed_publish_keeps_previous_snapshot(self) -> None:
        publish_stats(self.db)
        before = _without_timestamp(self._public())
        StatsService.add_player(self.db, "goldenBoy", make_player_rank("Pape", "t2"))

        with patch(
            "portail.stats.services.TeamService.get_directory",
            side_effect=ServiceUnavailable("registry read failed"),
        ):
            with self.assertRaises(ServiceUnavailable):
                publish_stats(self.db)

        self.assertEqual(_without_timestamp(self._public()), before)

    def test_public_defaults_to_empty_lists(self) -> None:
        self.assertEqual(STATS_VIEW.public(self.db), empty_stats())

    def test_page_data_reads_published_snapshots_only(self) -> None:
        NavetaneService.update_preliminary_match(
            self.db,
            PreliminaryMatchPatch(team_a="Jamono", team_b="Diaraf", winner_plays_against="Zénith"),
        )

        data = get_stats_page_data(self.db)
        self.assertEqual(data["ballonDor"], [])
        self.assertIsNone(data["preliminaryMatch"])
        self.assertIsNone(data["lastPublished"])

        publish_stats(self.db)
        publish_navetane(self.db)

        data = get_stats_page_data(self.db)
        self.assertEqual([p["name"] for p in data["ballonDor"]], ["Moussa", "Ibou"])
        self.assertEqual(data["preliminaryMatch"]["teamAData"], {"name": "Jamono", "logoUrl": "l1"})
        self.assertEqual(data["upcomingMatches"], [])


if __name__ == "__main__":
    unittest.main()
