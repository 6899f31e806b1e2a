"""Tests for the public and admin routes."""

from __future__ import annotations

import unittest
from unittest.mock import MagicMock, patch

from mockfirestore import MockFirestore

from portail import create_app
from portail.extensions import get_cache
from portail.navetane.services import NavetaneService
from tests.conftest import install_mock_batch, patch_mockfirestore

ROUTE_MODULES = (
    "portail.auth.routes",
    "portail.teams.routes",
    "portail.navetane.routes",
    "portail.finals.routes",
    "portail.articles.routes",
    "portail.sponsors.routes",
    "portail.stats.routes",
)


class RoutesTestCase(unittest.TestCase):
    def setUp(self) -> None:
        patch_mockfirestore()
        self.db = MockFirestore()
        install_mock_batch(self.db)
        self.mock_firestore_service = MagicMock()
        self.mock_firestore_service.client.return_value = self.db

        patchers = [patch("firebase_admin.initialize_app")] + [
            patch(f"{module}.firestore", new=self.mock_firestore_service)
            for module in ROUTE_MODULES
        ]
        for p in patchers:
            p.start()
            self.addCleanup(p.stop)

        self.app = create_app({"TESTING": True, "WTF_CSRF_ENABLED": False})
        self.client = self.app.test_client()

        self.db.collection("teams").document("t1").set({"name": "Jamono", "logoUrl": "l1"})
        self.db.collection("teams").document("t2").set({"name": "Diaraf", "logoUrl": "l2"})

    def _login(self, is_admin=True):
        with self.client.session_transaction() as sess:
            sess["user_id"] = "admin_uid"
            sess["is_admin"] = is_admin

    # --- Public ---

    def test_public_page_renders_without_published_data(self) -> None:
        response = self.client.get("/navetane/")
        self.assertEqual(response.status_code, 200)
        self.assertIn(b"No table published yet.", response.data)

    def test_public_page_shows_published_snapshot_only(self) -> None:
        self._login()
        poule_id = NavetaneService.create_poule(self.db, "Poule A")
        self.client.post(f"/admin/navetane/poules/{poule_id}/teams", data={"team_id": "t1", "pts": 3})

        self.assertNotIn(b"Jamono", self.client.get("/navetane/").data)

        self.client.post("/admin/navetane/publish")
        response = self.client.get("/navetane/")
        self.assertIn(b"Poule A", response.data)
        self.assertIn(b"Jamono", response.data)

    def test_data_json(self) -> None:
        self.db.collection("navetane_public_views").document("live").set(
            {"poules": [{"id": "p", "name": "Poule C", "teams": [{"id": "a", "pts": 1}]}]}
        )
        data = self.client.get("/navetane/data.json").get_json()
        self.assertEqual(data["poules"][0]["standings"][0]["rank"], 1)
        self.assertTrue(data["poules"][0]["standings"][0]["qualified"])
        self.assertEqual(data["coupeMatches"], [])

    def test_preview_json(self) -> None:
        self.db.collection("navetane_public_views").document("live").set(
            {"poules": [{"id": "p", "name": "Poule C", "teams": [{"id": "a", "pts": 1}]}]}
        )
        data = self.client.get("/navetane/preview.json").get_json()
        self.assertEqual(data["poules"][0]["name"], "Poule C")

    def test_index_redirects_to_league(self) -> None:
        response = self.client.get("/")
        self.assertEqual(response.status_code, 302)
        self.assertIn("/navetane/", response.headers["Location"])

    # --- Admin access ---

    def test_admin_requires_sign_in(self) -> None:
        response = self.client.get("/admin/navetane/", follow_redirects=True)
        self.assertIn(b"Please sign in to continue.", response.data)

    def test_admin_requires_admin_flag(self) -> None:
        self._login(is_admin=False)
        response = self.client.get("/admin/teams/", follow_redirects=True)
        self.assertIn(b"You are not authorized to view this page.", response.data)

    def test_admin_pages_render(self) -> None:
        self._login()
        for url in (
            "/admin/teams/",
            "/admin/navetane/",
            "/admin/finals/",
            "/admin/sponsors/",
            "/admin/articles/",
            "/admin/stats/",
        ):
            with self.subTest(url=url):
                self.assertEqual(self.client.get(url).status_code, 200)

    def test_session_login_sets_admin_flag(self) -> None:
        self.db.collection("users").document("u1").set({"name": "Admin", "isAdmin": True})
        with patch("portail.auth.routes.auth") as mock_auth:
            mock_auth.verify_id_token.return_value = {"uid": "u1"}
            response = self.client.post("/auth/session_login", json={"idToken": "token"})

        self.assertEqual(response.get_json(), {"status": "success", "isAdmin": True})
        self.assertEqual(self.client.get("/admin/teams/").status_code, 200)

        self.client.get("/auth/logout")
        self.assertEqual(self.client.get("/admin/teams/").status_code, 302)

    def test_session_login_requires_token(self) -> None:
        response = self.client.post("/auth/session_login", json={})
        self.assertEqual(response.status_code, 400)

    # --- Admin actions ---

    def test_duplicate_team_in_poule_is_flashed(self) -> None:
        self._login()
        poule_id = NavetaneService.create_poule(self.db, "Poule B")
        url = f"/admin/navetane/poules/{poule_id}/teams"
        self.client.post(url, data={"team_id": "t1"})
        response = self.client.post(url, data={"team_id": "t1"}, follow_redirects=True)

        self.assertIn(b"This team is already in the poule.", response.data)
        teams = NavetaneService.get_poule(self.db, poule_id)["teams"]
        self.assertEqual([r["id"] for r in teams], ["t1"])

    def test_edit_poule_team_recomputes_goal_balance(self) -> None:
        self._login()
        poule_id = NavetaneService.create_poule(self.db, "Poule B")
        self.client.post(
            f"/admin/navetane/poules/{poule_id}/teams",
            data={"team_id": "t1", "bp": 2, "bc": 2},
        )

        page = self.client.get("/admin/navetane/").data
        self.assertIn(b'<input name="diff" type="number" value="" placeholder="0">', page)

        # The edit form resubmits a blank balance along with the new goals
        self.client.post(
            f"/admin/navetane/poules/{poule_id}/teams/t1/edit",
            data={"team_id": "t1", "pts": 3, "bp": 5, "bc": 1, "diff": ""},
        )
        record = NavetaneService.get_poule(self.db, poule_id)["teams"][0]
        self.assertEqual(record["diff"], 4)

    def test_blank_qualified_count_restores_default_rule(self) -> None:
        self._login()
        poule_id = NavetaneService.create_poule(self.db, "Poule A", qualified_count=1)

        page = self.client.get("/admin/navetane/").data
        self.assertIn(b'name="qualified_count" type="number" min="0" value="1"', page)

        self.client.post(
            f"/admin/navetane/poules/{poule_id}/edit",
            data={"name": "Poule A", "qualified_count": ""},
        )
        poule = NavetaneService.get_poule(self.db, poule_id)
        self.assertIsNone(poule["qualifiedCount"])

        page = self.client.get("/admin/navetane/").data
        self.assertIn(b'value="" placeholder="3"', page)

    def test_create_team_invalidates_cache(self) -> None:
        self._login()
        self.client.get("/admin/teams/")
        with self.app.app_context():
            self.assertTrue(get_cache("teams").is_warm)

        response = self.client.post(
            "/admin/teams/",
            data={"name": "Zénith", "logo_url": "https://img.example.com/z.png"},
            follow_redirects=True,
        )

        self.assertIn("Zénith".encode(), response.data)
        with self.app.app_context():
            names = [t["name"] for t in get_cache("teams").get(lambda: [])]
        self.assertIn("Zénith", names)

    def test_store_failure_is_flashed_generically(self) -> None:
        self._login()
        with patch(
            "portail.navetane.routes.publish_navetane", side_effect=RuntimeError("deadline")
        ):
            response = self.client.post("/admin/navetane/publish", follow_redirects=True)
        self.assertIn(b"An error occurred while talking to the database.", response.data)

    def test_finals_add_and_publish(self) -> None:
        self._login()
        self.client.post("/admin/finals/coupe/final/add")
        draft = self.db.collection("finals_admin_data").document("current").get().to_dict()
        match_id = draft["coupe"]["final"][0]["id"]

        self.client.post(
            f"/admin/finals/coupe/final/{match_id}/edit",
            data={"team_a_id": "t1", "team_b_id": "", "score_a": "", "score_b": "",
                  "date": "", "status": "pending"},
        )
        self.client.post("/admin/finals/publish")

        public = self.db.collection("finals_public_view").document("live").get().to_dict()
        match = public["coupe"]["final"][0]
        self.assertEqual(match["teamAName"], "Jamono")
        self.assertIsNone(match["teamBName"])

    def test_unknown_bracket_stage_is_flashed(self) -> None:
        self._login()
        response = self.client.post("/admin/finals/coupe/eighths/add", follow_redirects=True)
        self.assertIn(b"Unknown bracket stage", response.data)

    def test_delete_article_route_cascades(self) -> None:
        self._login()
        self.db.collection("articles").document("a1").set({"title": "T", "pollId": "p1"})
        self.db.collection("polls").document("p1").set({"articleId": "a1", "options": []})

        self.client.post("/admin/articles/a1/delete")

        self.assertFalse(self.db.collection("articles").document("a1").get().exists)
        self.assertFalse(self.db.collection("polls").document("p1").get().exists)

    def test_vote_route(self) -> None:
        self.db.collection("polls").document("p1").set(
            {"articleId": "a1", "question": "?",
             "options": [{"id": "opt1", "text": "Oui", "votes": 0}], "totalVotes": 0}
        )
        transaction = MagicMock()
        transaction.update.side_effect = lambda ref, data: ref.update(data)

        with patch("portail.articles.services.firestore.transactional", side_effect=lambda f: f), \
                patch.object(self.db, "transaction", return_value=transaction, create=True):
            response = self.client.post("/articles/polls/p1/vote", json={"optionId": "opt1"})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json()["poll"]["totalVotes"], 1)
        stored = self.db.collection("polls").document("p1").get().to_dict()
        self.assertEqual(stored["options"][0]["votes"], 1)

    def test_vote_on_missing_poll(self) -> None:
        transaction = MagicMock()
        with patch("portail.articles.services.firestore.transactional", side_effect=lambda f: f), \
                patch.object(self.db, "transaction", return_value=transaction, create=True):
            response = self.client.post("/articles/polls/nope/vote", json={"optionId": "opt1"})
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.get_json()["status"], "error")

    def test_stats_add_player_and_publish(self) -> None:
        self._login()
        self.client.post(
            "/admin/stats/ballonDor/players",
            data={"name": "Moussa", "team_id": "t1", "points": 12},
        )
        self.client.post(
            "/admin/stats/upcomingMatches/matches",
            data={"team_a": "Jamono", "team_b": "Diaraf", "date": "Samedi", "stadium": "Stade"},
        )

        self.assertNotIn(b"Moussa", self.client.get("/statistiques/").data)

        self.client.post("/admin/stats/publish")
        response = self.client.get("/statistiques/")
        self.assertEqual(response.status_code, 200)
        self.assertIn(b"Moussa", response.data)

        data = self.client.get("/statistiques/data.json").get_json()
        self.assertEqual(data["ballonDor"][0]["teamName"], "Jamono")
        self.assertEqual(data["upcomingMatches"][0]["teamBLogoUrl"], "l2")
        self.assertIsNone(data["preliminaryMatch"])

    def test_unknown_ranking_is_flashed(self) -> None:
        self._login()
        response = self.client.post(
            "/admin/stats/palmares/players", data={"name": "A"}, follow_redirects=True
        )
        self.assertIn(b"Unknown ranking", response.data)

    def test_sponsors_json(self) -> None:
        self.db.collection("sponsors_public_view").document("live").set(
            {"sponsors": [{"id": "s1", "name": "Garage", "logoUrl": "l", "websiteUrl": ""}]}
        )
        data = self.client.get("/sponsors.json").get_json()
        self.assertEqual(data["sponsors"][0]["name"], "Garage")


if __name__ == "__main__":
    unittest.main()
