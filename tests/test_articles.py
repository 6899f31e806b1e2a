"""Tests for articles, their polls and vote counting."""

from __future__ import annotations

import unittest
from unittest.mock import MagicMock

from google.api_core.exceptions import ServiceUnavailable
from mockfirestore import MockFirestore

from portail.articles.models import make_poll_options
from portail.articles.services import ArticleService, slugify
from portail.errors import NotFoundError, ValidationError
from tests.conftest import MockBatch, install_mock_batch, patch_mockfirestore


class ArticleServiceTestCase(unittest.TestCase):
    def setUp(self) -> None:
        patch_mockfirestore()
        self.db = MockFirestore()
        install_mock_batch(self.db)

    def test_create_article_with_poll_links_both_ways(self) -> None:
        article_id = ArticleService.create_article(
            self.db,
            "Finale de la Coupe",
            "Texte",
            poll_question="Qui gagne ?",
            poll_options=["Jamono", "", "Diaraf"],
        )

        article = ArticleService.get_article(self.db, article_id)
        self.assertEqual(article["slug"], "finale-de-la-coupe")
        poll = ArticleService.get_poll_for_article(self.db, article_id)
        self.assertEqual(poll["id"], article["pollId"])
        self.assertEqual(poll["totalVotes"], 0)
        self.assertEqual([o["text"] for o in poll["options"]], ["Jamono", "Diaraf"])

    def test_create_article_without_poll(self) -> None:
        article_id = ArticleService.create_article(self.db, "Résultats", "Texte")
        self.assertIsNone(ArticleService.get_article(self.db, article_id)["pollId"])
        self.assertIsNone(ArticleService.get_poll_for_article(self.db, article_id))

    def test_failed_commit_writes_neither_article_nor_poll(self) -> None:
        batch = MockBatch()
        batch.commit.side_effect = ServiceUnavailable("write failed")
        self.db.batch = MagicMock(return_value=batch)

        with self.assertRaises(ServiceUnavailable):
            ArticleService.create_article(
                self.db, "Titre", "Texte", poll_question="?", poll_options=["Oui", "Non"]
            )

        self.assertEqual(len(batch.writes), 2)
        self.assertEqual(list(self.db.collection("articles").stream()), [])
        self.assertEqual(list(self.db.collection("polls").stream()), [])

    def test_create_article_validation(self) -> None:
        with self.assertRaises(ValidationError):
            ArticleService.create_article(self.db, " ", "Texte")
        with self.assertRaises(ValidationError):
            ArticleService.create_article(
                self.db, "Titre", "Texte", poll_question="?", poll_options=["Seule"]
            )

    def test_delete_article_deletes_its_poll(self) -> None:
        article_id = ArticleService.create_article(
            self.db, "Titre", "Texte", poll_question="?", poll_options=["a", "b"]
        )
        poll_id = ArticleService.get_article(self.db, article_id)["pollId"]

        ArticleService.delete_article(self.db, article_id)

        self.assertIsNone(ArticleService.get_article(self.db, article_id))
        self.assertFalse(self.db.collection("polls").document(poll_id).get().exists)

    def test_delete_article_leaves_other_polls(self) -> None:
        keep_id = ArticleService.create_article(
            self.db, "Garde", "Texte", poll_question="?", poll_options=["a", "b"]
        )
        drop_id = ArticleService.create_article(self.db, "Supprime", "Texte")

        ArticleService.delete_article(self.db, drop_id)

        self.assertIsNotNone(ArticleService.get_poll_for_article(self.db, keep_id))

    def test_slugify(self) -> None:
        self.assertEqual(slugify("Navétane 2024 : la finale!"), "navetane-2024-la-finale")
        self.assertEqual(slugify(""), "")

    def test_make_poll_options(self) -> None:
        self.assertEqual(
            make_poll_options([" Oui ", "", "Non"]),
            [{"id": "opt1", "text": "Oui", "votes": 0}, {"id": "opt2", "text": "Non", "votes": 0}],
        )


class PollVoteTransactionTestCase(unittest.TestCase):
    def _poll_ref(self, data, exists=True):
        poll_ref = MagicMock()
        poll_ref.id = "poll1"
        snapshot = MagicMock()
        snapshot.exists = exists
        snapshot.to_dict.return_value = data
        poll_ref.get.return_value = snapshot
        return poll_ref

    def test_vote_increments_option_and_total(self) -> None:
        transaction = MagicMock()
        poll_ref = self._poll_ref(
            {
                "question": "?",
                "options": [
                    {"id": "opt1", "text": "Oui", "votes": 2},
                    {"id": "opt2", "text": "Non", "votes": 5},
                ],
                "totalVotes": 7,
            }
        )

        poll = ArticleService._vote_in_transaction(transaction, poll_ref, "opt2")

        poll_ref.get.assert_called_with(transaction=transaction)
        transaction.update.assert_called_once_with(
            poll_ref,
            {
                "options": [
                    {"id": "opt1", "text": "Oui", "votes": 2},
                    {"id": "opt2", "text": "Non", "votes": 6},
                ],
                "totalVotes": 8,
            },
        )
        self.assertEqual(poll["id"], "poll1")
        self.assertEqual(poll["totalVotes"], 8)

    def test_vote_on_missing_poll(self) -> None:
        transaction = MagicMock()
        with self.assertRaises(NotFoundError):
            ArticleService._vote_in_transaction(transaction, self._poll_ref({}, exists=False), "opt1")
        transaction.update.assert_not_called()

    def test_vote_on_unknown_option(self) -> None:
        transaction = MagicMock()
        poll_ref = self._poll_ref({"options": [{"id": "opt1", "votes": 0}], "totalVotes": 0})
        with self.assertRaises(ValidationError):
            ArticleService._vote_in_transaction(transaction, poll_ref, "opt9")
        transaction.update.assert_not_called()

    def test_vote_requires_ids(self) -> None:
        with self.assertRaises(ValidationError):
            ArticleService.vote_on_poll(MagicMock(), "poll1", "")


if __name__ == "__main__":
    unittest.main()
