"""Service layer for articles and their polls."""

from __future__ import annotations

import logging
import re
import unicodedata
from typing import TYPE_CHECKING, Any, Optional, cast

from firebase_admin import firestore

from portail.core.constants import ARTICLES_COLLECTION, POLLS_COLLECTION
from portail.errors import NotFoundError, ValidationError

from .models import Article, Poll, make_poll_options

if TYPE_CHECKING:
    from google.cloud.firestore_v1.base_document import DocumentSnapshot
    from google.cloud.firestore_v1.client import Client
    from google.cloud.firestore_v1.document import DocumentReference
    from google.cloud.firestore_v1.transaction import Transaction

MIN_POLL_OPTIONS = 2


def slugify(text: str) -> str:
    """Turn a title into a lowercase ASCII slug."""
    text = unicodedata.normalize("NFKD", text or "")
    text = text.encode("ascii", "ignore").decode("ascii").lower()
    return re.sub(r"[^a-z0-9]+", "-", text).strip("-")


class ArticleService:
    """Service class for article operations."""

    @staticmethod
    def list_articles(db: Client) -> list[Article]:
        """List articles, most recent first."""
        docs = (
            db.collection(ARTICLES_COLLECTION)
            .order_by("publishedAt", direction=firestore.Query.DESCENDING)
            .stream()
        )
        articles = []
        for doc in docs:
            data = doc.to_dict() or {}
            data["id"] = doc.id
            articles.append(cast(Article, data))
        return articles

    @staticmethod
    def get_article(db: Client, article_id: str) -> Article | None:
        """Fetch a single article."""
        doc = cast(
            "DocumentSnapshot", db.collection(ARTICLES_COLLECTION).document(article_id).get()
        )
        if not doc.exists:
            return None
        data = doc.to_dict() or {}
        data["id"] = doc.id
        return cast(Article, data)

    @staticmethod
    def create_article(
        db: Client,
        title: str,
        content: str,
        author: str = "",
        excerpt: str = "",
        poll_question: Optional[str] = None,
        poll_options: Optional[list[str]] = None,
    ) -> str:
        """Create an article, with its poll when a question is given.

        The poll records the article id and the article records the poll id.
        Both documents are written in one batch.
        """
        title = (title or "").strip()
        if not title:
            raise ValidationError("An article needs a title.")

        options = make_poll_options(poll_options or [])
        question = (poll_question or "").strip()
        if question and len(options) < MIN_POLL_OPTIONS:
            raise ValidationError("A poll needs at least two answers.")

        article_ref = db.collection(ARTICLES_COLLECTION).document()
        article: dict[str, Any] = {
            "slug": slugify(title),
            "title": title,
            "excerpt": (excerpt or "").strip(),
            "content": content or "",
            "author": (author or "").strip(),
            "publishedAt": firestore.SERVER_TIMESTAMP,
            "pollId": None,
        }
        batch = db.batch()
        if question:
            poll_ref = db.collection(POLLS_COLLECTION).document()
            batch.set(
                poll_ref,
                {
                    "articleId": article_ref.id,
                    "question": question,
                    "options": options,
                    "totalVotes": 0,
                },
            )
            article["pollId"] = poll_ref.id
        batch.set(article_ref, article)
        batch.commit()
        return str(article_ref.id)

    @staticmethod
    def delete_article(db: Client, article_id: str) -> None:
        """Delete an article and the poll linked to it."""
        article_ref = db.collection(ARTICLES_COLLECTION).document(article_id)
        doc = cast("DocumentSnapshot", article_ref.get())
        batch = db.batch()
        poll_id = (doc.to_dict() or {}).get("pollId") if doc.exists else None
        if poll_id:
            batch.delete(db.collection(POLLS_COLLECTION).document(poll_id))
        batch.delete(article_ref)
        batch.commit()
        if poll_id:
            logging.info(f"Deleted poll {poll_id} with article {article_id}.")

    @staticmethod
    def get_poll_for_article(db: Client, article_id: str) -> Poll | None:
        """Fetch the poll attached to an article, if any."""
        docs = (
            db.collection(POLLS_COLLECTION)
            .where(filter=firestore.FieldFilter("articleId", "==", article_id))
            .limit(1)
            .stream()
        )
        for doc in docs:
            data = doc.to_dict() or {}
            data["id"] = doc.id
            return cast(Poll, data)
        return None

    @staticmethod
    def _vote_in_transaction(
        transaction: Transaction, poll_ref: DocumentReference, option_id: str
    ) -> Poll:
        """Count one vote for ``option_id`` inside a transaction."""
        snapshot = cast("DocumentSnapshot", poll_ref.get(transaction=transaction))
        if not snapshot.exists:
            raise NotFoundError("Poll not found.")
        data = snapshot.to_dict() or {}
        options = data.get("options") or []
        if not any(option.get("id") == option_id for option in options):
            raise ValidationError("Unknown poll answer.")

        new_options = [
            {**option, "votes": (option.get("votes") or 0) + 1}
            if option.get("id") == option_id
            else option
            for option in options
        ]
        total_votes = (data.get("totalVotes") or 0) + 1
        transaction.update(poll_ref, {"options": new_options, "totalVotes": total_votes})

        data.update(options=new_options, totalVotes=total_votes)
        data["id"] = poll_ref.id
        return cast(Poll, data)

    @staticmethod
    def vote_on_poll(db: Client, poll_id: str, option_id: str) -> Poll:
        """Record a vote atomically and return the updated poll."""
        if not poll_id or not option_id:
            raise ValidationError("A poll and an answer are required.")
        poll_ref = db.collection(POLLS_COLLECTION).document(poll_id)

        @firestore.transactional
        def vote(transaction: Transaction) -> Poll:
            return ArticleService._vote_in_transaction(transaction, poll_ref, option_id)

        return vote(db.transaction())
