"""Data models for articles and their polls."""

from __future__ import annotations

from typing import Any, Optional, TypedDict

from portail.core.types import FirestoreDocument


class PollOption(TypedDict):
    """One answer of a poll."""

    id: str
    text: str
    votes: int


class Poll(FirestoreDocument, total=False):
    """A poll attached to an article."""

    articleId: str
    question: str
    options: list[PollOption]
    totalVotes: int


class Article(FirestoreDocument, total=False):
    """A news article."""

    slug: str
    title: str
    excerpt: str
    content: str
    author: str
    publishedAt: Any
    pollId: Optional[str]


def make_poll_options(texts: list[str]) -> list[PollOption]:
    """Number the non-blank answers of a new poll, each starting at zero votes."""
    options: list[PollOption] = []
    for text in texts:
        text = (text or "").strip()
        if text:
            options.append({"id": f"opt{len(options) + 1}", "text": text, "votes": 0})
    return options
