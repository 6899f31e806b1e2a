"""Data models for sponsors."""

from portail.core.types import FirestoreDocument, PublicView


class Sponsor(FirestoreDocument, total=False):
    """A sponsor shown in the site sidebar."""

    name: str
    logoUrl: str
    websiteUrl: str


class SponsorsPublicView(PublicView, total=False):
    """The published sponsors list."""

    sponsors: list[Sponsor]
