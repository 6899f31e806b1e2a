"""Core module for the portail application."""

from .cache import ListCache
from .publishable import Publishable
from .types import FirestoreDocument, PublicView, TeamData

__all__ = ["FirestoreDocument", "ListCache", "PublicView", "Publishable", "TeamData"]
