"""Core data types for the portail application."""

from typing import Any, Optional, TypedDict


class _FirestoreDocumentBase(TypedDict):
    id: str


class FirestoreDocument(_FirestoreDocumentBase, total=False):
    """Generic Firestore document structure."""

    createdAt: Any
    updatedAt: Any


class TeamData(TypedDict):
    """Display data resolved for a team reference."""

    name: str
    logoUrl: str


class PublicView(TypedDict, total=False):
    """Fields shared by every published snapshot."""

    lastPublished: Optional[Any]


class _Unset:
    def __repr__(self) -> str:
        return "UNSET"


# Patch fields left as UNSET are not touched; None clears a field.
UNSET: Any = _Unset()
