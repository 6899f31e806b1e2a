"""Data models for the teams feature."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from portail.core.types import FirestoreDocument


class Team(FirestoreDocument, total=False):
    """A team document in the registry."""

    name: str
    logoUrl: str


@dataclass
class TeamPatch:
    """The mutable fields of a registry team."""

    name: Optional[str] = None
    logo_url: Optional[str] = None

    def to_update(self) -> dict[str, Any]:
        """Return the Firestore field updates for the fields that are set."""
        fields: dict[str, Any] = {}
        if self.name is not None:
            fields["name"] = self.name.strip()
        if self.logo_url is not None:
            fields["logoUrl"] = self.logo_url.strip()
        return fields
