"""Service layer for the team registry."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional, cast

from firebase_admin import firestore

from portail.core.constants import TEAMS_COLLECTION, TEAMS_PUBLIC_COLLECTION
from portail.core.publishable import Publishable
from portail.errors import NotFoundError, ValidationError

from .models import Team, TeamPatch

if TYPE_CHECKING:
    from google.cloud.firestore_v1.base_document import DocumentSnapshot
    from google.cloud.firestore_v1.client import Client

    from portail.core.cache import ListCache
    from portail.core.types import TeamData


class TeamDirectory:
    """Lookup tables over one registry listing, used while enriching a publish."""

    def __init__(self, teams: list[Team]) -> None:
        """Index the teams by id and by name (first occurrence of a name wins)."""
        self.teams = teams
        self.by_id: dict[str, Team] = {}
        self.by_name: dict[str, Team] = {}
        for team in teams:
            self.by_id[team["id"]] = team
            name = team.get("name")
            if name and name not in self.by_name:
                self.by_name[name] = team

    def resolve_name(self, name: Optional[str]) -> TeamData:
        """Resolve a team name, falling back to the raw name and an empty logo."""
        team = self.by_name.get(name) if name else None
        if team is None:
            return {"name": name or "", "logoUrl": ""}
        return {"name": team.get("name", ""), "logoUrl": team.get("logoUrl", "")}

    def resolve_id(self, team_id: Optional[str]) -> Optional[Team]:
        """Resolve a team id, returning None when it is unset or unknown."""
        if not team_id:
            return None
        return self.by_id.get(team_id)


class TeamService:
    """Service class for registry operations."""

    @staticmethod
    def _load_teams(db: Client) -> list[Team]:
        """Read every team ordered by name."""
        docs = db.collection(TEAMS_COLLECTION).order_by("name").stream()
        teams = []
        for doc in docs:
            data = doc.to_dict() or {}
            data["id"] = doc.id
            teams.append(cast(Team, data))
        return teams

    @staticmethod
    def list_teams(db: Client, cache: ListCache | None = None) -> list[Team]:
        """List the registry, served from ``cache`` when one is given."""
        if cache is None:
            return TeamService._load_teams(db)
        return cache.get(lambda: TeamService._load_teams(db))

    @staticmethod
    def get_directory(db: Client) -> TeamDirectory:
        """Build a lookup directory from a fresh registry read."""
        return TeamDirectory(TeamService._load_teams(db))

    @staticmethod
    def get_team(db: Client, team_id: str) -> Team | None:
        """Fetch a single team."""
        doc = cast("DocumentSnapshot", db.collection(TEAMS_COLLECTION).document(team_id).get())
        if not doc.exists:
            return None
        data = doc.to_dict() or {}
        data["id"] = doc.id
        return cast(Team, data)

    @staticmethod
    def create_team(
        db: Client, name: str, logo_url: str, cache: ListCache | None = None
    ) -> str:
        """Create a team and return its ID."""
        if not name or not name.strip():
            raise ValidationError("A team needs a name.")
        team_ref = db.collection(TEAMS_COLLECTION).document()
        team_ref.set(
            {
                "name": name.strip(),
                "logoUrl": (logo_url or "").strip(),
                "createdAt": firestore.SERVER_TIMESTAMP,
            }
        )
        if cache is not None:
            cache.invalidate()
        return str(team_ref.id)

    @staticmethod
    def update_team(
        db: Client, team_id: str, patch: TeamPatch, cache: ListCache | None = None
    ) -> None:
        """Apply a patch to a team."""
        fields = patch.to_update()
        if not fields:
            raise ValidationError("Nothing to update.")
        if "name" in fields and not fields["name"]:
            raise ValidationError("A team needs a name.")

        team_ref = db.collection(TEAMS_COLLECTION).document(team_id)
        if not cast("DocumentSnapshot", team_ref.get()).exists:
            raise NotFoundError("Team not found.")
        fields["updatedAt"] = firestore.SERVER_TIMESTAMP
        team_ref.update(fields)
        if cache is not None:
            cache.invalidate()

    @staticmethod
    def delete_team(db: Client, team_id: str, cache: ListCache | None = None) -> None:
        """Delete a team.

        References held by poules, cup matches and brackets are left as they
        are and resolve to placeholders at the next publish.
        """
        db.collection(TEAMS_COLLECTION).document(team_id).delete()
        if cache is not None:
            cache.invalidate()


def _teams_snapshot(db: Client, teams: list[Team]) -> dict[str, Any]:
    return {
        "teams": [
            {"id": t["id"], "name": t.get("name", ""), "logoUrl": t.get("logoUrl", "")}
            for t in teams
        ]
    }


TEAMS_VIEW: Publishable[list[Team]] = Publishable(
    name="teams",
    public_collection=TEAMS_PUBLIC_COLLECTION,
    load_draft=TeamService._load_teams,
    enrich=_teams_snapshot,
    default_view=lambda: {"teams": []},
)
