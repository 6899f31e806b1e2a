"""Service layer for the Navetane draft state and its publication."""

from __future__ import annotations

import copy
from typing import TYPE_CHECKING, Any, Optional, cast

from firebase_admin import firestore

from portail.core.constants import (
    COUPE_MATCHES_COLLECTION,
    NAVETANE_PUBLIC_COLLECTION,
    POULES_COLLECTION,
    PRELIMINARY_MATCH_COLLECTION,
    PRELIMINARY_MATCH_DOC_ID,
)
from portail.core.publishable import Publishable
from portail.errors import DuplicateResourceError, NotFoundError, ValidationError
from portail.teams.services import TeamDirectory, TeamService

from .models import (
    CoupeMatch,
    CoupeMatchPatch,
    NavetaneDraft,
    NavetanePublicView,
    Poule,
    PoulePatch,
    PouleStats,
    PouleTeamRecord,
    PreliminaryMatch,
    PreliminaryMatchPatch,
    make_team_record,
)
from .standings import poule_standings, preview_standings

if TYPE_CHECKING:
    from google.cloud.firestore_v1.base_document import DocumentSnapshot
    from google.cloud.firestore_v1.client import Client
    from google.cloud.firestore_v1.document import DocumentReference


def _snapshot_to_dict(doc: Any) -> dict[str, Any]:
    data = doc.to_dict() or {}
    data["id"] = doc.id
    return data


def _ensure_unique_team_ids(records: list[PouleTeamRecord]) -> None:
    seen: set[str] = set()
    for record in records:
        team_id = record.get("id")
        if team_id in seen:
            raise DuplicateResourceError("This team is already in the poule.")
        if team_id:
            seen.add(team_id)


class NavetaneService:
    """Reads and writes the admin (draft) copy of the league."""

    # --- Poules ---

    @staticmethod
    def list_poules(db: Client) -> list[Poule]:
        """Fetch all draft poules ordered by name."""
        docs = db.collection(POULES_COLLECTION).order_by("name").stream()
        return [cast(Poule, _snapshot_to_dict(doc)) for doc in docs]

    @staticmethod
    def get_poule(db: Client, poule_id: str) -> Poule | None:
        """Fetch a single draft poule."""
        doc = cast("DocumentSnapshot", db.collection(POULES_COLLECTION).document(poule_id).get())
        if not doc.exists:
            return None
        return cast(Poule, _snapshot_to_dict(doc))

    @staticmethod
    def _require_poule(db: Client, poule_id: str) -> tuple[DocumentReference, Poule]:
        ref = db.collection(POULES_COLLECTION).document(poule_id)
        doc = cast("DocumentSnapshot", ref.get())
        if not doc.exists:
            raise NotFoundError("Poule not found.")
        return ref, cast(Poule, _snapshot_to_dict(doc))

    @staticmethod
    def create_poule(
        db: Client, name: str, qualified_count: Optional[int] = None
    ) -> str:
        """Create an empty poule and return its ID."""
        if not name or not name.strip():
            raise ValidationError("A poule needs a name.")
        payload: dict[str, Any] = {
            "name": name.strip(),
            "teams": [],
            "createdAt": firestore.SERVER_TIMESTAMP,
        }
        if qualified_count is not None:
            payload["qualifiedCount"] = int(qualified_count)
        ref = db.collection(POULES_COLLECTION).document()
        ref.set(payload)
        return str(ref.id)

    @staticmethod
    def update_poule(db: Client, poule_id: str, patch: PoulePatch) -> None:
        """Rename a poule, replace its team records or set its qualifier count."""
        fields = patch.to_update()
        if not fields:
            raise ValidationError("Nothing to update.")
        if "name" in fields and not fields["name"]:
            raise ValidationError("A poule needs a name.")
        if "teams" in fields:
            _ensure_unique_team_ids(fields["teams"])
        if (fields.get("qualifiedCount") or 0) < 0:
            raise ValidationError("The number of qualified teams cannot be negative.")
        ref, _ = NavetaneService._require_poule(db, poule_id)
        ref.update(fields)

    @staticmethod
    def delete_poule(db: Client, poule_id: str) -> None:
        """Delete a poule together with its team records."""
        db.collection(POULES_COLLECTION).document(poule_id).delete()

    # --- Teams inside a poule ---

    @staticmethod
    def add_team_to_poule(
        db: Client, poule_id: str, team_id: str, stats: PouleStats | None = None
    ) -> PouleTeamRecord:
        """Add a registry team to a poule.

        Rejected with DuplicateResourceError, before anything is written, when
        the team is already in the poule.
        """
        ref, poule = NavetaneService._require_poule(db, poule_id)
        records = list(poule.get("teams") or [])
        if any(r.get("id") == team_id for r in records):
            raise DuplicateResourceError("This team is already in the poule.")

        team = TeamService.get_team(db, team_id)
        if team is None:
            raise NotFoundError("The selected team could not be found.")

        record = make_team_record(cast(dict, team), stats)
        records.append(record)
        ref.update({"teams": records})
        return record

    @staticmethod
    def update_team_in_poule(
        db: Client,
        poule_id: str,
        team_id: str,
        stats: PouleStats,
        new_team_id: Optional[str] = None,
    ) -> PouleTeamRecord:
        """Edit a team's statistics, optionally swapping in another registry team."""
        ref, poule = NavetaneService._require_poule(db, poule_id)
        records = list(poule.get("teams") or [])
        index = next((i for i, r in enumerate(records) if r.get("id") == team_id), None)
        if index is None:
            raise NotFoundError("This team is not in the poule.")

        record: PouleTeamRecord = dict(records[index])  # type: ignore[assignment]
        if new_team_id and new_team_id != team_id:
            if any(r.get("id") == new_team_id for r in records):
                raise DuplicateResourceError("This team is already in the poule.")
            team = TeamService.get_team(db, new_team_id)
            if team is None:
                raise NotFoundError("The selected team could not be found.")
            record["id"] = team["id"]
            record["team"] = team.get("name", "")
            record["logoUrl"] = team.get("logoUrl", "")

        record.update(stats.to_update())  # type: ignore[typeddict-item]
        records[index] = record
        ref.update({"teams": records})
        return record

    @staticmethod
    def remove_team_from_poule(db: Client, poule_id: str, team_id: str) -> None:
        """Remove a team's record from a poule."""
        ref, poule = NavetaneService._require_poule(db, poule_id)
        records = [r for r in (poule.get("teams") or []) if r.get("id") != team_id]
        ref.update({"teams": records})

    # --- Cup matches ---

    @staticmethod
    def list_coupe_matches(db: Client) -> list[CoupeMatch]:
        """Fetch all draft cup fixtures."""
        docs = db.collection(COUPE_MATCHES_COLLECTION).stream()
        return [cast(CoupeMatch, _snapshot_to_dict(doc)) for doc in docs]

    @staticmethod
    def create_coupe_match(db: Client, team_a: str, team_b: str) -> str:
        """Create a cup fixture between two team names."""
        fields = CoupeMatchPatch(team_a=team_a or "", team_b=team_b or "").to_update()
        if not fields["teamA"] or not fields["teamB"]:
            raise ValidationError("Both teams are required.")
        ref = db.collection(COUPE_MATCHES_COLLECTION).document()
        ref.set(fields)
        return str(ref.id)

    @staticmethod
    def update_coupe_match(db: Client, match_id: str, patch: CoupeMatchPatch) -> None:
        """Apply a patch to a cup fixture."""
        fields = patch.to_update()
        if not fields:
            raise ValidationError("Nothing to update.")
        if any(not value for value in fields.values()):
            raise ValidationError("Both teams are required.")
        ref = db.collection(COUPE_MATCHES_COLLECTION).document(match_id)
        if not cast("DocumentSnapshot", ref.get()).exists:
            raise NotFoundError("Cup match not found.")
        ref.update(fields)

    @staticmethod
    def delete_coupe_match(db: Client, match_id: str) -> None:
        """Delete a cup fixture."""
        db.collection(COUPE_MATCHES_COLLECTION).document(match_id).delete()

    # --- Preliminary match ---

    @staticmethod
    def _preliminary_ref(db: Client) -> DocumentReference:
        return db.collection(PRELIMINARY_MATCH_COLLECTION).document(PRELIMINARY_MATCH_DOC_ID)

    @staticmethod
    def get_preliminary_match(db: Client) -> PreliminaryMatch | None:
        """Fetch the draft preliminary match, if one was ever saved."""
        doc = cast("DocumentSnapshot", NavetaneService._preliminary_ref(db).get())
        if not doc.exists:
            return None
        return cast(PreliminaryMatch, doc.to_dict() or {})

    @staticmethod
    def update_preliminary_match(db: Client, patch: PreliminaryMatchPatch) -> None:
        """Upsert the preliminary match; fields missing from the patch are kept."""
        fields = patch.to_update()
        if not fields:
            raise ValidationError("Nothing to update.")
        NavetaneService._preliminary_ref(db).set(fields, merge=True)


# --- Publication ---


def load_navetane_draft(db: Client) -> NavetaneDraft:
    """Read every draft collection that feeds the public league page."""
    return {
        "poules": NavetaneService.list_poules(db),
        "coupeMatches": NavetaneService.list_coupe_matches(db),
        "preliminaryMatch": NavetaneService.get_preliminary_match(db),
    }


def _public_poule(poule: Poule) -> dict[str, Any]:
    public = {
        "id": poule["id"],
        "name": poule.get("name", ""),
        "teams": copy.deepcopy(list(poule.get("teams") or [])),
    }
    if poule.get("qualifiedCount") is not None:
        public["qualifiedCount"] = poule["qualifiedCount"]
    return public


def enrich_coupe_match(directory: TeamDirectory, match: CoupeMatch) -> dict[str, Any]:
    """Attach display data to a cup fixture, resolving teams by name."""
    return {
        "id": match.get("id"),
        "teamA": match.get("teamA", ""),
        "teamB": match.get("teamB", ""),
        "teamAData": directory.resolve_name(match.get("teamA")),
        "teamBData": directory.resolve_name(match.get("teamB")),
    }


def enrich_preliminary_match(
    directory: TeamDirectory, match: Optional[PreliminaryMatch]
) -> Optional[dict[str, Any]]:
    """Attach display data to the preliminary match, resolving teams by name."""
    if not match:
        return None
    return {
        "teamA": match.get("teamA", ""),
        "teamB": match.get("teamB", ""),
        "winnerPlaysAgainst": match.get("winnerPlaysAgainst", ""),
        "teamAData": directory.resolve_name(match.get("teamA")),
        "teamBData": directory.resolve_name(match.get("teamB")),
        "winnerPlaysAgainstData": directory.resolve_name(match.get("winnerPlaysAgainst")),
    }


def enrich_navetane(db: Client, draft: NavetaneDraft) -> dict[str, Any]:
    """Turn the draft into the denormalised public snapshot."""
    directory = TeamService.get_directory(db)
    return {
        "poules": [_public_poule(p) for p in draft["poules"]],
        "coupeMatches": [enrich_coupe_match(directory, m) for m in draft["coupeMatches"]],
        "preliminaryMatch": enrich_preliminary_match(directory, draft["preliminaryMatch"]),
    }


NAVETANE_VIEW: Publishable[NavetaneDraft] = Publishable(
    name="navetane",
    public_collection=NAVETANE_PUBLIC_COLLECTION,
    load_draft=load_navetane_draft,
    enrich=enrich_navetane,
    default_view=lambda: {"poules": [], "coupeMatches": [], "preliminaryMatch": None},
)


def publish_navetane(db: Client) -> dict[str, Any]:
    """Publish the league draft to ``navetane_public_views/live``."""
    return NAVETANE_VIEW.publish(db)


# --- Public page ---


def format_timestamp(value: Any) -> Optional[str]:
    """Render a stored timestamp as ISO 8601; unresolved values read as None."""
    if hasattr(value, "isoformat"):
        return str(value.isoformat())
    return None


def get_navetane_page_data(
    db: Client, default_qualified: Optional[int] = None
) -> dict[str, Any]:
    """Assemble the public league page from the published snapshots only."""
    from portail.finals.services import FINALS_VIEW  # noqa: PLC0415

    navetane = cast(NavetanePublicView, NAVETANE_VIEW.public(db))
    finals = FINALS_VIEW.public(db)
    return {
        "poules": [poule_standings(p, default_qualified) for p in navetane["poules"]],
        "coupeMatches": navetane["coupeMatches"],
        "preliminaryMatch": navetane["preliminaryMatch"],
        "lastPublished": format_timestamp(navetane.get("lastPublished")),
        "finals": {k: v for k, v in finals.items() if k != "lastPublished"},
        "finalsLastPublished": format_timestamp(finals.get("lastPublished")),
    }


def get_home_preview(db: Client, default_qualified: Optional[int] = None) -> list[dict[str, Any]]:
    """Return the top of each published poule table for the home page card."""
    navetane = cast(NavetanePublicView, NAVETANE_VIEW.public(db))
    return [
        {
            "name": p.get("name", ""),
            "standings": preview_standings(p, default_qualified=default_qualified),
        }
        for p in navetane["poules"]
    ]
