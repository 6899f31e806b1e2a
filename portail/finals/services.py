"""Service layer for the finals brackets.

Progression between stages is entered by hand: the service stores whatever
the admin picks and does not check that semifinalists won their quarterfinal
or that scores agree with a match's status.
"""

from __future__ import annotations

import secrets
from typing import TYPE_CHECKING, Any, cast

from portail.core.constants import (
    BRACKET_MATCH_ID_LENGTH,
    BRACKET_STAGES,
    COMPETITIONS,
    FINALS_ADMIN_COLLECTION,
    FINALS_ADMIN_DOC_ID,
    FINALS_PUBLIC_COLLECTION,
    MATCH_STATUS_PENDING,
    MATCH_STATUSES,
)
from portail.core.publishable import Publishable
from portail.errors import NotFoundError, ValidationError
from portail.teams.services import TeamDirectory, TeamService

from .models import (
    BracketMatch,
    BracketMatchPatch,
    CompetitionFinals,
    empty_finals,
    normalize_finals,
)

if TYPE_CHECKING:
    from google.cloud.firestore_v1.base_document import DocumentSnapshot
    from google.cloud.firestore_v1.client import Client
    from google.cloud.firestore_v1.document import DocumentReference


def new_match_id() -> str:
    """Return a short random id for a bracket match."""
    return secrets.token_urlsafe(BRACKET_MATCH_ID_LENGTH)[:BRACKET_MATCH_ID_LENGTH]


def _check_stage(competition: str, stage: str) -> None:
    if competition not in COMPETITIONS:
        raise ValidationError(f"Unknown competition: {competition}.")
    if stage not in BRACKET_STAGES:
        raise ValidationError(f"Unknown bracket stage: {stage}.")


def _clean_patch(patch: BracketMatchPatch) -> dict[str, Any]:
    fields = patch.to_update()
    for key in ("teamAId", "teamBId", "date"):
        if key in fields and not fields[key]:
            fields[key] = None
    for key in ("scoreA", "scoreB"):
        if key in fields and fields[key] is not None:
            try:
                fields[key] = int(fields[key])
            except (TypeError, ValueError):
                raise ValidationError("Scores must be whole numbers.") from None
            if fields[key] < 0:
                raise ValidationError("Scores cannot be negative.")
    if "status" in fields and fields["status"] not in MATCH_STATUSES:
        raise ValidationError("Status must be pending or played.")
    return fields


class FinalsService:
    """Reads and writes the admin (draft) brackets."""

    @staticmethod
    def _admin_ref(db: Client) -> DocumentReference:
        return db.collection(FINALS_ADMIN_COLLECTION).document(FINALS_ADMIN_DOC_ID)

    @staticmethod
    def get_admin_finals(db: Client) -> CompetitionFinals:
        """Fetch the draft brackets; a missing document reads as empty brackets."""
        doc = cast("DocumentSnapshot", FinalsService._admin_ref(db).get())
        if not doc.exists:
            return empty_finals()
        return normalize_finals(doc.to_dict())

    @staticmethod
    def save_finals(db: Client, finals: CompetitionFinals) -> None:
        """Overwrite the whole draft."""
        FinalsService._admin_ref(db).set(normalize_finals(cast(dict, finals)))

    @staticmethod
    def _write_stage(
        db: Client,
        finals: CompetitionFinals,
        competition: str,
        stage: str,
        matches: list[BracketMatch],
    ) -> None:
        finals[competition][stage] = [dict(m) for m in matches]  # type: ignore[literal-required]
        FinalsService._admin_ref(db).set(cast(dict, finals))

    @staticmethod
    def replace_stage(
        db: Client, competition: str, stage: str, matches: list[BracketMatch]
    ) -> None:
        """Replace one stage's match list in a single write."""
        _check_stage(competition, stage)
        finals = FinalsService.get_admin_finals(db)
        FinalsService._write_stage(db, finals, competition, stage, matches)

    @staticmethod
    def add_match(db: Client, competition: str, stage: str) -> BracketMatch:
        """Append an empty pending match to a stage."""
        _check_stage(competition, stage)
        finals = FinalsService.get_admin_finals(db)
        match: BracketMatch = {"id": new_match_id(), "status": MATCH_STATUS_PENDING}
        matches = finals[competition][stage] + [match]  # type: ignore[literal-required]
        FinalsService._write_stage(db, finals, competition, stage, matches)
        return match

    @staticmethod
    def update_match(
        db: Client, competition: str, stage: str, match_id: str, patch: BracketMatchPatch
    ) -> BracketMatch:
        """Apply a patch to one match and rewrite its stage."""
        _check_stage(competition, stage)
        fields = _clean_patch(patch)
        finals = FinalsService.get_admin_finals(db)
        updated = None
        rebuilt = []
        for match in finals[competition][stage]:  # type: ignore[literal-required]
            if match.get("id") == match_id:
                updated = {**match, **fields}
                rebuilt.append(updated)
            else:
                rebuilt.append(match)
        if updated is None:
            raise NotFoundError("Bracket match not found.")
        FinalsService._write_stage(db, finals, competition, stage, rebuilt)
        return cast(BracketMatch, updated)

    @staticmethod
    def remove_match(db: Client, competition: str, stage: str, match_id: str) -> None:
        """Drop one match from a stage."""
        _check_stage(competition, stage)
        finals = FinalsService.get_admin_finals(db)
        matches = [
            m for m in finals[competition][stage] if m.get("id") != match_id  # type: ignore[literal-required]
        ]
        FinalsService._write_stage(db, finals, competition, stage, matches)


# --- Publication ---


def enrich_bracket_match(directory: TeamDirectory, match: BracketMatch) -> dict[str, Any]:
    """Attach display data to a bracket match, resolving teams by id.

    Unset or unknown ids publish None for the name and logo.
    """
    enriched: dict[str, Any] = dict(match)
    for side in ("A", "B"):
        team = directory.resolve_id(match.get(f"team{side}Id"))  # type: ignore[misc]
        enriched[f"team{side}Name"] = team.get("name") if team else None
        enriched[f"team{side}LogoUrl"] = team.get("logoUrl") if team else None
    return enriched


def enrich_finals(db: Client, finals: CompetitionFinals) -> dict[str, Any]:
    """Turn the draft brackets into the public snapshot."""
    directory = TeamService.get_directory(db)
    return {
        competition: {
            stage: [
                enrich_bracket_match(directory, m)
                for m in finals[competition][stage]  # type: ignore[literal-required]
            ]
            for stage in BRACKET_STAGES
        }
        for competition in COMPETITIONS
    }


FINALS_VIEW: Publishable[CompetitionFinals] = Publishable(
    name="finals",
    public_collection=FINALS_PUBLIC_COLLECTION,
    load_draft=FinalsService.get_admin_finals,
    enrich=enrich_finals,
    default_view=lambda: cast(dict, empty_finals()),
)


def publish_finals(db: Client) -> dict[str, Any]:
    """Publish both brackets to ``finals_public_view/live``."""
    return FINALS_VIEW.publish(db)
