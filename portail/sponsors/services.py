"""Service layer for sponsors."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional, cast

from firebase_admin import firestore

from portail.core.constants import SPONSORS_COLLECTION, SPONSORS_PUBLIC_COLLECTION
from portail.core.publishable import Publishable
from portail.errors import ValidationError

from .models import Sponsor, SponsorsPublicView

if TYPE_CHECKING:
    from google.cloud.firestore_v1.client import Client


class SponsorService:
    """Service class for sponsor operations."""

    @staticmethod
    def list_sponsors(db: Client) -> list[Sponsor]:
        """List sponsors, newest first."""
        docs = (
            db.collection(SPONSORS_COLLECTION)
            .order_by("createdAt", direction=firestore.Query.DESCENDING)
            .stream()
        )
        sponsors = []
        for doc in docs:
            data = doc.to_dict() or {}
            data["id"] = doc.id
            sponsors.append(cast(Sponsor, data))
        return sponsors

    @staticmethod
    def create_sponsor(
        db: Client, name: str, logo_url: str, website_url: Optional[str] = None
    ) -> str:
        """Create a sponsor and return its ID."""
        if not name or not name.strip():
            raise ValidationError("A sponsor needs a name.")
        sponsor_ref = db.collection(SPONSORS_COLLECTION).document()
        sponsor_ref.set(
            {
                "name": name.strip(),
                "logoUrl": (logo_url or "").strip(),
                "websiteUrl": (website_url or "").strip(),
                "createdAt": firestore.SERVER_TIMESTAMP,
            }
        )
        return str(sponsor_ref.id)

    @staticmethod
    def delete_sponsor(db: Client, sponsor_id: str) -> None:
        """Delete a sponsor. The public list keeps it until the next publish."""
        db.collection(SPONSORS_COLLECTION).document(sponsor_id).delete()


def _sponsors_snapshot(db: Client, sponsors: list[Sponsor]) -> dict[str, Any]:
    # createdAt stays out of the public copy
    return {
        "sponsors": [
            {
                "id": s["id"],
                "name": s.get("name", ""),
                "logoUrl": s.get("logoUrl", ""),
                "websiteUrl": s.get("websiteUrl", ""),
            }
            for s in sponsors
        ]
    }


SPONSORS_VIEW: Publishable[list[Sponsor]] = Publishable(
    name="sponsors",
    public_collection=SPONSORS_PUBLIC_COLLECTION,
    load_draft=SponsorService.list_sponsors,
    enrich=_sponsors_snapshot,
    default_view=lambda: {"sponsors": []},
)


def publish_sponsors(db: Client) -> dict[str, Any]:
    """Publish the sponsors list."""
    return SPONSORS_VIEW.publish(db)


def get_public_sponsors(db: Client) -> list[Sponsor]:
    """Read the published sponsors list."""
    return cast(SponsorsPublicView, SPONSORS_VIEW.public(db))["sponsors"]
