"""Draft/public pairing shared by every published aggregate."""

from __future__ import annotations

import copy
import logging
from typing import TYPE_CHECKING, Any, Callable, Generic, Optional, TypeVar, cast

from firebase_admin import firestore

from .constants import PUBLIC_VIEW_DOC_ID

if TYPE_CHECKING:
    from google.cloud.firestore_v1.base_document import DocumentSnapshot
    from google.cloud.firestore_v1.client import Client
    from google.cloud.firestore_v1.document import DocumentReference

T = TypeVar("T")

Enricher = Callable[["Client", T], dict[str, Any]]


class Publishable(Generic[T]):
    """An admin-editable draft aggregate and the snapshot served to the public.

    The public document is never derived on read: it only changes when
    :meth:`publish` runs, which reads the draft, enriches it and overwrites
    the public document with a single ``set``. The reads feeding a publish are
    not wrapped in a transaction.
    """

    def __init__(
        self,
        name: str,
        public_collection: str,
        load_draft: Callable[[Client], T],
        enrich: Enricher[T],
        default_view: Callable[[], dict[str, Any]],
        public_doc_id: str = PUBLIC_VIEW_DOC_ID,
    ) -> None:
        """Initialize the pairing."""
        self.name = name
        self.public_collection = public_collection
        self.public_doc_id = public_doc_id
        self._load_draft = load_draft
        self._enrich = enrich
        self._default_view = default_view

    def public_ref(self, db: Client) -> DocumentReference:
        """Return the reference of the published snapshot."""
        return db.collection(self.public_collection).document(self.public_doc_id)

    def draft(self, db: Client) -> T:
        """Read the current draft state."""
        return self._load_draft(db)

    def build_snapshot(
        self, db: Client, enrich: Optional[Enricher[T]] = None
    ) -> dict[str, Any]:
        """Build the snapshot that a publish would write, without writing it."""
        enrich_fn = enrich or self._enrich
        return enrich_fn(db, self.draft(db))

    def publish(
        self, db: Client, enrich: Optional[Enricher[T]] = None
    ) -> dict[str, Any]:
        """Snapshot the draft into the public document and return the snapshot."""
        snapshot = self.build_snapshot(db, enrich)
        snapshot["lastPublished"] = firestore.SERVER_TIMESTAMP
        self.public_ref(db).set(snapshot)
        logging.info(f"Published {self.name} view to {self.public_collection}.")
        return snapshot

    def public(self, db: Client) -> dict[str, Any]:
        """Read the published snapshot, filling absent keys from the default."""
        view = self._default_view()
        doc = cast("DocumentSnapshot", self.public_ref(db).get())
        if doc.exists:
            view.update(copy.deepcopy(doc.to_dict() or {}))
        return view
