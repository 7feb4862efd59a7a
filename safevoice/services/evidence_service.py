"""
Evidence Service - evidence metadata for cases.

Only metadata lives here; uploads go straight from the app to storage.
"""

from firebase_admin import firestore
from safevoice.config.firebase import get_db
from safevoice.utils.firestore_helpers import snapshots_to_dicts, where_filter
from datetime import datetime, timezone
from typing import Dict, List
import logging

logger = logging.getLogger(__name__)

EVIDENCE_COLLECTION = "evidence"

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class EvidenceService:

    def __init__(self, db=None):
        self.db = db if db is not None else get_db()

    def get_all(self) -> List[Dict]:
        query = self.db.collection(EVIDENCE_COLLECTION).order_by(
            "uploadedAt", direction=firestore.Query.DESCENDING
        )
        return snapshots_to_dicts(query.stream())

    def get_by_case(self, case_id: str) -> List[Dict]:
        query = where_filter(self.db.collection(EVIDENCE_COLLECTION), "caseId", "==", case_id)
        items = snapshots_to_dicts(query.stream())
        return sorted(items, key=lambda item: item.get("uploadedAt") or _EPOCH, reverse=True)

    def create(self, evidence_data: Dict) -> str:
        _, doc_ref = self.db.collection(EVIDENCE_COLLECTION).add({
            **evidence_data,
            "uploadedAt": firestore.SERVER_TIMESTAMP,
            "createdAt": firestore.SERVER_TIMESTAMP,
        })
        logger.info(f"Registered evidence {doc_ref.id} for case {evidence_data.get('caseId')}")
        return doc_ref.id

    def delete(self, evidence_id: str) -> None:
        self.db.collection(EVIDENCE_COLLECTION).document(evidence_id).delete()
        logger.info(f"Deleted evidence {evidence_id}")
