"""
Case Service - harassment cases and their internal notes.

Cases are written by two clients: the mobile app (which files the report,
with GeoPoints and attachments) and this dashboard (which triages it).
"""

from firebase_admin import firestore
from safevoice.config.firebase import get_db
from safevoice.utils.firestore_helpers import snapshot_to_dict, snapshots_to_dicts, where_filter
from typing import Dict, List, Optional
from datetime import datetime, timezone
import logging

logger = logging.getLogger(__name__)

CASES_COLLECTION = "cases"
CASE_NOTES_COLLECTION = "case_notes"

URGENT_PRIORITIES = ("high", "urgent")
URGENT_CASES_LIMIT = 10

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _newest_first(items: List[Dict], field: str) -> List[Dict]:
    return sorted(items, key=lambda item: item.get(field) or _EPOCH, reverse=True)


def _submitted_at(case: Dict) -> datetime:
    return case.get("submittedAt") or case.get("createdAt") or _EPOCH


def _priority(case: Dict) -> str:
    # AI scoring writes "High"; the dashboard writes "high"
    return str(case.get("priority") or "").lower()


class CaseService:
    """Service for case triage in Firestore."""

    def __init__(self, db=None):
        self.db = db if db is not None else get_db()

    def get_all(self) -> List[Dict]:
        """
        All cases, newest first.

        Sorted client-side: a Firestore order_by would drop cases filed by the
        mobile app, which only carry createdAt.
        """
        cases = snapshots_to_dicts(self.db.collection(CASES_COLLECTION).stream())
        return sorted(cases, key=_submitted_at, reverse=True)

    def get_by_id(self, case_id: str) -> Optional[Dict]:
        doc = self.db.collection(CASES_COLLECTION).document(case_id).get()
        if not doc.exists:
            return None
        return snapshot_to_dict(doc)

    def create(self, case_data: Dict) -> str:
        _, doc_ref = self.db.collection(CASES_COLLECTION).add({
            **case_data,
            "submittedAt": firestore.SERVER_TIMESTAMP,
            "createdAt": firestore.SERVER_TIMESTAMP,
            "updatedAt": firestore.SERVER_TIMESTAMP,
        })
        logger.info(f"Created case {doc_ref.id} ({case_data.get('caseNumber')})")
        return doc_ref.id

    def update(self, case_id: str, case_data: Dict) -> None:
        """Update fields of an existing case. Raises if the case does not exist."""
        self.db.collection(CASES_COLLECTION).document(case_id).update({
            **case_data,
            "updatedAt": firestore.SERVER_TIMESTAMP,
        })
        logger.info(f"Updated case {case_id}: {sorted(case_data)}")

    def get_by_status(self, status: str) -> List[Dict]:
        query = where_filter(self.db.collection(CASES_COLLECTION), "status", "==", status)
        return sorted(snapshots_to_dicts(query.stream()), key=_submitted_at, reverse=True)

    def get_urgent_cases(self) -> List[Dict]:
        """
        Open high/urgent cases, newest first, at most URGENT_CASES_LIMIT.

        Filtering and ordering happen client-side so no composite index is needed.
        """
        cases = [
            case for case in self.get_all()
            if _priority(case) in URGENT_PRIORITIES and case.get("status") != "resolved"
        ]
        return cases[:URGENT_CASES_LIMIT]

    def get_stats(self) -> Dict[str, int]:
        all_cases = self.get_all()
        return {
            "total": len(all_cases),
            "pending": sum(1 for c in all_cases if c.get("status") == "pending"),
            "investigating": sum(1 for c in all_cases if c.get("status") == "investigating"),
            "resolved": sum(1 for c in all_cases if c.get("status") == "resolved"),
            "urgent": sum(
                1 for c in all_cases
                if _priority(c) == "urgent" and c.get("status") != "resolved"
            ),
        }


class CaseNoteService:
    """Internal notes attached to a case."""

    def __init__(self, db=None):
        self.db = db if db is not None else get_db()

    def get_by_case(self, case_id: str) -> List[Dict]:
        query = where_filter(self.db.collection(CASE_NOTES_COLLECTION), "caseId", "==", case_id)
        return _newest_first(snapshots_to_dicts(query.stream()), "createdAt")

    def create(self, case_id: str, note_data: Dict) -> str:
        _, doc_ref = self.db.collection(CASE_NOTES_COLLECTION).add({
            **note_data,
            "caseId": case_id,
            "createdAt": firestore.SERVER_TIMESTAMP,
        })
        return doc_ref.id
