"""
User Service - Manage dashboard staff in Firestore.
"""

from firebase_admin import firestore
from safevoice.config.firebase import get_db
from safevoice.utils.firestore_helpers import snapshot_to_dict, snapshots_to_dicts, where_filter
from typing import Dict, List, Optional
import logging

logger = logging.getLogger(__name__)

USERS_COLLECTION = "users"


class UserService:
    """
    Service for user management in Firestore.
    """

    def __init__(self, db=None):
        self.db = db if db is not None else get_db()

    def get_all(self) -> List[Dict]:
        docs = self.db.collection(USERS_COLLECTION).stream()
        return snapshots_to_dicts(docs)

    def get_by_id(self, user_id: str) -> Optional[Dict]:
        doc = self.db.collection(USERS_COLLECTION).document(user_id).get()
        if not doc.exists:
            return None
        return snapshot_to_dict(doc)

    def get_by_role(self, role: str) -> List[Dict]:
        query = where_filter(self.db.collection(USERS_COLLECTION), "role", "==", role)
        return snapshots_to_dicts(query.stream())

    def create(self, user_data: Dict) -> str:
        """
        Create a user.

        Returns:
            New document ID
        """
        _, doc_ref = self.db.collection(USERS_COLLECTION).add({
            **user_data,
            "createdAt": firestore.SERVER_TIMESTAMP,
            "updatedAt": firestore.SERVER_TIMESTAMP,
        })
        logger.info(f"Created user {doc_ref.id} with role {user_data.get('role')}")
        return doc_ref.id

    def update(self, user_id: str, user_data: Dict) -> None:
        """Update fields of an existing user. Raises if the user does not exist."""
        user_ref = self.db.collection(USERS_COLLECTION).document(user_id)
        user_ref.update({
            **user_data,
            "updatedAt": firestore.SERVER_TIMESTAMP,
        })
        logger.info(f"Updated user {user_id}: {sorted(user_data)}")

    def delete(self, user_id: str) -> None:
        self.db.collection(USERS_COLLECTION).document(user_id).delete()
        logger.info(f"Deleted user {user_id}")

    def count_active(self) -> int:
        return sum(1 for user in self.get_all() if user.get("status") == "active")
