"""
Panic Alert Service - SOS alerts raised from the mobile app.

Alerts carry no workflow status of their own; the dashboard derives one from
the alert's age:

    < 5 minutes   -> active
    < 30 minutes  -> responding
    otherwise     -> resolved
"""

from firebase_admin import firestore
from safevoice.config.firebase import get_db
from safevoice.utils.firestore_helpers import parse_timestamp, utcnow
from safevoice.utils.geo import extract_lat_lng, format_geo_point
from datetime import datetime
from typing import Dict, List, Optional
import logging

logger = logging.getLogger(__name__)

PANIC_COLLECTION = "panic_events"
USERS_COLLECTION = "users"

ACTIVE_WINDOW_MINUTES = 5
RESPONDING_WINDOW_MINUTES = 30

UNKNOWN_USER = {"userName": "Unknown User", "userPhone": "Not provided"}


def derive_alert_status(alert_time: Optional[datetime], now: Optional[datetime] = None) -> str:
    if alert_time is None:
        return "active"
    now = now or utcnow()
    minutes = (now - alert_time).total_seconds() / 60
    if minutes < ACTIVE_WINDOW_MINUTES:
        return "active"
    if minutes < RESPONDING_WINDOW_MINUTES:
        return "responding"
    return "resolved"


class PanicAlertService:

    def __init__(self, db=None):
        self.db = db if db is not None else get_db()

    def _user_info(self, user_id: str, cache: Dict[str, Dict]) -> Dict:
        if user_id in cache:
            return cache[user_id]
        try:
            doc = self.db.collection(USERS_COLLECTION).document(user_id).get()
            if not doc.exists:
                info = dict(UNKNOWN_USER)
            else:
                data = doc.to_dict() or {}
                name = f"{data.get('firstName') or ''} {data.get('lastName') or ''}".strip()
                info = {
                    "userName": name or "Unknown User",
                    "userPhone": data.get("phoneNumber") or "Not provided",
                }
        except Exception as e:
            logger.error(f"Error fetching user {user_id} for panic alert: {e}")
            info = dict(UNKNOWN_USER)
        cache[user_id] = info
        return info

    def list_alerts(
        self,
        search: str = "",
        status: str = "all",
        now: Optional[datetime] = None,
    ) -> List[Dict]:
        """
        Panic alerts, newest first, joined with the reporting user.

        Args:
            search: Case-insensitive match on user name, location or alert id
            status: active / responding / resolved, or "all"
        """
        now = now or utcnow()
        query = self.db.collection(PANIC_COLLECTION).order_by(
            "timestamp", direction=firestore.Query.DESCENDING
        )

        user_cache: Dict[str, Dict] = {}
        alerts = []
        for doc in query.stream():
            data = doc.to_dict() or {}
            alert_time = parse_timestamp(data.get("timestamp"))
            point = extract_lat_lng(data.get("location"))

            alert = {
                "id": doc.id,
                "audioUrl": data.get("audioUrl") or "",
                "location": format_geo_point(data.get("location")),
                "latitude": point[0] if point else None,
                "longitude": point[1] if point else None,
                "timestamp": alert_time,
                "userId": data.get("userId") or "",
                "status": derive_alert_status(alert_time, now),
            }
            if alert["userId"]:
                alert.update(self._user_info(alert["userId"], user_cache))
            alerts.append(alert)

        return [a for a in alerts if _matches(a, search, status)]


def _matches(alert: Dict, search: str, status: str) -> bool:
    if status and status != "all" and alert["status"] != status:
        return False
    if not search:
        return True
    needle = search.lower()
    haystack = (alert.get("userName", ""), alert["location"], alert["id"])
    return any(needle in value.lower() for value in haystack)
