"""
Firestore query and document helpers shared by the dashboard services.

NOTE: For the firebase_admin SDK we use positional `where` arguments, which
still work. The deprecation warning is just a warning.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional


TIMESTAMP_FIELDS = (
    "createdAt",
    "updatedAt",
    "submittedAt",
    "incidentDate",
    "resolvedAt",
    "uploadedAt",
    "lastLogin",
    "timestamp",
    "lastUpdated",
)


def where_filter(query, field_path: str, op_string: str, value):
    """
    Helper function for Firestore queries.

    Usage:
        query = where_filter(collection, "status", "==", "pending")
        query = where_filter(query, "priority", "in", ["high", "urgent"])
    """
    return query.where(field_path, op_string, value)


def parse_timestamp(value) -> Optional[datetime]:
    """
    Parse the timestamp shapes Firestore and the mobile app produce into a
    timezone-aware UTC datetime.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
    if isinstance(value, str):
        try:
            dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return dt.astimezone(timezone.utc)
    # Protobuf-style Timestamp
    if hasattr(value, "ToDatetime"):
        dt = value.ToDatetime()
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return dt.astimezone(timezone.utc)
    if hasattr(value, "timestamp"):
        return datetime.fromtimestamp(value.timestamp(), tz=timezone.utc)
    return None


def _is_geo_point(value) -> bool:
    return not isinstance(value, dict) and hasattr(value, "latitude") and hasattr(value, "longitude")


def snapshot_to_dict(doc) -> Dict[str, Any]:
    """
    Document snapshot -> dict with `id`, normalized timestamp fields and
    GeoPoints as {latitude, longitude} dicts.
    """
    data = doc.to_dict() or {}
    for field in TIMESTAMP_FIELDS:
        if field in data:
            data[field] = parse_timestamp(data[field])
    for key, value in data.items():
        if _is_geo_point(value):
            data[key] = {"latitude": value.latitude, "longitude": value.longitude}
    data["id"] = doc.id
    return data


def snapshots_to_dicts(docs: Iterable) -> List[Dict[str, Any]]:
    return [snapshot_to_dict(doc) for doc in docs]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)
