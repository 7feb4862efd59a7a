"""
Hotspot Service - recompute and persist incident concentration centers.

Reads panic alerts and cases, keeps only valid coordinates, runs the
concentration-center locator for each source with its own radius and stores
both centers in a single snapshot document:

    danger_zones/average_coordinates
        panicAvg:    {lat, lng} | null
        casesAvg:    {lat, lng} | null
        lastUpdated: server timestamp
        timestamp:   ISO-8601 string

The write is a merge, so other fields on the snapshot are left alone.
"""

from firebase_admin import firestore
from safevoice.config.firebase import get_db
from safevoice.core.settings import settings
from safevoice.services.concentration import find_concentration_center
from safevoice.utils.firestore_helpers import parse_timestamp, utcnow
from safevoice.utils.geo import LatLng, extract_lat_lng
from typing import Dict, List, Optional
import logging

logger = logging.getLogger(__name__)

PANIC_COLLECTION = "panic_events"
CASES_COLLECTION = "cases"
SNAPSHOT_COLLECTION = "danger_zones"
SNAPSHOT_DOCUMENT = "average_coordinates"


def _as_lat_lng_dict(point: Optional[LatLng]) -> Optional[Dict[str, float]]:
    if point is None:
        return None
    return {"lat": point[0], "lng": point[1]}


def case_location(case_data: Dict) -> Optional[LatLng]:
    """Incident location if valid, otherwise the reporter's current location."""
    return extract_lat_lng(case_data.get("incidentLocation")) or extract_lat_lng(case_data.get("currentLocation"))


class HotspotService:
    """Service for hotspot (concentration center) computation."""

    def __init__(self, db=None):
        self.db = db if db is not None else get_db()

    def collect_panic_coordinates(self) -> List[LatLng]:
        """
        Valid panic alert coordinates, in collection order.

        A failed read is logged and treated as "no data".
        """
        try:
            docs = self.db.collection(PANIC_COLLECTION).stream()
            points = []
            for doc in docs:
                point = extract_lat_lng((doc.to_dict() or {}).get("location"))
                if point is not None:
                    points.append(point)
            return points
        except Exception as e:
            logger.error(f"Failed to read panic alerts for hotspots: {e}", exc_info=True)
            return []

    def collect_case_coordinates(self) -> List[LatLng]:
        """Valid case coordinates, in collection order. Failures mean no data."""
        try:
            docs = self.db.collection(CASES_COLLECTION).stream()
            points = []
            for doc in docs:
                point = case_location(doc.to_dict() or {})
                if point is not None:
                    points.append(point)
            return points
        except Exception as e:
            logger.error(f"Failed to read cases for hotspots: {e}", exc_info=True)
            return []

    def recompute(
        self,
        panic_radius: Optional[float] = None,
        case_radius: Optional[float] = None,
    ) -> Dict:
        """
        Recompute both concentration centers and store the snapshot.

        Returns the stored centers together with the input counts.
        Write failures are logged and re-raised.
        """
        panic_radius = panic_radius or settings.PANIC_HOTSPOT_RADIUS_METERS
        case_radius = case_radius or settings.CASE_HOTSPOT_RADIUS_METERS

        panic_coords = self.collect_panic_coordinates()
        case_coords = self.collect_case_coordinates()
        logger.info(
            f"Finding concentration centers: panic={len(panic_coords)} points, cases={len(case_coords)} points"
        )

        panic_avg = _as_lat_lng_dict(find_concentration_center(panic_coords, panic_radius))
        cases_avg = _as_lat_lng_dict(find_concentration_center(case_coords, case_radius))
        timestamp = utcnow().isoformat()

        try:
            snapshot_ref = self.db.collection(SNAPSHOT_COLLECTION).document(SNAPSHOT_DOCUMENT)
            snapshot_ref.set(
                {
                    "panicAvg": panic_avg,
                    "casesAvg": cases_avg,
                    "lastUpdated": firestore.SERVER_TIMESTAMP,
                    "timestamp": timestamp,
                },
                merge=True,
            )
        except Exception as e:
            logger.error(f"Error storing concentration centers: {e}", exc_info=True)
            raise

        logger.info(f"✅ Concentration centers stored: panic={panic_avg}, cases={cases_avg}")
        return {
            "panic_avg": panic_avg,
            "cases_avg": cases_avg,
            "panic_count": len(panic_coords),
            "case_count": len(case_coords),
            "timestamp": timestamp,
        }

    def get_snapshot(self) -> Optional[Dict]:
        """Last stored snapshot, or None if it was never computed."""
        doc = self.db.collection(SNAPSHOT_COLLECTION).document(SNAPSHOT_DOCUMENT).get()
        if not doc.exists:
            return None
        # `timestamp` is stored as an ISO string here and stays one
        data = doc.to_dict() or {}
        data["lastUpdated"] = parse_timestamp(data.get("lastUpdated"))
        return data

    def get_map_events(self) -> Dict[str, List[Dict[str, float]]]:
        """Valid panic and case points for the heat-map overlay."""
        return {
            "panic_events": [_as_lat_lng_dict(p) for p in self.collect_panic_coordinates()],
            "cases": [_as_lat_lng_dict(p) for p in self.collect_case_coordinates()],
        }
