from datetime import datetime

import pytest
from firebase_admin import firestore

from safevoice.services.hotspot_service import HotspotService, case_location


@pytest.fixture
def seeded(fake_db):
    fake_db.store["panic_events"] = {
        "p1": {"location": firestore.GeoPoint(19.0760, 72.8777)},
        "p2": {"location": {"latitude": 19.0761, "longitude": 72.8778}},
        "p3": {"location": {"latitude": 19.0762, "longitude": 72.8779}},
        "p4": {"location": {"latitude": 40.7128, "longitude": -74.0060}},
        "p5": {"userId": "u1"},
        "p6": {"location": "somewhere"},
    }
    fake_db.store["cases"] = {
        "c1": {"incidentLocation": {"latitude": 19.0760, "longitude": 72.8777}},
        "c2": {"currentLocation": {"latitude": 19.0762, "longitude": 72.8779}},
        "c3": {
            "incidentLocation": {"latitude": "bad", "longitude": 72.0},
            "currentLocation": {"latitude": 19.0761, "longitude": 72.8778},
        },
        "c4": {"title": "No location"},
    }
    return fake_db


def test_collect_keeps_only_valid_coordinates(seeded):
    service = HotspotService(seeded)

    assert len(service.collect_panic_coordinates()) == 4
    assert service.collect_case_coordinates() == [
        (19.0760, 72.8777),
        (19.0762, 72.8779),
        (19.0761, 72.8778),
    ]


def test_case_location_prefers_incident_location():
    case = {
        "incidentLocation": {"latitude": 1.0, "longitude": 2.0},
        "currentLocation": {"latitude": 3.0, "longitude": 4.0},
    }
    assert case_location(case) == (1.0, 2.0)
    assert case_location({}) is None


def test_recompute_stores_both_centers(seeded):
    result = HotspotService(seeded).recompute(panic_radius=500, case_radius=800)

    assert result["panic_count"] == 4
    assert result["case_count"] == 3
    assert result["panic_avg"]["lat"] == pytest.approx(19.0761)
    assert result["panic_avg"]["lng"] == pytest.approx(72.8778)
    assert result["cases_avg"]["lat"] == pytest.approx(19.0761)

    stored = seeded.doc("danger_zones", "average_coordinates")
    assert stored["panicAvg"] == result["panic_avg"]
    assert stored["casesAvg"] == result["cases_avg"]
    assert isinstance(stored["lastUpdated"], datetime)
    assert stored["timestamp"] == result["timestamp"]


def test_recompute_merges_into_existing_snapshot(seeded):
    seeded.store["danger_zones"] = {"average_coordinates": {"label": "keep me", "panicAvg": {"lat": 0, "lng": 0}}}

    HotspotService(seeded).recompute()

    stored = seeded.doc("danger_zones", "average_coordinates")
    assert stored["label"] == "keep me"
    assert stored["panicAvg"]["lat"] == pytest.approx(19.0761)


def test_recompute_with_no_data_stores_nulls(fake_db):
    result = HotspotService(fake_db).recompute()

    assert result["panic_avg"] is None
    assert result["cases_avg"] is None
    stored = fake_db.doc("danger_zones", "average_coordinates")
    assert stored["panicAvg"] is None
    assert stored["casesAvg"] is None


def test_read_failure_counts_as_no_data(seeded):
    seeded.failing_collections.add("panic_events")

    result = HotspotService(seeded).recompute()

    assert result["panic_avg"] is None
    assert result["panic_count"] == 0
    assert result["cases_avg"] is not None


def test_write_failure_is_raised(seeded):
    seeded.failing_collections.add("danger_zones")

    with pytest.raises(RuntimeError):
        HotspotService(seeded).recompute()


def test_snapshot_round_trip(seeded):
    service = HotspotService(seeded)
    assert service.get_snapshot() is None

    result = service.recompute()
    snapshot = service.get_snapshot()

    assert snapshot["timestamp"] == result["timestamp"]
    assert isinstance(snapshot["timestamp"], str)
    assert snapshot["lastUpdated"].tzinfo is not None


def test_map_events(seeded):
    events = HotspotService(seeded).get_map_events()

    assert len(events["panic_events"]) == 4
    assert events["panic_events"][0] == {"lat": 19.0760, "lng": 72.8777}
    assert len(events["cases"]) == 3
