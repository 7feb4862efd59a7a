from datetime import datetime, timedelta, timezone

import pytest

from safevoice.services.panic_service import PanicAlertService, derive_alert_status

NOW = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "age, expected",
    [
        (timedelta(seconds=0), "active"),
        (timedelta(minutes=4, seconds=59), "active"),
        (timedelta(minutes=5), "responding"),
        (timedelta(minutes=29), "responding"),
        (timedelta(minutes=30), "resolved"),
        (timedelta(days=2), "resolved"),
    ],
)
def test_derive_alert_status(age, expected):
    assert derive_alert_status(NOW - age, now=NOW) == expected


def test_alert_without_timestamp_is_active():
    assert derive_alert_status(None, now=NOW) == "active"


@pytest.fixture
def alerts_db(fake_db):
    fake_db.store["users"] = {
        "u1": {"firstName": "Anika", "lastName": "Rao", "phoneNumber": "+91 99887 76655"},
        "u2": {"firstName": "Meera"},
    }
    fake_db.store["panic_events"] = {
        "a_old": {
            "userId": "u1",
            "location": {"latitude": 28.6139, "longitude": 77.2090},
            "timestamp": NOW - timedelta(hours=1),
        },
        "a_new": {
            "userId": "u1",
            "location": {"latitude": 19.0760, "longitude": 72.8777},
            "timestamp": NOW - timedelta(minutes=1),
            "audioUrl": "https://storage.example/a_new.m4a",
        },
        "a_mid": {
            "userId": "u2",
            "timestamp": NOW - timedelta(minutes=10),
        },
        "a_ghost": {
            "userId": "missing",
            "location": {"latitude": 19.1, "longitude": 72.9},
            "timestamp": NOW - timedelta(minutes=45),
        },
    }
    return fake_db


def test_alerts_newest_first_with_user_details(alerts_db):
    alerts = PanicAlertService(alerts_db).list_alerts(now=NOW)

    assert [a["id"] for a in alerts] == ["a_new", "a_mid", "a_ghost", "a_old"]

    newest = alerts[0]
    assert newest["status"] == "active"
    assert newest["userName"] == "Anika Rao"
    assert newest["userPhone"] == "+91 99887 76655"
    assert newest["location"] == "19.0760° N, 72.8777° E"
    assert (newest["latitude"], newest["longitude"]) == (19.076, 72.8777)
    assert newest["audioUrl"] == "https://storage.example/a_new.m4a"


def test_alert_without_location_or_known_user(alerts_db):
    alerts = {a["id"]: a for a in PanicAlertService(alerts_db).list_alerts(now=NOW)}

    assert alerts["a_mid"]["location"] == "Location not specified"
    assert alerts["a_mid"]["latitude"] is None
    assert alerts["a_mid"]["userName"] == "Meera"
    assert alerts["a_mid"]["userPhone"] == "Not provided"
    assert alerts["a_ghost"]["userName"] == "Unknown User"


def test_status_filter(alerts_db):
    service = PanicAlertService(alerts_db)

    assert [a["id"] for a in service.list_alerts(status="responding", now=NOW)] == ["a_mid"]
    assert [a["id"] for a in service.list_alerts(status="resolved", now=NOW)] == ["a_ghost", "a_old"]
    assert len(service.list_alerts(status="all", now=NOW)) == 4


def test_search_matches_name_location_or_id(alerts_db):
    service = PanicAlertService(alerts_db)

    assert [a["id"] for a in service.list_alerts(search="anika", now=NOW)] == ["a_new", "a_old"]
    assert [a["id"] for a in service.list_alerts(search="28.61", now=NOW)] == ["a_old"]
    assert [a["id"] for a in service.list_alerts(search="GHOST", now=NOW)] == ["a_ghost"]
    assert service.list_alerts(search="nobody", now=NOW) == []


def test_search_and_status_combine(alerts_db):
    alerts = PanicAlertService(alerts_db).list_alerts(search="anika", status="active", now=NOW)

    assert [a["id"] for a in alerts] == ["a_new"]
