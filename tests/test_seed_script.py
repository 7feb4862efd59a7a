from datetime import datetime
from pathlib import Path

from firebase_admin import firestore

from scripts.seed_db import load_seed, to_firestore, write_to_db

SEED_PATH = Path(__file__).resolve().parent.parent / "db_seed.json"


def test_to_firestore_converts_locations_and_timestamps():
    converted = to_firestore({
        "incidentLocation": {"latitude": 19.076, "longitude": 72.8777},
        "submittedAt": "2024-01-10T10:00:00Z",
        "title": "unchanged",
    })

    assert isinstance(converted["incidentLocation"], firestore.GeoPoint)
    assert converted["incidentLocation"].latitude == 19.076
    assert isinstance(converted["submittedAt"], datetime)
    assert converted["submittedAt"].tzinfo is not None
    assert converted["title"] == "unchanged"


def test_dry_run_writes_nothing(fake_db):
    write_to_db(fake_db, {"users": {"u1": {"name": "A"}}}, apply=False)

    assert fake_db.doc("users", "u1") is None


def test_apply_skips_populated_collections_unless_forced(fake_db):
    fake_db.store["users"] = {"existing": {"name": "Old"}}
    seed = {"users": {"u1": {"name": "A"}}, "cases": {"c1": {"title": "T"}}}

    write_to_db(fake_db, seed, apply=True)
    assert fake_db.doc("users", "u1") is None
    assert fake_db.doc("cases", "c1") == {"title": "T"}

    write_to_db(fake_db, seed, apply=True, force=True)
    assert fake_db.doc("users", "u1") == {"name": "A"}


def test_bundled_seed_is_loadable(fake_db):
    seed = load_seed(str(SEED_PATH))

    write_to_db(fake_db, seed, apply=True)

    assert set(fake_db.store) >= {"users", "cases", "panic_events"}
    location = fake_db.doc("panic_events", "panic_001")["location"]
    assert isinstance(location, firestore.GeoPoint)
