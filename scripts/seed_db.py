"""
Seed script for the SafeVoice Firestore database.

Usage:
  - Dry run (default): python scripts/seed_db.py
  - Apply to configured DB: python scripts/seed_db.py --apply
  - Custom seed file: python scripts/seed_db.py --apply --seed ./my_seed.json

Behavior:
  - Loads `db_seed.json` from repo root: {collection: {doc_id: data}}.
  - Location fields ({"latitude", "longitude"} dicts) are written as Firestore GeoPoints.
  - ISO timestamps in known timestamp fields are written as datetimes.
  - Skips collections that already contain documents unless --force is given.

NOTE: Requires FIREBASE_CREDENTIALS_PATH (or Application Default Credentials) in `.env`.
"""

import argparse
import json
import os
from typing import Any, Dict

from firebase_admin import firestore

from safevoice.config.firebase import get_db
from safevoice.utils.firestore_helpers import TIMESTAMP_FIELDS, parse_timestamp
from safevoice.utils.geo import extract_lat_lng

GEOPOINT_FIELDS = ("location", "incidentLocation", "currentLocation")


def load_seed(path: str) -> dict:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def to_firestore(data: Dict[str, Any]) -> Dict[str, Any]:
    converted = dict(data)
    for field in GEOPOINT_FIELDS:
        point = extract_lat_lng(converted.get(field))
        if point is not None:
            converted[field] = firestore.GeoPoint(*point)
    for field in TIMESTAMP_FIELDS:
        if isinstance(converted.get(field), str):
            converted[field] = parse_timestamp(converted[field])
    return converted


def write_to_db(db: Any, seed: dict, apply: bool = False, force: bool = False):
    for collection, docs in seed.items():
        if apply and not force and list(db.collection(collection).limit(1).stream()):
            print(f"Skipping {collection}: already has data (use --force to overwrite)")
            continue
        for doc_id, data in docs.items():
            print(f"Preparing: {collection}/{doc_id}")
            if not apply:
                continue
            try:
                db.collection(collection).document(doc_id).set(to_firestore(data))
                print(f"Wrote: {collection}/{doc_id}")
            except Exception as e:
                print(f"Failed to write {collection}/{doc_id}: {e}")


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--apply", action="store_true", help="Write seed to the DB instead of dry-run")
    parser.add_argument("--force", action="store_true", help="Write even if a collection already has documents")
    parser.add_argument("--seed", default=os.path.join(os.getcwd(), "db_seed.json"), help="Seed file path")
    args = parser.parse_args()

    if not os.path.exists(args.seed):
        print(f"Seed file not found: {args.seed}")
        return

    seed = load_seed(args.seed)
    db = get_db() if args.apply else None

    write_to_db(db, seed, apply=args.apply, force=args.force)

    if args.apply:
        print("Seeding completed.")
    else:
        print("Dry run complete. Re-run with --apply to write to DB.")


if __name__ == "__main__":
    main()
