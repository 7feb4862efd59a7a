"""
Shared fixtures: an in-memory Firestore double and a TestClient bound to it.

The double covers the subset of the firebase_admin client the services use:
collection/document references, add/set(merge)/update/delete/get, where,
order_by, limit, stream, batch and collections().
"""

from datetime import datetime, timezone
import copy
import itertools

import pytest
from firebase_admin import firestore
from google.api_core.exceptions import NotFound

from safevoice.config import firebase
from safevoice.services.geocoding import resolver
from safevoice.services.severity import registry
from safevoice.services.severity.keyword_provider import KeywordSeverityProvider

_auto_ids = itertools.count(1)


def _resolve_sentinels(data: dict) -> dict:
    now = datetime.now(timezone.utc)
    return {key: (now if value is firestore.SERVER_TIMESTAMP else value) for key, value in data.items()}


class FakeSnapshot:
    def __init__(self, doc_id, data):
        self.id = doc_id
        self._data = data

    @property
    def exists(self):
        return self._data is not None

    def to_dict(self):
        return copy.deepcopy(self._data) if self._data is not None else None


class FakeDocumentRef:
    def __init__(self, store, collection, doc_id):
        self._store = store
        self._collection = collection
        self.id = doc_id

    def _docs(self):
        return self._store.setdefault(self._collection, {})

    def get(self):
        return FakeSnapshot(self.id, self._docs().get(self.id))

    def set(self, data, merge=False):
        data = _resolve_sentinels(data)
        if merge and self.id in self._docs():
            self._docs()[self.id].update(data)
        else:
            self._docs()[self.id] = data

    def update(self, data):
        if self.id not in self._docs():
            raise NotFound(f"No document to update: {self._collection}/{self.id}")
        self._docs()[self.id].update(_resolve_sentinels(data))

    def delete(self):
        self._docs().pop(self.id, None)


_OPS = {
    "==": lambda a, b: a == b,
    "!=": lambda a, b: a != b,
    "in": lambda a, b: a in b,
    "<": lambda a, b: a is not None and a < b,
    "<=": lambda a, b: a is not None and a <= b,
    ">": lambda a, b: a is not None and a > b,
    ">=": lambda a, b: a is not None and a >= b,
}


class FakeQuery:
    def __init__(self, db, collection, filters=(), orders=(), limit_count=None):
        self._db = db
        self._collection = collection
        self._filters = tuple(filters)
        self._orders = tuple(orders)
        self._limit = limit_count

    def _copy(self, **changes):
        params = {
            "filters": self._filters,
            "orders": self._orders,
            "limit_count": self._limit,
        }
        params.update(changes)
        return FakeQuery(self._db, self._collection, **params)

    def where(self, field, op, value):
        return self._copy(filters=self._filters + ((field, op, value),))

    def order_by(self, field, direction="ASCENDING"):
        return self._copy(orders=self._orders + ((field, direction),))

    def limit(self, count):
        return self._copy(limit_count=count)

    def stream(self):
        if self._collection in self._db.failing_collections:
            raise RuntimeError(f"Simulated read failure on {self._collection}")

        items = list(self._db.store.get(self._collection, {}).items())
        for field, op, value in self._filters:
            items = [(i, d) for i, d in items if _OPS[op](d.get(field), value)]
        for field, direction in reversed(self._orders):
            # Firestore leaves out documents that lack the ordered field
            items = [(i, d) for i, d in items if d.get(field) is not None]
            items.sort(key=lambda item: item[1][field], reverse=direction == "DESCENDING")
        if self._limit is not None:
            items = items[: self._limit]
        return iter([FakeSnapshot(i, copy.deepcopy(d)) for i, d in items])


class FakeCollection(FakeQuery):
    def __init__(self, db, name):
        super().__init__(db, name)
        self.id = name

    def document(self, doc_id=None):
        if self._collection in self._db.failing_collections:
            raise RuntimeError(f"Simulated failure on {self._collection}")
        return FakeDocumentRef(self._db.store, self._collection, doc_id or f"auto_{next(_auto_ids)}")

    def add(self, data):
        ref = self.document()
        ref.set(data)
        return datetime.now(timezone.utc), ref


class FakeBatch:
    def __init__(self):
        self._ops = []

    def update(self, ref, data):
        self._ops.append((ref, data))

    def commit(self):
        missing = [ref.id for ref, _ in self._ops if not ref.get().exists]
        if missing:
            raise NotFound(f"No document to update: {missing}")
        for ref, data in self._ops:
            ref.update(data)


class FakeFirestore:
    def __init__(self, store=None):
        self.store = store if store is not None else {}
        self.failing_collections = set()

    def collection(self, name):
        return FakeCollection(self, name)

    def collections(self):
        return [FakeCollection(self, name) for name, docs in self.store.items() if docs]

    def batch(self):
        return FakeBatch()

    def doc(self, collection, doc_id):
        """Raw stored data for assertions."""
        return self.store.get(collection, {}).get(doc_id)


@pytest.fixture
def fake_db(monkeypatch):
    db = FakeFirestore()
    monkeypatch.setattr(firebase, "db", db)
    return db


@pytest.fixture(autouse=True)
def keyword_only_severity(monkeypatch):
    """No network: the default registry only carries the keyword classifier."""
    monkeypatch.setattr(
        registry,
        "_registry",
        registry.SeverityProviderRegistry(providers=[KeywordSeverityProvider()]),
    )


@pytest.fixture(autouse=True)
def reset_geocoder(monkeypatch):
    monkeypatch.setattr(resolver, "_geocoder_instance", None)


@pytest.fixture
def client(fake_db):
    from fastapi.testclient import TestClient
    from safevoice.main import app

    with TestClient(app) as test_client:
        yield test_client
