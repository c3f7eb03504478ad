"""
Shared fixtures: in-memory stand-ins for the review store and for
pymongo collections, so no test needs a running MongoDB.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

from core.schemas import ReviewItem


NOW = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)


# ---- Fake pymongo collection ----

def _matches(doc: dict, query: dict) -> bool:
    return all(doc.get(key) == value for key, value in query.items())


class FakeCursor(list):
    def sort(self, key, direction=1):
        return FakeCursor(sorted(self, key=lambda d: d.get(key), reverse=direction < 0))

    def limit(self, n):
        return FakeCursor(self[:n])


class FakeCollection:
    """Equality-only subset of the pymongo Collection API."""

    def __init__(self, docs=()):
        self.docs = [dict(d) for d in docs]
        self.indexes = []

    def find(self, query=None):
        return FakeCursor(dict(d) for d in self.docs if _matches(d, query or {}))

    def find_one(self, query=None):
        for doc in self.docs:
            if _matches(doc, query or {}):
                return dict(doc)
        return None

    def count_documents(self, query):
        return len([d for d in self.docs if _matches(d, query)])

    def insert_one(self, doc):
        doc.setdefault("_id", uuid.uuid4().hex)
        self.docs.append(dict(doc))
        return SimpleNamespace(inserted_id=doc["_id"])

    def update_one(self, query, update):
        for doc in self.docs:
            if _matches(doc, query):
                doc.update(update.get("$set", {}))
                return SimpleNamespace(matched_count=1, modified_count=1)
        return SimpleNamespace(matched_count=0, modified_count=0)

    def create_index(self, keys, **kwargs):
        self.indexes.append((keys, kwargs))


# ---- Fake review store ----

class FakeStore:
    """In-memory implementation of the review_repo functions the engine uses."""

    def __init__(self, items=()):
        self.items = {item.item_id: item for item in items}
        self.calls = []
        self.fail_writes = set()

    def find_candidates(self, user_id, jlpt_level, item_type):
        self.calls.append(("find_candidates", user_id, jlpt_level, item_type))
        return [
            item for item in self.items.values()
            if item.user_id == user_id and item.jlpt_level == jlpt_level and item.item_type == item_type
        ]

    def get_item(self, user_id, item_id):
        self.calls.append(("get_item", user_id, item_id))
        item = self.items.get(item_id)
        if item is None or item.user_id != user_id:
            return None
        return item

    def update_schedule(self, item_id, state, now=None):
        self.calls.append(("update_schedule", item_id))
        if item_id not in self.items or item_id in self.fail_writes:
            return False
        self.items[item_id] = self.items[item_id].model_copy(update=state.to_document())
        return True


# ---- Fixtures ----

@pytest.fixture
def now():
    return NOW


@pytest.fixture
def make_item():
    """Factory for ReviewItems; schedule fields default to never practiced."""
    def _make(
        title="食べる",
        user_id="u1",
        item_type="vocab",
        jlpt_level="N5",
        overdue_days=None,
        due_in_days=None,
        **fields
    ):
        if overdue_days is not None:
            fields.setdefault("last_practiced", NOW - timedelta(days=overdue_days + 1))
            fields.setdefault("next_practice", NOW - timedelta(days=overdue_days))
            fields.setdefault("practice_count", 1)
        if due_in_days is not None:
            fields.setdefault("last_practiced", NOW - timedelta(days=1))
            fields.setdefault("next_practice", NOW + timedelta(days=due_in_days))
            fields.setdefault("practice_count", 1)
        return ReviewItem(
            item_id=fields.pop("item_id", str(uuid.uuid4())),
            user_id=user_id,
            item_type=item_type,
            source_id=fields.pop("source_id", uuid.uuid4().int % 100000),
            title=title,
            jlpt_level=jlpt_level,
            **fields
        )
    return _make


@pytest.fixture
def make_store():
    return FakeStore


@pytest.fixture
def fake_collection(monkeypatch):
    """Point every repository module at one empty in-memory collection."""
    from core import lesson_repo, review_repo, user_repo

    collection = FakeCollection()
    for module in (review_repo, lesson_repo, user_repo):
        monkeypatch.setattr(module, "get_collection", lambda: collection)
    return collection
