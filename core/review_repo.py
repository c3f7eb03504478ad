"""
MongoDB repository for review items.

Provides the storage side of the SRS engine: candidate lookup,
schedule writes, and upserts from the Bunpro sync.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Optional

from pymongo import ASCENDING
from pymongo.collection import Collection

from core import db
from core.schemas import BunproItem, ItemType, MasteryLevel, ReviewItem
from core.srs.schedule import ScheduleState

# Configuration
COLLECTION_NAME = "reviews"


# ---- Connection Management ----

def get_collection() -> Collection:
    """Get the MongoDB reviews collection."""
    return db.get_collection(COLLECTION_NAME)


def ensure_indexes() -> None:
    """
    Create the indexes the engine relies on.

    Safe to call multiple times.
    """
    collection = get_collection()
    collection.create_index([("item_id", ASCENDING)], unique=True)
    collection.create_index([
        ("user_id", ASCENDING),
        ("jlpt_level", ASCENDING),
        ("item_type", ASCENDING)
    ])
    collection.create_index([
        ("user_id", ASCENDING),
        ("item_type", ASCENDING),
        ("source_id", ASCENDING)
    ], unique=True)


def _to_item(doc: Optional[dict]) -> Optional[ReviewItem]:
    if doc is None:
        return None
    return ReviewItem.model_validate(doc)


def _value(enum_or_str) -> str:
    return getattr(enum_or_str, "value", enum_or_str)


# ---- Query Functions ----

def find_candidates(user_id: str, jlpt_level: str, item_type: ItemType | str) -> list[ReviewItem]:
    """
    Get every item a user tracks at a JLPT level for one item type.

    Args:
        user_id: Owner of the items
        jlpt_level: Target level label (e.g., "N5")
        item_type: "vocab" or "grammar"

    Returns:
        Unordered list of ReviewItems
    """
    collection = get_collection()

    query = {
        "user_id": user_id,
        "jlpt_level": jlpt_level,
        "item_type": _value(item_type)
    }
    return [_to_item(doc) for doc in collection.find(query)]


def get_item(user_id: str, item_id: str) -> Optional[ReviewItem]:
    """
    Get a single item owned by a user.

    Returns:
        ReviewItem, or None if not found
    """
    collection = get_collection()
    return _to_item(collection.find_one({"item_id": item_id, "user_id": user_id}))


def find_by_source(user_id: str, source_id, item_type: ItemType | str) -> Optional[dict]:
    """Get the raw document for a Bunpro item, or None."""
    collection = get_collection()
    return collection.find_one({
        "user_id": user_id,
        "source_id": source_id,
        "item_type": _value(item_type)
    })


def count_items(user_id: str, item_type: Optional[ItemType | str] = None) -> int:
    """Count a user's tracked items, optionally for one item type."""
    collection = get_collection()

    query = {"user_id": user_id}
    if item_type:
        query["item_type"] = _value(item_type)

    return collection.count_documents(query)


def get_items_without_reading(user_id: str, mastery_level: MasteryLevel | str) -> list[ReviewItem]:
    """Get vocab items at a mastery level that have no hiragana reading yet."""
    collection = get_collection()

    query = {
        "user_id": user_id,
        "item_type": ItemType.VOCAB.value,
        "mastery_level": _value(mastery_level),
        "reading": None  # Matches missing or null
    }
    return [_to_item(doc) for doc in collection.find(query)]


# ---- Write Functions ----

def update_schedule(item_id: str, state: ScheduleState, now: Optional[datetime] = None) -> bool:
    """
    Persist an item's new schedule state.

    Args:
        item_id: Item to update
        state: Schedule state returned by advance_schedule()
        now: Timestamp for updated_at (defaults to now)

    Returns:
        True if an item was matched, False if the id is unknown
    """
    if now is None:
        now = datetime.now(timezone.utc)

    collection = get_collection()
    result = collection.update_one(
        {"item_id": item_id},
        {"$set": {**state.to_document(), "updated_at": now}}
    )
    return result.matched_count > 0


def set_reading(item_id: str, reading: str, now: Optional[datetime] = None) -> bool:
    """Store the hiragana reading of a vocab item."""
    if now is None:
        now = datetime.now(timezone.utc)

    collection = get_collection()
    result = collection.update_one(
        {"item_id": item_id},
        {"$set": {"reading": reading, "updated_at": now}}
    )
    return result.matched_count > 0


def upsert_item(
    user_id: str,
    item: BunproItem,
    mastery_level: MasteryLevel | str,
    item_type: ItemType | str,
    now: Optional[datetime] = None
) -> str:
    """
    Insert a Bunpro item, or refresh its mastery level if already tracked.

    New items start with no schedule state. Schedule fields of existing
    items are never touched here.

    Returns:
        "inserted", "updated" or "unchanged"
    """
    if now is None:
        now = datetime.now(timezone.utc)

    collection = get_collection()
    mastery = _value(mastery_level)

    existing = find_by_source(user_id, item.id, item_type)

    if existing:
        if existing.get("mastery_level") == mastery:
            return "unchanged"
        collection.update_one(
            {"item_id": existing["item_id"]},
            {"$set": {"mastery_level": mastery, "updated_at": now}}
        )
        return "updated"

    entry = ReviewItem(
        item_id=generate_item_id(),
        user_id=user_id,
        item_type=item_type,
        source_id=item.id,
        slug=item.slug,
        title=item.title,
        meaning=item.meaning,
        jlpt_level=item.level,
        mastery_level=mastery,
        created_at=now,
        updated_at=now
    )
    collection.insert_one(entry.model_dump())
    return "inserted"


# ---- Utility Functions ----

def generate_item_id() -> str:
    """
    Generate a unique item ID (UUID).

    Returns:
        UUID string
    """
    return str(uuid.uuid4())
