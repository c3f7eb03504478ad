"""
Bunpro -> MongoDB sync.

Pulls every mastery level for vocab and grammar and records new items
(or mastery level changes) in the reviews collection. Schedule state of
items already tracked is left alone.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from core import bunpro, review_repo
from core.schemas import BunproItem, ItemType


# Bunpro review type -> stored item type
ITEM_TYPE_BY_REVIEW_TYPE = {
    "Vocab": ItemType.VOCAB,
    "Grammar": ItemType.GRAMMAR,
}


def upsert_items(
    user_id: str,
    items: list[BunproItem],
    mastery_level: str,
    item_type: ItemType | str,
    now: Optional[datetime] = None,
    store=review_repo
) -> dict:
    """
    Record a batch of Bunpro items for a user.

    Returns:
        {"inserted": n, "updated": n}
    """
    if now is None:
        now = datetime.now(timezone.utc)

    inserted = 0
    updated = 0

    for item in items:
        outcome = store.upsert_item(user_id, item, mastery_level, item_type, now)
        if outcome == "inserted":
            inserted += 1
        elif outcome == "updated":
            updated += 1

    return {"inserted": inserted, "updated": updated}


def sync_type(user_id: str, review_type: str, fetch=None, store=review_repo) -> dict:
    """
    Sync every mastery level of one review type.

    Args:
        user_id: Owner of the synced items
        review_type: "Vocab" or "Grammar"
        fetch: Payload fetcher (defaults to bunpro.get_reviews_by_level_and_type)
        store: Storage backend

    Returns:
        {"inserted": n, "updated": n} totals
    """
    if not user_id:
        raise ValueError("user_id is required")
    if review_type not in ITEM_TYPE_BY_REVIEW_TYPE:
        raise ValueError(f'Invalid type "{review_type}". Must be one of: {", ".join(bunpro.VALID_TYPES)}')

    fetch = fetch or bunpro.get_reviews_by_level_and_type
    item_type = ITEM_TYPE_BY_REVIEW_TYPE[review_type]

    totals = {"inserted": 0, "updated": 0}

    for level in bunpro.VALID_LEVELS:
        print(f"[SYNC] Fetching {review_type} at level: {level}...")
        payload = fetch(level, review_type)
        items = bunpro.extract_words(payload)
        print(f"[SYNC]   Found {len(items)} {review_type} items at {level}")

        stats = upsert_items(user_id, items, level, item_type, store=store)
        totals["inserted"] += stats["inserted"]
        totals["updated"] += stats["updated"]

        print(f"[SYNC]   Inserted: {stats['inserted']}, Updated: {stats['updated']}")

    return totals


def sync_all_data(user_id: str, fetch=None, store=review_repo) -> dict:
    """Sync vocab, then grammar, for a user."""
    if not user_id:
        raise ValueError("user_id is required")

    results = {}
    for review_type in bunpro.VALID_TYPES:
        print(f"[SYNC] === Syncing {review_type} ===")
        stats = sync_type(user_id, review_type, fetch=fetch, store=store)
        print(
            f"[SYNC] {review_type} sync complete. "
            f"Inserted: {stats['inserted']}, Updated: {stats['updated']}"
        )
        results[review_type.lower()] = stats

    print("[SYNC] === All data synced ===")
    return results
