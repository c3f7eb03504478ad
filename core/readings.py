"""
Hiragana readings for vocab items.

Vocab titles containing kanji are sent to OpenAI in batches; the returned
readings are stored on the items.
"""

from __future__ import annotations

import json
import re
from typing import Optional

from core import llm, review_repo
from core.bunpro import VALID_LEVELS
from core.prompts import SYSTEM_PROMPT_READING, READING_INSTRUCTIONS
from core.schemas import ReadingBatch, ReadingEntry, ReviewItem

# Configuration
BATCH_SIZE = 50  # Items per API call

# CJK Unified Ideographs
KANJI_PATTERN = re.compile(r"[\u4e00-\u9fff]")


def contains_kanji(text: Optional[str]) -> bool:
    """True if the text has at least one kanji."""
    return bool(text) and KANJI_PATTERN.search(text) is not None


def request_readings(items: list[ReviewItem], model: Optional[str] = None, client=None) -> list[ReadingEntry]:
    """
    Ask the model for the hiragana reading of each item's title.

    Returns:
        One ReadingEntry per item the model answered for
    """
    if not items:
        return []

    items_json = json.dumps(
        [{"item_id": item.item_id, "title": item.title} for item in items],
        ensure_ascii=False,
        indent=2
    )
    prompt = READING_INSTRUCTIONS.format(items_json=items_json)

    batch = llm.parse_structured(SYSTEM_PROMPT_READING, prompt, ReadingBatch, model=model, client=client)
    return batch.readings


def add_readings_for_level(
    user_id: str,
    mastery_level: str,
    batch_size: int = BATCH_SIZE,
    model: Optional[str] = None,
    client=None,
    store=review_repo
) -> dict:
    """
    Fill in missing readings for a user's vocab at one mastery level.

    Only titles with kanji are sent; kana-only titles need no reading.
    Readings returned for unknown ids are ignored.

    Returns:
        {"processed": n, "updated": n}
    """
    if not user_id:
        raise ValueError("user_id is required")

    print(f"[READINGS] Fetching vocab at level: {mastery_level}...")
    all_vocab = store.get_items_without_reading(user_id, mastery_level)

    with_kanji = [item for item in all_vocab if contains_kanji(item.title)]
    print(f"[READINGS] Found {len(all_vocab)} vocab items, {len(with_kanji)} contain kanji")

    if not with_kanji:
        return {"processed": 0, "updated": 0}

    requested_ids = {item.item_id for item in with_kanji}
    total_batches = (len(with_kanji) + batch_size - 1) // batch_size
    updated = 0

    for start in range(0, len(with_kanji), batch_size):
        batch = with_kanji[start:start + batch_size]
        print(f"[READINGS] Processing batch {start // batch_size + 1}/{total_batches} ({len(batch)} items)...")

        for entry in request_readings(batch, model=model, client=client):
            if entry.item_id not in requested_ids:
                print(f"[READINGS] ⚠ Ignoring reading for unknown item {entry.item_id}")
                continue
            if store.set_reading(entry.item_id, entry.hiragana):
                updated += 1

    print(f"[READINGS] ✓ Updated {updated} items with readings")
    return {"processed": len(with_kanji), "updated": updated}


def add_readings_for_all_levels(user_id: str, **kwargs) -> dict:
    """Run add_readings_for_level over every mastery level."""
    results = {}
    for level in VALID_LEVELS:
        print(f"\n[READINGS] === Processing {level} ===")
        results[level] = add_readings_for_level(user_id, level, **kwargs)

    print("\n[READINGS] === Summary ===")
    for level, stats in results.items():
        print(f"{level}: processed {stats['processed']}, updated {stats['updated']}")

    return results
