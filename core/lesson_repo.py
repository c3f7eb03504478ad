"""
MongoDB repository for generated reading lessons.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Optional

from pymongo import DESCENDING
from pymongo.collection import Collection

from core import db
from core.schemas import ReadingLesson, ReviewItem

# Configuration
COLLECTION_NAME = "lessons"


def get_collection() -> Collection:
    """Get the MongoDB lessons collection."""
    return db.get_collection(COLLECTION_NAME)


def save_reading_lesson(
    user_id: str,
    jlpt_level: str,
    lesson: ReadingLesson,
    vocab: list[ReviewItem],
    grammar: list[ReviewItem],
    now: Optional[datetime] = None
) -> str:
    """
    Store a generated lesson with the items it practices.

    Returns:
        The new lesson_id
    """
    if now is None:
        now = datetime.now(timezone.utc)

    lesson_id = str(uuid.uuid4())
    document = {
        "lesson_id": lesson_id,
        "user_id": user_id,
        "jlpt_level": jlpt_level,
        "title": lesson.title,
        "lines": [line.model_dump() for line in lesson.lines],
        "vocab_ids": [item.item_id for item in vocab],
        "grammar_ids": [item.item_id for item in grammar],
        "created_at": now
    }

    get_collection().insert_one(document)
    return lesson_id


def get_lesson(lesson_id: str) -> Optional[dict]:
    """Get a lesson document by id, or None."""
    return get_collection().find_one({"lesson_id": lesson_id})


def get_recent_lessons(user_id: str, limit: int = 10) -> list[dict]:
    """A user's most recent lessons, newest first."""
    cursor = get_collection().find({"user_id": user_id}).sort("created_at", DESCENDING).limit(limit)
    return list(cursor)
