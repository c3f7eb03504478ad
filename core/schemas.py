"""
Pydantic models for Bunpro review items and generated lessons.

These models define the structure of MongoDB documents and support
OpenAI structured outputs for lesson and reading generation.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, Field


class ItemType(str, Enum):
    """Kind of study item."""
    VOCAB = "vocab"
    GRAMMAR = "grammar"


class MasteryLevel(str, Enum):
    """Bunpro SRS mastery tiers, from newest to fully learned."""
    BEGINNER = "beginner"
    ADEPT = "adept"
    SEASONED = "seasoned"
    EXPERT = "expert"
    MASTER = "master"


# ---- Bunpro Import ----

class BunproReviewStats(BaseModel):
    """Review statistics Bunpro reports alongside each item."""
    streak: Optional[int] = None
    accuracy: Optional[float] = None
    times_studied: Optional[int] = None
    next_review: Optional[str] = None


class BunproItem(BaseModel):
    """A vocab or grammar point as extracted from a Bunpro payload."""
    id: Union[int, str] = Field(..., description="Bunpro reviewable id")
    slug: Optional[str] = None
    title: str
    meaning: Optional[str] = None
    level: Optional[str] = Field(None, description="JLPT level label, e.g. 'N5'")
    review: Optional[BunproReviewStats] = None


# ---- Review Items ----

class ReviewItem(BaseModel):
    """
    A single tracked study item in the MongoDB `reviews` collection.

    One document per user + item_type + source_id. Schedule fields are
    absent until the item is practiced for the first time.
    """
    item_id: str = Field(..., description="Unique item id (UUID)")
    user_id: str
    item_type: ItemType
    source_id: Union[int, str] = Field(..., description="Bunpro id, used for de-duplication")

    slug: Optional[str] = None
    title: str
    meaning: Optional[str] = None
    reading: Optional[str] = Field(None, description="Hiragana reading (vocab only)")

    jlpt_level: Optional[str] = None
    mastery_level: Optional[MasteryLevel] = None

    # Schedule state (owned by the SRS engine)
    last_practiced: Optional[datetime] = None
    next_practice: Optional[datetime] = None
    practice_interval: Optional[int] = None  # days, 1-180 once set
    practice_ease: Optional[float] = None    # >= 1.3 once set
    practice_count: int = 0

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        use_enum_values = True  # Store enum values as strings in MongoDB


class ScheduleUpdate(BaseModel):
    """Outcome of advancing one item after a session."""
    item_id: str
    title: Optional[str] = None
    practice_count: int
    new_interval: int
    next_practice: datetime


class Recommendation(BaseModel):
    """Items picked for the next lesson."""
    vocab: list[ReviewItem] = Field(default_factory=list)
    grammar: list[ReviewItem] = Field(default_factory=list)


# ---- Generated Lessons ----

class LessonChunk(BaseModel):
    """A word or phrase inside a lesson line."""
    japanese: str = Field(..., description="Japanese word/phrase (kanji allowed, no furigana syntax)")
    hiragana: str = Field(..., description="Hiragana reading")
    english: str = Field(..., description="English meaning of this chunk")


class LessonLine(BaseModel):
    """One sentence of a reading lesson."""
    japanese: str = Field(..., description="Japanese text with furigana syntax {kanji|reading}")
    english: str = Field(..., description="English translation")
    points: list[str] = Field(default_factory=list, description="Vocab/grammar titles used in this line")
    chunks: list[LessonChunk] = Field(default_factory=list, description="Chunks that form the complete sentence")


class ReadingLesson(BaseModel):
    """
    Structured output from lesson generation.

    This is what the LLM returns when asked for a reading passage.
    """
    title: str = Field(..., description="Short descriptive title in format 'JLPT Level: Topic'")
    lines: list[LessonLine]


# ---- Readings ----

class ReadingEntry(BaseModel):
    """Hiragana reading for one vocab item."""
    item_id: str = Field(..., description="The item ID")
    title: str = Field(..., description="The original text")
    hiragana: str = Field(..., description="The hiragana reading")


class ReadingBatch(BaseModel):
    """Structured output wrapper for a batch of readings."""
    readings: list[ReadingEntry]


# ---- Users ----

class UserAccount(BaseModel):
    """A learner account."""
    email: str
    password: str
    created_at: Optional[datetime] = None
