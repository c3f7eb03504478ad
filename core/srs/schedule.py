"""
Schedule - SM-2 Inspired Interval Updates

Pure schedule state and the update applied after a practice session
(no database calls).

Main workflow:
1. Read schedule state from the item (caller's responsibility)
2. Advance it with the session time
3. Persist the returned state (caller's responsibility)

Intervals grow 1 -> 3 -> interval * ease, capped at MAX_INTERVAL days.
No recall quality is recorded per session yet, so ease is never lowered.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional
import math

from core.srs.constants import (
    DEFAULT_EASE,
    MIN_EASE,
    DEFAULT_INTERVAL,
    FIRST_INTERVAL,
    SECOND_INTERVAL,
    MAX_INTERVAL,
)


@dataclass
class ScheduleState:
    """
    Schedule fields of a single review item.

    None means "never set" for every field except practice_count.
    A stored 0 ease or interval is treated as unset.
    """
    practice_count: int = 0
    practice_interval: Optional[int] = None  # days
    practice_ease: Optional[float] = None
    last_practiced: Optional[datetime] = None
    next_practice: Optional[datetime] = None

    @classmethod
    def from_item(cls, item) -> "ScheduleState":
        """Copy the schedule fields off a ReviewItem (or any look-alike)."""
        return cls(
            practice_count=item.practice_count or 0,
            practice_interval=item.practice_interval,
            practice_ease=item.practice_ease,
            last_practiced=item.last_practiced,
            next_practice=item.next_practice,
        )

    @property
    def ease(self) -> float:
        return self.practice_ease or DEFAULT_EASE

    @property
    def interval(self) -> int:
        return self.practice_interval or DEFAULT_INTERVAL

    def to_document(self) -> dict:
        """Fields to $set on the stored item."""
        return {
            "practice_count": self.practice_count,
            "practice_interval": self.practice_interval,
            "practice_ease": self.practice_ease,
            "last_practiced": self.last_practiced,
            "next_practice": self.next_practice,
        }


def round_half_up(value: float) -> int:
    """Round .5 upwards (Python's round() rounds half to even)."""
    return int(math.floor(value + 0.5))


def next_interval(practice_count: int, interval: int, ease: float) -> int:
    """
    Compute the interval (days) following the practice_count-th session.

    Args:
        practice_count: Sessions completed, including the one just finished
        interval: Previous interval in days
        ease: Ease factor

    Returns:
        New interval in days, within [1, MAX_INTERVAL]
    """
    if practice_count == 1:
        raw_interval = FIRST_INTERVAL
    elif practice_count == 2:
        raw_interval = SECOND_INTERVAL
    else:
        raw_interval = round_half_up(interval * ease)

    return max(1, min(raw_interval, MAX_INTERVAL))


def advance_schedule(state: ScheduleState, now: datetime) -> ScheduleState:
    """
    Advance an item's schedule after it was practiced at `now`.

    Returns a new ScheduleState; the input is left untouched.
    """
    practice_count = state.practice_count + 1
    ease = state.ease

    interval = next_interval(practice_count, state.interval, ease)
    new_ease = max(ease, MIN_EASE)

    return ScheduleState(
        practice_count=practice_count,
        practice_interval=interval,
        practice_ease=new_ease,
        last_practiced=now,
        next_practice=now + timedelta(days=interval),
    )
