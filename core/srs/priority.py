"""
Priority - Review Urgency Scoring

Pure scoring of how urgently an item should be reviewed (no database calls).

Score bands (higher = more urgent):
- 1000:        never practiced
- 500 - 700:   due or overdue, grows with days overdue
- 0 - 100:     not yet due, decays to 0 twenty days before due
- 50:          practiced but no next_practice recorded (legacy documents)
"""

from __future__ import annotations
from datetime import datetime

from core.srs.constants import (
    NEVER_PRACTICED_PRIORITY,
    OVERDUE_BASE,
    OVERDUE_PER_DAY,
    OVERDUE_MAX_BONUS,
    UPCOMING_BASE,
    UPCOMING_DECAY_PER_DAY,
    NO_SCHEDULE_PRIORITY,
    SECONDS_PER_DAY,
)


def days_between(start: datetime, end: datetime) -> float:
    """Fractional days from start to end (negative if end is earlier)."""
    return (end - start).total_seconds() / SECONDS_PER_DAY


def calculate_priority(item, now: datetime) -> float:
    """
    Calculate the review priority of an item.

    Works on anything exposing `last_practiced` and `next_practice`
    (ReviewItem, ScheduleState).

    Args:
        item: Item with schedule fields
        now: Evaluation time

    Returns:
        Priority score, higher = more likely to be selected
    """
    if item.last_practiced is None:
        return NEVER_PRACTICED_PRIORITY

    next_practice = item.next_practice

    if next_practice is not None and next_practice <= now:
        days_overdue = days_between(next_practice, now)
        return OVERDUE_BASE + min(days_overdue * OVERDUE_PER_DAY, OVERDUE_MAX_BONUS)

    if next_practice is not None:
        days_until_due = days_between(now, next_practice)
        return max(0.0, UPCOMING_BASE - days_until_due * UPCOMING_DECAY_PER_DAY)

    return NO_SCHEDULE_PRIORITY
