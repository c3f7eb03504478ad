"""
SRS - Spaced Repetition Scheduling

Priority scoring, lesson selection and SM-2 style schedule updates
for Bunpro vocab and grammar items.

Everything in this package is pure: callers pass `now` explicitly and
handle persistence themselves.

Quick start:
    from core import srs

    # Pick items for a lesson
    chosen = srs.select_items(candidates, now, count=3)

    # After the session
    state = srs.advance_schedule(srs.ScheduleState.from_item(item), now)
"""

# Scoring
from core.srs.priority import calculate_priority, days_between

# Selection
from core.srs.selection import rank_items, select_items

# Schedule updates
from core.srs.schedule import (
    ScheduleState,
    advance_schedule,
    next_interval,
)

# Constants
from core.srs.constants import (
    NEVER_PRACTICED_PRIORITY,
    NO_SCHEDULE_PRIORITY,
    TOP_TIER_MULTIPLIER,
    DEFAULT_EASE,
    MIN_EASE,
    MAX_INTERVAL,
)


__all__ = [
    # Scoring
    "calculate_priority",
    "days_between",

    # Selection
    "rank_items",
    "select_items",

    # Schedule
    "ScheduleState",
    "advance_schedule",
    "next_interval",

    # Parameters
    "NEVER_PRACTICED_PRIORITY",
    "NO_SCHEDULE_PRIORITY",
    "TOP_TIER_MULTIPLIER",
    "DEFAULT_EASE",
    "MIN_EASE",
    "MAX_INTERVAL",
]
