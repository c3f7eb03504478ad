"""
Selection - Lesson Item Picking

Ranks candidates by priority, then samples from a generous top tier so
lessons don't always repeat the same most-overdue items.
"""

from __future__ import annotations
import random
from datetime import datetime
from typing import Optional, Sequence, TypeVar

from core.srs.constants import TOP_TIER_MULTIPLIER
from core.srs.priority import calculate_priority


T = TypeVar("T")


def rank_items(candidates: Sequence[T], now: datetime) -> list[tuple[float, T]]:
    """
    Score every candidate and sort by score, most urgent first.

    Candidates are not modified; scores are returned alongside them.
    """
    scored = [(calculate_priority(item, now), item) for item in candidates]
    scored.sort(key=lambda pair: pair[0], reverse=True)
    return scored


def select_items(
    candidates: Sequence[T],
    now: datetime,
    count: int,
    rng: Optional[random.Random] = None
) -> list[T]:
    """
    Select up to `count` items for a lesson.

    Takes the top count * 3 candidates by priority, shuffles them and
    returns the first `count`. Fewer candidates than requested simply
    returns all of them.

    Args:
        candidates: Pool already filtered by owner, level and item type
        now: Evaluation time for scoring
        count: Number of items wanted (>= 0)
        rng: Random source for the shuffle (defaults to the global one)

    Returns:
        Selected items, in shuffled order
    """
    if count < 0:
        raise ValueError(f"count must be >= 0, got {count}")

    if not candidates:
        return []

    ranked = rank_items(candidates, now)

    top_tier_size = min(count * TOP_TIER_MULTIPLIER, len(ranked))
    top_tier = [item for _, item in ranked[:top_tier_size]]

    (rng or random).shuffle(top_tier)

    return top_tier[:min(count, top_tier_size)]
