"""
Lesson recommendation and post-session schedule updates.

Wires the pure SRS engine to a storage backend. The default backend is
the MongoDB review repository; any object exposing the same
find_candidates / get_item / update_schedule functions works.

Workflow:
1. recommend_items() picks vocab and grammar for a lesson
2. The learner studies the lesson
3. advance_after_session() moves each practiced item's schedule forward
"""

from __future__ import annotations

import random
from datetime import datetime, timezone
from typing import Iterable, Optional

from core import review_repo, srs
from core.schemas import ItemType, Recommendation, ReviewItem, ScheduleUpdate


# ---- Defaults ----
DEFAULT_VOCAB_COUNT = 3
DEFAULT_GRAMMAR_COUNT = 2


def _validate_request(user_id: str, jlpt_level: str, vocab_count: int, grammar_count: int) -> None:
    if not user_id:
        raise ValueError("user_id is required")
    if not jlpt_level:
        raise ValueError("jlpt_level is required")
    if vocab_count < 0 or grammar_count < 0:
        raise ValueError(
            f"Counts must be >= 0 (vocab_count={vocab_count}, grammar_count={grammar_count})"
        )


def select_items_for_lesson(
    user_id: str,
    jlpt_level: str,
    item_type: ItemType | str,
    count: int,
    now: datetime,
    rng: Optional[random.Random] = None,
    store=review_repo
) -> list[ReviewItem]:
    """
    Fetch one item type's candidates and select `count` of them.
    """
    candidates = store.find_candidates(user_id, jlpt_level, item_type)
    return srs.select_items(candidates, now, count, rng=rng)


def recommend_items(
    user_id: str,
    jlpt_level: str,
    vocab_count: int = DEFAULT_VOCAB_COUNT,
    grammar_count: int = DEFAULT_GRAMMAR_COUNT,
    now: Optional[datetime] = None,
    rng: Optional[random.Random] = None,
    store=review_repo
) -> Recommendation:
    """
    Recommend vocab and grammar items for the next lesson.

    Each item type is selected independently; there is no balancing
    between the two.

    Args:
        user_id: Learner
        jlpt_level: JLPT level label (e.g., "N5")
        vocab_count: Number of vocab items wanted
        grammar_count: Number of grammar items wanted
        now: Evaluation time (defaults to now)
        rng: Random source for selection
        store: Storage backend

    Returns:
        Recommendation with vocab and grammar lists

    Raises:
        ValueError: If user_id or jlpt_level is missing, or a count is negative
    """
    _validate_request(user_id, jlpt_level, vocab_count, grammar_count)

    if now is None:
        now = datetime.now(timezone.utc)

    print(f"[SRS] Selecting {vocab_count} vocab and {grammar_count} grammar for {jlpt_level}...")

    vocab = select_items_for_lesson(
        user_id, jlpt_level, ItemType.VOCAB, vocab_count, now, rng=rng, store=store
    )
    grammar = select_items_for_lesson(
        user_id, jlpt_level, ItemType.GRAMMAR, grammar_count, now, rng=rng, store=store
    )

    print(f"[SRS] Selected {len(vocab)} vocab items: {[v.title for v in vocab]}")
    print(f"[SRS] Selected {len(grammar)} grammar items: {[g.title for g in grammar]}")

    return Recommendation(vocab=vocab, grammar=grammar)


def advance_after_session(
    user_id: str,
    item_ids: Iterable[str],
    now: Optional[datetime] = None,
    store=review_repo
) -> list[ScheduleUpdate]:
    """
    Update practice stats for every item shown in a finished session.

    Items are processed one at a time; an unknown id (or a write that
    matches nothing) is reported and skipped without affecting the rest.
    Earlier writes are not rolled back.

    Args:
        user_id: Learner who practiced the items
        item_ids: Ids of the practiced items
        now: Session time (defaults to now)
        store: Storage backend

    Returns:
        One ScheduleUpdate per item that was found and written
    """
    if not user_id:
        raise ValueError("user_id is required")

    if now is None:
        now = datetime.now(timezone.utc)

    results = []

    for item_id in item_ids:
        item = store.get_item(user_id, item_id)

        if item is None:
            print(f"[SRS] ⚠ Item {item_id} not found for user {user_id}")
            continue

        state = srs.advance_schedule(srs.ScheduleState.from_item(item), now)

        if not store.update_schedule(item_id, state, now):
            print(f"[SRS] ⚠ Item {item_id} disappeared before its schedule could be saved")
            continue

        results.append(ScheduleUpdate(
            item_id=item_id,
            title=item.title,
            practice_count=state.practice_count,
            new_interval=state.practice_interval,
            next_practice=state.next_practice
        ))

    return results


def score_item(item, now: Optional[datetime] = None) -> float:
    """Priority of a single item, for diagnostics."""
    if now is None:
        now = datetime.now(timezone.utc)
    return srs.calculate_priority(item, now)
