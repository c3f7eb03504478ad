"""
Build one reading lesson end to end.

1. Recommend vocab and grammar via SRS
2. Generate a reading passage with OpenAI
3. Save the lesson
4. Advance the schedule of every item used

Usage:
    python -m scripts.run_lesson --user-id <id> --level N5 [--vocab 3] [--grammar 2]
"""

from __future__ import annotations

import argparse
import os
import sys

from dotenv import load_dotenv

from core import db, lesson_repo
from core.lesson_generator import generate_reading_lesson
from core.recommender import (
    DEFAULT_GRAMMAR_COUNT,
    DEFAULT_VOCAB_COUNT,
    advance_after_session,
    recommend_items,
)

load_dotenv()


def run_lesson(user_id: str, jlpt_level: str, vocab_count: int, grammar_count: int, model=None):
    print(f"\n=== SRS lesson for user {user_id} ({jlpt_level}) ===")

    print("\n--- Step 1: Select vocab and grammar via SRS ---")
    rec = recommend_items(user_id, jlpt_level, vocab_count, grammar_count)

    if not rec.vocab and not rec.grammar:
        print("No items found. Make sure you have synced data for this user.")
        return

    print("\n--- Step 2: Generate lesson ---")
    lesson = generate_reading_lesson(rec.vocab, rec.grammar, jlpt_level, model=model)
    print(f"Generated title: {lesson.title}")
    print(f"Lines count: {len(lesson.lines)}")

    print("\n--- Step 3: Save lesson ---")
    lesson_id = lesson_repo.save_reading_lesson(user_id, jlpt_level, lesson, rec.vocab, rec.grammar)
    print(f"Saved lesson: {lesson_id}")

    print("\n--- Step 4: Update practice stats ---")
    item_ids = [item.item_id for item in rec.vocab + rec.grammar]
    for update in advance_after_session(user_id, item_ids):
        print(
            f"  - {update.title}: practice_count={update.practice_count}, "
            f"next_practice={update.next_practice.date().isoformat()}"
        )

    print("\n=== Lesson complete ===")


def main():
    parser = argparse.ArgumentParser(description="Recommend, generate and save a reading lesson")
    parser.add_argument(
        "--user-id",
        default=os.getenv("TEST_USER_ID"),
        help="Learner (default: TEST_USER_ID)"
    )
    parser.add_argument("--level", default="N5", help="JLPT level label (default: N5)")
    parser.add_argument("--vocab", type=int, default=DEFAULT_VOCAB_COUNT, help="Vocab items")
    parser.add_argument("--grammar", type=int, default=DEFAULT_GRAMMAR_COUNT, help="Grammar items")
    parser.add_argument("--model", help="OpenAI model (default: OPENAI_MODEL)")

    args = parser.parse_args()

    try:
        run_lesson(args.user_id, args.level, args.vocab, args.grammar, model=args.model)
    except Exception as e:
        print(f"✗ Lesson failed: {e}")
        sys.exit(1)
    finally:
        db.close_client()


if __name__ == "__main__":
    main()
