"""
Add hiragana readings to vocab items that contain kanji.

Usage:
    python -m scripts.add_readings --user-id <id> [--level beginner]
"""

from __future__ import annotations

import argparse
import os
import sys

from dotenv import load_dotenv

from core import db
from core.bunpro import VALID_LEVELS
from core.readings import BATCH_SIZE, add_readings_for_all_levels, add_readings_for_level

load_dotenv()


def main():
    parser = argparse.ArgumentParser(description="Add hiragana readings to vocab")
    parser.add_argument(
        "--user-id",
        default=os.getenv("TEST_USER_ID"),
        help="Owner of the items (default: TEST_USER_ID)"
    )
    parser.add_argument(
        "--level",
        choices=VALID_LEVELS,
        help="Only process one mastery level (default: all)"
    )
    parser.add_argument(
        "--batch-size",
        type=int,
        default=BATCH_SIZE,
        help="Items per OpenAI request"
    )
    parser.add_argument("--model", help="OpenAI model (default: OPENAI_MODEL)")

    args = parser.parse_args()

    try:
        if args.level:
            result = add_readings_for_level(
                args.user_id, args.level, batch_size=args.batch_size, model=args.model
            )
            print("Done.", result)
        else:
            add_readings_for_all_levels(args.user_id, batch_size=args.batch_size, model=args.model)
            print("Done.")
    except Exception as e:
        print(f"✗ Failed: {e}")
        sys.exit(1)
    finally:
        db.close_client()


if __name__ == "__main__":
    main()
