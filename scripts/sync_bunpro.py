"""
Sync Bunpro vocab and grammar into the reviews collection.

Usage:
    python -m scripts.sync_bunpro --user-id <id> [--type Vocab|Grammar]
"""

from __future__ import annotations

import argparse
import os
import sys

from dotenv import load_dotenv

from core import db, review_repo
from core.bunpro import VALID_TYPES
from core.sync import sync_all_data, sync_type

load_dotenv()


def main():
    parser = argparse.ArgumentParser(description="Sync Bunpro reviews to MongoDB")
    parser.add_argument(
        "--user-id",
        default=os.getenv("TEST_USER_ID"),
        help="Owner of the synced items (default: TEST_USER_ID)"
    )
    parser.add_argument(
        "--type",
        choices=VALID_TYPES,
        help="Only sync one review type (default: both)"
    )

    args = parser.parse_args()

    try:
        review_repo.ensure_indexes()
        if args.type:
            sync_type(args.user_id, args.type)
        else:
            sync_all_data(args.user_id)
    except Exception as e:
        print(f"✗ Sync failed: {e}")
        sys.exit(1)
    finally:
        db.close_client()

    print("Done.")


if __name__ == "__main__":
    main()
