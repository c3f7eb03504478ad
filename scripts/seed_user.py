"""
Seed a learner account.

Usage:
    python -m scripts.seed_user [--email EMAIL] [--password PASSWORD]
"""

from __future__ import annotations

import argparse
import os
import sys

from dotenv import load_dotenv

from core import db, user_repo

load_dotenv()

# Configurable defaults
DEFAULT_EMAIL = "admin@example.com"
DEFAULT_PASSWORD = "password123"


def main():
    parser = argparse.ArgumentParser(description="Seed a user account")
    parser.add_argument("--email", default=os.getenv("SEED_EMAIL", DEFAULT_EMAIL))
    parser.add_argument("--password", default=os.getenv("SEED_PASSWORD", DEFAULT_PASSWORD))

    args = parser.parse_args()

    print("Seeding user...")
    try:
        user_repo.seed_user(args.email, args.password)
    except Exception as e:
        print(f"✗ Seeder failed: {e}")
        sys.exit(1)
    finally:
        db.close_client()

    print("Seeder completed successfully.")


if __name__ == "__main__":
    main()
