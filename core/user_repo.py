"""
MongoDB repository for learner accounts.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from pymongo.collection import Collection

from core import db
from core.schemas import UserAccount

# Configuration
COLLECTION_NAME = "users"


def get_collection() -> Collection:
    """Get the MongoDB users collection."""
    return db.get_collection(COLLECTION_NAME)


def get_user_by_email(email: str) -> Optional[dict]:
    return get_collection().find_one({"email": email})


def seed_user(email: str, password: str, now: Optional[datetime] = None) -> dict:
    """
    Create a user unless one with this email already exists.

    Returns:
        The existing user document, or the newly inserted one
    """
    if not email or not password:
        raise ValueError("Both email and password are required to seed a user")

    existing = get_user_by_email(email)
    if existing:
        print(f'User with email "{email}" already exists. Skipping insert.')
        return existing

    if now is None:
        now = datetime.now(timezone.utc)

    document = UserAccount(email=email, password=password, created_at=now).model_dump()
    result = get_collection().insert_one(document)
    document["_id"] = result.inserted_id

    print(f'Seeded user with email "{email}" (insertedId: {result.inserted_id})')
    return document
