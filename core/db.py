"""
MongoDB connection management.

One pooled client per process, shared by every repository module.
"""

from __future__ import annotations

import os
from typing import Optional

from dotenv import load_dotenv
from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.database import Database

# Load environment
load_dotenv()

# Configuration
DEFAULT_DB_NAME = "japanese_revision"

# Global connection pool (reused across requests)
_client: Optional[MongoClient] = None


def get_db_name() -> str:
    """Database name from DB_NAME, with a default."""
    return os.getenv("DB_NAME", DEFAULT_DB_NAME)


def get_client() -> MongoClient:
    """
    Get the shared MongoDB client, creating it on first use.

    Returns:
        MongoClient configured for timezone-aware datetimes
    """
    global _client

    if _client is not None:
        return _client

    mongo_uri = os.getenv("MONGO_URI")
    if not mongo_uri:
        raise ValueError("MONGO_URI not found in environment variables")

    _client = MongoClient(
        mongo_uri,
        tz_aware=True,       # Return aware UTC datetimes
        maxPoolSize=10,
        minPoolSize=1,
        maxIdleTimeMS=60000
    )
    return _client


def get_database() -> Database:
    return get_client()[get_db_name()]


def get_collection(name: str) -> Collection:
    """Get a collection from the configured database."""
    return get_database()[name]


def close_client() -> None:
    """Close the shared client (scripts call this before exiting)."""
    global _client
    if _client is not None:
        _client.close()
        _client = None
