"""
Bunpro API client.

Fetches a user's vocab and grammar reviews grouped by SRS mastery level,
and flattens Bunpro's JSON:API payloads into BunproItem models.
"""

from __future__ import annotations

import os
import random
import time
from typing import Callable, Optional

import requests
from dotenv import load_dotenv

from core.schemas import BunproItem, BunproReviewStats

# Load environment
load_dotenv()

# Configuration
API_URL = "https://api.bunpro.jp/api/frontend/user_stats/srs_level_details"
REQUEST_TIMEOUT = 30  # seconds
PAGE_DELAY_MS = (500, 1500)  # Pause between page requests

VALID_LEVELS = ["beginner", "adept", "seasoned", "expert", "master"]
VALID_TYPES = ["Vocab", "Grammar"]


def get_token() -> str:
    """Bunpro API token from BUNPRO_TOKEN (or TOKEN)."""
    token = os.getenv("BUNPRO_TOKEN") or os.getenv("TOKEN")
    if not token:
        raise ValueError("BUNPRO_TOKEN not found in environment variables")
    return token


def _headers(token: str) -> dict:
    return {
        "accept": "*/*",
        "accept-language": "en-US,en;q=0.9",
        "authorization": f"Token token={token}",
        "cache-control": "no-cache",
        "pragma": "no-cache",
        "Referer": "https://bunpro.jp/"
    }


def random_delay(min_ms: int = PAGE_DELAY_MS[0], max_ms: int = PAGE_DELAY_MS[1]) -> int:
    """Random pause length in milliseconds, inclusive."""
    return random.randint(min_ms, max_ms)


def get_reviews_by_level_and_type(
    level: str,
    review_type: str,
    session: Optional[requests.Session] = None,
    sleep: Callable[[float], None] = time.sleep
) -> dict:
    """
    Fetch every page of reviews for one mastery level and review type.

    Args:
        level: Mastery level (one of VALID_LEVELS)
        review_type: "Vocab" or "Grammar"
        session: Optional requests session (a new one is used otherwise)
        sleep: Pause function between pages

    Returns:
        Payload shaped like a single Bunpro page:
        {"reviews": {"data": [...], "included": [...]}}

    Raises:
        ValueError: If level or review_type is invalid, or no token is set
        requests.HTTPError: If Bunpro answers with an error status
    """
    if level not in VALID_LEVELS:
        raise ValueError(f'Invalid level "{level}". Must be one of: {", ".join(VALID_LEVELS)}')
    if review_type not in VALID_TYPES:
        raise ValueError(f'Invalid type "{review_type}". Must be one of: {", ".join(VALID_TYPES)}')

    headers = _headers(get_token())

    if session is None:
        with requests.Session() as own_session:
            return _fetch_pages(own_session, headers, level, review_type, sleep)
    return _fetch_pages(session, headers, level, review_type, sleep)


def _fetch_pages(http, headers: dict, level: str, review_type: str, sleep: Callable[[float], None]) -> dict:
    all_reviews = []
    all_included = []

    page = 1
    total_pages = 1

    while page <= total_pages:
        response = http.get(
            API_URL,
            params={"level": level, "reviewable_type": review_type, "page": page},
            headers=headers,
            timeout=REQUEST_TIMEOUT
        )
        response.raise_for_status()
        data = response.json()

        reviews = data.get("reviews") or {}
        all_reviews.extend(reviews.get("data") or [])
        all_included.extend(reviews.get("included") or [])

        total_pages = (data.get("pagy") or {}).get("pages", 1)
        page += 1

        # Don't flood the API
        if page <= total_pages:
            delay = random_delay()
            print(f"  Waiting {delay}ms before next request...")
            sleep(delay / 1000)

    return {"reviews": {"data": all_reviews, "included": all_included}}


def extract_words(payload: dict) -> list[BunproItem]:
    """
    Join review records with their included reviewable attributes.

    Reviews whose reviewable is missing from `included`, or has no title,
    are skipped.
    """
    reviews = (payload.get("reviews") or {}).get("data") or []
    included = (payload.get("reviews") or {}).get("included") or []

    # reviewable id -> attributes
    attributes_by_id = {str(entry.get("id")): entry.get("attributes") or {} for entry in included}

    items = []
    for review in reviews:
        reviewable = ((review.get("relationships") or {}).get("reviewable") or {}).get("data") or {}
        attributes = attributes_by_id.get(str(reviewable.get("id")))
        if not attributes:
            continue
        if not attributes.get("title"):
            print(f"  ⚠ Skipping reviewable {reviewable.get('id')} with no title")
            continue

        stats = review.get("attributes") or {}
        items.append(BunproItem(
            id=attributes.get("id", reviewable.get("id")),
            slug=attributes.get("slug"),
            title=attributes.get("title"),
            meaning=attributes.get("meaning"),
            level=attributes.get("level"),
            review=BunproReviewStats(
                streak=stats.get("streak"),
                accuracy=stats.get("accuracy"),
                times_studied=stats.get("times_studied"),
                next_review=stats.get("next_review")
            )
        ))

    return items


def shuffle_and_chunk_words(
    words: list,
    chunk_size: int = 20,
    rng: Optional[random.Random] = None
) -> list[list]:
    """
    Shuffle a copy of `words` and split it into chunks of `chunk_size`.

    The last chunk may be shorter. The input list is left untouched.
    """
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be > 0, got {chunk_size}")

    shuffled = list(words)
    (rng or random).shuffle(shuffled)

    return [shuffled[i:i + chunk_size] for i in range(0, len(shuffled), chunk_size)]
