"""
OpenAI client shared by lesson and reading generation.
"""

from __future__ import annotations

import os
from typing import Optional

from dotenv import load_dotenv
from openai import OpenAI

# Load environment variables
load_dotenv()

DEFAULT_MODEL = "gpt-4o-2024-08-06"

# Initialize OpenAI client (module-level, reused across calls)
_client: Optional[OpenAI] = None


def get_model() -> str:
    """Model name from OPENAI_MODEL, with a default."""
    return os.getenv("OPENAI_MODEL", DEFAULT_MODEL)


def get_client() -> OpenAI:
    """Get or create the OpenAI client."""
    global _client
    if _client is None:
        api_key = os.getenv("OPENAI_API_KEY")
        if not api_key:
            raise ValueError("OPENAI_API_KEY not found in environment variables")
        _client = OpenAI(api_key=api_key)
    return _client


def parse_structured(system_prompt: str, prompt: str, response_format, model: Optional[str] = None, client=None):
    """
    Run a chat completion with a pydantic structured output.

    Raises:
        ValueError: If the model returns nothing parseable
        openai.APIError: If the API call fails
    """
    client = client or get_client()

    completion = client.chat.completions.parse(
        model=model or get_model(),
        messages=[
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": prompt}
        ],
        response_format=response_format,
    )

    parsed = completion.choices[0].message.parsed
    if parsed is None:
        raise ValueError(f"Failed to parse structured output as {response_format.__name__}")
    return parsed
