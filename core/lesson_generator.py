"""
AI-generated reading lessons.

Uses OpenAI's structured outputs to write a short graded passage that
practices the vocab and grammar picked by the recommender.

Usage:
    from core.lesson_generator import generate_reading_lesson
    lesson = generate_reading_lesson(rec.vocab, rec.grammar, "N5")
"""

from __future__ import annotations

from typing import Optional

from core import llm
from core.prompts import (
    SYSTEM_PROMPT_LESSON,
    LESSON_INSTRUCTIONS,
    MIN_LESSON_SENTENCES,
    MAX_LESSON_SENTENCES,
    format_list,
)
from core.schemas import ReadingLesson, ReviewItem


def describe_item(item: ReviewItem) -> str:
    """"title (meaning)" line for the prompt."""
    if item.meaning:
        return f"{item.title} ({item.meaning})"
    return item.title


def build_lesson_prompt(vocab: list[ReviewItem], grammar: list[ReviewItem], jlpt_level: str) -> str:
    return LESSON_INSTRUCTIONS.format(
        min_sentences=MIN_LESSON_SENTENCES,
        max_sentences=MAX_LESSON_SENTENCES,
        level=jlpt_level,
        vocab_list=format_list([describe_item(v) for v in vocab]),
        grammar_list=format_list([describe_item(g) for g in grammar]),
    )


def generate_reading_lesson(
    vocab: list[ReviewItem],
    grammar: list[ReviewItem],
    jlpt_level: str,
    model: Optional[str] = None,
    client=None
) -> ReadingLesson:
    """
    Generate a reading lesson using the given items.

    Args:
        vocab: Vocab items to practice
        grammar: Grammar items to practice
        jlpt_level: JLPT level label (e.g., "N5")
        model: OpenAI model (defaults to OPENAI_MODEL)
        client: Optional OpenAI client

    Returns:
        ReadingLesson with a title and lines

    Raises:
        ValueError: If no items are given or OPENAI_API_KEY is not set
        openai.APIError: If the API call fails
    """
    if not vocab and not grammar:
        raise ValueError("At least one vocab or grammar item is required")

    prompt = build_lesson_prompt(vocab, grammar, jlpt_level)
    return llm.parse_structured(SYSTEM_PROMPT_LESSON, prompt, ReadingLesson, model=model, client=client)
