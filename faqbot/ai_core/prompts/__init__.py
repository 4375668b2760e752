"""Prompts package."""

from faqbot.ai_core.prompts.matching import (
    EXACT_MATCH_MARKER,
    RELATED_MATCH_MARKER,
    NO_MATCH_MARKER,
    QUESTION_DELIMITER,
    create_matching_prompt,
)

__all__ = [
    "EXACT_MATCH_MARKER",
    "RELATED_MATCH_MARKER",
    "NO_MATCH_MARKER",
    "QUESTION_DELIMITER",
    "create_matching_prompt",
]
