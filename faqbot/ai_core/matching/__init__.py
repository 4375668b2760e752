from faqbot.ai_core.matching.match_classifier import (
    MatchClassifier,
    MatchResult,
    MatchType,
    ClassificationError,
    parse_classifier_response,
)

__all__ = [
    "MatchClassifier",
    "MatchResult",
    "MatchType",
    "ClassificationError",
    "parse_classifier_response",
]
