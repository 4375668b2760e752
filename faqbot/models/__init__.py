# Shared data models
from faqbot.models.knowledge import QAEntry, KnowledgeSnapshot, KnowledgePage
from faqbot.models.api_responses import (
    QueryRequest,
    ComposedAnswer,
    ErrorResponse,
    KBStatusResponse,
)

__all__ = [
    "QAEntry",
    "KnowledgeSnapshot",
    "KnowledgePage",
    "QueryRequest",
    "ComposedAnswer",
    "ErrorResponse",
    "KBStatusResponse",
]
