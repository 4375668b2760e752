"""
Knowledge Base Models

This module defines the question/answer entries loaded from the knowledge
source and the cached snapshot that groups them.
"""

from typing import Any, Dict, FrozenSet, List, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field, field_validator


class QAEntry(BaseModel):
    """One knowledge base item. Immutable once loaded."""

    model_config = ConfigDict(frozen=True)

    question: str = Field(..., min_length=1, description="Trimmed question text (unique key)")
    answer: str = Field("", description="Answer text, may be empty")
    image_url: Optional[str] = Field(None, description="Optional image attachment URL")
    pdf_url: Optional[str] = Field(None, description="Optional PDF attachment URL")
    link_url: Optional[str] = Field(None, description="Optional external link URL")
    link_text: Optional[str] = Field(None, description="Optional label for link_url")

    @field_validator("question", mode="before")
    @classmethod
    def strip_question(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip()
        return value


class KnowledgeSnapshot(BaseModel):
    """
    Ordered set of entries captured by one full fetch of the knowledge source.

    Question texts are expected to be unique; duplicates are kept as-is and
    lookups return the first entry.
    """

    model_config = ConfigDict(frozen=True)

    entries: Tuple[QAEntry, ...] = ()
    captured_at: Optional[float] = Field(
        None, description="Clock reading at capture time (None for the empty snapshot)"
    )

    @property
    def is_empty(self) -> bool:
        return not self.entries

    @property
    def questions(self) -> FrozenSet[str]:
        return frozenset(entry.question for entry in self.entries)

    def find(self, question: str) -> Optional[QAEntry]:
        """Return the first entry whose question equals ``question``."""
        for entry in self.entries:
            if entry.question == question:
                return entry
        return None

    def __len__(self) -> int:
        return len(self.entries)


class KnowledgePage(BaseModel):
    """
    One page returned by the knowledge source.

    Records are flat dicts with the keys ``question``, ``answer``,
    ``image_url``, ``pdf_url``, ``link_url`` and ``link_text``.
    """

    records: List[Dict[str, Optional[str]]] = Field(default_factory=list)
    has_more: bool = False
    next_cursor: Optional[str] = None
