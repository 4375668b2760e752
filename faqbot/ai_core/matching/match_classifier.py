"""
Question Match Classifier

Responsibilities:
- Ask the chat model whether the user question matches the knowledge base
  (exact / related / no match)
- Parse the marker-based reply strictly
- Validate every claimed question against the current snapshot
"""

import logging
from enum import Enum
from typing import AbstractSet, Any, List, Optional, Sequence

from pydantic import BaseModel, Field, model_validator
from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import HumanMessage

from faqbot.ai_core.llm import create_chat_model
from faqbot.ai_core.prompts.matching import (
    EXACT_MATCH_MARKER,
    RELATED_MATCH_MARKER,
    QUESTION_DELIMITER,
    create_matching_prompt,
)
from faqbot.models.knowledge import KnowledgeSnapshot

logger = logging.getLogger(__name__)


class ClassificationError(Exception):
    """Raised when the classifier call fails or returns nothing usable."""

    pass


class MatchType(str, Enum):
    """Outcome of question classification."""

    EXACT = "exact"  # One entry answers the question directly
    RELATED = "related"  # One or more entries are relevant
    NONE = "none"  # Nothing relevant


class MatchResult(BaseModel):
    """
    Validated classification result.

    Every question in ``questions`` exists verbatim in the snapshot the result
    was produced from. EXACT carries exactly one question, RELATED at least
    one (in classifier order), NONE carries none.
    """

    match_type: MatchType = Field(..., description="exact, related, or none")
    questions: List[str] = Field(
        default_factory=list, description="Matched original question texts"
    )

    @model_validator(mode="after")
    def check_question_count(self) -> "MatchResult":
        count = len(self.questions)
        if self.match_type == MatchType.EXACT and count != 1:
            raise ValueError("EXACT match requires exactly one question")
        if self.match_type == MatchType.RELATED and count == 0:
            raise ValueError("RELATED match requires at least one question")
        if self.match_type == MatchType.NONE and count != 0:
            raise ValueError("NONE match cannot carry questions")
        return self

    @classmethod
    def exact(cls, question: str) -> "MatchResult":
        return cls(match_type=MatchType.EXACT, questions=[question])

    @classmethod
    def related(cls, questions: Sequence[str]) -> "MatchResult":
        return cls(match_type=MatchType.RELATED, questions=list(questions))

    @classmethod
    def none(cls) -> "MatchResult":
        return cls(match_type=MatchType.NONE)

    @property
    def found(self) -> bool:
        return self.match_type != MatchType.NONE

    def describe(self) -> str:
        """Human readable summary used for the query log."""
        if self.match_type == MatchType.EXACT:
            return f"Exact match: {self.questions[0]}"
        if self.match_type == MatchType.RELATED:
            return f"Related match: {' | '.join(self.questions)}"
        return "No match"


def parse_classifier_response(
    raw_response: Optional[str], known_questions: AbstractSet[str]
) -> MatchResult:
    """
    Parse a marker reply into a MatchResult.

    Accepted shapes (after trimming):
        EXACT_MATCH::<question>
        RELATED_MATCH::<question>|||<question>|||...
        NO_MATCH

    Questions not in ``known_questions`` are dropped. An EXACT reply naming an
    unknown question, a RELATED reply with no known question left, and any
    other shape all yield a NONE result.

    Args:
        raw_response: Raw classifier text
        known_questions: Question texts of the current snapshot

    Returns:
        Validated MatchResult
    """
    text = (raw_response or "").strip()

    if text.startswith(EXACT_MATCH_MARKER):
        question = text[len(EXACT_MATCH_MARKER):].strip()
        if question in known_questions:
            return MatchResult.exact(question)
        logger.debug(f"Dropping unknown exact match: {question!r}")
        return MatchResult.none()

    if text.startswith(RELATED_MATCH_MARKER):
        matched: List[str] = []
        for piece in text[len(RELATED_MATCH_MARKER):].split(QUESTION_DELIMITER):
            question = piece.strip()
            if question not in known_questions:
                if question:
                    logger.debug(f"Dropping unknown related match: {question!r}")
                continue
            if question not in matched:
                matched.append(question)
        if matched:
            return MatchResult.related(matched)
        return MatchResult.none()

    return MatchResult.none()


def _response_text(content: Any) -> str:
    """Extract text from a chat message content (string or content blocks)."""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for block in content:
            if isinstance(block, str):
                parts.append(block)
            elif isinstance(block, dict) and block.get("type") == "text":
                parts.append(block.get("text", ""))
        return "".join(parts)
    return ""


class MatchClassifier:
    """
    Classifies a user question against the knowledge base.

    The chat model reply is untrusted: it is parsed against three fixed
    markers and every question it names must exist in the snapshot.
    Provider failures degrade to a NONE result instead of raising.
    """

    def __init__(self, llm: Optional[BaseChatModel] = None):
        """
        Args:
            llm: LangChain chat model (defaults to the gen_ai_hub proxy model,
                created on first use)
        """
        self._llm = llm

    @property
    def llm(self) -> BaseChatModel:
        """Lazy initialization of the chat model."""
        if self._llm is None:
            self._llm = create_chat_model()
        return self._llm

    async def classify(self, question: str, snapshot: KnowledgeSnapshot) -> MatchResult:
        """
        Classify a user question against a knowledge snapshot.

        Args:
            question: User's question
            snapshot: Current knowledge snapshot

        Returns:
            MatchResult whose questions all exist in ``snapshot``
        """
        if snapshot.is_empty:
            logger.info("Knowledge snapshot is empty, skipping classification")
            return MatchResult.none()

        try:
            raw_response = await self._request_classification(question, snapshot)
        except ClassificationError as e:
            logger.error(f"Classification failed: {e}", exc_info=True)
            return MatchResult.none()

        result = parse_classifier_response(raw_response, snapshot.questions)

        if result.match_type == MatchType.EXACT:
            logger.info(f"Classifier found exact match: {result.questions[0]}")
        elif result.match_type == MatchType.RELATED:
            logger.info(
                f"Classifier found {len(result.questions)} related matches: "
                f"{', '.join(result.questions)}"
            )
        else:
            logger.info("Classifier found no match, or the reply format was invalid")

        return result

    async def _request_classification(
        self, question: str, snapshot: KnowledgeSnapshot
    ) -> str:
        """Send the matching prompt and return the trimmed reply text."""
        prompt = create_matching_prompt(question, snapshot.entries)

        try:
            response = await self.llm.ainvoke([HumanMessage(content=prompt)])
        except Exception as e:
            raise ClassificationError(f"Classifier request failed: {e}") from e

        text = _response_text(getattr(response, "content", None)).strip()
        if not text:
            raise ClassificationError("Classifier returned an empty response")
        return text
