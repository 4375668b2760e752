"""
Answer Composer

Turns a validated MatchResult into the answer payload returned to the user.
"""

import logging
from typing import List

from faqbot.ai_core.matching.match_classifier import MatchResult, MatchType
from faqbot.models.api_responses import ComposedAnswer
from faqbot.models.knowledge import KnowledgeSnapshot, QAEntry

logger = logging.getLogger(__name__)

RELATED_ANSWER_INTRO = "Here is what I found related to your question:"
NO_ANSWER_MESSAGE = (
    "Sorry, I couldn't find an answer related to your question in the knowledge base. "
    "Please try rephrasing it."
)


def no_answer(ai_assisted: bool = True) -> ComposedAnswer:
    """Fallback payload with no attachments."""
    return ComposedAnswer(answer=NO_ANSWER_MESSAGE, ai_assisted=ai_assisted)


class AnswerComposer:
    """
    Builds the final answer for each MatchResult variant.

    - EXACT: the matched entry's answer and attachments, unchanged
    - RELATED: every matched entry as a bulleted section, in match order;
      attachments come only from the first matched entry
    - NONE: fixed fallback message, no attachments
    """

    def compose(self, result: MatchResult, snapshot: KnowledgeSnapshot) -> ComposedAnswer:
        entries = self._locate(result, snapshot)

        if not entries:
            if result.found:
                logger.warning(
                    f"Matched questions not found in snapshot: {result.questions}"
                )
            return no_answer()

        if result.match_type == MatchType.EXACT:
            return self._from_entry(entries[0], entries[0].answer)

        sections = [f"• **{entry.question}**\n{entry.answer}" for entry in entries]
        combined = "\n\n".join([RELATED_ANSWER_INTRO] + sections).strip()
        return self._from_entry(entries[0], combined)

    def _locate(self, result: MatchResult, snapshot: KnowledgeSnapshot) -> List[QAEntry]:
        """Look up entries for the matched questions, keeping result order."""
        entries = []
        for question in result.questions:
            entry = snapshot.find(question)
            if entry is not None:
                entries.append(entry)
        return entries

    def _from_entry(self, entry: QAEntry, answer: str) -> ComposedAnswer:
        return ComposedAnswer(
            answer=answer,
            image_url=entry.image_url,
            pdf_url=entry.pdf_url,
            link_url=entry.link_url,
            link_text=entry.link_text,
            ai_assisted=True,
        )
