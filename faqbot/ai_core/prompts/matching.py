"""
Question Matching Prompt (exact / related / no match)

The classifier answers with one of three fixed markers. The reply is parsed
strictly and every question it names is checked against the knowledge base.
"""

from typing import Iterable

from faqbot.models.knowledge import QAEntry

EXACT_MATCH_MARKER = "EXACT_MATCH::"
RELATED_MATCH_MARKER = "RELATED_MATCH::"
NO_MATCH_MARKER = "NO_MATCH"
QUESTION_DELIMITER = "|||"

MATCHING_PROMPT_TEMPLATE = """You are a knowledge base search expert. Analyze the user question against the knowledge base below.

Follow these steps in order:
1. Decide whether one knowledge base question is semantically near-identical to the user question, or directly answers it. If so, reply with "{exact}" followed by that entry's ORIGINAL question, copied verbatim.
2. If there is no such question, find ALL knowledge base entries that are semantically relevant to the user question. Reply with "{related}" followed by every matched ORIGINAL question, separated by "{delimiter}".
3. If no entry is relevant, reply with "{none}".

Reply with the marker line only. Do not add explanations.

[KNOWLEDGE BASE START]
{knowledge_base}
[KNOWLEDGE BASE END]

User question: "{question}"
"""


def format_knowledge_base(entries: Iterable[QAEntry]) -> str:
    """Render every entry as a question/answer block for the prompt."""
    return "\n\n".join(
        f"[QUESTION]\n{entry.question}\n[ANSWER]\n{entry.answer}\n[END]"
        for entry in entries
    )


def create_matching_prompt(question: str, entries: Iterable[QAEntry]) -> str:
    """
    Create the classification prompt for a user question.

    Args:
        question: User's question
        entries: All knowledge base entries

    Returns:
        Prompt text embedding the full knowledge base
    """
    return MATCHING_PROMPT_TEMPLATE.format(
        exact=EXACT_MATCH_MARKER,
        related=RELATED_MATCH_MARKER,
        delimiter=QUESTION_DELIMITER,
        none=NO_MATCH_MARKER,
        knowledge_base=format_knowledge_base(entries),
        question=question,
    )
