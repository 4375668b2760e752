from faqbot.ai_core.composition.answer_composer import (
    AnswerComposer,
    NO_ANSWER_MESSAGE,
    RELATED_ANSWER_INTRO,
    no_answer,
)

__all__ = ["AnswerComposer", "NO_ANSWER_MESSAGE", "RELATED_ANSWER_INTRO", "no_answer"]
