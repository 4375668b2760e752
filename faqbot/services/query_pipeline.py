"""
Query Pipeline

Full question answering flow:
Question -> Knowledge snapshot (cached) -> Classification -> Answer composition
-> Query log (fire-and-forget)
"""

import asyncio
import logging
from functools import lru_cache
from typing import Any, Callable, Optional, Set

from faqbot.ai_core.composition import AnswerComposer, no_answer
from faqbot.ai_core.matching import MatchClassifier, MatchResult
from faqbot.integrations.notion import NotionClient
from faqbot.models.api_responses import ComposedAnswer
from faqbot.services.audit_log import AuditLogger
from faqbot.services.knowledge_store import KnowledgeStore

logger = logging.getLogger(__name__)

# Schedules a coroutine function with its arguments, e.g. BackgroundTasks.add_task
Dispatch = Callable[..., Any]


class QueryPipeline:
    """
    Orchestrates the answer pipeline for one question.

    Pipeline steps:
    1. Get the knowledge snapshot (refreshed when the cache expired)
    2. Classify the question against the snapshot
    3. Compose the answer
    4. Dispatch the query log entry without waiting for it
    """

    def __init__(
        self,
        store: KnowledgeStore,
        classifier: MatchClassifier,
        composer: Optional[AnswerComposer] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self.store = store
        self.classifier = classifier
        self.composer = composer or AnswerComposer()
        self.audit_logger = audit_logger or AuditLogger()
        self._pending_logs: Set[asyncio.Task] = set()

    async def answer(self, question: str, dispatch: Optional[Dispatch] = None) -> ComposedAnswer:
        """
        Answer a user question from the knowledge base.

        Args:
            question: User's question
            dispatch: Scheduler for the query log write. When omitted the write
                runs as a background asyncio task.

        Returns:
            ComposedAnswer for the question
        """
        logger.info(f"Processing question: {question}")

        snapshot = await self.store.get()
        if snapshot.is_empty:
            logger.info("Knowledge base is empty, returning fallback answer")
            return no_answer(ai_assisted=False)

        result = await self.classifier.classify(question, snapshot)
        answer = self.composer.compose(result, snapshot)

        self._dispatch_log(question, result, dispatch)
        return answer

    def _dispatch_log(
        self, question: str, result: MatchResult, dispatch: Optional[Dispatch]
    ) -> None:
        if not self.audit_logger.enabled:
            return

        args = (question, result.found, result.describe())
        if dispatch is not None:
            dispatch(self.audit_logger.record, *args)
            return

        task = asyncio.create_task(self.audit_logger.record(*args))
        self._pending_logs.add(task)
        task.add_done_callback(self._pending_logs.discard)


@lru_cache
def get_query_pipeline() -> QueryPipeline:
    """Process-wide pipeline wired to Notion and the default chat model."""
    notion_client = NotionClient()
    return QueryPipeline(
        store=KnowledgeStore(notion_client.query_knowledge_page),
        classifier=MatchClassifier(),
        audit_logger=AuditLogger(notion_client),
    )
