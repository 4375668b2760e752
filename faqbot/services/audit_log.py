"""
Query Audit Log Service

Writes one entry per answered question to the Notion log database.
Fire-and-forget: failures are logged and never reach the caller.
"""

import logging
from typing import Optional

from faqbot.integrations.notion.client import NotionClient

logger = logging.getLogger(__name__)


class AuditLogError(Exception):
    """Raised when a query log entry cannot be written."""

    pass


class AuditLogger:
    """Records user questions and their match outcome."""

    def __init__(self, notion_client: Optional[NotionClient] = None):
        """
        Args:
            notion_client: Client used to write log pages. Logging is disabled
                when no client is given or no log database is configured.
        """
        self.notion_client = notion_client

    @property
    def enabled(self) -> bool:
        return self.notion_client is not None and self.notion_client.logging_enabled

    async def record(self, question: str, found_answer: bool, description: str) -> None:
        """
        Record one query. Never raises.

        Args:
            question: Original user question
            found_answer: Whether an answer was found
            description: What matched (e.g. "Exact match: <question>")
        """
        if not self.enabled:
            return

        try:
            await self._write(question, found_answer, description)
            logger.debug(f"Logged query: found={found_answer}, {description}")
        except AuditLogError as e:
            logger.error(f"Failed to write query log: {e}")

    async def _write(self, question: str, found_answer: bool, description: str) -> None:
        try:
            await self.notion_client.create_log_entry(question, found_answer, description)
        except Exception as e:
            raise AuditLogError(str(e)) from e
