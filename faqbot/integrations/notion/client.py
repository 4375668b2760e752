"""
Notion API Client

Responsibilities:
- databases/{id}/query: Fetch one page of knowledge base entries
- pages.create: Append an entry to the query log database
- Pure fetching focus - caching and validation live in services
"""

import logging
from typing import Any, Dict, Optional

import httpx
from notion_client import AsyncClient
from notion_client.errors import HTTPResponseError, RequestTimeoutError

from faqbot.config import get_settings
from faqbot.integrations.notion.parser import parse_page, QUESTION_PROPERTY
from faqbot.models.knowledge import KnowledgePage

logger = logging.getLogger(__name__)


class SourceFetchError(Exception):
    """Raised when the knowledge base cannot be read from Notion."""

    pass


class NotionClient:
    """Async Notion client for the knowledge base and query log databases."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        knowledge_base_id: Optional[str] = None,
        log_db_id: Optional[str] = None,
        client: Optional[AsyncClient] = None,
    ):
        settings = get_settings()
        self.knowledge_base_id = knowledge_base_id or settings.notion_knowledge_base_id
        self.log_db_id = log_db_id if log_db_id is not None else settings.notion_log_db_id
        self.page_size = settings.notion_page_size
        self.client = client or AsyncClient(
            auth=api_key or settings.notion_api_key,
            notion_version=settings.notion_version,
        )

    @property
    def logging_enabled(self) -> bool:
        """Query logging is active only when a log database is configured."""
        return bool(self.log_db_id)

    async def query_knowledge_page(
        self, start_cursor: Optional[str] = None
    ) -> KnowledgePage:
        """
        Fetch one page of knowledge base entries.

        Only pages with a non-empty Question title are requested.

        Args:
            start_cursor: Cursor returned by the previous page (None for the first)

        Returns:
            KnowledgePage with parsed records and continuation info

        Raises:
            SourceFetchError: If the database is not configured or Notion fails
        """
        if not self.knowledge_base_id:
            raise SourceFetchError("NOTION_KNOWLEDGE_BASE_ID not configured")

        body: Dict[str, Any] = {
            "page_size": self.page_size,
            "filter": {
                "property": QUESTION_PROPERTY,
                "title": {"is_not_empty": True},
            },
        }
        if start_cursor:
            body["start_cursor"] = start_cursor

        try:
            response = await self.client.request(
                path=f"databases/{self.knowledge_base_id}/query",
                method="POST",
                body=body,
            )
        except (HTTPResponseError, RequestTimeoutError, httpx.HTTPError) as e:
            logger.error(f"Notion API error while querying knowledge base: {e}")
            raise SourceFetchError(f"Failed to query knowledge base: {e}") from e

        results = response.get("results", [])
        logger.debug(
            f"Fetched {len(results)} knowledge pages (has_more={response.get('has_more')})"
        )

        return KnowledgePage(
            records=[parse_page(page) for page in results],
            has_more=bool(response.get("has_more")),
            next_cursor=response.get("next_cursor"),
        )

    async def create_log_entry(
        self, question: str, found_answer: bool, description: str
    ) -> None:
        """
        Append one query to the log database.

        Args:
            question: Original user question
            found_answer: Whether an answer was found
            description: What matched (free text)
        """
        await self.client.pages.create(
            parent={"database_id": self.log_db_id},
            properties={
                "Query": {"title": [{"text": {"content": question}}]},
                "Found Answer": {"checkbox": found_answer},
                "Matched Keywords": {
                    "rich_text": [{"text": {"content": description}}]
                },
            },
        )
