"""
Knowledge Store Service

Keeps an in-memory snapshot of the knowledge base and refreshes it from the
source once the snapshot is older than the configured TTL.

The snapshot is shared by all requests without locking. Two concurrent
refreshes may both hit the source; the last one to finish wins.
"""

import logging
import time
from typing import (
    Any,
    AsyncIterator,
    Awaitable,
    Callable,
    Dict,
    List,
    Optional,
)

from faqbot.config import get_settings
from faqbot.integrations.notion.client import SourceFetchError
from faqbot.models.knowledge import KnowledgePage, KnowledgeSnapshot, QAEntry

logger = logging.getLogger(__name__)

PageFetcher = Callable[[Optional[str]], Awaitable[KnowledgePage]]


class PageSequence:
    """
    Lazy, restartable sequence of pages from a paginated source.

    Each ``async for`` starts again from the first page and stops after the
    page whose ``has_more`` flag is false.
    """

    def __init__(self, fetch_page: PageFetcher):
        """
        Args:
            fetch_page: Coroutine function taking a start cursor (None for the
                first page) and returning a KnowledgePage
        """
        self.fetch_page = fetch_page

    async def __aiter__(self) -> AsyncIterator[KnowledgePage]:
        cursor: Optional[str] = None
        while True:
            page = await self.fetch_page(cursor)
            yield page
            if not page.has_more:
                return
            if not page.next_cursor:
                logger.warning("Source reported more pages without a cursor, stopping")
                return
            cursor = page.next_cursor


def record_to_entry(record: Dict[str, Any]) -> Optional[QAEntry]:
    """Build a QAEntry from a source record, or None if the question is blank."""
    question = (record.get("question") or "").strip()
    if not question:
        return None
    return QAEntry(
        question=question,
        answer=record.get("answer") or "",
        image_url=record.get("image_url"),
        pdf_url=record.get("pdf_url"),
        link_url=record.get("link_url"),
        link_text=record.get("link_text"),
    )


class KnowledgeStore:
    """
    TTL cache over the knowledge source with a stale-on-error policy.

    - Within TTL: the cached snapshot is returned, no source call is made
    - After TTL: one full refresh is attempted per ``get()``
    - Refresh failed or returned nothing: the previous snapshot is served
      (its capture time is left untouched); an empty snapshot is returned
      only if nothing was ever loaded
    """

    def __init__(
        self,
        fetch_page: PageFetcher,
        ttl_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Args:
            fetch_page: Page fetcher for the knowledge source
            ttl_seconds: Snapshot lifetime (defaults to CACHE_TTL_SECONDS)
            clock: Monotonic clock returning seconds
        """
        self.pages = PageSequence(fetch_page)
        self.ttl_seconds = (
            ttl_seconds if ttl_seconds is not None else get_settings().cache_ttl_seconds
        )
        self._clock = clock
        self._snapshot: Optional[KnowledgeSnapshot] = None

    @property
    def snapshot(self) -> Optional[KnowledgeSnapshot]:
        return self._snapshot

    def is_fresh(self) -> bool:
        """Check whether the cached snapshot is still within TTL."""
        if self._snapshot is None or self._snapshot.captured_at is None:
            return False
        return self._clock() - self._snapshot.captured_at < self.ttl_seconds

    async def get(self) -> KnowledgeSnapshot:
        """
        Return the current knowledge snapshot, refreshing it when expired.

        Never raises for source failures.
        """
        if self.is_fresh():
            return self._snapshot
        return await self.refresh()

    async def refresh(self) -> KnowledgeSnapshot:
        """Fetch every page from the source and replace the snapshot on success."""
        entries: List[QAEntry] = []
        try:
            entries = await self._fetch_all()
        except SourceFetchError as e:
            logger.error(f"Knowledge base refresh failed: {e}")
            entries = []
        except Exception as e:
            logger.error(f"Unexpected error refreshing knowledge base: {e}", exc_info=True)
            entries = []

        if entries:
            snapshot = KnowledgeSnapshot(entries=tuple(entries), captured_at=self._clock())
            self._snapshot = snapshot
            logger.info(f"Loaded {len(snapshot)} Q&A entries from the knowledge base")
            return snapshot

        if self._snapshot is not None:
            logger.warning(
                f"Refresh returned no entries, serving previous snapshot "
                f"({len(self._snapshot)} entries)"
            )
            return self._snapshot

        logger.warning("Knowledge base is empty and no previous snapshot exists")
        return KnowledgeSnapshot()

    def status(self) -> Dict[str, Any]:
        """Describe the cache state."""
        snapshot = self._snapshot
        age = None
        if snapshot is not None and snapshot.captured_at is not None:
            age = self._clock() - snapshot.captured_at
        return {
            "entries": len(snapshot) if snapshot is not None else 0,
            "cached": snapshot is not None,
            "age_seconds": age,
            "ttl_seconds": self.ttl_seconds,
            "fresh": self.is_fresh(),
        }

    async def _fetch_all(self) -> List[QAEntry]:
        entries: List[QAEntry] = []
        skipped = 0
        async for page in self.pages:
            for record in page.records:
                entry = record_to_entry(record)
                if entry is None:
                    skipped += 1
                    continue
                entries.append(entry)
        if skipped:
            logger.debug(f"Skipped {skipped} records with an empty question")
        return entries
