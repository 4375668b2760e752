"""
Knowledge Cache API Routes

1. GET /api/kb/status - Inspect the cached knowledge snapshot
2. POST /api/kb/refresh - Reload the knowledge base now
"""

from fastapi import APIRouter, Depends
import logging

from faqbot.models.api_responses import KBStatusResponse
from faqbot.services.query_pipeline import QueryPipeline, get_query_pipeline

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/status", response_model=KBStatusResponse)
async def kb_status(pipeline: QueryPipeline = Depends(get_query_pipeline)):
    """Report entry count, age and freshness of the cached snapshot."""
    return KBStatusResponse(**pipeline.store.status())


@router.post("/refresh", response_model=KBStatusResponse)
async def kb_refresh(pipeline: QueryPipeline = Depends(get_query_pipeline)):
    """
    Reload the knowledge base regardless of TTL.

    The previous snapshot is kept if the reload fails or returns nothing.
    """
    logger.info("Manual knowledge base refresh requested")
    await pipeline.store.refresh()
    return KBStatusResponse(**pipeline.store.status())
