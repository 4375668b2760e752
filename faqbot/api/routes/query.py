"""
Query API Route

POST /api/query - Answer a question from the knowledge base.
"""

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Response
import logging

from faqbot.models.api_responses import ComposedAnswer, ErrorResponse, QueryRequest
from faqbot.services.query_pipeline import QueryPipeline, get_query_pipeline

logger = logging.getLogger(__name__)
router = APIRouter()


@router.options("/query", include_in_schema=False)
async def query_preflight():
    """Answer bare OPTIONS requests with an empty 200."""
    return Response(status_code=200)


@router.api_route(
    "/query", methods=["GET", "HEAD", "PUT", "PATCH", "DELETE"], include_in_schema=False
)
async def query_method_not_allowed():
    raise HTTPException(
        status_code=405,
        detail="Only POST requests are allowed",
        headers={"Allow": "POST, OPTIONS"},
    )


@router.post(
    "/query",
    response_model=ComposedAnswer,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def query(
    request: QueryRequest,
    background_tasks: BackgroundTasks,
    pipeline: QueryPipeline = Depends(get_query_pipeline),
):
    """
    Answer a question using the knowledge base.

    Pipeline:
    1. Load the knowledge base (cached for CACHE_TTL_SECONDS)
    2. Classify the question: exact match, related matches, or no match
    3. Compose the answer (related matches are merged into one answer)
    4. Log the query in the background

    Example request body:
    ```json
    {
        "question": "How do I reset my password?"
    }
    ```

    Example response:
    ```json
    {
        "answer": "Open Settings > Account and choose Reset password.",
        "imageUrl": "https://example.com/reset.png",
        "pdfUrl": null,
        "linkUrl": null,
        "linkText": null,
        "aiAssisted": true
    }
    ```
    """
    question = (request.question or "").strip()
    if not question:
        raise HTTPException(status_code=400, detail="Please provide a question.")

    try:
        return await pipeline.answer(question, dispatch=background_tasks.add_task)
    except Exception as e:
        logger.error(f"Error in query endpoint: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail="Internal server error",
        )
