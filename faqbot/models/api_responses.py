"""
API Response Models

Pydantic models for consistent API request and response structures.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Optional


class QueryRequest(BaseModel):
    """Request model for the query endpoint."""

    question: Optional[str] = Field(None, description="User's question")


class ComposedAnswer(BaseModel):
    """
    Final answer payload returned to the caller.

    Serialized with camelCase keys (imageUrl, pdfUrl, linkUrl, linkText,
    aiAssisted). Attachment fields come from at most one knowledge entry.
    """

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    answer: str = Field(..., description="Answer text shown to the user")
    image_url: Optional[str] = Field(None, description="Image attachment URL")
    pdf_url: Optional[str] = Field(None, description="PDF attachment URL")
    link_url: Optional[str] = Field(None, description="External link URL")
    link_text: Optional[str] = Field(None, description="Label for the external link")
    ai_assisted: bool = Field(
        True, description="True whenever the classifier was consulted"
    )


class ErrorResponse(BaseModel):
    """Error body for 4xx/5xx responses."""

    error: str


class KBStatusResponse(BaseModel):
    """Knowledge cache status."""

    entries: int = Field(..., description="Number of cached entries")
    cached: bool = Field(..., description="Whether a snapshot is currently held")
    age_seconds: Optional[float] = Field(
        None, description="Seconds since the snapshot was captured"
    )
    ttl_seconds: float = Field(..., description="Configured cache TTL")
    fresh: bool = Field(..., description="Whether the snapshot is within TTL")
