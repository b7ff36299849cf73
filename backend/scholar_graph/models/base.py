"""
Strict Base Model for API Request/Response Validation

Usage:
    # For request bodies (strictest validation)
    class BulkDeleteRequest(StrictRequest):
        filter: Optional[dict[str, Any]] = None

    # For response bodies (allows extra fields)
    class NodeResponse(StrictResponse):
        node: dict[str, Any]

Architecture:
    API Request → StrictRequest (extra="forbid") → Route Handler
    Neo4j record → StrictResponse (extra="ignore") → API Response
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class StrictRequest(BaseModel):
    """
    Base model for API request bodies with strict validation.

    Rejects any fields not explicitly declared in the model, so a typo such
    as "filters" instead of "filter" fails with 422 instead of silently
    matching every entity.
    """

    model_config = ConfigDict(
        extra="forbid",  # Reject unknown fields
        validate_default=True,
    )


class StrictResponse(BaseModel):
    """
    Base model for API response bodies.

    More lenient than StrictRequest: extra fields are ignored.
    """

    model_config = ConfigDict(
        extra="ignore",
        validate_default=True,
    )


class ErrorDetail(StrictResponse):
    """
    Standardized error response detail.

    Matches the error format from the error_handling middleware.
    """

    error: str  # Error code (e.g., "not_found")
    message: str  # Human-readable message
    error_id: str  # Correlation ID for log lookup
    details: Optional[dict] = None
    timestamp: datetime


class MessageResponse(StrictResponse):
    """Response for operations that only report what happened."""

    message: str
