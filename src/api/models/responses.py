"""Pydantic response models for API endpoints."""

from pydantic import BaseModel

from models.events import SummarySource


class HealthResponse(BaseModel):
    """Health check response."""

    status: str  # "healthy" or "unhealthy"
    version: str
    service_active: bool
    ai_configured: bool
    timestamp: str  # ISO 8601 UTC
    error: str | None = None


class SummaryResponse(BaseModel):
    """Result of one automation run."""

    text: str
    source: SummarySource
    generated_at: str  # ISO 8601 UTC


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str
    code: str
    details: list[str] = []


class ErrorCodes:
    """Error code constants."""

    UNAUTHORIZED = "UNAUTHORIZED"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"
    INTERNAL_ERROR = "INTERNAL_ERROR"
