"""API Pydantic models."""

from .responses import ErrorCodes, ErrorResponse, HealthResponse, SummaryResponse

__all__ = ["HealthResponse", "SummaryResponse", "ErrorResponse", "ErrorCodes"]
