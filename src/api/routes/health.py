"""Health check endpoint."""

from datetime import datetime, timezone

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from api.models.responses import HealthResponse
from core.config import API_VERSION, GEMINI_API_KEY
from services.orchestrator import is_active

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint for monitoring.

    Returns 200 while the automation service is active, 503 otherwise.
    """
    service_active = is_active()
    timestamp = datetime.now(timezone.utc).isoformat()
    ai_configured = bool(GEMINI_API_KEY)

    if service_active:
        return HealthResponse(
            status="healthy",
            version=API_VERSION,
            service_active=True,
            ai_configured=ai_configured,
            timestamp=timestamp,
        )
    else:
        return JSONResponse(
            status_code=503,
            content=HealthResponse(
                status="unhealthy",
                version=API_VERSION,
                service_active=False,
                ai_configured=ai_configured,
                timestamp=timestamp,
                error="Automation service is not active",
            ).model_dump(mode="json"),
        )
