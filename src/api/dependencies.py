"""FastAPI dependencies for authentication and the active orchestrator."""

import secrets

from fastapi import Header, HTTPException, status

from api.models.responses import ErrorCodes
from core.config import DAYPLANNER_API_KEY
from services.orchestrator import AutomationOrchestrator, get_active


async def verify_api_key(x_api_key: str = Header(..., alias="X-API-Key")) -> str:
    """
    Verify API key from X-API-Key header.

    Raises:
        HTTPException: 401 if key is missing or invalid
    """
    if not DAYPLANNER_API_KEY:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "API key not configured on server",
                "code": ErrorCodes.INTERNAL_ERROR,
                "details": [],
            },
        )

    # Constant-time comparison
    if not secrets.compare_digest(x_api_key, DAYPLANNER_API_KEY):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={
                "error": "Invalid or missing API key",
                "code": ErrorCodes.UNAUTHORIZED,
                "details": [],
            },
        )

    return x_api_key


async def require_orchestrator() -> AutomationOrchestrator:
    """
    Return the active orchestrator.

    Raises:
        HTTPException: 503 if the automation service is not active
    """
    orchestrator = get_active()
    if orchestrator is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={
                "error": "Automation service is not active",
                "code": ErrorCodes.SERVICE_UNAVAILABLE,
                "details": [],
            },
        )
    return orchestrator
