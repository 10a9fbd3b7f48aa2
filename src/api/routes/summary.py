"""Daily summary endpoint."""

import asyncio
import time
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Request

from api.dependencies import require_orchestrator, verify_api_key
from api.logging import RequestLog, log_request
from api.models.responses import ErrorCodes, SummaryResponse
from services.orchestrator import AutomationOrchestrator

router = APIRouter(prefix="/v1")


def get_client_ip(request: Request) -> str:
    """Extract client IP from request, handling proxies."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


@router.post("/summary/run", response_model=SummaryResponse)
async def run_summary_endpoint(
    request: Request,
    _api_key: str = Depends(verify_api_key),
    orchestrator: AutomationOrchestrator = Depends(require_orchestrator),
):
    """
    Run the daily automation and return today's summary.

    The run executes on its own worker thread; the handle is awaited on the
    event loop so the server never blocks while it settles.
    """
    start_time = time.time()
    request_log = RequestLog(
        endpoint="/v1/summary/run",
        method="POST",
        client_ip=get_client_ip(request),
    )

    try:
        handle = orchestrator.run()
        result = await asyncio.wrap_future(handle.future)

        request_log.status_code = 200
        request_log.summary_source = result.source.value
        request_log.summary_length = len(result.text)

        return SummaryResponse(
            text=result.text,
            source=result.source,
            generated_at=datetime.now(timezone.utc).isoformat(),
        )

    except Exception as e:
        request_log.status_code = 500
        request_log.error_code = ErrorCodes.INTERNAL_ERROR
        request_log.error_message = str(e)

        raise HTTPException(
            status_code=500,
            detail={
                "error": "Internal server error",
                "code": ErrorCodes.INTERNAL_ERROR,
                "details": [],
            },
        ) from e

    finally:
        request_log.processing_time_ms = int((time.time() - start_time) * 1000)
        log_request(request_log)
