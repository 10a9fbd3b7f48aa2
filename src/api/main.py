"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from api.models.responses import ErrorCodes, ErrorResponse
from api.routes import health_router, summary_router
from core.config import API_DEBUG, API_VERSION, LOG_FILE, LOG_LEVEL
from core.logger import setup_logger
from services.bootstrap import build_orchestrator
from services.orchestrator import activate, deactivate


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Activate the automation service for the lifetime of the app."""
    setup_logger(level=LOG_LEVEL, log_file=LOG_FILE or None)

    orchestrator = build_orchestrator()
    activate(orchestrator)

    yield

    deactivate(orchestrator)


app = FastAPI(
    title="Calendar Day Planner API",
    description="Runs the daily calendar automation and returns today's summary",
    version=API_VERSION,
    debug=API_DEBUG,
    lifespan=lifespan,
)

# CORS middleware (for development)
if API_DEBUG:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions with standard error format."""
    logger.opt(exception=exc).error(f"Unhandled error on {request.url.path}")
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            error="Internal server error",
            code=ErrorCodes.INTERNAL_ERROR,
            details=[],
        ).model_dump(),
    )


app.include_router(health_router)
app.include_router(summary_router)


# Entry point for uvicorn
if __name__ == "__main__":
    import uvicorn

    from core.config import API_HOST, API_PORT

    uvicorn.run(
        "api.main:app",
        host=API_HOST,
        port=API_PORT,
        reload=API_DEBUG,
    )
