"""API route modules."""

from .health import router as health_router
from .summary import router as summary_router

__all__ = ["health_router", "summary_router"]
