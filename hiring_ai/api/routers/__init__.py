"""API routers."""

from .health import router as health_router
from .jobs import router as jobs_router
from .processing import router as processing_router
from .search import router as search_router
from .stats import router as stats_router

__all__ = [
    "health_router",
    "jobs_router",
    "processing_router",
    "search_router",
    "stats_router",
]
