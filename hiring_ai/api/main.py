"""
FastAPI application with assembled routers.

Initializes the FastAPI app around an explicitly constructed container
and configures the uvicorn server.

Dependencies: fastapi, hiring_ai.api.routers, hiring_ai.container, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hiring_ai import __version__
from hiring_ai.container import Container
from hiring_ai.observability.logger import configure_logging
from hiring_ai.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

from .routers import (
    health_router,
    jobs_router,
    processing_router,
    search_router,
    stats_router,
)

# GOOGLE_API_KEY is read from the environment by the gateway
load_dotenv()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Starts the container (storage, worker pool) and drains it on shutdown.
    """
    container: Container = app.state.container

    # Startup
    configure_logging(container.settings.log_level)
    await container.start()
    logger.info(f"{__name__}:lifespan - Worker pool started")

    yield

    # Shutdown
    await container.shutdown(drain=True)
    logger.info(f"{__name__}:lifespan - Container shut down")


def create_app(container: Container | None = None) -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Args:
        container: Prebuilt object graph (built from environment settings if None)

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    container = container or Container()

    app = FastAPI(
        title="Hiring AI Processing API",
        description="Resume processing, background jobs, and semantic candidate search",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add observability middleware
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    # Register all routers with /api/v1 prefix for versioning
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(jobs_router, prefix="/api/v1")
    app.include_router(processing_router, prefix="/api/v1")
    app.include_router(search_router, prefix="/api/v1")
    app.include_router(stats_router, prefix="/api/v1")

    return app


if __name__ == "__main__":
    # The factory builds the container in the server process, not at import
    uvicorn.run(
        "hiring_ai.api.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=8000,
    )
