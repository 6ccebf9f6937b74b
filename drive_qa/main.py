"""
FastAPI application entry point.

Initializes FastAPI app, registers routers, adds middleware, and configures lifespan.

Dependencies: fastapi, drive_qa.api, drive_qa.observability, drive_qa.configs
System role: Application initialization and configuration
"""

import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from drive_qa import __version__
from drive_qa.api import api_router
from drive_qa.api.deps import ServiceContainer
from drive_qa.configs import Settings, get_settings
from drive_qa.observability.logger import configure_logging
from drive_qa.observability.middleware import (
    CorrelationMiddleware,
    RequestLoggingMiddleware,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Configures logging on startup. Services are created lazily by the
    container on first use, so startup does not contact any backend.
    """
    # Startup
    configure_logging(app.state.services.settings.log_level)
    logger.info(f"{__name__}:lifespan - Application startup: logging configured")

    yield

    # Shutdown
    logger.info(f"{__name__}:lifespan - Application shutdown")


def create_app(
    settings: Settings | None = None,
    services: ServiceContainer | None = None,
) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        settings: Application settings (loaded from the environment when None)
        services: Pre-built service container (built from settings when None)

    Returns:
        FastAPI: Configured application instance
    """
    # Backend SDKs read credentials such as GOOGLE_API_KEY from os.environ
    load_dotenv()
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Question answering over cloud drive documents",
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.services = services or ServiceContainer(settings)

    # Add observability middleware (added first = last to execute)
    app.add_middleware(CorrelationMiddleware)
    app.add_middleware(RequestLoggingMiddleware)

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register API routes
    app.include_router(api_router, prefix="/api/v1")

    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "drive_qa.main:create_app",
        factory=True,
        host="localhost",
        port=8082,
        reload=True,
    )
