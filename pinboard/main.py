"""FastAPI application factory and configuration."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from pinboard import __version__
from pinboard.api.v1.router import api_router
from pinboard.config import settings
from pinboard.core.exceptions import register_exception_handlers
from pinboard.core.logging import setup_logging
from pinboard.core.middleware import RequestLoggingMiddleware
from pinboard.database import engine
from pinboard.models import Base
from pinboard.utils.uploads import UPLOADS_URL_PREFIX

setup_logging(
    service_name="pinboard",
    environment=settings.environment,
    log_level=settings.log_level,
    json_output=settings.log_json,
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Handles startup and shutdown events.
    """
    # Startup
    logger.info(
        "Starting %s v%s",
        settings.app_name,
        __version__,
        extra={"environment": settings.environment, "debug": settings.debug},
    )
    if settings.create_tables_on_startup:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    yield
    # Shutdown
    logger.info("Shutting down")
    await engine.dispose()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        FastAPI: Configured application instance.
    """
    app = FastAPI(
        title=settings.app_name,
        description="A REST API for sharing images and organizing them into collections.",
        version=__version__,
        docs_url="/docs" if not settings.is_production else None,
        redoc_url="/redoc" if not settings.is_production else None,
        openapi_url="/openapi.json" if not settings.is_production else None,
        lifespan=lifespan,
    )

    # Register exception handlers
    register_exception_handlers(app)

    # Add middleware
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.debug else settings.cors_origins,
        allow_credentials=not settings.debug,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include API routes
    app.include_router(api_router, prefix="/api")

    # Uploaded files; the directory may not exist until the first upload
    Path(settings.upload_dir).mkdir(parents=True, exist_ok=True)
    app.mount(
        UPLOADS_URL_PREFIX,
        StaticFiles(directory=settings.upload_dir, check_dir=False),
        name="uploads",
    )

    # Health check endpoint (outside the API prefix)
    @app.get("/health", tags=["System"])
    async def health_check() -> dict[str, str]:
        """Health check endpoint for container orchestration."""
        return {"status": "healthy"}

    return app


# Application instance
app = create_app()
