"""Policy Admin Backend - Main Application Module."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from beartype import beartype
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import __version__
from .api.response_patterns import (
    http_exception_handler,
    validation_exception_handler,
)
from .api.v1 import router as v1_router
from .core.config import get_settings
from .core.database import get_database
from .core.logging_utils import configure_logging
from .schemas.common import APIInfo
from .services.seed_service import seed_if_allowed

logger = logging.getLogger(__name__)

APP_NAME = "Policy Admin Backend"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Manage application lifecycle - startup and shutdown."""
    # Startup
    settings = get_settings()
    configure_logging(level=settings.log_level)
    logger.info("Starting %s in %s mode", APP_NAME, settings.api_env)

    db = get_database()
    await db.connect()
    logger.info("Database engine initialized")

    if db.config.is_sqlite:
        await db.create_all()

    if settings.seed_on_startup:
        await seed_if_allowed(db, settings)

    yield

    # Shutdown
    logger.info("Shutting down %s", APP_NAME)
    await db.disconnect()
    logger.info("Database connections closed")


@beartype
def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        FastAPI: Configured application instance
    """
    settings = get_settings()

    app = FastAPI(
        title=APP_NAME,
        description="Search and inspect insurance policy terms",
        version=__version__,
        docs_url="/docs" if not settings.is_production else None,
        redoc_url="/redoc" if not settings.is_production else None,
        openapi_url="/openapi.json" if not settings.is_production else None,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api_cors_origins,
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)

    app.include_router(v1_router)

    # Root endpoint
    @app.get("/")
    async def root() -> APIInfo:
        """Root endpoint returning API information."""
        return APIInfo(
            name=settings.app_name,
            version=__version__,
            status="operational",
            environment=settings.api_env,
        )

    return app


# Create the application instance
app = create_app()


@beartype
def main() -> None:
    """Run the main application entry point."""
    settings = get_settings()

    uvicorn.run(
        "policy_admin.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.is_development,
        log_level="info" if not settings.is_production else "error",
    )


if __name__ == "__main__":
    main()
