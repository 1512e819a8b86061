"""
FastAPI application setup for the dictionary backend.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
import logging
from datetime import datetime, timezone
from contextlib import asynccontextmanager

from awadiko.config import get_settings
from awadiko.core.logging import configure_logging
from awadiko.core.error_handlers import setup_error_handlers, error_handler
from awadiko.core.cache_client import get_cache_client, close_cache_client
from awadiko.core.db import SessionLocal
from awadiko.middleware import RequestContextMiddleware
from awadiko.api import (
    auth_router,
    admin_concepts_router,
    admin_domains_router,
    admin_terms_router,
    dictionary_router,
    review_router,
    neo_router,
    language_router,
)

# Get application settings
settings = get_settings()

configure_logging(
    level=settings.log_level.value,
    json_output=settings.log_json,
    fmt=settings.log_format,
    log_file=settings.log_file,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan: warm the cache connection on startup and
    release it on shutdown.
    """
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    if get_cache_client() is None:
        logger.info("Redis cache disabled; dictionary reads are served from the database")

    try:
        yield
    finally:
        logger.info("Shutting down application")
        close_cache_client()
        logger.info("Application shutdown complete")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        FastAPI: Configured application instance
    """
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        **settings.get_cors_config()
    )
    app.add_middleware(RequestContextMiddleware)

    setup_error_handlers(app)

    app.include_router(auth_router)
    app.include_router(admin_concepts_router)
    app.include_router(admin_domains_router)
    app.include_router(admin_terms_router)
    app.include_router(dictionary_router)
    app.include_router(review_router)
    app.include_router(neo_router)
    app.include_router(language_router)

    @app.get("/")
    async def root():
        """Root endpoint for basic health check."""
        return {
            "message": f"Welcome to {settings.app_name}",
            "version": settings.app_version,
            "status": "running"
        }

    @app.get("/health")
    def health_check():
        """Database and cache status."""
        details = {"database": {"status": "unknown"}, "cache": {"status": "disabled"}}

        session = SessionLocal()
        try:
            session.execute(text("SELECT 1"))
            details["database"] = {"status": "healthy"}
        except SQLAlchemyError as e:
            logger.error(f"Database health check failed: {e}")
            details["database"] = {"status": "unhealthy", "error": str(e)}
        finally:
            session.close()

        cache = get_cache_client()
        if cache is not None:
            details["cache"] = {"status": "healthy" if cache.ping() else "degraded"}

        return {
            "status": "healthy" if details["database"]["status"] == "healthy" else "unhealthy",
            "version": settings.app_version,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "details": details,
            "error_statistics": error_handler.get_error_statistics(),
        }

    return app


# Create application instance
app = create_app()
