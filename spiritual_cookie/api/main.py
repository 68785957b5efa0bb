"""
FastAPI application factory and configuration.

This module creates the FastAPI application instance,
configures middleware, exception handlers, and lifespan events.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.staticfiles import StaticFiles
from psycopg_pool import ConnectionPool
from starlette.middleware.sessions import SessionMiddleware

from spiritual_cookie.adapters.identity import build_providers
from spiritual_cookie.adapters.repository.postgres import run_migrations
from spiritual_cookie.api.errors import install_error_handlers
from spiritual_cookie.api.routes import router as api_router
from spiritual_cookie.config.settings import get_settings
from spiritual_cookie.web import STATIC_DIR, pages_router

logger = logging.getLogger(__name__)

# OpenAPI tags for documentation grouping
tags_metadata = [
    {
        "name": "prayer",
        "description": "Submit prayer requests on behalf of the signed-in user",
    },
    {
        "name": "auth",
        "description": "Sign in and out through an external identity provider",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Manages application startup and shutdown:
    - Creates database connection pool on startup
    - Runs migrations on startup
    - Closes connection pool on shutdown
    """
    settings = get_settings()

    logger.info("Starting application...")
    logger.info("Connecting to database...")

    # Create connection pool with explicit sizing
    pool = ConnectionPool(
        conninfo=settings.database_url,
        min_size=settings.pool_min_size,
        max_size=settings.pool_max_size,
        open=True,
    )

    # Run migrations
    logger.info("Running database migrations...")
    run_migrations(pool)

    # Store pool in app state for dependency injection
    app.state.pool = pool

    logger.info("Application startup complete")

    yield

    # Shutdown
    logger.info("Shutting down application...")
    pool.close()
    logger.info("Database connection pool closed")


async def health_check(request: Request) -> dict[str, str]:
    """
    Health check endpoint with database validation.

    Returns 200 OK if application and database are healthy.
    Raises exception if database connection fails.
    """
    # Validate database connectivity
    pool = request.app.state.pool
    with pool.connection() as conn:
        conn.execute("SELECT 1")

    return {"status": "healthy"}


def create_app() -> FastAPI:
    """Build the application with middleware, routers and error handlers."""
    settings = get_settings()

    application = FastAPI(
        title="spiritual-cookie",
        description="Spiritual Cookie - Collect prayer requests from signed-in users",
        version="0.1.0",
        openapi_tags=tags_metadata,
        lifespan=lifespan,
    )

    application.add_middleware(
        SessionMiddleware,
        secret_key=settings.auth_secret,
        session_cookie="spiritual_cookie_session",
        max_age=settings.session_max_age,
        same_site="lax",
        https_only=settings.session_https_only,
    )

    application.state.providers = build_providers(settings)
    if not application.state.providers:
        logger.warning("No identity provider configured; sign-in is unavailable")

    install_error_handlers(application)

    application.add_api_route("/health", health_check, methods=["GET"])
    application.include_router(api_router, prefix="/api")
    application.include_router(pages_router)
    application.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")

    return application


app = create_app()
