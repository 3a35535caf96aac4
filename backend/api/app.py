"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
import time
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from shared.config import get_settings
from modules.catalog.routes import router as catalog_router
from modules.ledger.routes import router as ledger_router
from modules.media.routes import router as media_router

from .dependencies import get_container
from .errors import register_exception_handlers
from .routes import auth, health

logger = logging.getLogger(__name__)

# Stream URLs carry the session token in the query string
_UNLOGGED_PREFIXES = ("/api/stream",)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs startup and shutdown logic.
    """
    settings = get_settings()
    logger.info("Starting %s on %s:%s", settings.app_name, settings.host, settings.port)
    if not settings.email_configured:
        logger.warning("Email is not configured; signup codes will be logged instead of sent")
    if not settings.storage_configured:
        logger.warning("Object storage is not configured; media endpoints will fail")
    yield
    logger.info("Shutting down %s", settings.app_name)
    await get_container().aclose()


async def log_requests(request: Request, call_next):
    """Log method, path, status and duration. Query strings are never logged."""
    path = request.url.path
    if path.startswith(_UNLOGGED_PREFIXES):
        return await call_next(request)

    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info("%s %s %d %.1fms", request.method, path, response.status_code, elapsed_ms)
    return response


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Course and notes marketplace with authenticated media delivery",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
        expose_headers=["Content-Range", "Accept-Ranges", "Content-Length"],
    )
    app.middleware("http")(log_requests)

    register_exception_handlers(app)

    # Register routes
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
    app.include_router(media_router, prefix="/api", tags=["media"])
    app.include_router(ledger_router, prefix="/api", tags=["ledger"])
    app.include_router(catalog_router, prefix="/api", tags=["catalog"])

    return app


# Application instance for uvicorn
app = create_app()
