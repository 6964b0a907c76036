"""
Application factory for the FastAPI backend.

This module centralizes app creation so tests and scripts can
instantiate an application with custom settings when needed.
"""

import asyncio
from contextlib import asynccontextmanager

from fastapi import FastAPI

from api.router import api_router
from core.config import Settings, settings as default_settings
from core.errors import register_exception_handlers
from core.middleware import configure_middleware
from db.pool import database_pool
from services.rephrase_service import RephraseEngine
from services.rephrasers.registry import build_remote_rephraser
from utils.logging import get_logger, setup_logging


def build_rephrase_engine(settings: Settings) -> RephraseEngine:
    return RephraseEngine(
        build_remote_rephraser(settings),
        timeout_seconds=settings.rephrase_timeout_seconds,
        max_concurrency=settings.rephrase_max_concurrency,
        max_attempts=settings.rephrase_retry_max_attempts,
        backoff_base=settings.rephrase_retry_backoff_base,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan to initialize and tear down shared resources."""
    settings: Settings = app.state.settings
    setup_logging(settings)
    logger = get_logger("app", component="application")

    if getattr(app.state, "rephrase_engine", None) is None:
        app.state.rephrase_engine = build_rephrase_engine(settings)

    try:
        await asyncio.wait_for(database_pool.setup(settings), timeout=settings.database_connect_timeout)
        logger.info("Database connection established successfully")
    except asyncio.TimeoutError:
        logger.warning("Database connection timed out during startup - continuing without result storage")
    except Exception as e:
        logger.warning(f"Database connection failed during startup: {e} - continuing without result storage")

    logger.info(
        "App starting",
        rephrase_provider=app.state.rephrase_engine.provider,
        rephrase_timeout_seconds=settings.rephrase_timeout_seconds,
        scan_max_concurrency=settings.scan_max_concurrency,
        database_available=database_pool.is_available(),
        debug_mode=settings.debug,
    )

    yield

    await database_pool.close()
    logger.info("App shutdown complete")


def create_app(settings: Settings | None = None, rephrase_engine: RephraseEngine | None = None) -> FastAPI:
    """Create and configure the FastAPI application instance."""
    settings = settings or default_settings

    app = FastAPI(
        title=settings.api_title,
        description=settings.api_description,
        version=settings.api_version,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_tags=[
            {"name": "default", "description": "General API information and root endpoints"},
            {"name": "health", "description": "Health check endpoints"},
            {"name": "analysis", "description": "Sentiment scoring, classification, rephrasing and page scans"},
            {"name": "analysis-results", "description": "Stored results of flagged and rephrased content"},
        ],
    )
    app.state.settings = settings
    # An injected engine (tests, embedding) takes precedence over the configured one
    app.state.rephrase_engine = rephrase_engine

    configure_middleware(app, settings=settings)
    register_exception_handlers(app, debug=settings.debug)

    @app.get("/", tags=["default"])
    async def root():
        return {
            "message": settings.api_title,
            "version": settings.api_version,
            "docs": "/docs" if settings.debug else "Documentation disabled in production",
            "health": f"{settings.api_prefix}/health",
        }

    app.include_router(api_router, prefix=settings.api_prefix)

    return app
