"""
FastAPI application factory.

Creates and configures the main application instance.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from folio.api.middleware import ErrorHandlerMiddleware, LoggingMiddleware
from folio.api.middleware.error_handler import setup_exception_handlers
from folio.api.routes import analytics_router, health_router, search_router
from folio.config import configure_logging, get_logger, get_settings

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan handler.

    Initializes resources on startup and cleans up on shutdown.
    """
    settings = get_settings()
    configure_logging()

    logger.info(
        "application_starting",
        host=settings.api.host,
        port=settings.api.port,
        debug=settings.api.debug,
    )

    # Initialize database
    try:
        from folio.infrastructure.storage.sqlite import get_connection_pool
        from folio.infrastructure.storage.sqlite.migrations import initialize_database

        applied = await initialize_database()
        logger.info("database_initialized", applied=[m.version for m in applied])

        await get_connection_pool()
        logger.info("connection_pool_ready")

    except Exception as e:
        logger.error("database_init_failed", error=str(e))
        raise

    # Periodic cleanup of expired rate limit counters
    from folio.application.services import get_rate_limit_sweeper, get_task_group

    sweeper = get_rate_limit_sweeper()
    sweeper.start()

    logger.info("application_started")

    yield

    # Shutdown
    logger.info("application_stopping")

    # Let pending analytics writes finish before the pool goes away
    cancelled = await get_task_group().drain(timeout=settings.analytics.drain_timeout_seconds)
    logger.info("analytics_drained", cancelled=cancelled)

    await sweeper.stop()

    try:
        from folio.infrastructure.storage.sqlite import close_connection_pool

        await close_connection_pool()

    except Exception as e:
        logger.warning("connection_pool_close_failed", error=str(e))

    logger.info("application_stopped")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title="Folio Search API",
        description="Relevance-ranked search over portfolio projects, blogs, images and tags",
        version=settings.app_version,
        docs_url="/docs" if settings.api.debug else None,
        redoc_url="/redoc" if settings.api.debug else None,
        lifespan=lifespan,
    )

    # Add middleware
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(ErrorHandlerMiddleware)

    # CORS
    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
            expose_headers=[
                "Retry-After",
                "X-RateLimit-Limit",
                "X-RateLimit-Remaining",
                "X-RateLimit-Reset",
                "X-Request-ID",
            ],
        )

    # Setup exception handlers
    setup_exception_handlers(app)

    # Register routers
    app.include_router(health_router)
    app.include_router(search_router)
    app.include_router(analytics_router)

    # Root health endpoint (for container health checks)
    @app.get("/health")
    async def root_health() -> dict[str, str]:
        """Simple health check at root level."""
        return {
            "status": "healthy",
            "version": settings.app_version,
        }

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "folio.api.main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.api.debug,
    )
