"""
FastAPI application factory.

Creates and configures the main application instance.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from niklaus import __version__
from niklaus.api.middleware import ErrorHandlerMiddleware, LoggingMiddleware
from niklaus.api.middleware.error_handler import setup_exception_handlers
from niklaus.api.routes import (
    auth_router,
    backoffice_router,
    cart_router,
    catalog_router,
    entities_router,
    health_router,
    orders_router,
    session_router,
    support_router,
)
from niklaus.config import configure_logging, get_logger, get_settings

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan handler.

    Builds the shared backend on startup and closes every client session on
    shutdown.
    """
    from niklaus.application.services import get_backend, get_session_registry

    configure_logging()
    settings = get_settings()

    logger.info(
        "application_starting",
        host=settings.api.host,
        port=settings.api.port,
        debug=settings.api.debug,
        inference_provider=settings.inference.provider,
    )

    try:
        get_backend()
        logger.info("backend_ready")

    except Exception as e:
        logger.error("backend_init_failed", error=str(e))
        raise

    logger.info("application_started")

    yield

    logger.info("application_stopping")

    try:
        await get_session_registry().close_all()
        logger.info("sessions_closed")

    except Exception as e:
        logger.warning("sessions_close_failed", error=str(e))

    logger.info("application_stopped")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title="Niklaus B2B API",
        description="B2B ordering sessions: entities, live catalog, cart, orders and support chat",
        version=__version__,
        docs_url="/docs" if settings.api.debug else None,
        redoc_url="/redoc" if settings.api.debug else None,
        lifespan=lifespan,
    )

    # Add middleware
    app.add_middleware(ErrorHandlerMiddleware)
    app.add_middleware(LoggingMiddleware)

    # CORS
    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
            expose_headers=["X-Request-ID"],
        )

    # Setup exception handlers
    setup_exception_handlers(app)

    # Register routers
    app.include_router(health_router)
    app.include_router(session_router)
    app.include_router(auth_router)
    app.include_router(entities_router)
    app.include_router(catalog_router)
    app.include_router(cart_router)
    app.include_router(orders_router)
    app.include_router(support_router)
    app.include_router(backoffice_router)

    @app.get("/")
    async def root() -> dict[str, str]:
        """Return API info."""
        return {
            "name": settings.app_name,
            "version": __version__,
            "docs": "/docs",
        }

    # Root health endpoint (for k8s/docker health checks)
    @app.get("/health")
    async def root_health() -> dict[str, str]:
        """Simple health check at root level."""
        return {
            "status": "healthy",
            "version": __version__,
        }

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "niklaus.api.main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.api.debug,
    )
