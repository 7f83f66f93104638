"""FastAPI application initialization and configuration."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .core.config import Settings, settings as default_settings
from .core.database import Database
from .core.exceptions import register_exception_handlers
from .core.middleware import setup_middleware
from .core.observability import (
    SERVICE_VERSION,
    instrument_fastapi,
    instrument_sqlalchemy,
    setup_metrics,
    setup_structured_logging,
    setup_tracing,
)
from .routers import (
    auth_router,
    business_router,
    guide_review_router,
    health_router,
    metrics_router,
    notification_router,
    tour_request_router,
    tour_review_router,
    tour_router,
)
from .services.business_service import BusinessService

# Configure structured logging
setup_structured_logging(default_settings)

# Configure traditional logging for library and module loggers
logging.basicConfig(
    level=getattr(logging, default_settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Sets up tracing and metrics, prepares the schema and sample data when
    configured to, and releases the connection pool on shutdown.
    """
    settings: Settings = app.state.settings
    database: Database = app.state.database

    logger.info("Starting Tour Guide API")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Debug mode: {settings.debug}")

    try:
        setup_tracing(settings)
        setup_metrics(settings)
        instrument_sqlalchemy(database.engine)
        logger.info("Observability setup completed")

        if settings.create_tables_on_startup:
            await database.create_all()
            logger.info("Database tables ensured")

        if settings.seed_sample_data:
            async with database.session() as session:
                inserted = await BusinessService(session).seed_sample_businesses()
            if inserted:
                logger.info(f"Seeded {inserted} sample businesses")
    except Exception as e:
        logger.error(f"Failed to initialize application: {e}")
        raise

    logger.info("Application startup complete")

    yield

    logger.info("Shutting down Tour Guide API")
    await database.dispose()
    logger.info("Application shutdown complete")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Settings to build the application with; defaults to the
            environment-derived settings

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    settings = settings or default_settings

    app = FastAPI(
        title="Tour Guide API",
        description="Marketplace for guided tours: tours, booking requests, reviews, notifications and a local business directory",
        version=SERVICE_VERSION,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )
    app.state.settings = settings
    app.state.database = Database(settings.database_url)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "traceparent", "tracestate"],
    )

    setup_middleware(app, enable_logging=True)

    instrument_fastapi(app)

    register_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(metrics_router)
    app.include_router(auth_router)
    app.include_router(tour_router)
    app.include_router(tour_request_router)
    app.include_router(tour_review_router)
    app.include_router(guide_review_router)
    app.include_router(notification_router)
    app.include_router(business_router)

    logger.info("FastAPI application created and configured")

    return app


# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "tourguide.main:app",
        host=default_settings.host,
        port=default_settings.port,
        reload=default_settings.debug,
        log_level=default_settings.log_level.lower(),
        access_log=True,
    )
