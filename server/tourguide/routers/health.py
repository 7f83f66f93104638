"""Health, readiness and service info endpoints."""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import check_connection, get_db
from ..core.observability import SERVICE_NAME, SERVICE_VERSION
from ..schemas.health import DatabaseStatus, HealthResponse, HealthStatus

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])

DB_DEPENDENCY = Depends(get_db)


@router.get("/health", response_model=HealthResponse)
async def health_check(db: AsyncSession = DB_DEPENDENCY) -> JSONResponse:
    """
    Liveness probe.

    Always answers 200 while the process is up; the ``database`` field
    reports whether a trivial query succeeded.
    """
    connected = await check_connection(db)
    response_data = HealthResponse(
        status=HealthStatus.OK,
        message="Tour Guide API is running",
        database=DatabaseStatus.CONNECTED if connected else DatabaseStatus.DISCONNECTED,
        timestamp=datetime.now(timezone.utc),
        version=SERVICE_VERSION,
    )

    logger.debug(
        "Health check requested",
        extra={
            "database": response_data.database.value,
            "timestamp": response_data.timestamp.isoformat()
        }
    )

    return JSONResponse(status_code=200, content=response_data.model_dump(mode="json"))


@router.get("/ready")
async def readiness_check(db: AsyncSession = DB_DEPENDENCY) -> JSONResponse:
    """Readiness probe: 503 until the database answers."""
    connected = await check_connection(db)
    if not connected:
        logger.warning("Readiness check failed - database unreachable")

    return JSONResponse(
        status_code=200 if connected else 503,
        content={
            "status": "ready" if connected else "not_ready",
            "service": SERVICE_NAME,
            "checks": {"database": "ok" if connected else "unavailable"},
        },
    )


@router.get("/info")
async def service_info(request: Request) -> dict:
    """Service name, version, environment and entry points."""
    settings = request.app.state.settings
    return {
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "description": "Tour guide marketplace API: tours, booking requests, reviews, notifications and a business directory",
        "environment": settings.environment,
        "debug": settings.debug,
        "endpoints": {
            "health": "/health",
            "readiness": "/ready",
            "metrics": "/metrics",
            "auth": "/api/auth",
            "tours": "/api/tours",
            "tour_requests": "/api/tour-requests",
            "tour_reviews": "/api/tour-reviews",
            "guide_reviews": "/api/guide-reviews",
            "notifications": "/api/notifications",
            "businesses": "/api/businesses",
            "docs": "/docs" if settings.debug else None,
        },
    }
