"""
Health check endpoint.
"""

from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, Response, status
from loguru import logger
from pydantic import BaseModel, ConfigDict
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.db.session import get_db

router = APIRouter()


class HealthStatus(BaseModel):
    """Health status model."""

    model_config = ConfigDict(
        json_schema_extra={"example": {"status": "ok", "version": "0.1.0", "environment": "development"}}
    )

    status: str
    version: str
    environment: str


class ComponentStatus(BaseModel):
    """Component health status model."""

    model_config = ConfigDict(
        json_schema_extra={"example": {"name": "database", "status": "healthy", "details": {"dialect": "postgresql"}}}
    )

    name: str
    status: str
    details: Optional[Dict] = None


class DetailedHealthStatus(HealthStatus):
    """Detailed health status model with component status information."""

    components: List[ComponentStatus]


@router.get(
    "",
    response_model=HealthStatus,
    summary="Basic health check endpoint",
    description="Returns a simple status indicating the service is running, along with version and environment information.",  # noqa: E501
    responses={200: {"description": "Service is healthy"}},
)
async def health_check() -> HealthStatus:
    """
    Basic health check endpoint.

    Returns a simple status indicating the service is running, along with version
    and environment information.
    """
    return HealthStatus(
        status="ok",
        version=settings.VERSION,
        environment=settings.ENVIRONMENT,
    )


@router.get(
    "/ready",
    response_model=DetailedHealthStatus,
    summary="Readiness check endpoint",
    description="Checks the database and returns detailed status information.",
    responses={200: {"description": "Service is ready"}, 503: {"description": "Service is not ready"}},
)
async def readiness_check(
    response: Response,
    db: AsyncSession = Depends(get_db),
) -> DetailedHealthStatus:
    """
    Detailed health check for service readiness.

    Answers 503 when the database cannot be reached.
    """
    components = []
    all_healthy = True

    dialect = db.get_bind().dialect.name
    try:
        await db.execute(text("SELECT 1"))
        components.append(ComponentStatus(name="database", status="healthy", details={"dialect": dialect}))
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {str(e)}")
        components.append(ComponentStatus(name="database", status="unhealthy", details={"error": str(e)}))
        all_healthy = False

    if not all_healthy:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return DetailedHealthStatus(
        status="ok" if all_healthy else "degraded",
        version=settings.VERSION,
        environment=settings.ENVIRONMENT,
        components=components,
    )
