"""Health check endpoints."""

import time
from datetime import UTC, datetime

import structlog
from fastapi import APIRouter
from pydantic import BaseModel, Field

from api.config import get_settings
from scanner.crawler.catalog import load_crawler_catalog

router = APIRouter(tags=["Health"])
logger = structlog.get_logger()

# Track server start time for uptime calculation
_server_start_time = time.time()


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Health status: healthy, unhealthy")
    timestamp: str = Field(..., description="ISO 8601 timestamp")
    version: str = Field(..., description="API version")
    uptime_seconds: int = Field(..., description="Server uptime in seconds")


class DependencyCheck(BaseModel):
    """Individual dependency check result."""

    status: str = Field(..., description="Status: healthy, unhealthy")
    latency_ms: float | None = Field(None, description="Check latency in milliseconds")
    error: str | None = Field(None, description="Error message if unhealthy")


class ReadyResponse(BaseModel):
    """Readiness check response with dependency status."""

    status: str = Field(..., description="Overall status")
    timestamp: str = Field(..., description="ISO 8601 timestamp")
    version: str = Field(..., description="API version")
    uptime_seconds: int = Field(..., description="Server uptime in seconds")
    checks: dict[str, DependencyCheck] = Field(..., description="Individual dependency checks")


class ApiInfoResponse(BaseModel):
    """API information response."""

    name: str
    version: str
    env: str
    docs: str | None


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Basic health check endpoint.

    Returns healthy if the API is running. Use /ready to verify the
    crawler catalog can be loaded.
    """
    uptime = int(time.time() - _server_start_time)
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(UTC).isoformat(),
        version="0.1.0",
        uptime_seconds=uptime,
    )


@router.get("/ready", response_model=ReadyResponse)
async def readiness_check() -> ReadyResponse:
    """Readiness check: the crawler catalog must load and be non-empty."""
    checks: dict[str, DependencyCheck] = {}
    overall_status = "healthy"
    uptime = int(time.time() - _server_start_time)

    try:
        start = time.perf_counter()
        crawlers = load_crawler_catalog()
        if not crawlers:
            raise ValueError("Crawler catalog is empty")
        latency_ms = (time.perf_counter() - start) * 1000
        checks["crawler_catalog"] = DependencyCheck(
            status="healthy",
            latency_ms=round(latency_ms, 2),
            error=None,
        )
    except (OSError, ValueError) as e:
        logger.warning("Crawler catalog check failed", error=str(e))
        checks["crawler_catalog"] = DependencyCheck(
            status="unhealthy",
            latency_ms=None,
            error=str(e),
        )
        overall_status = "unhealthy"

    return ReadyResponse(
        status=overall_status,
        timestamp=datetime.now(UTC).isoformat(),
        version="0.1.0",
        uptime_seconds=uptime,
        checks=checks,
    )


@router.get("/", response_model=ApiInfoResponse)
async def root() -> ApiInfoResponse:
    """Root endpoint with API information."""
    settings = get_settings()
    return ApiInfoResponse(
        name="BotCheck API",
        version="0.1.0",
        env=settings.env,
        docs="/docs" if settings.debug else None,
    )
