"""Health check endpoints for production monitoring."""

from __future__ import annotations

import time
from collections.abc import Callable

from fastapi import APIRouter, Depends, Request

from grc_reports.dependencies import get_store
from grc_reports.errors import StoreError
from grc_reports.middleware import is_shutdown_requested
from grc_reports.schemas.health import HealthResponse, ServiceHealth
from grc_reports.store import RecordStore

router = APIRouter(tags=["health"])


def _check_service(name: str, check_fn: Callable[[], None]) -> ServiceHealth:
    """Run a health check function and return a ServiceHealth result."""
    start = time.monotonic()
    try:
        check_fn()
        latency = (time.monotonic() - start) * 1000
        return ServiceHealth(
            service=name,
            status="healthy",
            latency_ms=round(latency, 2),
        )
    except (StoreError, RuntimeError) as exc:
        latency = (time.monotonic() - start) * 1000
        return ServiceHealth(
            service=name,
            status="unhealthy",
            latency_ms=round(latency, 2),
            details=str(exc)[:200],
        )


def _check_app() -> None:
    """Application self-check; fails once shutdown has begun."""
    if is_shutdown_requested():
        raise RuntimeError("shutdown in progress")


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """Basic health check: is the application running?"""
    settings = request.app.state.settings
    services = [_check_service("app", _check_app)]
    overall = "healthy" if all(s.status == "healthy" for s in services) else "degraded"

    return HealthResponse(
        status=overall,
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
        store_backend=settings.store_backend,
        services=services,
    )


@router.get("/health/ready", response_model=HealthResponse)
async def readiness_check(
    request: Request,
    store: RecordStore = Depends(get_store),
) -> HealthResponse:
    """Readiness check: can the record store serve requests?"""
    settings = request.app.state.settings
    services = [
        _check_service("app", _check_app),
        _check_service(f"store:{settings.store_backend}", store.ping),
    ]
    overall = "healthy" if all(s.status == "healthy" for s in services) else "unhealthy"

    return HealthResponse(
        status=overall,
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
        store_backend=settings.store_backend,
        services=services,
    )


@router.get("/health/live")
async def liveness_check() -> dict[str, str]:
    """Liveness probe: is the process alive?"""
    return {"status": "alive"}
