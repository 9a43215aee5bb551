"""Schemas for health probes."""

from __future__ import annotations

from pydantic import BaseModel


class ServiceHealth(BaseModel):
    """Result of probing one dependency."""

    service: str
    status: str
    latency_ms: float | None = None
    details: str | None = None


class HealthResponse(BaseModel):
    """Aggregate health of the app and its record store."""

    status: str
    app_name: str
    version: str
    environment: str
    store_backend: str
    services: list[ServiceHealth]
