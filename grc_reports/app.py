"""GRC Report Builder: FastAPI application factory."""

from __future__ import annotations

from fastapi import FastAPI

from grc_reports.config import Settings, get_settings
from grc_reports.errors import configure_exception_handlers
from grc_reports.middleware import (
    configure_cors,
    configure_rate_limiting,
    configure_request_logging,
    lifespan,
)
from grc_reports.routers import health, reports, risk_items, templates
from grc_reports.store import RecordStore, build_store


def create_app(settings: Settings | None = None, store: RecordStore | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    ``store`` overrides the backend selected by ``settings.store_backend``.
    """
    if settings is None:
        settings = get_settings()
    if store is None:
        store = build_store(settings)

    app = FastAPI(
        title=settings.app_name,
        description="Guided GRC report builder: organization data, risk matrix, export content",
        version=settings.app_version,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.store = store

    # Middleware
    configure_request_logging(app)
    configure_rate_limiting(app, settings)
    configure_cors(app, settings)
    configure_exception_handlers(app)

    # Routers
    app.include_router(health.router)
    app.include_router(templates.router)
    app.include_router(reports.router)
    app.include_router(risk_items.router)

    return app


# Default app instance for uvicorn
app = create_app()
