"""Request pipeline for the report API.

Requests pass through CORS, a per-caller rate limit and a logging layer
that tags every log line with the request id and the calling user. The
lifespan hook configures logging, checks the record store on startup and
closes it on shutdown.
"""

from __future__ import annotations

import logging
import signal
import sys
import threading
import time
import uuid
from contextlib import asynccontextmanager
from typing import Any

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from grc_reports.config import Settings
from grc_reports.errors import StoreError

logger = structlog.get_logger()

REQUEST_ID_HEADER = "X-Request-ID"
USER_ID_HEADER = "X-User-ID"


def rate_limit_key(request: Request) -> str:
    """Callers that identify themselves are limited per user, others per address."""
    user_id = request.headers.get(USER_ID_HEADER)
    if user_id:
        return f"user:{user_id}"
    return get_remote_address(request)


def get_limiter(settings: Settings) -> Limiter:
    """Create the rate limiter applied to every route."""
    return Limiter(key_func=rate_limit_key, default_limits=[settings.rate_limit_default])


def configure_cors(app: FastAPI, settings: Settings) -> None:
    """Allow the wizard front end to call the API from its own origin."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", REQUEST_ID_HEADER, USER_ID_HEADER],
        expose_headers=[REQUEST_ID_HEADER],
    )


def configure_rate_limiting(app: FastAPI, settings: Settings) -> None:
    app.state.limiter = get_limiter(settings)
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)


async def logging_middleware(request: Request, call_next) -> Response:
    """Bind request id and caller to the log context, then log the request."""
    request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(
        request_id=request_id,
        user_id=request.headers.get(USER_ID_HEADER),
    )

    start_time = time.monotonic()
    response = await call_next(request)
    duration_ms = round((time.monotonic() - start_time) * 1000, 2)
    response.headers[REQUEST_ID_HEADER] = request_id

    log = logger.warning if response.status_code >= 500 else logger.info
    log(
        "http_request",
        method=request.method,
        path=request.url.path,
        status_code=response.status_code,
        duration_ms=duration_ms,
        client_ip=request.client.host if request.client else "unknown",
    )
    return response


def configure_request_logging(app: FastAPI) -> None:
    app.middleware("http")(logging_middleware)


def configure_structured_logging(settings: Settings) -> None:
    """Route structlog through stdlib logging with a JSON or console renderer."""
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=settings.log_level.upper())

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]
    if settings.log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


_shutdown_requested = False


def is_shutdown_requested() -> bool:
    """True once SIGTERM/SIGINT arrived or the app started shutting down."""
    return _shutdown_requested


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging, verify the record store, and close it on exit."""
    global _shutdown_requested
    _shutdown_requested = False

    settings = app.state.settings
    store = app.state.store
    configure_structured_logging(settings)

    logger.info(
        "application_starting",
        version=settings.app_version,
        environment=settings.environment,
        store_backend=settings.store_backend,
    )
    try:
        store.ping()
    except StoreError:
        logger.error("store_unavailable", store_backend=settings.store_backend)
        raise

    previous_handlers = {sig: signal.getsignal(sig) for sig in (signal.SIGTERM, signal.SIGINT)}

    def _handle_signal(signum, frame):
        global _shutdown_requested
        _shutdown_requested = True
        logger.info("shutdown_signal_received", signal=signum)
        previous = previous_handlers.get(signum)
        if callable(previous):
            previous(signum, frame)

    # signal handlers can only be installed from the main thread
    if threading.current_thread() is threading.main_thread():
        for sig in previous_handlers:
            signal.signal(sig, _handle_signal)

    yield

    _shutdown_requested = True
    store.close()
    logger.info("application_stopped", store_backend=settings.store_backend)
