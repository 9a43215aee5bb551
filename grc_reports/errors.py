"""Error types and exception handlers."""

from __future__ import annotations

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = structlog.get_logger()


class StoreError(Exception):
    """Unexpected failure inside a record store backend."""


def reference_error(field: str, message: str) -> RequestValidationError:
    """Build a 422 error for a body field that references a missing record.

    Uses the same shape FastAPI emits for schema validation failures so
    clients can highlight the offending field either way.
    """
    return RequestValidationError([
        {
            "type": "missing_reference",
            "loc": ("body", field),
            "msg": message,
            "input": None,
        }
    ])


async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    """Log storage failures and return a generic 500."""
    logger.error(
        "store_error",
        method=request.method,
        path=request.url.path,
        error_type=type(exc).__name__,
        exc_info=exc,
    )
    return JSONResponse(status_code=500, content={"detail": "Internal storage error"})


def configure_exception_handlers(app: FastAPI) -> None:
    """Register application exception handlers."""
    app.add_exception_handler(StoreError, store_error_handler)
