"""Request-scoped dependencies shared by the routers."""

from __future__ import annotations

from fastapi import Header, Request

from grc_reports.store import RecordStore


def get_store(request: Request) -> RecordStore:
    """The record store attached to the running app."""
    return request.app.state.store


def get_user_id(
    request: Request,
    x_user_id: int | None = Header(default=None, ge=1),
) -> int:
    """Owner of the request: ``X-User-ID`` or the configured default user."""
    if x_user_id is not None:
        return x_user_id
    return request.app.state.settings.default_user_id
