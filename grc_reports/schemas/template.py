"""Schemas for the report template catalog."""

from __future__ import annotations

from grc_reports.schemas.common import CamelModel, ReportType


class ReportTemplate(CamelModel):
    id: ReportType
    name: str
    description: str
    icon: str
