"""Schemas for reports and their embedded organization data."""

from __future__ import annotations

from datetime import datetime

from pydantic import ConfigDict, EmailStr, Field, field_validator, model_validator

from grc_reports.schemas.common import (
    CamelModel,
    ComplianceFramework,
    OrganizationSize,
    ReportStatus,
    ReportType,
)


class Organization(CamelModel):
    """Organization data captured by the wizard, embedded in a report."""

    name: str = Field(..., min_length=1, max_length=255)
    industry: str | None = None
    contact: str | None = None
    email: EmailStr | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip: str | None = None
    size: OrganizationSize | None = None
    framework: ComplianceFramework | None = None
    logo_url: str | None = None

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Company name is required")
        return v

    @field_validator("email", mode="before")
    @classmethod
    def _blank_email_is_absent(cls, v: object) -> object:
        if isinstance(v, str):
            return v.strip() or None
        return v


class ReportDetails(CamelModel):
    """Report-period metadata."""

    period: str = Field(..., min_length=1, description="Reporting period, e.g. 'Q1 2025'")
    scope: str | None = None
    prepared_by: str | None = None

    @field_validator("period")
    @classmethod
    def _period_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Report period is required")
        return v


class ReportCreate(CamelModel):
    """Request to create a report."""

    title: str = Field(..., min_length=1, max_length=255)
    type: ReportType
    organization_data: Organization
    report_data: ReportDetails | None = None
    status: ReportStatus = ReportStatus.DRAFT

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Report title is required")
        return v


class ReportUpdate(CamelModel):
    """Partial report update. Only explicitly supplied fields are merged."""

    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(default=None, min_length=1, max_length=255)
    type: ReportType | None = None
    organization_data: Organization | None = None
    report_data: ReportDetails | None = None
    status: ReportStatus | None = None

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("Report title is required")
        return v

    @model_validator(mode="after")
    def _required_fields_not_null(self) -> ReportUpdate:
        for name in ("title", "type", "organization_data", "status"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self


class Report(CamelModel):
    """A stored report."""

    id: int
    user_id: int
    title: str
    type: ReportType
    organization_data: Organization
    report_data: ReportDetails | None = None
    status: ReportStatus = ReportStatus.DRAFT
    created_at: datetime
    updated_at: datetime
