"""Schemas for the renderer-agnostic export document."""

from __future__ import annotations

from datetime import date, datetime
from typing import Literal

from grc_reports.schemas.common import (
    CamelModel,
    ComplianceFramework,
    ReportType,
    RiskCategory,
    RiskLevel,
    RiskStatus,
)
from grc_reports.schemas.summary import MatrixCell, RiskSummary


class CoverSection(CamelModel):
    title: str
    report_type: ReportType
    report_type_name: str
    organization_name: str
    address_lines: list[str] = []
    industry: str | None = None
    framework: ComplianceFramework | None = None
    period: str | None = None
    generated_on: date
    logo_url: str | None = None
    confidentiality: str


class ExecutiveSummarySection(CamelModel):
    summary: RiskSummary
    has_critical: bool
    narrative: str
    key_findings: list[str]


class LevelCountRow(CamelModel):
    level: RiskLevel
    label: str
    color: str
    count: int


class MatrixSection(CamelModel):
    rows: list[LevelCountRow]
    cells: list[MatrixCell]


class RiskDetail(CamelModel):
    position: int
    risk_item_id: int
    name: str
    description: str | None = None
    category: RiskCategory
    level: RiskLevel
    level_label: str
    likelihood: int
    impact: int
    status: RiskStatus
    mitigation: str | None = None


class RecommendationGroup(CamelModel):
    priority: Literal["critical", "high", "general"]
    title: str
    lines: list[str]


class ExportDocument(CamelModel):
    """Export content in section order: cover, executive summary, matrix,
    risk details, recommendations."""

    report_id: int
    generated_at: datetime
    cover: CoverSection
    executive_summary: ExecutiveSummarySection
    matrix: MatrixSection
    risk_details: list[RiskDetail]
    recommendations: list[RecommendationGroup]
