"""Schemas for risk aggregation results."""

from __future__ import annotations

from pydantic import Field

from grc_reports.schemas.common import CamelModel, RiskLevel
from grc_reports.schemas.risk_item import RiskItem


class RiskSummary(CamelModel):
    """Counts of risk items per level."""

    total: int = 0
    counts: dict[RiskLevel, int] = Field(
        ..., description="One entry per risk level, zero when no item has that level"
    )
    needs_attention: int = Field(0, description="Critical plus high items")
    acceptable: int = Field(0, description="Low plus very-low items")


class PrioritizedRisks(CamelModel):
    """Critical and high items in their original order."""

    critical: list[RiskItem] = []
    high: list[RiskItem] = []


class MatrixCell(CamelModel):
    """One cell of the 5x5 likelihood/impact matrix."""

    likelihood: int
    impact: int
    score: int
    level: RiskLevel
    code: str
    count: int = 0


class RiskLevelInfo(CamelModel):
    """Presentation metadata for a risk level."""

    level: RiskLevel
    label: str
    color: str
    severity: int
    code: str


class RiskMatrixResponse(CamelModel):
    """The scoring matrix and its legend."""

    levels: list[RiskLevelInfo]
    cells: list[MatrixCell]


class ReportSummaryResponse(CamelModel):
    """Preview data for a report."""

    report_id: int
    summary: RiskSummary
    prioritized: PrioritizedRisks
