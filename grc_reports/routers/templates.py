"""Template catalog and risk matrix endpoints."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException

from grc_reports.schemas.summary import MatrixCell, RiskLevelInfo, RiskMatrixResponse
from grc_reports.schemas.template import ReportTemplate
from grc_reports.services.risk_scoring import LEVEL_ORDER, RISK_LEVELS, build_matrix
from grc_reports.services.templates import REPORT_TEMPLATES, get_template

router = APIRouter(prefix="/api", tags=["templates"])


@router.get("/templates", response_model=list[ReportTemplate])
async def list_templates() -> list[ReportTemplate]:
    """Report templates available in the wizard's first step."""
    return [ReportTemplate(**t) for t in REPORT_TEMPLATES]


@router.get("/templates/{template_id}", response_model=ReportTemplate)
async def get_report_template(template_id: str) -> ReportTemplate:
    template = get_template(template_id)
    if template is None:
        raise HTTPException(status_code=404, detail=f"Template '{template_id}' not found")
    return ReportTemplate(**template)


@router.get("/risk-matrix", response_model=RiskMatrixResponse)
async def get_risk_matrix() -> RiskMatrixResponse:
    """The 5x5 scoring matrix with its level legend."""
    return RiskMatrixResponse(
        levels=[RiskLevelInfo(level=level, **RISK_LEVELS[level]) for level in LEVEL_ORDER],
        cells=[MatrixCell(**cell) for cell in build_matrix()],
    )
