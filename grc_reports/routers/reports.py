"""Report API endpoints: CRUD, preview summary and export content."""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends, HTTPException

from grc_reports.dependencies import get_store, get_user_id
from grc_reports.schemas.common import RiskLevel
from grc_reports.schemas.export import ExportDocument
from grc_reports.schemas.report import Report, ReportCreate, ReportUpdate
from grc_reports.schemas.risk_item import RiskItem
from grc_reports.schemas.summary import ReportSummaryResponse
from grc_reports.services.aggregator import prioritize, summarize
from grc_reports.services.export_builder import build_export_content
from grc_reports.store import RecordStore

logger = structlog.get_logger()

router = APIRouter(prefix="/api/reports", tags=["reports"])


def _require_report(store: RecordStore, report_id: int) -> Report:
    report = store.get_report(report_id)
    if report is None:
        raise HTTPException(status_code=404, detail=f"Report {report_id} not found")
    return report


@router.post("", response_model=Report, status_code=201)
async def create_report(
    request: ReportCreate,
    store: RecordStore = Depends(get_store),
    user_id: int = Depends(get_user_id),
) -> Report:
    """Create a report for the selected template and organization."""
    report = store.create_report(request, user_id=user_id)
    logger.info("report_created", report_id=report.id, report_type=report.type.value, user_id=user_id)
    return report


@router.get("", response_model=list[Report])
async def list_reports(
    store: RecordStore = Depends(get_store),
    user_id: int = Depends(get_user_id),
) -> list[Report]:
    """List the caller's reports in creation order."""
    return store.list_reports(user_id)


@router.get("/{report_id}", response_model=Report)
async def get_report(report_id: int, store: RecordStore = Depends(get_store)) -> Report:
    return _require_report(store, report_id)


@router.patch("/{report_id}", response_model=Report)
async def update_report(
    report_id: int,
    request: ReportUpdate,
    store: RecordStore = Depends(get_store),
) -> Report:
    """Merge the supplied fields into a report."""
    report = store.update_report(report_id, request)
    if report is None:
        raise HTTPException(status_code=404, detail=f"Report {report_id} not found")
    logger.info(
        "report_updated",
        report_id=report_id,
        fields=sorted(request.model_fields_set),
        status=report.status.value,
    )
    return report


@router.delete("/{report_id}")
async def delete_report(report_id: int, store: RecordStore = Depends(get_store)) -> dict[str, str]:
    """Delete a report and all of its risk items."""
    if not store.delete_report(report_id):
        raise HTTPException(status_code=404, detail=f"Report {report_id} not found")
    logger.info("report_deleted", report_id=report_id)
    return {"message": "Report deleted"}


@router.get("/{report_id}/risk-items", response_model=list[RiskItem])
async def list_report_risk_items(
    report_id: int,
    store: RecordStore = Depends(get_store),
) -> list[RiskItem]:
    """Risk items of a report in the order they were added."""
    return store.list_risk_items(report_id)


@router.get("/{report_id}/summary", response_model=ReportSummaryResponse)
async def get_report_summary(
    report_id: int,
    store: RecordStore = Depends(get_store),
) -> ReportSummaryResponse:
    """Preview counts and priority lists for a report."""
    _require_report(store, report_id)
    items = store.list_risk_items(report_id)
    return ReportSummaryResponse(
        report_id=report_id,
        summary=summarize(items),
        prioritized=prioritize(items),
    )


@router.get("/{report_id}/export", response_model=ExportDocument)
async def export_report(
    report_id: int,
    store: RecordStore = Depends(get_store),
) -> ExportDocument:
    """Build the renderer-agnostic export document for a report."""
    report = _require_report(store, report_id)
    items = store.list_risk_items(report_id)
    document = build_export_content(report, items)
    logger.info(
        "export_built",
        report_id=report_id,
        risk_items=len(items),
        critical=document.executive_summary.summary.counts[RiskLevel.CRITICAL],
    )
    return document
