"""Risk item API endpoints."""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends, HTTPException

from grc_reports.dependencies import get_store
from grc_reports.errors import reference_error
from grc_reports.schemas.risk_item import RiskItem, RiskItemCreate, RiskItemUpdate
from grc_reports.store import RecordStore

logger = structlog.get_logger()

router = APIRouter(prefix="/api/risk-items", tags=["risk-items"])


@router.post("", response_model=RiskItem, status_code=201)
async def create_risk_item(
    request: RiskItemCreate,
    store: RecordStore = Depends(get_store),
) -> RiskItem:
    """Add a risk item to an existing report.

    The risk level is derived from likelihood and impact.
    """
    item = store.create_risk_item(request)
    if item is None:
        logger.warning("orphan_risk_item_rejected", report_id=request.report_id)
        raise reference_error("reportId", f"Report {request.report_id} does not exist")
    logger.info(
        "risk_item_created",
        risk_item_id=item.id,
        report_id=item.report_id,
        risk_level=item.risk_level.value,
    )
    return item


@router.get("/{risk_item_id}", response_model=RiskItem)
async def get_risk_item(risk_item_id: int, store: RecordStore = Depends(get_store)) -> RiskItem:
    item = store.get_risk_item(risk_item_id)
    if item is None:
        raise HTTPException(status_code=404, detail=f"Risk item {risk_item_id} not found")
    return item


@router.patch("/{risk_item_id}", response_model=RiskItem)
async def update_risk_item(
    risk_item_id: int,
    request: RiskItemUpdate,
    store: RecordStore = Depends(get_store),
) -> RiskItem:
    """Update a risk item; its level is recomputed from the new ratings."""
    item = store.update_risk_item(risk_item_id, request)
    if item is None:
        raise HTTPException(status_code=404, detail=f"Risk item {risk_item_id} not found")
    logger.info(
        "risk_item_updated",
        risk_item_id=risk_item_id,
        fields=sorted(request.model_fields_set),
        risk_level=item.risk_level.value,
    )
    return item


@router.delete("/{risk_item_id}")
async def delete_risk_item(risk_item_id: int, store: RecordStore = Depends(get_store)) -> dict[str, str]:
    if not store.delete_risk_item(risk_item_id):
        raise HTTPException(status_code=404, detail=f"Risk item {risk_item_id} not found")
    logger.info("risk_item_deleted", risk_item_id=risk_item_id)
    return {"message": "Risk item deleted"}
