"""Report template catalog. Template ids double as report types."""

from __future__ import annotations

from typing import Any

from grc_reports.schemas.common import ReportType

REPORT_TEMPLATES: list[dict[str, Any]] = [
    {
        "id": ReportType.RISK_ASSESSMENT,
        "name": "Risk Assessment Report",
        "description": "Comprehensive evaluation of organizational risks and controls",
        "icon": "shield-alt",
    },
    {
        "id": ReportType.POLICY_COMPLIANCE,
        "name": "Policy Compliance Gap Analysis",
        "description": "Analysis of compliance gaps against regulatory frameworks",
        "icon": "clipboard-check",
    },
    {
        "id": ReportType.INCIDENT_REPORT,
        "name": "Incident Report",
        "description": "Documentation and analysis of security incidents",
        "icon": "exclamation-triangle",
    },
    {
        "id": ReportType.BUSINESS_IMPACT,
        "name": "Business Impact Analysis",
        "description": "Assessment of potential business disruptions and recovery strategies",
        "icon": "chart-line",
    },
    {
        "id": ReportType.VENDOR_RISK,
        "name": "Vendor Risk Assessment",
        "description": "Evaluation of third-party vendor security and compliance",
        "icon": "handshake",
    },
]

_BY_ID = {t["id"]: t for t in REPORT_TEMPLATES}


def get_template(template_id: str) -> dict[str, Any] | None:
    """Look up a template by id; None for unknown ids."""
    try:
        return _BY_ID.get(ReportType(template_id))
    except ValueError:
        return None


def template_name(report_type: ReportType) -> str:
    return _BY_ID[ReportType(report_type)]["name"]
