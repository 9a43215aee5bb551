"""Export content builder: assembles the sections of an exported report.

Produces structured content only. Pagination, fonts and file formats are
left to whichever renderer consumes the ExportDocument.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from grc_reports.models.base import utcnow
from grc_reports.schemas.common import RiskLevel
from grc_reports.schemas.export import (
    CoverSection,
    ExecutiveSummarySection,
    ExportDocument,
    LevelCountRow,
    MatrixSection,
    RecommendationGroup,
    RiskDetail,
)
from grc_reports.schemas.report import Organization, Report
from grc_reports.schemas.risk_item import RiskItem
from grc_reports.schemas.summary import PrioritizedRisks, RiskSummary
from grc_reports.services.aggregator import prioritize, summarize, tally_matrix
from grc_reports.services.risk_scoring import LEVEL_ORDER, RISK_LEVELS, level_label
from grc_reports.services.templates import template_name

CONFIDENTIALITY_NOTICE = "Confidential & Proprietary"

CRITICAL_NARRATIVE = (
    "Immediate attention is required for critical risk items to ensure "
    "organizational security and compliance."
)
NO_CRITICAL_NARRATIVE = (
    "No critical risks identified. Focus on high and medium risks "
    "for continued improvement."
)

CRITICAL_GROUP_TITLE = "Address Critical Risks Immediately"
HIGH_GROUP_TITLE = "Plan Mitigation for High Risks"
GENERAL_GROUP_TITLE = "Regular Review and Updates"

GENERAL_RECOMMENDATIONS = [
    "Conduct quarterly risk assessments",
    "Update risk register as new threats emerge",
    "Review and test incident response procedures",
]


def _address_lines(org: Organization) -> list[str]:
    lines = []
    if org.address:
        lines.append(org.address)
    if org.city and org.state:
        lines.append(f"{org.city}, {org.state} {org.zip or ''}".rstrip())
    return lines


def build_cover(report: Report, generated_at: datetime) -> CoverSection:
    org = report.organization_data
    return CoverSection(
        title=report.title,
        report_type=report.type,
        report_type_name=template_name(report.type),
        organization_name=org.name,
        address_lines=_address_lines(org),
        industry=org.industry,
        framework=org.framework,
        period=report.report_data.period if report.report_data else None,
        generated_on=generated_at.date(),
        logo_url=org.logo_url,
        confidentiality=CONFIDENTIALITY_NOTICE,
    )


def build_executive_summary(summary: RiskSummary) -> ExecutiveSummarySection:
    """Executive summary with the two-branch narrative.

    One or more critical risks selects the critical narrative; otherwise
    the no-critical narrative is used.
    """
    has_critical = summary.counts[RiskLevel.CRITICAL] > 0
    key_findings = [
        f"{summary.total} total risk item(s) identified across {len(LEVEL_ORDER)} risk levels",
        f"{summary.needs_attention} risk(s) require immediate or high-priority attention",
        f"{summary.acceptable} risk(s) are at acceptable levels with current controls",
    ]
    if summary.needs_attention > 0:
        key_findings.append("Immediate action recommended for critical and high-risk items")

    return ExecutiveSummarySection(
        summary=summary,
        has_critical=has_critical,
        narrative=CRITICAL_NARRATIVE if has_critical else NO_CRITICAL_NARRATIVE,
        key_findings=key_findings,
    )


def build_matrix_section(summary: RiskSummary, items: Sequence[RiskItem]) -> MatrixSection:
    rows = [
        LevelCountRow(
            level=level,
            label=level_label(level),
            color=RISK_LEVELS[level]["color"],
            count=summary.counts[level],
        )
        for level in LEVEL_ORDER
    ]
    return MatrixSection(rows=rows, cells=tally_matrix(items))


def build_risk_details(items: Sequence[RiskItem]) -> list[RiskDetail]:
    return [
        RiskDetail(
            position=position,
            risk_item_id=item.id,
            name=item.name,
            description=item.description,
            category=item.category,
            level=item.risk_level,
            level_label=level_label(item.risk_level),
            likelihood=item.likelihood,
            impact=item.impact,
            status=item.status,
            mitigation=item.mitigation or None,
        )
        for position, item in enumerate(items, start=1)
    ]


def build_recommendations(prioritized: PrioritizedRisks) -> list[RecommendationGroup]:
    """Critical group, then high group, then the standing recommendations.

    The critical and high groups are omitted when they have no items.
    """
    groups = []
    if prioritized.critical:
        groups.append(RecommendationGroup(
            priority="critical",
            title=CRITICAL_GROUP_TITLE,
            lines=[f"address {item.name} immediately" for item in prioritized.critical],
        ))
    if prioritized.high:
        groups.append(RecommendationGroup(
            priority="high",
            title=HIGH_GROUP_TITLE,
            lines=[f"plan mitigation for {item.name}" for item in prioritized.high],
        ))
    groups.append(RecommendationGroup(
        priority="general",
        title=GENERAL_GROUP_TITLE,
        lines=list(GENERAL_RECOMMENDATIONS),
    ))
    return groups


def build_export_content(
    report: Report,
    items: Sequence[RiskItem],
    generated_at: datetime | None = None,
) -> ExportDocument:
    """Assemble the export document for a report and its risk items.

    Args:
        report: The report being exported.
        items: Its risk items, in the order they should appear.
        generated_at: Generation timestamp; defaults to now (UTC).

    Returns:
        ExportDocument with cover, executive summary, matrix breakdown,
        per-item details and recommendations.
    """
    if generated_at is None:
        generated_at = utcnow()

    summary = summarize(items)
    return ExportDocument(
        report_id=report.id,
        generated_at=generated_at,
        cover=build_cover(report, generated_at),
        executive_summary=build_executive_summary(summary),
        matrix=build_matrix_section(summary, items),
        risk_details=build_risk_details(items),
        recommendations=build_recommendations(prioritize(items)),
    )
