"""Report aggregation: risk counts, priorities and matrix tallies.

Pure functions of the risk items they are given; shared by the preview
endpoint and the export builder.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence

from grc_reports.schemas.common import RiskLevel
from grc_reports.schemas.risk_item import RiskItem
from grc_reports.schemas.summary import MatrixCell, PrioritizedRisks, RiskSummary
from grc_reports.services.risk_scoring import LEVEL_ORDER, build_matrix

ATTENTION_LEVELS = {RiskLevel.CRITICAL, RiskLevel.HIGH}
ACCEPTABLE_LEVELS = {RiskLevel.LOW, RiskLevel.VERY_LOW}


def count_by_level(items: Sequence[RiskItem]) -> dict[RiskLevel, int]:
    """Count items per level; every level is present, in ascending severity."""
    counter = Counter(item.risk_level for item in items)
    return {level: counter.get(level, 0) for level in LEVEL_ORDER}


def summarize(items: Sequence[RiskItem]) -> RiskSummary:
    """Summarize a report's risk items.

    Args:
        items: Risk items of a single report.

    Returns:
        RiskSummary with the total, per-level counts, the number needing
        immediate attention (critical + high) and the number at acceptable
        levels (low + very-low).
    """
    counts = count_by_level(items)
    return RiskSummary(
        total=len(items),
        counts=counts,
        needs_attention=sum(counts[level] for level in ATTENTION_LEVELS),
        acceptable=sum(counts[level] for level in ACCEPTABLE_LEVELS),
    )


def prioritize(items: Sequence[RiskItem]) -> PrioritizedRisks:
    """Split out critical and high items, keeping input order within each."""
    return PrioritizedRisks(
        critical=[item for item in items if item.risk_level == RiskLevel.CRITICAL],
        high=[item for item in items if item.risk_level == RiskLevel.HIGH],
    )


def tally_matrix(items: Sequence[RiskItem]) -> list[MatrixCell]:
    """Place items on the 5x5 matrix and count them per cell."""
    per_cell = Counter((item.likelihood, item.impact) for item in items)
    return [
        MatrixCell(**cell, count=per_cell.get((cell["likelihood"], cell["impact"]), 0))
        for cell in build_matrix()
    ]
