"""Risk scoring model: likelihood x impact to risk level."""

from __future__ import annotations

from typing import Any

from grc_reports.schemas.common import RiskLevel

MIN_RATING = 1
MAX_RATING = 5

# Upper score bound (inclusive) for each level; anything above is critical
LEVEL_THRESHOLDS: list[tuple[int, RiskLevel]] = [
    (4, RiskLevel.VERY_LOW),
    (8, RiskLevel.LOW),
    (12, RiskLevel.MEDIUM),
    (16, RiskLevel.HIGH),
]

# Ascending severity
LEVEL_ORDER: list[RiskLevel] = [
    RiskLevel.VERY_LOW,
    RiskLevel.LOW,
    RiskLevel.MEDIUM,
    RiskLevel.HIGH,
    RiskLevel.CRITICAL,
]

RISK_LEVELS: dict[RiskLevel, dict[str, Any]] = {
    RiskLevel.VERY_LOW: {"label": "Very Low", "color": "#22c55e", "severity": 0, "code": "VL"},
    RiskLevel.LOW: {"label": "Low", "color": "#16a34a", "severity": 1, "code": "L"},
    RiskLevel.MEDIUM: {"label": "Medium", "color": "#ca8a04", "severity": 2, "code": "M"},
    RiskLevel.HIGH: {"label": "High", "color": "#ea580c", "severity": 3, "code": "H"},
    RiskLevel.CRITICAL: {"label": "Critical", "color": "#dc2626", "severity": 4, "code": "C"},
}


def _check_rating(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer between {MIN_RATING} and {MAX_RATING}")
    if not MIN_RATING <= value <= MAX_RATING:
        raise ValueError(
            f"{name} must be between {MIN_RATING} and {MAX_RATING}, got {value}"
        )


def risk_score(likelihood: int, impact: int) -> int:
    """Return the raw likelihood x impact score (1-25)."""
    _check_rating("likelihood", likelihood)
    _check_rating("impact", impact)
    return likelihood * impact


def score_to_level(likelihood: int, impact: int) -> RiskLevel:
    """Map a likelihood/impact pair to its risk level.

    Score breakpoints over the 1-25 product range:
        <= 4 very-low, 5-8 low, 9-12 medium, 13-16 high, > 16 critical.

    Ratings outside 1-5 raise ValueError; they are never clamped.
    """
    score = risk_score(likelihood, impact)
    for upper, level in LEVEL_THRESHOLDS:
        if score <= upper:
            return level
    return RiskLevel.CRITICAL


def level_label(level: RiskLevel) -> str:
    return RISK_LEVELS[RiskLevel(level)]["label"]


def build_matrix() -> list[dict[str, Any]]:
    """Build the 5x5 risk matrix, impact descending then likelihood ascending.

    Row order matches the on-screen grid: the top row is impact 5.
    """
    cells = []
    for impact in range(MAX_RATING, MIN_RATING - 1, -1):
        for likelihood in range(MIN_RATING, MAX_RATING + 1):
            level = score_to_level(likelihood, impact)
            cells.append({
                "likelihood": likelihood,
                "impact": impact,
                "score": likelihood * impact,
                "level": level,
                "code": RISK_LEVELS[level]["code"],
            })
    return cells
