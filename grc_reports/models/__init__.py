"""Database models for the GRC Report Builder."""

from grc_reports.models.base import Base
from grc_reports.models.report import ReportRecord
from grc_reports.models.risk_item import RiskItemRecord

__all__ = [
    "Base",
    "ReportRecord",
    "RiskItemRecord",
]
