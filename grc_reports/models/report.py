"""Report model: one wizard session's report."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from grc_reports.models.base import Base, utcnow


class ReportRecord(Base):
    """A GRC report with its organization data embedded as JSON."""

    __tablename__ = "reports"
    # AUTOINCREMENT keeps SQLite from reusing ids after deletes
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[str] = mapped_column(String(50), nullable=False)
    organization_data: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
    report_data: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="draft")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)

    risk_items: Mapped[list["RiskItemRecord"]] = relationship(
        back_populates="report",
        cascade="all, delete-orphan",
        order_by="RiskItemRecord.id",
    )

    def __repr__(self) -> str:
        return f"<ReportRecord {self.id} {self.title[:40]}>"
