"""Risk item model: a single rated risk within a report."""

from __future__ import annotations

from sqlalchemy import CheckConstraint, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from grc_reports.models.base import Base


class RiskItemRecord(Base):
    """A risk rated on the 5x5 likelihood/impact matrix."""

    __tablename__ = "risk_items"
    __table_args__ = (
        CheckConstraint("likelihood BETWEEN 1 AND 5", name="ck_risk_items_likelihood"),
        CheckConstraint("impact BETWEEN 1 AND 5", name="ck_risk_items_impact"),
        {"sqlite_autoincrement": True},
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    report_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("reports.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    category: Mapped[str] = mapped_column(String(50), nullable=False)
    likelihood: Mapped[int] = mapped_column(Integer, nullable=False)  # 1-5
    impact: Mapped[int] = mapped_column(Integer, nullable=False)  # 1-5
    risk_level: Mapped[str] = mapped_column(String(20), nullable=False)
    mitigation: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="open")

    report: Mapped["ReportRecord"] = relationship(back_populates="risk_items")

    def __repr__(self) -> str:
        return f"<RiskItemRecord {self.id} report={self.report_id} level={self.risk_level}>"
