"""Initial schema: reports and risk items.

Revision ID: 001
Revises: None
Create Date: 2026-10-19
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Reports (organization data embedded as JSON)
    op.create_table(
        "reports",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.Integer, nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("type", sa.String(50), nullable=False),
        sa.Column("organization_data", sa.JSON, nullable=False),
        sa.Column("report_data", sa.JSON, nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="draft"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sqlite_autoincrement=True,
    )
    op.create_index("ix_reports_user_id", "reports", ["user_id"])

    # Risk items
    op.create_table(
        "risk_items",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "report_id",
            sa.Integer,
            sa.ForeignKey("reports.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("category", sa.String(50), nullable=False),
        sa.Column("likelihood", sa.Integer, nullable=False),
        sa.Column("impact", sa.Integer, nullable=False),
        sa.Column("risk_level", sa.String(20), nullable=False),
        sa.Column("mitigation", sa.Text, nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="open"),
        sa.CheckConstraint("likelihood BETWEEN 1 AND 5", name="ck_risk_items_likelihood"),
        sa.CheckConstraint("impact BETWEEN 1 AND 5", name="ck_risk_items_impact"),
        sqlite_autoincrement=True,
    )
    op.create_index("ix_risk_items_report_id", "risk_items", ["report_id"])


def downgrade() -> None:
    op.drop_index("ix_risk_items_report_id", table_name="risk_items")
    op.drop_table("risk_items")
    op.drop_index("ix_reports_user_id", table_name="reports")
    op.drop_table("reports")
