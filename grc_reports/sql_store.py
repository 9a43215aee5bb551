"""SQLAlchemy-backed record store.

Each store call runs in its own session and commits once, so a call
either fully applies or leaves the database untouched.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timezone

import structlog
from sqlalchemy import Engine, create_engine, event, select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from grc_reports.errors import StoreError
from grc_reports.models import Base, ReportRecord, RiskItemRecord
from grc_reports.schemas.report import Report, ReportCreate, ReportUpdate
from grc_reports.schemas.risk_item import RiskItem, RiskItemCreate, RiskItemUpdate
from grc_reports.services.risk_scoring import score_to_level
from grc_reports.store import RecordStore, advance_timestamp

logger = structlog.get_logger()


def _aware(value: datetime) -> datetime:
    # SQLite drops tzinfo on round trip
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class SqlRecordStore(RecordStore):
    """Record store persisted through SQLAlchemy."""

    def __init__(self, engine: Engine, create_schema: bool = True) -> None:
        self.engine = engine
        self._sessions = sessionmaker(bind=engine, expire_on_commit=False)
        if create_schema:
            Base.metadata.create_all(engine)

    @classmethod
    def from_url(cls, url: str, echo: bool = False) -> SqlRecordStore:
        engine = create_engine(url, echo=echo)
        if engine.dialect.name == "sqlite":
            event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return cls(engine)

    @contextmanager
    def _session(self, operation: str) -> Iterator[Session]:
        try:
            with self._sessions.begin() as session:
                yield session
        except SQLAlchemyError as exc:
            logger.error("sql_store_failure", operation=operation, error=str(exc))
            raise StoreError(f"{operation} failed") from exc

    # ─── Row conversion ──────────────────────────────────────────────────

    @staticmethod
    def _to_report(row: ReportRecord) -> Report:
        return Report(
            id=row.id,
            user_id=row.user_id,
            title=row.title,
            type=row.type,
            organization_data=row.organization_data,
            report_data=row.report_data,
            status=row.status,
            created_at=_aware(row.created_at),
            updated_at=_aware(row.updated_at),
        )

    @staticmethod
    def _to_risk_item(row: RiskItemRecord) -> RiskItem:
        return RiskItem(
            id=row.id,
            report_id=row.report_id,
            name=row.name,
            description=row.description,
            category=row.category,
            likelihood=row.likelihood,
            impact=row.impact,
            risk_level=score_to_level(row.likelihood, row.impact),
            mitigation=row.mitigation,
            status=row.status,
        )

    # ─── Reports ─────────────────────────────────────────────────────────

    def create_report(self, data: ReportCreate, user_id: int) -> Report:
        now = advance_timestamp()
        values = data.model_dump(mode="json")
        with self._session("create_report") as session:
            row = ReportRecord(
                user_id=user_id,
                title=values["title"],
                type=values["type"],
                organization_data=values["organization_data"],
                report_data=values["report_data"],
                status=values["status"],
                created_at=now,
                updated_at=now,
            )
            session.add(row)
            session.flush()
            return self._to_report(row)

    def get_report(self, report_id: int) -> Report | None:
        with self._session("get_report") as session:
            row = session.get(ReportRecord, report_id)
            return self._to_report(row) if row else None

    def update_report(self, report_id: int, changes: ReportUpdate) -> Report | None:
        with self._session("update_report") as session:
            row = session.get(ReportRecord, report_id)
            if row is None:
                return None
            for name, value in changes.model_dump(mode="json", exclude_unset=True).items():
                setattr(row, name, value)
            row.updated_at = advance_timestamp(_aware(row.updated_at))
            session.flush()
            return self._to_report(row)

    def list_reports(self, user_id: int) -> list[Report]:
        with self._session("list_reports") as session:
            rows = session.scalars(
                select(ReportRecord)
                .where(ReportRecord.user_id == user_id)
                .order_by(ReportRecord.id)
            )
            return [self._to_report(row) for row in rows]

    def delete_report(self, report_id: int) -> bool:
        with self._session("delete_report") as session:
            row = session.get(ReportRecord, report_id)
            if row is None:
                return False
            session.delete(row)
            return True

    # ─── Risk items ──────────────────────────────────────────────────────

    def create_risk_item(self, data: RiskItemCreate) -> RiskItem | None:
        values = data.model_dump(mode="json", exclude={"risk_level"})
        with self._session("create_risk_item") as session:
            if session.get(ReportRecord, data.report_id) is None:
                return None
            row = RiskItemRecord(
                risk_level=score_to_level(data.likelihood, data.impact).value,
                **values,
            )
            session.add(row)
            session.flush()
            return self._to_risk_item(row)

    def get_risk_item(self, risk_item_id: int) -> RiskItem | None:
        with self._session("get_risk_item") as session:
            row = session.get(RiskItemRecord, risk_item_id)
            return self._to_risk_item(row) if row else None

    def list_risk_items(self, report_id: int) -> list[RiskItem]:
        with self._session("list_risk_items") as session:
            rows = session.scalars(
                select(RiskItemRecord)
                .where(RiskItemRecord.report_id == report_id)
                .order_by(RiskItemRecord.id)
            )
            return [self._to_risk_item(row) for row in rows]

    def update_risk_item(self, risk_item_id: int, changes: RiskItemUpdate) -> RiskItem | None:
        with self._session("update_risk_item") as session:
            row = session.get(RiskItemRecord, risk_item_id)
            if row is None:
                return None
            for name, value in changes.model_dump(mode="json", exclude_unset=True).items():
                setattr(row, name, value)
            row.risk_level = score_to_level(row.likelihood, row.impact).value
            session.flush()
            return self._to_risk_item(row)

    def delete_risk_item(self, risk_item_id: int) -> bool:
        with self._session("delete_risk_item") as session:
            row = session.get(RiskItemRecord, risk_item_id)
            if row is None:
                return False
            session.delete(row)
            return True

    def ping(self) -> None:
        with self._session("ping") as session:
            session.execute(text("SELECT 1"))

    def close(self) -> None:
        self.engine.dispose()
