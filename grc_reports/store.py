"""Record store for reports and risk items.

``RecordStore`` is the repository interface the API depends on. Two
adapters implement it: ``InMemoryRecordStore`` (development and tests)
and ``SqlRecordStore`` (SQLAlchemy, see ``grc_reports.sql_store``).
"""

from __future__ import annotations

import itertools
import threading
from abc import ABC, abstractmethod
from datetime import datetime, timedelta

from grc_reports.config import Settings
from grc_reports.models.base import utcnow
from grc_reports.schemas.report import Report, ReportCreate, ReportUpdate
from grc_reports.schemas.risk_item import RiskItem, RiskItemCreate, RiskItemUpdate
from grc_reports.services.risk_scoring import score_to_level


def advance_timestamp(previous: datetime | None = None) -> datetime:
    """Return the current UTC time, strictly later than ``previous``."""
    now = utcnow()
    if previous is not None and now <= previous:
        now = previous + timedelta(microseconds=1)
    return now


class RecordStore(ABC):
    """Repository of reports and their risk items.

    Every method is atomic. Lookups return ``None`` (or ``False`` for
    deletes) when the id does not exist; they never raise for that.
    Backend failures raise ``StoreError``.
    """

    @abstractmethod
    def create_report(self, data: ReportCreate, user_id: int) -> Report:
        """Persist a new report owned by ``user_id``."""

    @abstractmethod
    def get_report(self, report_id: int) -> Report | None:
        ...

    @abstractmethod
    def update_report(self, report_id: int, changes: ReportUpdate) -> Report | None:
        """Merge the explicitly set fields of ``changes`` and refresh ``updated_at``."""

    @abstractmethod
    def list_reports(self, user_id: int) -> list[Report]:
        """Reports owned by ``user_id`` in creation order."""

    @abstractmethod
    def delete_report(self, report_id: int) -> bool:
        """Delete a report together with its risk items."""

    @abstractmethod
    def create_risk_item(self, data: RiskItemCreate) -> RiskItem | None:
        """Persist a risk item, or return None if its report does not exist."""

    @abstractmethod
    def get_risk_item(self, risk_item_id: int) -> RiskItem | None:
        ...

    @abstractmethod
    def list_risk_items(self, report_id: int) -> list[RiskItem]:
        """Risk items of a report in creation order."""

    @abstractmethod
    def update_risk_item(self, risk_item_id: int, changes: RiskItemUpdate) -> RiskItem | None:
        """Merge changes and recompute the derived risk level."""

    @abstractmethod
    def delete_risk_item(self, risk_item_id: int) -> bool:
        ...

    def ping(self) -> None:
        """Raise ``StoreError`` if the backend cannot serve requests."""

    def close(self) -> None:
        """Release backend resources."""


class InMemoryRecordStore(RecordStore):
    """Lock-guarded in-memory store for development and testing."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self.reports: dict[int, Report] = {}
        self.risk_items: dict[int, RiskItem] = {}
        self._report_ids = itertools.count(1)
        self._risk_item_ids = itertools.count(1)

    def reset(self) -> None:
        """Clear all data and restart the id sequences; used in tests."""
        self.__init__()

    # ─── Reports ─────────────────────────────────────────────────────────

    def create_report(self, data: ReportCreate, user_id: int) -> Report:
        with self._lock:
            now = advance_timestamp()
            report = Report(
                id=next(self._report_ids),
                user_id=user_id,
                created_at=now,
                updated_at=now,
                **data.model_dump(),
            )
            self.reports[report.id] = report
            return report.model_copy(deep=True)

    def get_report(self, report_id: int) -> Report | None:
        with self._lock:
            report = self.reports.get(report_id)
            return report.model_copy(deep=True) if report else None

    def update_report(self, report_id: int, changes: ReportUpdate) -> Report | None:
        with self._lock:
            existing = self.reports.get(report_id)
            if existing is None:
                return None
            payload = existing.model_dump()
            payload.update(changes.model_dump(exclude_unset=True))
            payload["updated_at"] = advance_timestamp(existing.updated_at)
            updated = Report.model_validate(payload)
            self.reports[report_id] = updated
            return updated.model_copy(deep=True)

    def list_reports(self, user_id: int) -> list[Report]:
        with self._lock:
            return [
                r.model_copy(deep=True)
                for r in self.reports.values()
                if r.user_id == user_id
            ]

    def delete_report(self, report_id: int) -> bool:
        with self._lock:
            if self.reports.pop(report_id, None) is None:
                return False
            orphaned = [i for i, item in self.risk_items.items() if item.report_id == report_id]
            for item_id in orphaned:
                del self.risk_items[item_id]
            return True

    # ─── Risk items ──────────────────────────────────────────────────────

    def create_risk_item(self, data: RiskItemCreate) -> RiskItem | None:
        with self._lock:
            if data.report_id not in self.reports:
                return None
            item = RiskItem(
                id=next(self._risk_item_ids),
                risk_level=score_to_level(data.likelihood, data.impact),
                **data.model_dump(exclude={"risk_level"}),
            )
            self.risk_items[item.id] = item
            return item.model_copy()

    def get_risk_item(self, risk_item_id: int) -> RiskItem | None:
        with self._lock:
            item = self.risk_items.get(risk_item_id)
            return item.model_copy() if item else None

    def list_risk_items(self, report_id: int) -> list[RiskItem]:
        with self._lock:
            return [
                item.model_copy()
                for item in self.risk_items.values()
                if item.report_id == report_id
            ]

    def update_risk_item(self, risk_item_id: int, changes: RiskItemUpdate) -> RiskItem | None:
        with self._lock:
            existing = self.risk_items.get(risk_item_id)
            if existing is None:
                return None
            payload = existing.model_dump()
            payload.update(changes.model_dump(exclude_unset=True))
            payload["risk_level"] = score_to_level(payload["likelihood"], payload["impact"])
            updated = RiskItem.model_validate(payload)
            self.risk_items[risk_item_id] = updated
            return updated.model_copy()

    def delete_risk_item(self, risk_item_id: int) -> bool:
        with self._lock:
            return self.risk_items.pop(risk_item_id, None) is not None


def build_store(settings: Settings) -> RecordStore:
    """Create the record store selected by ``settings.store_backend``."""
    if settings.store_backend == "sql":
        from grc_reports.sql_store import SqlRecordStore

        return SqlRecordStore.from_url(settings.database_url, echo=settings.database_echo)
    return InMemoryRecordStore()
