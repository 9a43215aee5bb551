"""Shared test fixtures for the GRC Report Builder test suite."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from grc_reports.app import create_app
from grc_reports.config import Settings
from grc_reports.schemas.report import ReportCreate
from grc_reports.schemas.risk_item import RiskItem, RiskItemCreate
from grc_reports.sql_store import SqlRecordStore
from grc_reports.store import InMemoryRecordStore


def _test_settings() -> Settings:
    """Return settings suitable for testing."""
    return Settings(
        environment="development",
        debug=True,
        log_format="console",
        rate_limit_default="1000/minute",
        allowed_origins="http://localhost:3000,http://localhost:5000",
        store_backend="memory",
    )


def make_report(**overrides) -> ReportCreate:
    """A valid report request, with optional field overrides."""
    data = {
        "title": "Q1 Audit",
        "type": "risk-assessment",
        "organizationData": {
            "name": "Acme",
            "industry": "technology",
            "address": "1 Main Street",
            "city": "Springfield",
            "state": "IL",
            "zip": "62701",
            "framework": "iso27001",
        },
        "reportData": {"period": "Q1 2025"},
    }
    data.update(overrides)
    return ReportCreate.model_validate(data)


def make_risk_item(report_id: int, **overrides) -> RiskItemCreate:
    """A valid risk item request, with optional field overrides."""
    data = {
        "reportId": report_id,
        "name": "Phishing",
        "description": "Credential harvesting via email",
        "category": "cybersecurity",
        "likelihood": 4,
        "impact": 4,
    }
    data.update(overrides)
    return RiskItemCreate.model_validate(data)


@pytest.fixture
def settings():
    """Test settings."""
    return _test_settings()


@pytest.fixture
def store():
    """A fresh in-memory record store."""
    return InMemoryRecordStore()


@pytest.fixture
def sql_store(tmp_path):
    """A SQL record store backed by a throwaway SQLite file."""
    record_store = SqlRecordStore.from_url(f"sqlite:///{tmp_path / 'grc_test.db'}")
    yield record_store
    record_store.close()


@pytest.fixture(params=["memory", "sql"])
def record_store(request, tmp_path):
    """Each record store adapter in turn, for contract tests."""
    if request.param == "memory":
        yield InMemoryRecordStore()
        return
    record_store = SqlRecordStore.from_url(f"sqlite:///{tmp_path / 'contract.db'}")
    yield record_store
    record_store.close()


@pytest.fixture
def app(settings, store):
    """Create a fresh FastAPI app for testing."""
    return create_app(settings, store=store)


@pytest.fixture
def client(app):
    """HTTP test client."""
    return TestClient(app)


@pytest.fixture
def sample_report(store):
    """A draft report for the default user."""
    return store.create_report(make_report(), user_id=1)


@pytest.fixture
def sample_risk_items(store, sample_report) -> list[RiskItem]:
    """Risk items spanning every level, added in a fixed order."""
    specs = [
        ("Ransomware outbreak", "cybersecurity", 5, 5),  # 25 critical
        ("Phishing", "cybersecurity", 4, 4),  # 16 high
        ("Vendor insolvency", "financial", 3, 3),  # 9 medium
        ("Data centre outage", "operational", 5, 4),  # 20 critical
        ("Regulatory fine", "compliance", 2, 4),  # 8 low
        ("Logo misuse", "reputational", 1, 2),  # 2 very-low
        ("Key staff departure", "strategic", 3, 5),  # 15 high
    ]
    items = []
    for name, category, likelihood, impact in specs:
        items.append(store.create_risk_item(make_risk_item(
            sample_report.id,
            name=name,
            category=category,
            likelihood=likelihood,
            impact=impact,
            description=None,
        )))
    return items
