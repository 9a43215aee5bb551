"""Tests for the alembic schema migration, run against SQLite."""

from __future__ import annotations

import importlib.util
from pathlib import Path

import pytest
from alembic.migration import MigrationContext
from alembic.operations import Operations
from sqlalchemy import create_engine, inspect

from grc_reports.models import Base

MIGRATION_PATH = Path(__file__).resolve().parents[1] / "alembic" / "versions" / "001_initial_schema.py"


@pytest.fixture(scope="module")
def migration():
    spec = importlib.util.spec_from_file_location("initial_schema", MIGRATION_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def engine(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'migrate.db'}")
    yield engine
    engine.dispose()


def _run(engine, fn) -> None:
    with engine.begin() as conn:
        with Operations.context(MigrationContext.configure(conn)):
            fn()


class TestInitialSchemaMigration:
    """Tests for revision 001."""

    def test_revision_metadata(self, migration):
        assert migration.revision == "001"
        assert migration.down_revision is None

    def test_upgrade_creates_tables(self, engine, migration):
        _run(engine, migration.upgrade)
        assert set(inspect(engine).get_table_names()) >= {"reports", "risk_items"}

    def test_columns_match_models(self, engine, migration):
        """The migrated schema has the same columns as the ORM models."""
        _run(engine, migration.upgrade)
        inspector = inspect(engine)
        for name, table in Base.metadata.tables.items():
            migrated = {c["name"] for c in inspector.get_columns(name)}
            assert migrated == {c.name for c in table.columns}

    def test_indexes_and_foreign_key(self, engine, migration):
        _run(engine, migration.upgrade)
        inspector = inspect(engine)
        assert {ix["name"] for ix in inspector.get_indexes("reports")} == {"ix_reports_user_id"}
        assert {ix["name"] for ix in inspector.get_indexes("risk_items")} == {"ix_risk_items_report_id"}
        (fk,) = inspector.get_foreign_keys("risk_items")
        assert fk["referred_table"] == "reports"
        assert fk["options"].get("ondelete") == "CASCADE"

    def test_downgrade_drops_tables(self, engine, migration):
        _run(engine, migration.upgrade)
        _run(engine, migration.downgrade)
        assert not {"reports", "risk_items"} & set(inspect(engine).get_table_names())
