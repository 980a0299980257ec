"""Mini README: Tests for the versioned migration runner."""

from __future__ import annotations

import pytest
from sqlalchemy import create_engine, inspect, select, text
from sqlalchemy.pool import StaticPool

from salestracker.storage import (
    MIGRATIONS,
    Migration,
    MigrationError,
    apply_migrations,
    current_version,
    schema_migrations,
)


@pytest.fixture
def blank_engine():
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield engine
    engine.dispose()


def test_apply_creates_sales_table_and_indexes(blank_engine) -> None:
    """The first migration creates the table with its secondary indexes."""

    version = apply_migrations(blank_engine)

    inspector = inspect(blank_engine)
    assert version == MIGRATIONS[-1].version
    assert "sales" in inspector.get_table_names()
    columns = {column["name"] for column in inspector.get_columns("sales")}
    assert columns == {"id", "type", "amount", "date", "category", "created_at", "updated_at"}
    indexes = {index["name"] for index in inspector.get_indexes("sales")}
    assert {"idx_sales_date", "idx_sales_category"} <= indexes


def test_apply_is_idempotent(blank_engine) -> None:
    """Re-running migrations skips versions that are already recorded."""

    apply_migrations(blank_engine)
    apply_migrations(blank_engine)

    with blank_engine.connect() as connection:
        versions = connection.execute(select(schema_migrations.c.version)).scalars().all()
    assert versions == [migration.version for migration in MIGRATIONS]


def test_pending_migrations_run_in_version_order(blank_engine) -> None:
    applied = []

    def _record(name):
        def _apply(connection) -> None:
            applied.append(name)

        return _apply

    migrations = [
        Migration(3, "third", _record("third")),
        Migration(2, "second", _record("second")),
        *MIGRATIONS,
    ]

    assert apply_migrations(blank_engine, migrations) == 3
    assert applied == ["second", "third"]
    assert current_version(blank_engine) == 3


def test_failed_migration_raises_and_is_not_recorded(blank_engine) -> None:
    """A broken migration stops start-up and leaves its version unapplied."""

    def _broken(connection) -> None:
        connection.execute(text("ALTER TABLE missing_table ADD COLUMN note TEXT"))

    with pytest.raises(MigrationError):
        apply_migrations(blank_engine, [*MIGRATIONS, Migration(2, "broken", _broken)])

    assert current_version(blank_engine) == 1


def test_duplicate_versions_are_rejected(blank_engine) -> None:
    noop = MIGRATIONS[0].apply

    with pytest.raises(MigrationError):
        apply_migrations(blank_engine, [Migration(1, "a", noop), Migration(1, "b", noop)])


def test_current_version_of_empty_database_is_zero(blank_engine) -> None:
    assert current_version(blank_engine) == 0
