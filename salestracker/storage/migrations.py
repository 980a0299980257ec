"""Mini README: Versioned schema migrations applied at start-up.

Structure:
    * Migration - version, name and a callable that receives a connection.
    * MIGRATIONS - the ordered migration history of the project.
    * apply_migrations - runs every pending migration, each in its own
      transaction, and records it in ``schema_migrations``.
    * current_version - highest applied version, ``0`` for an empty database.

Running ``apply_migrations`` twice is harmless: applied versions are skipped.
Any failure raises ``MigrationError`` and the caller is expected to abort.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Iterable, Sequence

from sqlalchemy import func, insert, select
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from ..logging_utils import get_logger
from .schema import sales, schema_migrations

LOGGER = get_logger(__name__)


class MigrationError(RuntimeError):
    """Raised when the schema cannot be brought up to date."""


@dataclass(frozen=True)
class Migration:
    """A single schema change identified by a unique version."""

    version: int
    name: str
    apply: Callable[[Connection], None]

    def __str__(self) -> str:
        return f"Migration v{self.version:03d}: {self.name}"


def _create_sales_table(connection: Connection) -> None:
    # Also creates idx_sales_date and idx_sales_category.
    sales.create(connection, checkfirst=True)


MIGRATIONS: Sequence[Migration] = (
    Migration(1, "create sales table", _create_sales_table),
)


def current_version(engine: Engine) -> int:
    """Return the highest applied migration version."""

    with engine.connect() as connection:
        schema_migrations.create(connection, checkfirst=True)
        connection.commit()
        version = connection.execute(select(func.max(schema_migrations.c.version))).scalar()
    return int(version or 0)


def apply_migrations(engine: Engine, migrations: Iterable[Migration] = MIGRATIONS) -> int:
    """Apply pending migrations in version order and return the schema version."""

    ordered = sorted(migrations, key=lambda migration: migration.version)
    versions = [migration.version for migration in ordered]
    if len(set(versions)) != len(versions):
        raise MigrationError(f"Duplicate migration versions: {versions}")

    try:
        with engine.begin() as connection:
            schema_migrations.create(connection, checkfirst=True)
            applied = set(connection.execute(select(schema_migrations.c.version)).scalars())

        for migration in ordered:
            if migration.version in applied:
                continue
            with engine.begin() as connection:
                migration.apply(connection)
                connection.execute(
                    insert(schema_migrations).values(
                        version=migration.version,
                        name=migration.name,
                        applied_at=datetime.now(timezone.utc),
                    )
                )
            LOGGER.info("Applied %s", migration)
    except SQLAlchemyError as error:
        raise MigrationError(f"migrations.apply: {error}") from error

    version = current_version(engine)
    LOGGER.info("Database schema at version %s", version)
    return version
