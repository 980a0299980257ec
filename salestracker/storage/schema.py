"""Mini README: Table definitions for the sales tracker database.

Structure:
    * UTCDateTime - timestamp type normalising every value to UTC.
    * sales - one row per income or expense entry.
    * schema_migrations - bookkeeping for applied migration versions.

PostgreSQL stores ``date`` as ``TIMESTAMPTZ``. SQLite has no timezone aware
type, so values are written as naive UTC text and tagged with UTC again when
read; range comparisons stay correct because every stored value shares the
same offset.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    Index,
    Integer,
    MetaData,
    Numeric,
    String,
    Table,
    func,
)
from sqlalchemy.types import TypeDecorator


class UTCDateTime(TypeDecorator):
    """Timezone aware timestamp that always round-trips as UTC."""

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: Optional[datetime], dialect) -> Optional[datetime]:
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        value = value.astimezone(timezone.utc)
        if dialect.name == "sqlite":
            return value.replace(tzinfo=None)
        return value

    def process_result_value(self, value: Optional[datetime], dialect) -> Optional[datetime]:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


metadata = MetaData()

sales = Table(
    "sales",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("type", String(10), nullable=False),
    Column("amount", Numeric(10, 2, asdecimal=False), nullable=False),
    Column("date", UTCDateTime(), nullable=False),
    Column("category", String(255), nullable=False),
    Column("created_at", UTCDateTime(), server_default=func.now()),
    Column("updated_at", UTCDateTime(), server_default=func.now()),
    CheckConstraint("type IN ('income', 'expense')", name="sales_type_check"),
    CheckConstraint("amount > 0", name="sales_amount_check"),
    # NUMERIC(10,2) overflow; SQLite does not enforce the precision itself.
    CheckConstraint("amount < 100000000", name="sales_amount_range_check"),
    Index("idx_sales_date", "date"),
    Index("idx_sales_category", "category"),
    # SQLite would otherwise hand out the id of a deleted last row again.
    sqlite_autoincrement=True,
)

schema_migrations = Table(
    "schema_migrations",
    metadata,
    Column("version", Integer, primary_key=True, autoincrement=False),
    Column("name", String(255), nullable=False),
    Column("applied_at", UTCDateTime(), nullable=False),
)
