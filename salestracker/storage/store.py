"""Mini README: Durable CRUD and analytics for ledger entries.

Structure:
    * StoreError - wraps driver failures with an operation tag.
    * EntryStore - create, list, update, delete and analytics over ``sales``.

Each operation borrows one pooled connection through ``engine.begin()``, so
it runs as a single transaction and the connection is always returned, even
on error. Nothing is retried. Updating or deleting an id that does not exist
affects zero rows and is reported as success. Amounts are rounded to cents
before binding so SQLite keeps the same values PostgreSQL would.
"""

from __future__ import annotations

import math
from contextlib import contextmanager
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterator, List, Optional

from sqlalchemy import Select, delete, func, insert, select, update
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from ..ledger import AnalyticsSummary, Entry, EntryKind, summarise
from ..logging_utils import get_logger
from .schema import sales

LOGGER = get_logger(__name__)

_CENT = Decimal("0.01")


def _column_amount(amount: Optional[float]) -> Optional[float]:
    """Round to cents the way PostgreSQL stores NUMERIC(10,2), on every engine."""

    if amount is None or not math.isfinite(amount):
        return amount
    return float(Decimal(str(amount)).quantize(_CENT, rounding=ROUND_HALF_UP))


def aggregate_query(start: datetime, end: datetime) -> Select:
    """Single-statement summary using the engine's PERCENTILE_CONT aggregate."""

    return select(
        func.coalesce(func.sum(sales.c.amount), 0),
        func.coalesce(func.avg(sales.c.amount), 0),
        func.count(),
        func.percentile_cont(0.5).within_group(sales.c.amount),
        func.percentile_cont(0.9).within_group(sales.c.amount),
    ).where(sales.c.date.between(start, end))


class StoreError(RuntimeError):
    """A store operation failed inside the database engine."""

    def __init__(self, operation: str, error: Exception) -> None:
        super().__init__(f"{operation}: {error}")
        self.operation = operation


class EntryStore:
    """Persist entries in the ``sales`` table."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    @contextmanager
    def _transaction(self, operation: str) -> Iterator[Connection]:
        try:
            with self._engine.begin() as connection:
                yield connection
        except SQLAlchemyError as error:
            LOGGER.error("%s failed: %s", operation, error)
            raise StoreError(operation, error) from error

    def create_entry(self, entry: Entry) -> Entry:
        """Insert ``entry`` and return a copy carrying the generated id."""

        with self._transaction("store.create") as connection:
            result = connection.execute(
                insert(sales).values(
                    type=entry.kind_value,
                    amount=_column_amount(entry.amount),
                    date=entry.occurred_at,
                    category=entry.category,
                )
            )
            entry_id = result.inserted_primary_key[0]
        LOGGER.debug("Stored entry %s", entry_id)
        return entry.with_id(int(entry_id))

    def list_entries(self) -> List[Entry]:
        """Return every entry, most recent ``occurred_at`` first."""

        query = select(
            sales.c.id, sales.c.type, sales.c.amount, sales.c.date, sales.c.category
        ).order_by(sales.c.date.desc(), sales.c.id.desc())
        with self._transaction("store.list") as connection:
            rows = connection.execute(query).all()
        return [
            Entry(
                id=row.id,
                kind=EntryKind(row.type),
                amount=float(row.amount),
                occurred_at=row.date,
                category=row.category,
            )
            for row in rows
        ]

    def update_entry(self, entry: Entry) -> None:
        """Overwrite every mutable field of the row matching ``entry.id``."""

        statement = (
            update(sales)
            .where(sales.c.id == entry.id)
            .values(
                type=entry.kind_value,
                amount=_column_amount(entry.amount),
                date=entry.occurred_at,
                category=entry.category,
                updated_at=func.now(),
            )
        )
        with self._transaction("store.update") as connection:
            result = connection.execute(statement)
        LOGGER.debug("Update of entry %s touched %s rows", entry.id, result.rowcount)

    def delete_entry(self, entry_id: int) -> None:
        """Remove the row matching ``entry_id``."""

        with self._transaction("store.delete") as connection:
            result = connection.execute(delete(sales).where(sales.c.id == entry_id))
        LOGGER.debug("Delete of entry %s touched %s rows", entry_id, result.rowcount)

    def analytics(self, start: datetime, end: datetime) -> AnalyticsSummary:
        """Summarise amounts of entries with ``start <= occurred_at <= end``."""

        with self._transaction("store.analytics") as connection:
            if connection.dialect.name == "postgresql":
                row = connection.execute(aggregate_query(start, end)).one()
                return _summary_from_row(*row)
            amounts = connection.execute(
                select(sales.c.amount)
                .where(sales.c.date.between(start, end))
                .order_by(sales.c.amount)
            ).scalars().all()
        return summarise(amounts)


def _summary_from_row(total, average, count, median, percentile90) -> AnalyticsSummary:
    if not count:
        return AnalyticsSummary()
    return AnalyticsSummary(
        sum=float(total),
        average=float(average),
        count=int(count),
        median=float(median),
        percentile90=float(percentile90),
    )
