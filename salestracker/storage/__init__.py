"""Mini README: Relational persistence for ledger entries.

Exposes the SQLAlchemy table definitions, the engine factory that applies
the pool settings, the versioned migration runner and ``EntryStore``, the
only component that issues SQL against the ``sales`` table.
"""

from .engine import create_engine_from_settings
from .migrations import MIGRATIONS, Migration, MigrationError, apply_migrations, current_version
from .schema import metadata, sales, schema_migrations
from .store import EntryStore, StoreError

__all__ = [
    "EntryStore",
    "MIGRATIONS",
    "Migration",
    "MigrationError",
    "StoreError",
    "apply_migrations",
    "create_engine_from_settings",
    "current_version",
    "metadata",
    "sales",
    "schema_migrations",
]
