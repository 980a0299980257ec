"""Mini README: Explicit application context shared by the API and the store.

``build_context`` reads settings, creates the pooled engine, brings the schema
up to date and wires the ``EntryStore``. The resulting ``AppContext`` is
passed to ``create_application`` instead of living in module globals, so
tests can hand in an in-memory database.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from sqlalchemy.engine import Engine

from .configuration import TrackerSettings, get_settings
from .logging_utils import get_logger
from .storage import EntryStore, apply_migrations, create_engine_from_settings

LOGGER = get_logger(__name__)


@dataclass
class AppContext:
    """Process-wide collaborators created once at start-up."""

    settings: TrackerSettings
    engine: Engine
    store: EntryStore

    def close(self) -> None:
        """Release every pooled connection."""

        self.engine.dispose()
        LOGGER.debug("Connection pool disposed")


def build_context(settings: Optional[TrackerSettings] = None, *, migrate: bool = True) -> AppContext:
    """Create the engine, apply migrations and return the wired context.

    Raises ``MigrationError`` when the schema cannot be applied; callers treat
    that as fatal.
    """

    settings = settings or get_settings()
    engine = create_engine_from_settings(settings)
    if migrate:
        try:
            apply_migrations(engine)
        except Exception:
            engine.dispose()
            raise
    return AppContext(settings=settings, engine=engine, store=EntryStore(engine))
