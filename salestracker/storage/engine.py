"""Mini README: Engine construction from ``TrackerSettings``.

Server databases get a bounded ``QueuePool`` sized by the settings. SQLite
URLs are accepted for local runs and tests; an in-memory SQLite database is
bound to a single shared connection so every request sees the same data.
"""

from __future__ import annotations

from typing import Any, Dict

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

from ..configuration import TrackerSettings
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

_IN_MEMORY_DATABASES = {None, "", ":memory:"}


def create_engine_from_settings(settings: TrackerSettings) -> Engine:
    """Create the process-wide engine and its connection pool."""

    url = settings.sqlalchemy_url
    options: Dict[str, Any] = {}
    if url.get_backend_name() == "sqlite":
        options["connect_args"] = {"check_same_thread": False}
        if url.database in _IN_MEMORY_DATABASES:
            options["poolclass"] = StaticPool
    else:
        options["pool_size"] = settings.pool_size
        options["max_overflow"] = settings.max_overflow
        options["pool_pre_ping"] = True

    engine = create_engine(url, **options)
    LOGGER.info("Database engine created for %s", url.render_as_string(hide_password=True))
    return engine
