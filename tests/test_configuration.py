"""Mini README: Tests for environment driven settings and engine creation."""

from __future__ import annotations

from sqlalchemy.pool import QueuePool, StaticPool

from salestracker.configuration import TrackerSettings
from salestracker.storage import create_engine_from_settings


def test_database_fields_build_postgres_url(monkeypatch) -> None:
    """Without an override the URL is assembled from the individual fields."""

    monkeypatch.delenv("SALESTRACKER_DATABASE_URL", raising=False)
    monkeypatch.setenv("SALESTRACKER_DATABASE_HOST", "db.internal")
    monkeypatch.setenv("SALESTRACKER_DATABASE_PORT", "6543")
    monkeypatch.setenv("SALESTRACKER_DATABASE_USER", "tracker")
    monkeypatch.setenv("SALESTRACKER_DATABASE_PASSWORD", "secret")
    monkeypatch.setenv("SALESTRACKER_DATABASE_NAME", "ledger")

    url = TrackerSettings(_env_file=None).sqlalchemy_url

    assert url.drivername == "postgresql+psycopg"
    assert (url.host, url.port, url.username, url.database) == ("db.internal", 6543, "tracker", "ledger")
    assert url.password == "secret"


def test_environment_overrides_port_and_level(monkeypatch) -> None:
    monkeypatch.setenv("SALESTRACKER_INTERFACE_PORT", "9090")
    monkeypatch.setenv("SALESTRACKER_LOG_LEVEL", "debug")

    settings = TrackerSettings(_env_file=None)

    assert settings.interface_port == 9090
    assert settings.log_level == "DEBUG"


def test_database_url_override_wins() -> None:
    settings = TrackerSettings(_env_file=None, database_url="sqlite:///tracker.db")

    assert settings.sqlalchemy_url.get_backend_name() == "sqlite"
    assert settings.sqlalchemy_url.database == "tracker.db"


def test_static_directory_defaults_to_packaged_client() -> None:
    settings = TrackerSettings(_env_file=None)

    assert (settings.static_directory / "index.html").is_file()


def test_in_memory_sqlite_shares_one_connection() -> None:
    engine = create_engine_from_settings(
        TrackerSettings(_env_file=None, database_url="sqlite:///:memory:")
    )
    try:
        assert isinstance(engine.pool, StaticPool)
    finally:
        engine.dispose()


def test_file_sqlite_uses_default_pool(tmp_path) -> None:
    engine = create_engine_from_settings(
        TrackerSettings(_env_file=None, database_url=f"sqlite:///{tmp_path / 'sales.db'}")
    )
    try:
        assert not isinstance(engine.pool, StaticPool)
    finally:
        engine.dispose()


def test_server_database_gets_bounded_queue_pool() -> None:
    """Pool sizing from settings applies to server databases."""

    settings = TrackerSettings(
        _env_file=None,
        database_url="postgresql+psycopg://user:pw@localhost/sales",
        pool_size=3,
        max_overflow=2,
    )
    engine = create_engine_from_settings(settings)
    try:
        assert isinstance(engine.pool, QueuePool)
        assert engine.pool.size() == 3
    finally:
        engine.dispose()
