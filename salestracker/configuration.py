"""Mini README: Centralised configuration models and helpers for the tracker.

Structure:
    * TrackerSettings - Pydantic settings describing the runtime configuration.
    * get_settings - cached accessor so settings are read once per process.

Usage:
    Values come from ``SALESTRACKER_*`` environment variables or a ``.env``
    file. ``database_url`` overrides the individual database fields and accepts
    any SQLAlchemy URL, which is how tests and local runs point at SQLite.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, validator
from pydantic_settings import BaseSettings
from sqlalchemy.engine import URL, make_url

_DEFAULT_STATIC_DIRECTORY = Path(__file__).parent / "interface" / "static"


class TrackerSettings(BaseSettings):
    """Runtime configuration for the sales tracker service."""

    environment: str = Field(
        "development",
        description="Environment label; only \"development\" runs the server with auto-reload.",
    )
    log_level: str = Field("INFO", description="Root logging level name.")
    interface_host: str = Field(
        "0.0.0.0",
        description="Network interface for the HTTP service to bind to.",
    )
    interface_port: int = Field(
        8080,
        description="Port the HTTP service listens on.",
        ge=1,
        le=65535,
    )
    database_host: str = Field("localhost", description="PostgreSQL host name.")
    database_port: int = Field(5432, ge=1, le=65535)
    database_user: str = Field("postgres")
    database_password: str = Field("postgres")
    database_name: str = Field("sales")
    database_url: Optional[str] = Field(
        None,
        description=(
            "Full SQLAlchemy URL. When set it replaces the individual database"
            " fields, e.g. sqlite:///sales.db for a local single-file store."
        ),
    )
    pool_size: int = Field(5, ge=1, description="Persistent connections kept in the pool.")
    max_overflow: int = Field(10, ge=0, description="Extra connections allowed under load.")
    static_directory: Path = Field(
        _DEFAULT_STATIC_DIRECTORY,
        description="Directory holding the browser client served under /web.",
    )

    class Config:
        env_prefix = "SALESTRACKER_"
        env_file = ".env"
        case_sensitive = False

    @validator("static_directory", pre=True)
    def _expand_path(cls, value: Optional[str | Path]) -> Path:
        """Expand user directories so relative overrides resolve predictably."""

        return Path(value).expanduser().resolve()

    @validator("log_level")
    def _normalise_level(cls, value: str) -> str:
        return value.strip().upper()

    @property
    def reload_enabled(self) -> bool:
        """Whether uvicorn should watch the source tree for changes."""

        return self.environment.strip().lower() == "development"

    @property
    def sqlalchemy_url(self) -> URL:
        """Return the database URL, preferring the explicit override."""

        if self.database_url:
            return make_url(self.database_url)
        return URL.create(
            "postgresql+psycopg",
            username=self.database_user,
            password=self.database_password,
            host=self.database_host,
            port=self.database_port,
            database=self.database_name,
        )


@lru_cache()
def get_settings() -> TrackerSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return TrackerSettings()
