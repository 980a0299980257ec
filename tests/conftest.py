"""Mini README: Shared fixtures backed by an in-memory SQLite database.

Each test receives a fresh database: the engine uses a single shared
connection, migrations are applied, and the store and FastAPI client are
built on top of it through an explicit ``AppContext``.
"""

from __future__ import annotations

from typing import Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine

from salestracker.configuration import TrackerSettings
from salestracker.context import AppContext, build_context
from salestracker.interface import create_application
from salestracker.storage import EntryStore


@pytest.fixture
def settings() -> TrackerSettings:
    return TrackerSettings(_env_file=None, database_url="sqlite:///:memory:")


@pytest.fixture
def context(settings: TrackerSettings) -> Iterator[AppContext]:
    context = build_context(settings)
    yield context
    context.close()


@pytest.fixture
def engine(context: AppContext) -> Engine:
    return context.engine


@pytest.fixture
def store(context: AppContext) -> EntryStore:
    return context.store


@pytest.fixture
def client(context: AppContext) -> TestClient:
    return TestClient(create_application(context))
