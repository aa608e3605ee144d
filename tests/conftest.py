"""Pytest configuration and fixtures."""

import os

# app.main builds its application at import time and refuses to start
# without a database location and name.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("DB_NAME", "pocket_ledger_import.db")

from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.core.database import Database
from app.crud.transaction import TransactionStore
from app.main import create_app


class StepClock:
    """Deterministic clock: every call is one second after the previous one."""

    def __init__(self, start=None):
        self.current = start or datetime(2024, 1, 1, tzinfo=timezone.utc)

    def __call__(self):
        self.current = self.current + timedelta(seconds=1)
        return self.current


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        DATABASE_URL="sqlite+aiosqlite://",
        DB_NAME=str(tmp_path / "ledger.db"),
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest_asyncio.fixture
async def database(settings):
    db = Database.from_settings(settings)
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def store(database):
    return TransactionStore(database, clock=StepClock())
