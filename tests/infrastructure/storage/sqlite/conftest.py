"""Pytest fixtures for SQLite storage tests."""

from collections.abc import AsyncGenerator
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from folio.config import get_settings
from folio.infrastructure.storage.sqlite import (
    SQLiteAnalyticsStore,
    SQLiteContentStore,
    close_pool,
)
from folio.infrastructure.storage.sqlite.migrations import initialize_database


@pytest.fixture
def temp_db_path(tmp_path: Path) -> Path:
    """Create a temporary database path."""
    return tmp_path / "test.db"


@pytest.fixture
def mock_settings(temp_db_path: Path):
    """Mock settings with temp database path."""
    mock = MagicMock()
    mock.storage.db_path = temp_db_path
    mock.storage.pool_size = 2
    mock.storage.busy_timeout = 5000
    return mock


@pytest.fixture
async def migrated_db() -> AsyncGenerator[Path, None]:
    """Apply the real migrations to the configured database."""
    db_path = get_settings().storage.db_path
    await initialize_database(db_path)
    yield db_path
    await close_pool()


@pytest.fixture
def content_store(migrated_db: Path) -> SQLiteContentStore:
    return SQLiteContentStore()


@pytest.fixture
def analytics_store(migrated_db: Path) -> SQLiteAnalyticsStore:
    return SQLiteAnalyticsStore()
