"""Fixtures for API tests."""

from collections.abc import Generator
from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from folio.api.main import create_app
from folio.core.entities import SearchCategory, SearchResultPage
from folio.core.services import AnalyticsRecorder, SearchService

NOW = datetime(2026, 3, 15, 12, 0, tzinfo=UTC)


@pytest.fixture
def app() -> FastAPI:
    """Fresh application so dependency overrides stay per test."""
    return create_app()


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    """Test client with the application lifespan running."""
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c


@pytest.fixture
def search_service():
    """Search service double returning an empty page."""
    service = MagicMock(spec=SearchService)
    service.search = AsyncMock(
        return_value=SearchResultPage(
            query="",
            category=SearchCategory.ALL,
            page=1,
            limit=20,
            total=0,
            total_pages=0,
        )
    )
    return service


@pytest.fixture
def recorder():
    return MagicMock(spec=AnalyticsRecorder)
