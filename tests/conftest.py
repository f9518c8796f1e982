"""Pytest configuration and fixtures."""

from collections.abc import Generator
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

import folio.infrastructure.ratelimit as ratelimit_module
import folio.infrastructure.storage.sqlite as sqlite_module
import folio.infrastructure.storage.sqlite.connection as conn_module
from folio.application.services import reset_services
from folio.config import reset_settings
from folio.core.entities import Blog, Image, Project, Tag, TagRef

NOW = datetime(2026, 3, 15, 12, 0, tzinfo=UTC)


def _reset_singletons() -> None:
    reset_settings()
    reset_services()
    conn_module._pool = None
    ratelimit_module._rate_limit_store = None
    sqlite_module._content_store = None
    sqlite_module._analytics_store = None


@pytest.fixture(autouse=True)
def isolated_environment(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[Path, None, None]:
    """Point storage at a temporary directory and reset global singletons."""
    data_dir = tmp_path / "data"
    monkeypatch.setenv("STORAGE_DATA_DIR", str(data_dir))
    monkeypatch.setenv("STORAGE_POOL_SIZE", "2")
    monkeypatch.setenv("RATE_LIMIT_IP_HASH_SALT", "test-salt")
    monkeypatch.setenv("ENVIRONMENT", "development")

    _reset_singletons()
    yield data_dir
    _reset_singletons()


@pytest.fixture
def now() -> datetime:
    """Fixed reference time."""
    return NOW


@pytest.fixture
def sample_project() -> Project:
    """Published, featured project created recently."""
    return Project(
        id="p1",
        title="React Dashboard",
        slug="react-dashboard",
        description="Admin dashboard built with React",
        content="Charts, tables and react hooks.",
        tech_stack=["React", "TypeScript"],
        featured=True,
        published=True,
        views=12,
        tags=[TagRef(name="Frontend", slug="frontend")],
        created_at=NOW - timedelta(days=2),
    )


@pytest.fixture
def sample_blog() -> Blog:
    """Published blog created long ago."""
    return Blog(
        id="b1",
        title="Notes on State Management",
        slug="state-management",
        excerpt="Comparing react context with stores",
        content="A long article body.",
        published=True,
        read_time=7,
        tags=[TagRef(name="React", slug="react")],
        published_at=NOW - timedelta(days=99),
        created_at=NOW - timedelta(days=100),
    )


@pytest.fixture
def sample_image() -> Image:
    """Visible gallery image."""
    return Image(
        id="i1",
        url="/images/react.png",
        alt="React logo",
        caption="Sticker on a laptop",
        width=640,
        height=480,
        created_at=NOW - timedelta(days=60),
    )


@pytest.fixture
def sample_tag() -> Tag:
    """Tag created long ago."""
    return Tag(id="t1", name="react", slug="react", created_at=NOW - timedelta(days=365))
