"""Unit tests for SearchContentUseCase."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from folio.application.dto.requests import SearchRequest
from folio.application.use_cases import SearchContentUseCase
from folio.core.entities import (
    Blog,
    Image,
    Project,
    SearchCategory,
    SearchResultPage,
    Tag,
    TagRef,
)
from folio.core.exceptions import SearchError
from folio.core.services import AnalyticsRecorder, SearchService

NOW = datetime(2026, 3, 15, 12, 0, tzinfo=UTC)


def _page(**buckets) -> SearchResultPage:
    total = sum(len(v) for v in buckets.values())
    return SearchResultPage(
        query="react",
        category=SearchCategory.ALL,
        page=1,
        limit=20,
        total=total,
        total_pages=1 if total else 0,
        **buckets,
    )


@pytest.fixture
def search_service():
    service = MagicMock(spec=SearchService)
    service.search = AsyncMock(return_value=_page())
    return service


@pytest.fixture
def recorder():
    return MagicMock(spec=AnalyticsRecorder)


@pytest.fixture
def use_case(search_service, recorder):
    return SearchContentUseCase(search_service=search_service, recorder=recorder)


class TestSearchContentExecute:
    """Tests for SearchContentUseCase.execute()."""

    @pytest.mark.asyncio
    async def test_sanitizes_before_searching(self, use_case, search_service):
        """Should pass the sanitized query to the search service."""
        request = SearchRequest(query="<react>", category="blogs", page=2, limit=5)

        result = await use_case.execute(request)

        search_service.search.assert_awaited_once_with(
            query="react",
            category=SearchCategory.BLOGS,
            page=2,
            limit=5,
        )
        assert result.query == "react"
        assert result.took_ms >= 0

    @pytest.mark.asyncio
    async def test_records_analytics_with_total(self, use_case, search_service, recorder):
        """Should schedule analytics with the pre-pagination total."""
        search_service.search.return_value = _page(
            projects=[Project(title="React", slug="react")],
            tags=[Tag(name="react", slug="react")],
        )

        await use_case.execute(SearchRequest(query="react"))

        recorder.record.assert_called_once_with("react", 2)

    @pytest.mark.asyncio
    async def test_search_failure_propagates(self, use_case, search_service, recorder):
        """Should not record analytics when the search fails."""
        search_service.search.side_effect = SearchError(reason="boom")

        with pytest.raises(SearchError):
            await use_case.execute(SearchRequest(query="react"))

        recorder.record.assert_not_called()


class TestSearchContentResponse:
    """Tests for SearchContentUseCase.to_response()."""

    @pytest.mark.asyncio
    async def test_response_shape(self, use_case, search_service):
        """Should map every bucket to its result DTO."""
        search_service.search.return_value = _page(
            projects=[
                Project(
                    id="p1",
                    title="React Dashboard",
                    slug="react-dashboard",
                    content="secret body",
                    tech_stack=["React"],
                    tags=[TagRef(name="Frontend", slug="frontend")],
                    created_at=NOW,
                )
            ],
            blogs=[Blog(id="b1", title="Hooks", slug="hooks", read_time=4, created_at=NOW)],
            images=[Image(id="i1", url="/a.png", alt="React logo", caption="cap", created_at=NOW)],
            tags=[Tag(id="t1", name="react", slug="react", created_at=NOW)],
        )

        result = await use_case.execute(SearchRequest(query="react"))
        body = use_case.to_response(result).model_dump(by_alias=True)

        assert body["total"] == 4
        assert body["totalPages"] == 1
        assert body["category"] == "all"

        project = body["results"]["projects"][0]
        assert project["type"] == "project"
        assert project["url"] == "/projects/react-dashboard"
        assert project["techStack"] == ["React"]
        assert project["tags"] == [{"name": "Frontend"}]
        assert "content" not in project
        assert "score" not in project

        blog = body["results"]["blogs"][0]
        assert blog["url"] == "/blogs/hooks"
        assert blog["readTime"] == 4

        image = body["results"]["images"][0]
        assert image["title"] == "React logo"
        assert image["description"] == "cap"

        tag = body["results"]["tags"][0]
        assert tag["title"] == "react"
        assert tag["url"] == "/tags/react"
