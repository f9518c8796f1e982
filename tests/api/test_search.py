"""Tests for search endpoints."""

from datetime import UTC, datetime

import pytest
from fastapi.testclient import TestClient

from folio.api.dependencies import get_search_limiter, get_search_use_case
from folio.application.use_cases import SearchContentUseCase
from folio.config import reset_settings
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
from folio.core.services import RateLimitConfig, RateLimiter
from folio.infrastructure.ratelimit import InMemoryRateLimitStore

NOW = datetime(2026, 3, 15, 12, 0, tzinfo=UTC)


@pytest.fixture
def use_case(app, search_service, recorder):
    use_case = SearchContentUseCase(search_service=search_service, recorder=recorder)
    app.dependency_overrides[get_search_use_case] = lambda: use_case
    return use_case


@pytest.fixture
def tight_limit(app):
    """Allow two searches per window."""
    limiter = RateLimiter(RateLimitConfig(max_requests=2, window_ms=60_000), InMemoryRateLimitStore())
    app.dependency_overrides[get_search_limiter] = lambda: limiter
    return limiter


class TestSearchEndpoint:
    """Tests for GET /api/search."""

    def test_response_shape(self, client: TestClient, use_case, search_service):
        """Results are camelCase and carry no scores or bodies."""
        search_service.search.return_value = SearchResultPage(
            query="react",
            category=SearchCategory.ALL,
            page=1,
            limit=20,
            total=4,
            total_pages=1,
            projects=[
                Project(
                    id="p1",
                    title="React Dashboard",
                    slug="react-dashboard",
                    content="long body",
                    tech_stack=["React"],
                    tags=[TagRef(name="Frontend")],
                    created_at=NOW,
                )
            ],
            blogs=[Blog(id="b1", title="Hooks", slug="hooks", read_time=3, created_at=NOW)],
            images=[Image(id="i1", url="/r.png", alt="React logo", created_at=NOW)],
            tags=[Tag(id="t1", name="react", slug="react", created_at=NOW)],
        )

        response = client.get("/api/search?q=react")

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 4
        assert data["page"] == 1
        assert data["totalPages"] == 1
        assert data["category"] == "all"

        project = data["results"]["projects"][0]
        assert project["type"] == "project"
        assert project["techStack"] == ["React"]
        assert project["url"] == "/projects/react-dashboard"
        assert "content" not in project
        assert "score" not in project

        assert data["results"]["blogs"][0]["readTime"] == 3
        assert data["results"]["images"][0]["title"] == "React logo"
        assert data["results"]["tags"][0]["url"] == "/tags/react"

    def test_passes_parameters(self, client: TestClient, use_case, search_service):
        response = client.get("/api/search?q=%3Creact%3E&category=blogs&page=2&limit=5")

        assert response.status_code == 200
        search_service.search.assert_awaited_once_with(
            query="react", category=SearchCategory.BLOGS, page=2, limit=5
        )

    def test_query_alias(self, client: TestClient, use_case, search_service):
        """The query parameter is accepted when q is absent."""
        response = client.get("/api/search?query=vue")

        assert response.status_code == 200
        assert search_service.search.await_args.kwargs["query"] == "vue"

    def test_records_analytics(self, client: TestClient, use_case, recorder):
        client.get("/api/search?q=react")
        recorder.record.assert_called_once_with("react", 0)

    def test_sets_rate_limit_headers(self, client: TestClient, use_case):
        response = client.get("/api/search?q=react")

        assert response.headers["X-RateLimit-Limit"] == "60"
        assert response.headers["X-RateLimit-Remaining"] == "59"
        assert "X-RateLimit-Reset" in response.headers


class TestSearchValidation:
    """Tests for rejected search parameters."""

    @pytest.mark.parametrize(
        "params",
        [
            "",
            "?q=",
            "?q=%20%20%20",
            "?q=" + "a" * 201,
            "?q=react&category=videos",
            "?q=react&page=0",
            "?q=react&limit=51",
            "?q=react&limit=abc",
        ],
    )
    def test_invalid_parameters(self, client: TestClient, use_case, search_service, params):
        response = client.get(f"/api/search{params}")

        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "Invalid search parameters"
        assert data["errorCode"] == "INVALID_SEARCH_PARAMETERS"
        assert data["path"] == "/api/search"
        assert data["hint"]
        assert isinstance(data["details"], list)
        search_service.search.assert_not_awaited()

    def test_details_name_the_field(self, client: TestClient, use_case):
        data = client.get("/api/search?q=react&limit=500").json()
        assert data["details"][0]["field"] == "limit"

    def test_query_that_sanitizes_to_nothing(self, client: TestClient, use_case, search_service):
        """Passes validation and reaches the search as an empty query."""
        response = client.get("/api/search?q=%3C%3E")

        assert response.status_code == 200
        assert response.json()["total"] == 0
        assert search_service.search.await_args.kwargs["query"] == ""


class TestSearchRateLimit:
    """Tests for search rate limiting."""

    def test_over_limit(self, client: TestClient, use_case, tight_limit):
        assert client.get("/api/search?q=a").status_code == 200
        assert client.get("/api/search?q=a").status_code == 200

        response = client.get("/api/search?q=a")

        assert response.status_code == 429
        assert int(response.headers["Retry-After"]) > 0
        assert response.headers["X-RateLimit-Remaining"] == "0"
        data = response.json()
        assert data["errorCode"] == "RATE_LIMITED"
        assert data["error"] == "Too many requests. Please try again later."

    def test_invalid_requests_count(self, client: TestClient, use_case, tight_limit):
        """The limit applies before parameter validation."""
        client.get("/api/search")
        client.get("/api/search?limit=0")

        assert client.get("/api/search?q=a").status_code == 429

    def test_clients_are_separate(self, client: TestClient, use_case, tight_limit):
        for _ in range(3):
            client.get("/api/search?q=a", headers={"X-Forwarded-For": "198.51.100.1"})

        response = client.get("/api/search?q=a", headers={"X-Forwarded-For": "198.51.100.2, 10.0.0.1"})

        assert response.status_code == 200

    def test_disabled(self, client: TestClient, use_case, tight_limit, monkeypatch):
        monkeypatch.setenv("RATE_LIMIT_ENABLED", "false")
        reset_settings()

        statuses = {client.get("/api/search?q=a").status_code for _ in range(5)}

        assert statuses == {200}


class TestSearchRateLimitStatus:
    """Tests for GET /api/search/rate-limit."""

    def test_reports_without_counting(self, client: TestClient, use_case, tight_limit):
        client.get("/api/search?q=a")

        first = client.get("/api/search/rate-limit").json()
        second = client.get("/api/search/rate-limit").json()

        assert first == second
        assert first["enabled"] is True
        assert first["limit"] == 2
        assert first["remaining"] == 1
        assert first["reset"] > 0

    def test_exhausted_budget(self, client: TestClient, use_case, tight_limit):
        for _ in range(3):
            client.get("/api/search?q=a")

        assert client.get("/api/search/rate-limit").json()["remaining"] == 0
        assert client.get("/api/search?q=a").status_code == 429

    def test_per_client(self, client: TestClient, use_case, tight_limit):
        client.get("/api/search?q=a", headers={"X-Real-IP": "203.0.113.9"})

        other = client.get("/api/search/rate-limit", headers={"X-Real-IP": "203.0.113.10"})

        assert other.json()["remaining"] == 2


class TestSearchFailures:
    """Tests for server-side failures."""

    def test_search_error(self, client: TestClient, use_case, search_service):
        search_service.search.side_effect = SearchError(reason="database is locked")

        response = client.get("/api/search?q=react")

        assert response.status_code == 500
        data = response.json()
        assert data["errorCode"] == "SEARCH_FAILED"
        assert data["error"] == "An error occurred while searching. Please try again."
        assert data["details"] is None

    def test_unexpected_error_reported_as_search_failure(
        self, client: TestClient, use_case, search_service
    ):
        search_service.search.side_effect = RuntimeError("boom")

        response = client.get("/api/search?q=react")

        assert response.status_code == 500
        data = response.json()
        assert data["errorCode"] == "SEARCH_FAILED"
        assert data["error"] == "An error occurred while searching. Please try again."
        assert "boom" not in response.text

    def test_response_mapping_failure(self, client: TestClient, use_case, monkeypatch):
        def broken(result):
            raise KeyError("projects")

        monkeypatch.setattr(use_case, "to_response", broken)

        response = client.get("/api/search?q=react")

        assert response.status_code == 500
        assert response.json()["errorCode"] == "SEARCH_FAILED"

    def test_other_routes_keep_internal_error(self, app, client: TestClient):
        async def explode():
            raise RuntimeError("boom")

        app.add_api_route("/explode", explode)

        response = client.get("/explode")

        assert response.status_code == 500
        assert response.json()["errorCode"] == "INTERNAL_ERROR"
        assert "boom" not in response.text
