"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization.
These are the ONLY contracts between use cases and API layer.
Fields serialize as camelCase.
"""

from datetime import date, datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model that exports camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Search results


class TagNameResponse(CamelModel):
    """Tag attached to a project or blog result."""

    name: str


class ProjectResultResponse(CamelModel):
    """Project search hit."""

    id: str
    type: Literal["project"] = "project"
    title: str
    slug: str
    description: str | None = None
    tech_stack: list[str] = Field(default_factory=list)
    featured: bool = False
    views: int = 0
    tags: list[TagNameResponse] = Field(default_factory=list)
    url: str
    created_at: datetime


class BlogResultResponse(CamelModel):
    """Blog search hit."""

    id: str
    type: Literal["blog"] = "blog"
    title: str
    slug: str
    excerpt: str | None = None
    featured: bool = False
    views: int = 0
    read_time: int | None = None
    tags: list[TagNameResponse] = Field(default_factory=list)
    url: str
    published_at: datetime | None = None
    created_at: datetime


class ImageResultResponse(CamelModel):
    """Image search hit; title and description mirror alt and caption."""

    id: str
    type: Literal["image"] = "image"
    url: str
    alt: str | None = None
    caption: str | None = None
    title: str | None = None
    description: str | None = None
    width: int | None = None
    height: int | None = None
    created_at: datetime


class TagResultResponse(CamelModel):
    """Tag search hit."""

    id: str
    type: Literal["tag"] = "tag"
    name: str
    slug: str
    title: str
    url: str
    created_at: datetime


class SearchResultsResponse(CamelModel):
    """One page of hits grouped by category."""

    projects: list[ProjectResultResponse] = Field(default_factory=list)
    blogs: list[BlogResultResponse] = Field(default_factory=list)
    images: list[ImageResultResponse] = Field(default_factory=list)
    tags: list[TagResultResponse] = Field(default_factory=list)


class SearchResponse(CamelModel):
    """Response for ranked content search."""

    results: SearchResultsResponse
    total: int = Field(..., description="Matches across all categories before pagination")
    page: int
    total_pages: int
    category: str


# Rate limiting


class RateLimitStatusResponse(CamelModel):
    """Remaining request budget for the calling client."""

    enabled: bool
    limit: int
    remaining: int
    reset: int = Field(..., description="Window end, epoch milliseconds")


# Click tracking


class TrackClickResponse(CamelModel):
    """Response for click tracking."""

    success: bool = True


# Analytics


class SearchAggregateResponse(CamelModel):
    """Rollup for one query."""

    query: str
    search_count: int
    click_count: int
    last_searched: datetime
    avg_results: float


class SearchHistoryResponse(CamelModel):
    """One executed search."""

    id: int | None = None
    query: str
    results: int
    clicked_result: str | None = None
    searched_at: datetime


class ViewedContentResponse(CamelModel):
    """Project or blog ranked by views."""

    id: str
    title: str
    slug: str
    views: int


class SearchTrendPointResponse(CamelModel):
    """Searches on one day."""

    day: date = Field(..., alias="date")
    count: int


class AnalyticsSummaryResponse(CamelModel):
    """Search analytics dashboard data."""

    total_searches: int
    unique_queries: int
    total_clicks: int
    average_ctr: float = Field(
        ...,
        alias="averageCTR",
        description="Mean click-through rate of the top searches, in percent",
    )
    top_searches: list[SearchAggregateResponse] = Field(default_factory=list)
    zero_result_searches: list[SearchHistoryResponse] = Field(default_factory=list)
    recent_searches: list[SearchHistoryResponse] = Field(default_factory=list)
    top_viewed_projects: list[ViewedContentResponse] = Field(default_factory=list)
    top_viewed_blogs: list[ViewedContentResponse] = Field(default_factory=list)
    search_trend: list[SearchTrendPointResponse] | None = None


# Health


class ComponentHealthResponse(CamelModel):
    """Health of one backing component."""

    name: str
    available: bool
    latency_ms: float | None = None
    error: str | None = None


class HealthResponse(CamelModel):
    """Health check response."""

    status: str
    version: str = "1.0.0"
    uptime_seconds: float
    database: ComponentHealthResponse | None = None
    rate_limit_keys: int | None = None
    pending_analytics: int | None = None


# Errors


class ErrorResponse(CamelModel):
    """Standardized error response DTO.

    Every error response includes:
    - error: human-readable description
    - error_code: machine-readable code (e.g. RATE_LIMITED)
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error: str = Field(..., description="Human-readable error description")
    error_code: str = Field(..., description="Machine-readable error code")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    details: Any = Field(default=None, description="Additional details")
    path: str | None = Field(default=None, description="Request path")
