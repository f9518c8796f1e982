"""
Search analytics entities.

History rows are append-only; aggregates are upserted per unique query.
"""

from datetime import UTC, date, datetime

from pydantic import BaseModel, Field


class SearchHistoryRecord(BaseModel):
    """A single executed search."""

    id: int | None = None
    query: str
    results: int = 0
    clicked_result: str | None = None
    searched_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class SearchAnalyticsAggregate(BaseModel):
    """Rollup of every search for one exact (sanitized) query."""

    query: str
    search_count: int = 0
    click_count: int = 0
    last_searched: datetime
    avg_results: float = 0.0

    @property
    def click_through_rate(self) -> float:
        if self.search_count <= 0:
            return 0.0
        return self.click_count / self.search_count


class ViewedContent(BaseModel):
    """Project or blog ranked by view count."""

    id: str
    title: str
    slug: str
    views: int = 0


class SearchTrendPoint(BaseModel):
    """Number of searches on one day."""

    day: date
    count: int = 0
