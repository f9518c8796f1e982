"""
Abstract interfaces for storage providers.

Defines contracts for content and search analytics stores.
"""

from abc import ABC, abstractmethod
from datetime import datetime

from folio.core.entities.analytics import (
    SearchAnalyticsAggregate,
    SearchHistoryRecord,
    SearchTrendPoint,
    ViewedContent,
)
from folio.core.entities.content import Blog, Image, Project, Tag


class IContentStore(ABC):
    """
    Abstract interface for content storage.

    Search methods match the query as a case-insensitive substring and
    return only publicly visible rows, newest first.
    """

    # Search operations
    @abstractmethod
    async def search_projects(self, query: str, limit: int) -> list[Project]:
        """Published projects matching title, description, content, tags or tech stack."""
        pass

    @abstractmethod
    async def search_blogs(self, query: str, limit: int) -> list[Blog]:
        """Published blogs matching title, excerpt, content or tags."""
        pass

    @abstractmethod
    async def search_images(self, query: str, limit: int) -> list[Image]:
        """Visible images matching alt text or caption."""
        pass

    @abstractmethod
    async def search_tags(self, query: str, limit: int) -> list[Tag]:
        """Tags matching name or slug."""
        pass

    # View counters
    @abstractmethod
    async def increment_project_views(self, project_id: str) -> None:
        """Increment a project's view count."""
        pass

    @abstractmethod
    async def increment_blog_views(self, blog_id: str) -> None:
        """Increment a blog's view count."""
        pass

    @abstractmethod
    async def top_viewed_projects(self, limit: int = 5) -> list[ViewedContent]:
        """Published projects with the most views."""
        pass

    @abstractmethod
    async def top_viewed_blogs(self, limit: int = 5) -> list[ViewedContent]:
        """Published blogs with the most views."""
        pass


class IAnalyticsStore(ABC):
    """
    Abstract interface for search analytics storage.

    History is append-only; aggregates are keyed by exact query text.
    """

    @abstractmethod
    async def add_history(self, query: str, results: int) -> SearchHistoryRecord:
        """Append one search history record."""
        pass

    @abstractmethod
    async def upsert_aggregate(
        self,
        query: str,
        results: int,
        searched_at: datetime,
    ) -> SearchAnalyticsAggregate:
        """Create or bump the rollup for a query and recompute its average."""
        pass

    @abstractmethod
    async def get_aggregate(self, query: str) -> SearchAnalyticsAggregate | None:
        """Get the rollup for an exact query."""
        pass

    @abstractmethod
    async def record_click(self, query: str, clicked_result: str) -> SearchAnalyticsAggregate:
        """Count a result click and attach it to unclicked history rows."""
        pass

    @abstractmethod
    async def count_searches(self, since: datetime | None = None) -> int:
        """Number of history records, optionally since a point in time."""
        pass

    @abstractmethod
    async def count_unique_queries(self) -> int:
        """Number of distinct aggregated queries."""
        pass

    @abstractmethod
    async def total_clicks(self) -> int:
        """Sum of click counts over all aggregates."""
        pass

    @abstractmethod
    async def top_searches(self, limit: int = 15) -> list[SearchAnalyticsAggregate]:
        """Aggregates ordered by search count."""
        pass

    @abstractmethod
    async def zero_result_searches(
        self,
        limit: int = 10,
        since: datetime | None = None,
    ) -> list[SearchHistoryRecord]:
        """Most recent distinct queries that returned nothing."""
        pass

    @abstractmethod
    async def recent_searches(
        self,
        limit: int = 20,
        since: datetime | None = None,
    ) -> list[SearchHistoryRecord]:
        """Most recent history records."""
        pass

    @abstractmethod
    async def daily_search_counts(self, since: datetime) -> list[SearchTrendPoint]:
        """Searches per UTC day since a point in time (days with searches only)."""
        pass
