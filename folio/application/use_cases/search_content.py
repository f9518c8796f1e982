"""
Search Content Use Case.

Sanitizes the query, runs the ranked search and schedules analytics.
"""

import time
from dataclasses import dataclass

from folio.application.dto.requests import SearchRequest
from folio.application.dto.responses import (
    BlogResultResponse,
    ImageResultResponse,
    ProjectResultResponse,
    SearchResponse,
    SearchResultsResponse,
    TagNameResponse,
    TagResultResponse,
)
from folio.application.services import get_analytics_recorder, get_search_service
from folio.config import get_logger
from folio.core.entities import SearchResultPage
from folio.core.services import AnalyticsRecorder, SearchService, sanitize

logger = get_logger(__name__)


@dataclass
class SearchContentResult:
    """Search outcome data transfer object."""

    query: str
    page: SearchResultPage
    took_ms: float


class SearchContentUseCase:
    """
    Use case for ranked search across portfolio content.

    The analytics write is detached; the result is returned without
    waiting for it.
    """

    def __init__(
        self,
        search_service: SearchService | None = None,
        recorder: AnalyticsRecorder | None = None,
    ):
        self._search = search_service
        self._recorder = recorder

    def _get_search(self) -> SearchService:
        if self._search is None:
            self._search = get_search_service()
        return self._search

    def _get_recorder(self) -> AnalyticsRecorder:
        if self._recorder is None:
            self._recorder = get_analytics_recorder()
        return self._recorder

    async def execute(self, request: SearchRequest) -> SearchContentResult:
        """
        Execute search use case.

        Args:
            request: Validated search parameters

        Returns:
            SearchContentResult with the requested page
        """
        query = sanitize(request.query)
        start = time.time()

        page = await self._get_search().search(
            query=query,
            category=request.category,
            page=request.page,
            limit=request.limit,
        )

        took_ms = (time.time() - start) * 1000

        self._get_recorder().record(query, page.total)

        return SearchContentResult(query=query, page=page, took_ms=took_ms)

    def to_response(self, result: SearchContentResult) -> SearchResponse:
        """Convert to API response format."""
        page = result.page
        return SearchResponse(
            results=SearchResultsResponse(
                projects=[
                    ProjectResultResponse(
                        id=p.id,
                        title=p.title,
                        slug=p.slug,
                        description=p.description,
                        tech_stack=p.tech_stack,
                        featured=p.featured,
                        views=p.views,
                        tags=[TagNameResponse(name=t.name) for t in p.tags],
                        url=p.url,
                        created_at=p.created_at,
                    )
                    for p in page.projects
                ],
                blogs=[
                    BlogResultResponse(
                        id=b.id,
                        title=b.title,
                        slug=b.slug,
                        excerpt=b.excerpt,
                        featured=b.featured,
                        views=b.views,
                        read_time=b.read_time,
                        tags=[TagNameResponse(name=t.name) for t in b.tags],
                        url=b.url,
                        published_at=b.published_at,
                        created_at=b.created_at,
                    )
                    for b in page.blogs
                ],
                images=[
                    ImageResultResponse(
                        id=i.id,
                        url=i.url,
                        alt=i.alt,
                        caption=i.caption,
                        title=i.alt,
                        description=i.caption,
                        width=i.width,
                        height=i.height,
                        created_at=i.created_at,
                    )
                    for i in page.images
                ],
                tags=[
                    TagResultResponse(
                        id=t.id,
                        name=t.name,
                        slug=t.slug,
                        title=t.name,
                        url=f"/tags/{t.slug}",
                        created_at=t.created_at,
                    )
                    for t in page.tags
                ],
            ),
            total=page.total,
            page=page.page,
            total_pages=page.total_pages,
            category=page.category.value,
        )
