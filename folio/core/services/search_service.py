"""
Search service for ranked content search.

Fans a sanitized query out to every requested content category,
scores each candidate, and cuts one page out of the ranked list.
"""

import asyncio
import math
from collections.abc import Awaitable, Callable, Sequence
from datetime import UTC, datetime

from folio.config import get_logger
from folio.core.entities.search import (
    CATEGORY_ORDER,
    Candidate,
    ScoredCandidate,
    SearchCategory,
    SearchResultPage,
    candidate_category,
)
from folio.core.exceptions import SearchError
from folio.core.interfaces.storage import IContentStore
from folio.core.services.relevance import score

logger = get_logger(__name__)


def rank(scored: Sequence[ScoredCandidate]) -> list[ScoredCandidate]:
    """Order by descending score; equal scores keep their input order."""
    return sorted(scored, key=lambda s: s.score, reverse=True)


def paginate(
    ranked: Sequence[ScoredCandidate],
    query: str,
    category: SearchCategory,
    page: int,
    limit: int,
) -> SearchResultPage:
    """Slice one page out of the ranked list and bucket it by category."""
    total = len(ranked)
    skip = (page - 1) * limit

    result = SearchResultPage(
        query=query,
        category=category,
        page=page,
        limit=limit,
        total=total,
        total_pages=math.ceil(total / limit),
    )

    for item in ranked[skip : skip + limit]:
        bucket = candidate_category(item.candidate)
        getattr(result, bucket.value).append(item.candidate)

    return result


class SearchService:
    """
    Relevance-ranked search across projects, blogs, images and tags.

    Every category query runs concurrently. A failure in any of them
    fails the whole search so that totals stay consistent.
    """

    def __init__(
        self,
        content_store: IContentStore,
        overfetch_factor: int = 2,
        clock: Callable[[], datetime] | None = None,
    ):
        """
        Initialize search service.

        Args:
            content_store: Data-access layer for content
            overfetch_factor: Candidates fetched per category, as a multiple of the page limit
            clock: Returns the current time, used for the recency boost
        """
        self._store = content_store
        self._overfetch_factor = overfetch_factor
        self._clock = clock or (lambda: datetime.now(UTC))

    def _lookups(
        self, category: SearchCategory
    ) -> list[tuple[SearchCategory, Callable[[str, int], Awaitable[Sequence[Candidate]]]]]:
        lookups = {
            SearchCategory.PROJECTS: self._store.search_projects,
            SearchCategory.BLOGS: self._store.search_blogs,
            SearchCategory.IMAGES: self._store.search_images,
            SearchCategory.TAGS: self._store.search_tags,
        }
        return [
            (cat, lookups[cat])
            for cat in CATEGORY_ORDER
            if category in (SearchCategory.ALL, cat)
        ]

    async def fan_out(
        self,
        query: str,
        category: SearchCategory,
        fetch_limit: int,
    ) -> list[Candidate]:
        """
        Query every requested category concurrently.

        Returns:
            Candidates concatenated in category order

        Raises:
            SearchError: If any category lookup fails
        """
        lookups = self._lookups(category)

        try:
            batches = await asyncio.gather(
                *(lookup(query, fetch_limit) for _, lookup in lookups)
            )
        except Exception as e:
            logger.error(
                "search_fanout_failed",
                query=query,
                category=category.value,
                error=str(e),
            )
            raise SearchError(reason=str(e)) from e

        candidates: list[Candidate] = []
        for (cat, _), batch in zip(lookups, batches):
            logger.debug("search_category_fetched", category=cat.value, count=len(batch))
            candidates.extend(batch)
        return candidates

    async def search(
        self,
        query: str,
        category: SearchCategory = SearchCategory.ALL,
        page: int = 1,
        limit: int = 20,
    ) -> SearchResultPage:
        """
        Run a ranked search.

        Args:
            query: Sanitized query text
            category: Category filter
            page: 1-based page number
            limit: Page size

        Returns:
            SearchResultPage for the requested page
        """
        if not query:
            return paginate([], query, category, page, limit)

        logger.info(
            "executing_search",
            query=query,
            category=category.value,
            page=page,
            limit=limit,
        )

        candidates = await self.fan_out(query, category, limit * self._overfetch_factor)

        now = self._clock()
        lower_query = query.lower()
        scored = [ScoredCandidate(c, score(c, lower_query, now)) for c in candidates]

        result = paginate(rank(scored), query, category, page, limit)

        logger.info(
            "search_complete",
            query=query,
            total=result.total,
            returned=result.returned,
        )

        return result
