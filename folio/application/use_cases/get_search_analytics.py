"""
Get Search Analytics Use Case.

Builds the search analytics dashboard: totals, top and failing queries,
recent activity, most viewed content and a daily trend.
"""

import asyncio
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from folio.application.dto.responses import (
    AnalyticsSummaryResponse,
    SearchAggregateResponse,
    SearchHistoryResponse,
    SearchTrendPointResponse,
    ViewedContentResponse,
)
from folio.config import get_logger, get_settings
from folio.core.entities import SearchAnalyticsAggregate, SearchTrendPoint
from folio.core.exceptions import AnalyticsError
from folio.core.interfaces import IAnalyticsStore, IContentStore

logger = get_logger(__name__)


def average_ctr(aggregates: list[SearchAnalyticsAggregate]) -> float:
    """Mean click-through rate in percent; 0 for no aggregates."""
    if not aggregates:
        return 0.0
    return sum(a.click_through_rate for a in aggregates) / len(aggregates) * 100


def fill_trend(
    counts: list[SearchTrendPoint],
    days: int,
    today: datetime,
) -> list[SearchTrendPoint]:
    """One point per day for the last ``days`` days, oldest first, zero-filled."""
    by_day = {point.day: point.count for point in counts}
    end = today.astimezone(UTC).date()
    return [
        SearchTrendPoint(day=day, count=by_day.get(day, 0))
        for day in (end - timedelta(days=offset) for offset in range(days - 1, -1, -1))
    ]


class GetSearchAnalyticsUseCase:
    """Use case for the search analytics summary."""

    def __init__(
        self,
        analytics_store: IAnalyticsStore | None = None,
        content_store: IContentStore | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self._analytics = analytics_store
        self._content = content_store
        self._clock = clock or (lambda: datetime.now(UTC))

    def _get_analytics(self) -> IAnalyticsStore:
        if self._analytics is None:
            from folio.infrastructure.storage.sqlite import get_analytics_store

            self._analytics = get_analytics_store()
        return self._analytics

    def _get_content(self) -> IContentStore:
        if self._content is None:
            from folio.infrastructure.storage.sqlite import get_content_store

            self._content = get_content_store()
        return self._content

    async def execute(self, days: int | None = None) -> AnalyticsSummaryResponse:
        """
        Build the analytics summary.

        Args:
            days: Restrict history-based figures to the last N days; None for all time

        Raises:
            AnalyticsError: If any analytics query fails
        """
        settings = get_settings().analytics
        analytics = self._get_analytics()
        content = self._get_content()

        now = self._clock()
        since = now - timedelta(days=days) if days else None

        try:
            (
                total_searches,
                unique_queries,
                total_clicks,
                top_searches,
                zero_results,
                recent,
                top_projects,
                top_blogs,
            ) = await asyncio.gather(
                analytics.count_searches(since),
                analytics.count_unique_queries(),
                analytics.total_clicks(),
                analytics.top_searches(settings.top_searches),
                analytics.zero_result_searches(settings.zero_result_searches, since),
                analytics.recent_searches(settings.recent_searches, since),
                content.top_viewed_projects(settings.top_viewed),
                content.top_viewed_blogs(settings.top_viewed),
            )

            trend = None
            if since is not None:
                counts = await analytics.daily_search_counts(since)
                trend = fill_trend(counts, min(days, settings.max_trend_days), now)
        except Exception as e:
            logger.error("search_analytics_fetch_failed", days=days, error=str(e))
            raise AnalyticsError("Failed to fetch analytics", code="ANALYTICS_FAILED") from e

        logger.info(
            "search_analytics_fetched",
            days=days,
            total_searches=total_searches,
            unique_queries=unique_queries,
        )

        return AnalyticsSummaryResponse(
            total_searches=total_searches,
            unique_queries=unique_queries,
            total_clicks=total_clicks,
            average_ctr=average_ctr(top_searches),
            top_searches=[
                SearchAggregateResponse(**a.model_dump()) for a in top_searches
            ],
            zero_result_searches=[
                SearchHistoryResponse(**r.model_dump()) for r in zero_results
            ],
            recent_searches=[SearchHistoryResponse(**r.model_dump()) for r in recent],
            top_viewed_projects=[
                ViewedContentResponse(**v.model_dump()) for v in top_projects
            ],
            top_viewed_blogs=[ViewedContentResponse(**v.model_dump()) for v in top_blogs],
            search_trend=(
                [SearchTrendPointResponse(day=p.day, count=p.count) for p in trend]
                if trend
                else None
            ),
        )
