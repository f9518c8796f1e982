"""
Track Search Click Use Case.

Counts a click on a search result against its query and bumps the view
counter of the opened project or blog.
"""

from folio.application.dto.requests import TrackClickRequest
from folio.application.dto.responses import TrackClickResponse
from folio.config import get_logger
from folio.core.exceptions import AnalyticsError, InvalidParametersError
from folio.core.interfaces import IAnalyticsStore, IContentStore
from folio.core.services import sanitize

logger = get_logger(__name__)


class TrackSearchClickUseCase:
    """Use case for search result click tracking."""

    def __init__(
        self,
        analytics_store: IAnalyticsStore | None = None,
        content_store: IContentStore | None = None,
    ):
        self._analytics = analytics_store
        self._content = content_store

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

    async def execute(self, request: TrackClickRequest) -> TrackClickResponse:
        """
        Record one click.

        Raises:
            InvalidParametersError: If nothing is left of the query after sanitizing
            AnalyticsError: If the click could not be stored
        """
        query = sanitize(request.query)
        if not query:
            raise InvalidParametersError(
                [{"field": "query", "message": "Query is empty after sanitization"}]
            )

        try:
            aggregate = await self._get_analytics().record_click(query, request.clicked_result)
        except Exception as e:
            logger.error("track_click_failed", query=query, error=str(e))
            raise AnalyticsError("Failed to track click", code="CLICK_TRACKING_FAILED") from e

        logger.info(
            "search_click_tracked",
            query=query,
            result_type=request.result_type,
            click_count=aggregate.click_count,
        )

        if request.result_id and request.result_type in ("project", "blog"):
            await self._increment_views(request.result_type, request.result_id)

        return TrackClickResponse(success=True)

    async def _increment_views(self, result_type: str, result_id: str) -> None:
        content = self._get_content()
        try:
            if result_type == "project":
                await content.increment_project_views(result_id)
            else:
                await content.increment_blog_views(result_id)
        except Exception as e:
            logger.warning(
                "click_view_increment_failed",
                result_type=result_type,
                result_id=result_id,
                error=str(e),
            )
