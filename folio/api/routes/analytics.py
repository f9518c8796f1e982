"""
Search analytics endpoints.
"""

from fastapi import APIRouter, Depends, Query

from folio.api.dependencies import get_analytics_use_case
from folio.application.dto.responses import AnalyticsSummaryResponse
from folio.application.use_cases import GetSearchAnalyticsUseCase
from folio.core.exceptions import ValidationError

router = APIRouter(prefix="/api/admin/analytics", tags=["analytics"])


def parse_days(days: str | None) -> int | None:
    """'all' or missing means no time window; otherwise a positive day count."""
    if days is None or days == "all":
        return None
    try:
        value = int(days)
    except ValueError:
        value = 0
    if value <= 0:
        raise ValidationError("days", "must be a positive integer or 'all'", days)
    return value


@router.get("", response_model=AnalyticsSummaryResponse)
async def get_search_analytics(
    days: str | None = Query(default=None, description="Window in days, or 'all'"),
    use_case: GetSearchAnalyticsUseCase = Depends(get_analytics_use_case),
) -> AnalyticsSummaryResponse:
    """
    Search analytics summary.

    Totals, top and zero-result queries, recent searches, most viewed
    content and, for a numeric window, a daily search trend.
    """
    return await use_case.execute(parse_days(days))
