"""
Search endpoints.
"""

from fastapi import APIRouter, Depends, Query, Request
from pydantic import ValidationError as PydanticValidationError

from folio.api.dependencies import (
    click_rate_limit,
    client_key,
    get_search_limiter,
    get_search_use_case,
    get_track_click_use_case,
    search_rate_limit,
)
from folio.api.middleware.error_handler import validation_issues
from folio.application.dto.requests import SearchRequest, TrackClickRequest
from folio.application.dto.responses import (
    RateLimitStatusResponse,
    SearchResponse,
    TrackClickResponse,
)
from folio.application.use_cases import SearchContentUseCase, TrackSearchClickUseCase
from folio.config import get_settings
from folio.core.exceptions import FolioError, InvalidSearchParametersError, SearchError
from folio.core.services import RateLimiter

router = APIRouter(prefix="/api/search", tags=["search"])


def parse_search_params(
    q: str | None,
    query: str | None,
    category: str | None,
    page: str | None,
    limit: str | None,
) -> SearchRequest:
    """
    Validate raw query string values.

    Raises:
        InvalidSearchParametersError: If any value is out of range
    """
    raw = {
        "query": q or query,
        "category": category,
        "page": page,
        "limit": limit,
    }
    try:
        return SearchRequest.model_validate({k: v for k, v in raw.items() if v is not None})
    except PydanticValidationError as e:
        raise InvalidSearchParametersError(validation_issues(e.errors())) from e


@router.get(
    "",
    response_model=SearchResponse,
    dependencies=[Depends(search_rate_limit)],
)
async def search_content(
    q: str | None = Query(default=None, description="Search query (1-200 characters)"),
    query: str | None = Query(default=None, description="Alias of q"),
    category: str | None = Query(
        default=None, description="all, projects, blogs, images or tags"
    ),
    page: str | None = Query(default=None, description="1-based page number"),
    limit: str | None = Query(default=None, description="Results per page (max 50)"),
    use_case: SearchContentUseCase = Depends(get_search_use_case),
) -> SearchResponse:
    """
    Relevance-ranked search across projects, blogs, images and tags.

    The request is counted against the client's rate limit before its
    parameters are validated. Failures past validation surface as
    SEARCH_FAILED.
    """
    request = parse_search_params(q, query, category, page, limit)
    try:
        result = await use_case.execute(request)
        return use_case.to_response(result)
    except FolioError:
        raise
    except Exception as e:
        raise SearchError(reason=f"{type(e).__name__}: {e}") from e


@router.post(
    "/track-click",
    response_model=TrackClickResponse,
    dependencies=[Depends(click_rate_limit)],
)
async def track_click(
    request: TrackClickRequest,
    use_case: TrackSearchClickUseCase = Depends(get_track_click_use_case),
) -> TrackClickResponse:
    """
    Record that a search result was opened.

    Increments the query's click count and the view count of the opened
    project or blog.
    """
    return await use_case.execute(request)


@router.get("/rate-limit", response_model=RateLimitStatusResponse)
async def search_rate_limit_status(
    request: Request,
    limiter: RateLimiter = Depends(get_search_limiter),
) -> RateLimitStatusResponse:
    """Remaining search budget for the caller; does not count a request."""
    status = limiter.status(client_key(request, "search"))
    return RateLimitStatusResponse(
        enabled=get_settings().rate_limit.enabled,
        limit=status.limit,
        remaining=status.remaining,
        reset=int(status.reset_at),
    )
