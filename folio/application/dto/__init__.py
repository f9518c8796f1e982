"""Data Transfer Objects for API layer.

Request DTOs: Validate and parse incoming API requests.
Response DTOs: Structure and serialize API responses.

These are the ONLY contracts between API handlers and use cases.
"""

from folio.application.dto.requests import SearchRequest, TrackClickRequest
from folio.application.dto.responses import (
    AnalyticsSummaryResponse,
    BlogResultResponse,
    CamelModel,
    ComponentHealthResponse,
    ErrorResponse,
    HealthResponse,
    ImageResultResponse,
    ProjectResultResponse,
    RateLimitStatusResponse,
    SearchAggregateResponse,
    SearchHistoryResponse,
    SearchResponse,
    SearchResultsResponse,
    SearchTrendPointResponse,
    TagNameResponse,
    TagResultResponse,
    TrackClickResponse,
    ViewedContentResponse,
)

__all__ = [
    # Requests
    "SearchRequest",
    "TrackClickRequest",
    # Responses
    "CamelModel",
    "SearchResponse",
    "SearchResultsResponse",
    "ProjectResultResponse",
    "BlogResultResponse",
    "ImageResultResponse",
    "TagResultResponse",
    "TagNameResponse",
    "TrackClickResponse",
    "RateLimitStatusResponse",
    "AnalyticsSummaryResponse",
    "SearchAggregateResponse",
    "SearchHistoryResponse",
    "SearchTrendPointResponse",
    "ViewedContentResponse",
    "HealthResponse",
    "ComponentHealthResponse",
    "ErrorResponse",
]
