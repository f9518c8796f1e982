"""
Application layer - Use cases, DTOs, and service factories.

This layer orchestrates business logic by:
1. Defining request/response DTOs for API contracts
2. Implementing use cases that coordinate core services
3. Providing factory functions for dependency injection

Use cases are the only entry point for API handlers.
"""

from folio.application.dto.requests import SearchRequest, TrackClickRequest
from folio.application.dto.responses import (
    AnalyticsSummaryResponse,
    ErrorResponse,
    HealthResponse,
    SearchResponse,
    TrackClickResponse,
)
from folio.application.services import (
    get_analytics_recorder,
    get_click_rate_limiter,
    get_rate_limit_sweeper,
    get_search_rate_limiter,
    get_search_service,
    get_task_group,
    reset_services,
)
from folio.application.use_cases import (
    GetSearchAnalyticsUseCase,
    SearchContentUseCase,
    TrackSearchClickUseCase,
)

__all__ = [
    # Request DTOs
    "SearchRequest",
    "TrackClickRequest",
    # Response DTOs
    "SearchResponse",
    "TrackClickResponse",
    "AnalyticsSummaryResponse",
    "HealthResponse",
    "ErrorResponse",
    # Use Cases
    "SearchContentUseCase",
    "TrackSearchClickUseCase",
    "GetSearchAnalyticsUseCase",
    # Service factories
    "get_search_service",
    "get_analytics_recorder",
    "get_task_group",
    "get_search_rate_limiter",
    "get_click_rate_limiter",
    "get_rate_limit_sweeper",
    "reset_services",
]
