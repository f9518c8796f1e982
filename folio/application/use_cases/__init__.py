"""Application use cases."""

from folio.application.use_cases.get_search_analytics import GetSearchAnalyticsUseCase
from folio.application.use_cases.search_content import (
    SearchContentResult,
    SearchContentUseCase,
)
from folio.application.use_cases.track_search_click import TrackSearchClickUseCase

__all__ = [
    "SearchContentUseCase",
    "SearchContentResult",
    "TrackSearchClickUseCase",
    "GetSearchAnalyticsUseCase",
]
