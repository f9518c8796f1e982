"""
Service factory functions for dependency injection.

This module provides factory functions that wire infrastructure
implementations to core services. Use cases should import from here.
"""

from typing import TYPE_CHECKING

from folio.config import get_settings
from folio.core.services import (
    AnalyticsRecorder,
    RateLimiter,
    SearchService,
    rate_limit_config,
)
from folio.core.tasks import DetachedTaskGroup

if TYPE_CHECKING:
    from folio.core.interfaces import IAnalyticsStore, IContentStore, IRateLimitStore
    from folio.infrastructure.ratelimit import RateLimitSweeper


# Singleton service instances
_search_service: SearchService | None = None
_analytics_recorder: AnalyticsRecorder | None = None
_task_group: DetachedTaskGroup | None = None
_search_rate_limiter: RateLimiter | None = None
_click_rate_limiter: RateLimiter | None = None
_rate_limit_sweeper: "RateLimitSweeper | None" = None


def get_task_group() -> DetachedTaskGroup:
    """Get the task group that owns detached analytics writes."""
    global _task_group
    if _task_group is None:
        _task_group = DetachedTaskGroup(name="analytics")
    return _task_group


def get_search_service(content_store: "IContentStore | None" = None) -> SearchService:
    """
    Get or create SearchService instance.

    Args:
        content_store: Optional content store override

    Returns:
        Configured SearchService
    """
    global _search_service

    if _search_service is not None and content_store is None:
        return _search_service

    # Lazy import infrastructure
    from folio.infrastructure.storage.sqlite import get_content_store

    service = SearchService(
        content_store=content_store or get_content_store(),
        overfetch_factor=get_settings().search.overfetch_factor,
    )

    if content_store is None:
        _search_service = service

    return service


def get_analytics_recorder(
    analytics_store: "IAnalyticsStore | None" = None,
) -> AnalyticsRecorder:
    """
    Get or create AnalyticsRecorder instance.

    Args:
        analytics_store: Optional analytics store override

    Returns:
        Configured AnalyticsRecorder
    """
    global _analytics_recorder

    if _analytics_recorder is not None and analytics_store is None:
        return _analytics_recorder

    from folio.infrastructure.storage.sqlite import get_analytics_store

    recorder = AnalyticsRecorder(
        store=analytics_store or get_analytics_store(),
        tasks=get_task_group(),
        enabled=get_settings().analytics.enabled,
    )

    if analytics_store is None:
        _analytics_recorder = recorder

    return recorder


def _rate_limit_store() -> "IRateLimitStore":
    from folio.infrastructure.ratelimit import get_rate_limit_store

    return get_rate_limit_store()


def get_search_rate_limiter() -> RateLimiter:
    """Get the limiter guarding the search endpoint."""
    global _search_rate_limiter
    if _search_rate_limiter is None:
        settings = get_settings().rate_limit
        _search_rate_limiter = RateLimiter(
            config=rate_limit_config(
                settings.search_preset,
                max_requests=settings.search_max_requests,
                window_ms=settings.search_window_ms,
            ),
            store=_rate_limit_store(),
            name="search",
        )
    return _search_rate_limiter


def get_click_rate_limiter() -> RateLimiter:
    """Get the limiter guarding click tracking."""
    global _click_rate_limiter
    if _click_rate_limiter is None:
        settings = get_settings().rate_limit
        _click_rate_limiter = RateLimiter(
            config=rate_limit_config(
                settings.click_preset,
                max_requests=settings.click_max_requests,
                window_ms=settings.click_window_ms,
            ),
            store=_rate_limit_store(),
            name="track_click",
        )
    return _click_rate_limiter


def get_rate_limit_sweeper() -> "RateLimitSweeper":
    """Get the background sweeper for the shared rate limit store."""
    global _rate_limit_sweeper
    if _rate_limit_sweeper is None:
        from folio.infrastructure.ratelimit import RateLimitSweeper

        _rate_limit_sweeper = RateLimitSweeper(
            store=_rate_limit_store(),
            interval_seconds=get_settings().rate_limit.sweep_interval_seconds,
        )
    return _rate_limit_sweeper


def reset_services() -> None:
    """
    Reset all singleton service instances.

    Useful for testing or when configuration changes.
    """
    global _search_service
    global _analytics_recorder
    global _task_group
    global _search_rate_limiter
    global _click_rate_limiter
    global _rate_limit_sweeper

    _search_service = None
    _analytics_recorder = None
    _task_group = None
    _search_rate_limiter = None
    _click_rate_limiter = None
    _rate_limit_sweeper = None


__all__ = [
    # Factory functions
    "get_task_group",
    "get_search_service",
    "get_analytics_recorder",
    "get_search_rate_limiter",
    "get_click_rate_limiter",
    "get_rate_limit_sweeper",
    # Reset
    "reset_services",
]
