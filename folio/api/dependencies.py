"""
Dependency injection container for FastAPI.

Provides use cases and rate limit guards to route handlers.
"""

from fastapi import Depends, Request, Response

from folio.application.services import get_click_rate_limiter, get_search_rate_limiter
from folio.application.use_cases import (
    GetSearchAnalyticsUseCase,
    SearchContentUseCase,
    TrackSearchClickUseCase,
)
from folio.config import get_settings
from folio.core.services import RateLimiter, hash_client_ip


# Use case dependencies
def get_search_use_case() -> SearchContentUseCase:
    """Get search content use case."""
    return SearchContentUseCase()


def get_track_click_use_case() -> TrackSearchClickUseCase:
    """Get click tracking use case."""
    return TrackSearchClickUseCase()


def get_analytics_use_case() -> GetSearchAnalyticsUseCase:
    """Get search analytics use case."""
    return GetSearchAnalyticsUseCase()


# Rate limiting
def get_search_limiter() -> RateLimiter:
    """Get the search endpoint limiter."""
    return get_search_rate_limiter()


def get_click_limiter() -> RateLimiter:
    """Get the click tracking limiter."""
    return get_click_rate_limiter()


def client_ip(request: Request) -> str:
    """Originating IP: first X-Forwarded-For hop, then X-Real-IP, then the peer."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first

    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip.strip()

    if request.client and request.client.host:
        return request.client.host

    return "unknown"


def client_key(request: Request, route: str) -> str:
    """Rate limit key for a route and the hashed client address."""
    salt = get_settings().rate_limit.ip_hash_salt
    return f"{route}:{hash_client_ip(client_ip(request), salt)}"


def _enforce(limiter: RateLimiter, request: Request, response: Response, route: str) -> None:
    if not get_settings().rate_limit.enabled:
        return
    decision = limiter.enforce(client_key(request, route))
    response.headers.update(decision.headers())


def search_rate_limit(
    request: Request,
    response: Response,
    limiter: RateLimiter = Depends(get_search_limiter),
) -> None:
    """Count a search request; raises RateLimitExceededError when over budget."""
    _enforce(limiter, request, response, "search")


def click_rate_limit(
    request: Request,
    response: Response,
    limiter: RateLimiter = Depends(get_click_limiter),
) -> None:
    """Count a click tracking request; raises RateLimitExceededError when over budget."""
    _enforce(limiter, request, response, "track_click")
