"""Core business services."""

from folio.core.services.analytics_recorder import AnalyticsRecorder
from folio.core.services.rate_limiter import (
    RATE_LIMITS,
    RateLimitConfig,
    RateLimitDecision,
    RateLimiter,
    hash_client_ip,
    rate_limit_config,
)
from folio.core.services.relevance import score, score_view, title_score
from folio.core.services.sanitizer import sanitize
from folio.core.services.search_service import SearchService, paginate, rank

__all__ = [
    "sanitize",
    "score",
    "score_view",
    "title_score",
    "RateLimiter",
    "RateLimitConfig",
    "RateLimitDecision",
    "RATE_LIMITS",
    "hash_client_ip",
    "rate_limit_config",
    "SearchService",
    "rank",
    "paginate",
    "AnalyticsRecorder",
]
