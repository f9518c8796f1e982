"""Rate limit counter stores."""

from folio.infrastructure.ratelimit.memory import InMemoryRateLimitStore
from folio.infrastructure.ratelimit.sweeper import RateLimitSweeper

# Singleton instance
_rate_limit_store: InMemoryRateLimitStore | None = None


def get_rate_limit_store() -> InMemoryRateLimitStore:
    """Get singleton rate limit store instance."""
    global _rate_limit_store
    if _rate_limit_store is None:
        _rate_limit_store = InMemoryRateLimitStore()
    return _rate_limit_store


__all__ = [
    "InMemoryRateLimitStore",
    "RateLimitSweeper",
    "get_rate_limit_store",
]
