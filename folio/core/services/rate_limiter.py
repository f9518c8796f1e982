"""
Fixed-window rate limiting.

The limiter is constructed per endpoint with its own configuration and
an injected counter store. Keys combine the route with a hashed client
identifier, so several limiters can share one store.
"""

import hashlib
import math
import time
from collections.abc import Callable
from dataclasses import dataclass

from folio.config import get_logger
from folio.core.exceptions import ConfigurationError, RateLimitExceededError
from folio.core.interfaces.rate_limit import IRateLimitStore

logger = get_logger(__name__)


def _now_ms() -> float:
    return time.time() * 1000


@dataclass(frozen=True)
class RateLimitConfig:
    """Request budget per fixed window."""

    max_requests: int
    window_ms: int


# Presets for different endpoint types
RATE_LIMITS: dict[str, RateLimitConfig] = {
    "auth": RateLimitConfig(max_requests=5, window_ms=15 * 60 * 1000),
    "api": RateLimitConfig(max_requests=60, window_ms=60 * 1000),
    "strict": RateLimitConfig(max_requests=10, window_ms=60 * 1000),
}


def rate_limit_config(
    preset: str,
    max_requests: int | None = None,
    window_ms: int | None = None,
) -> RateLimitConfig:
    """
    Build a limiter budget from a named preset.

    Explicit values replace the preset's.

    Raises:
        ConfigurationError: If the preset is unknown
    """
    base = RATE_LIMITS.get(preset)
    if base is None:
        raise ConfigurationError(
            f"Unknown rate limit preset: {preset}",
            code="UNKNOWN_RATE_LIMIT_PRESET",
            details={"preset": preset, "available": sorted(RATE_LIMITS)},
        )
    return RateLimitConfig(
        max_requests=max_requests or base.max_requests,
        window_ms=window_ms or base.window_ms,
    )


@dataclass(frozen=True)
class RateLimitDecision:
    """Outcome of counting one request."""

    allowed: bool
    limit: int
    remaining: int
    reset_at: float  # epoch milliseconds
    now: float

    @property
    def retry_after(self) -> int:
        """Whole seconds until the window resets (0 when allowed)."""
        if self.allowed:
            return 0
        return max(0, math.ceil((self.reset_at - self.now) / 1000))

    def headers(self) -> dict[str, str]:
        return {
            "X-RateLimit-Limit": str(self.limit),
            "X-RateLimit-Remaining": str(self.remaining),
            "X-RateLimit-Reset": str(int(self.reset_at)),
        }


def hash_client_ip(ip: str, salt: str = "") -> str:
    """One-way client identifier: truncated salted SHA-256 of the IP."""
    return hashlib.sha256(f"{salt}{ip}".encode()).hexdigest()[:16]


class RateLimiter:
    """
    Fixed-window request counter.

    The first request for a key, or the first one after its window ended,
    starts a new window with count 1. Later requests increment the count
    and are denied once it exceeds ``max_requests``.
    """

    def __init__(
        self,
        config: RateLimitConfig,
        store: IRateLimitStore,
        clock: Callable[[], float] | None = None,
        name: str = "default",
    ):
        """
        Initialize rate limiter.

        Args:
            config: Request budget per window
            store: Counter store shared with other limiters
            clock: Returns the current time in epoch milliseconds
            name: Label used in logs
        """
        self.config = config
        self.name = name
        self._store = store
        self._clock = clock or _now_ms

    @property
    def store(self) -> IRateLimitStore:
        return self._store

    def check(self, key: str) -> RateLimitDecision:
        """Count one request for a key and decide whether it may proceed."""
        now = self._clock()
        entry = self._store.hit(key, now, self.config.window_ms)
        allowed = entry.count <= self.config.max_requests

        if not allowed:
            logger.warning(
                "rate_limit_exceeded",
                limiter=self.name,
                count=entry.count,
                limit=self.config.max_requests,
            )

        return RateLimitDecision(
            allowed=allowed,
            limit=self.config.max_requests,
            remaining=max(0, self.config.max_requests - entry.count),
            reset_at=entry.reset_at,
            now=now,
        )

    def is_allowed(self, key: str) -> bool:
        """Count one request and report whether it is allowed."""
        return self.check(key).allowed

    def enforce(self, key: str) -> RateLimitDecision:
        """
        Count one request, raising when the budget is exhausted.

        Raises:
            RateLimitExceededError: If the request is over the limit
        """
        decision = self.check(key)
        if not decision.allowed:
            raise RateLimitExceededError(
                limit=decision.limit,
                reset_at_ms=decision.reset_at,
                now_ms=decision.now,
            )
        return decision

    def status(self, key: str) -> RateLimitDecision:
        """Current budget for a key without counting a request."""
        now = self._clock()
        entry = self._store.peek(key)

        if entry is None or now > entry.reset_at:
            return RateLimitDecision(
                allowed=True,
                limit=self.config.max_requests,
                remaining=self.config.max_requests,
                reset_at=now + self.config.window_ms,
                now=now,
            )

        return RateLimitDecision(
            allowed=entry.count < self.config.max_requests,
            limit=self.config.max_requests,
            remaining=max(0, self.config.max_requests - entry.count),
            reset_at=entry.reset_at,
            now=now,
        )

    def sweep(self) -> int:
        """Drop expired entries from the underlying store."""
        return self._store.sweep(self._clock())

    def reset(self, key: str | None = None) -> None:
        """Forget a key's counter, or all counters."""
        self._store.reset(key)
