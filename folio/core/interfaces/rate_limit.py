"""
Abstract interface for rate limit counter stores.

The limiter only talks to this contract, so a shared backend can replace
the process-local store without touching call sites.
"""

from abc import ABC, abstractmethod

from folio.core.entities.rate_limit import RateLimitEntry


class IRateLimitStore(ABC):
    """Keyed fixed-window counters."""

    @abstractmethod
    def hit(self, key: str, now_ms: float, window_ms: int) -> RateLimitEntry:
        """
        Count one request for a key.

        Starts a new window with count 1 when the key is unknown or its
        window ended before ``now_ms``; otherwise increments the count.
        Must be atomic per key.
        """
        pass

    @abstractmethod
    def peek(self, key: str) -> RateLimitEntry | None:
        """Current entry for a key without counting a request."""
        pass

    @abstractmethod
    def sweep(self, now_ms: float) -> int:
        """Drop entries whose window has ended. Returns the number removed."""
        pass

    @abstractmethod
    def reset(self, key: str | None = None) -> None:
        """Forget one key, or every key when none is given."""
        pass

    @abstractmethod
    def __len__(self) -> int:
        pass
