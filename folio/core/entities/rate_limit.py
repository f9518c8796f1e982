"""Rate limiting entities."""

from dataclasses import dataclass


@dataclass
class RateLimitEntry:
    """Request counter for one key in the current fixed window."""

    count: int
    reset_at: float  # epoch milliseconds
