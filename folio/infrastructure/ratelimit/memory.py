"""
Process-local rate limit counters.

Counters live in a plain dict and are lost on restart. Every method is
synchronous, so no update can interleave with another on the event loop.
"""

from folio.core.entities.rate_limit import RateLimitEntry
from folio.core.interfaces.rate_limit import IRateLimitStore


class InMemoryRateLimitStore(IRateLimitStore):
    """Dict-backed counter store for a single process."""

    def __init__(self) -> None:
        self._entries: dict[str, RateLimitEntry] = {}

    def hit(self, key: str, now_ms: float, window_ms: int) -> RateLimitEntry:
        entry = self._entries.get(key)

        if entry is None or now_ms > entry.reset_at:
            entry = RateLimitEntry(count=1, reset_at=now_ms + window_ms)
            self._entries[key] = entry
            return entry

        entry.count += 1
        return entry

    def peek(self, key: str) -> RateLimitEntry | None:
        return self._entries.get(key)

    def sweep(self, now_ms: float) -> int:
        expired = [key for key, entry in self._entries.items() if entry.reset_at < now_ms]
        for key in expired:
            del self._entries[key]
        return len(expired)

    def reset(self, key: str | None = None) -> None:
        if key is None:
            self._entries.clear()
        else:
            self._entries.pop(key, None)

    def __len__(self) -> int:
        return len(self._entries)
