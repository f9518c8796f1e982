"""Tests for the in-memory rate limit store and its sweeper."""

import asyncio

import pytest

from folio.infrastructure.ratelimit import (
    InMemoryRateLimitStore,
    RateLimitSweeper,
    get_rate_limit_store,
)


class TestInMemoryRateLimitStore:
    """Tests for InMemoryRateLimitStore."""

    def test_hit_starts_window(self):
        store = InMemoryRateLimitStore()
        entry = store.hit("k", now_ms=1000, window_ms=500)
        assert entry.count == 1
        assert entry.reset_at == 1500

    def test_hit_increments_within_window(self):
        store = InMemoryRateLimitStore()
        store.hit("k", 1000, 500)
        entry = store.hit("k", 1200, 500)
        assert entry.count == 2
        assert entry.reset_at == 1500

    def test_hit_after_window_restarts(self):
        store = InMemoryRateLimitStore()
        store.hit("k", 1000, 500)
        store.hit("k", 1100, 500)
        entry = store.hit("k", 1501, 500)
        assert entry.count == 1
        assert entry.reset_at == 2001

    def test_peek(self):
        store = InMemoryRateLimitStore()
        assert store.peek("k") is None
        store.hit("k", 0, 10)
        assert store.peek("k").count == 1

    def test_sweep(self):
        store = InMemoryRateLimitStore()
        store.hit("a", 0, 10)
        store.hit("b", 0, 100)
        assert store.sweep(50) == 1
        assert len(store) == 1
        assert store.peek("b") is not None

    def test_reset(self):
        store = InMemoryRateLimitStore()
        store.hit("a", 0, 10)
        store.hit("b", 0, 10)
        store.reset("a")
        store.reset("missing")
        assert len(store) == 1
        store.reset()
        assert len(store) == 0

    def test_singleton(self):
        """Should return the same store on every call."""
        assert get_rate_limit_store() is get_rate_limit_store()


class TestRateLimitSweeper:
    """Tests for RateLimitSweeper."""

    def test_sweep_once(self):
        store = InMemoryRateLimitStore()
        store.hit("a", 0, 10)
        sweeper = RateLimitSweeper(store, clock=lambda: 100)
        assert sweeper.sweep_once() == 1
        assert len(store) == 0

    @pytest.mark.asyncio
    async def test_loop_sweeps_periodically(self):
        """Should sweep on each interval until stopped."""
        store = InMemoryRateLimitStore()
        store.hit("a", 0, 10)
        sweeper = RateLimitSweeper(store, interval_seconds=0.01, clock=lambda: 100)

        sweeper.start()
        assert sweeper.running is True
        await asyncio.sleep(0.05)
        await sweeper.stop()

        assert sweeper.running is False
        assert len(store) == 0

    @pytest.mark.asyncio
    async def test_start_twice_keeps_one_task(self):
        sweeper = RateLimitSweeper(InMemoryRateLimitStore(), interval_seconds=60)
        sweeper.start()
        task = sweeper._task
        sweeper.start()
        assert sweeper._task is task
        await sweeper.stop()

    @pytest.mark.asyncio
    async def test_stop_without_start(self):
        sweeper = RateLimitSweeper(InMemoryRateLimitStore())
        await sweeper.stop()
        assert sweeper.running is False
