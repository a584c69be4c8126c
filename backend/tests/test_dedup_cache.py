# tests/test_dedup_cache.py
"""
Deduplication cache tests
Tests: first-seen semantics, LRU eviction, TTL expiry, Redis SET NX
"""

import asyncio

import pytest
from unittest.mock import AsyncMock

from xrayfix.services.dedup_cache import InMemoryDeduplicationCache, RedisDeduplicationCache


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


class TestInMemoryDeduplicationCache:
    """Test the single-process cache"""

    @pytest.mark.asyncio
    async def test_first_call_is_new_then_duplicate(self):
        cache = InMemoryDeduplicationCache(capacity=10)

        assert await cache.is_new("myjob:42") is True
        assert await cache.is_new("myjob:42") is False
        assert await cache.is_new("myjob:43") is True

    @pytest.mark.asyncio
    async def test_concurrent_calls_admit_exactly_one(self):
        cache = InMemoryDeduplicationCache(capacity=10)

        results = await asyncio.gather(*[cache.is_new("myjob:42") for _ in range(20)])

        assert results.count(True) == 1

    @pytest.mark.asyncio
    async def test_least_recently_seen_is_evicted(self):
        cache = InMemoryDeduplicationCache(capacity=2)

        await cache.is_new("a:1")
        await cache.is_new("b:1")
        await cache.is_new("a:1")  # touch a
        await cache.is_new("c:1")  # evicts b

        assert len(cache) == 2
        assert await cache.is_new("a:1") is False
        assert await cache.is_new("b:1") is True

    @pytest.mark.asyncio
    async def test_entries_expire_after_ttl(self):
        clock = FakeClock()
        cache = InMemoryDeduplicationCache(capacity=10, ttl_seconds=60, clock=clock)

        assert await cache.is_new("myjob:42") is True
        clock.now = 59
        assert await cache.is_new("myjob:42") is False
        clock.now = 200
        assert await cache.is_new("myjob:42") is True

    def test_capacity_must_be_positive(self):
        with pytest.raises(ValueError):
            InMemoryDeduplicationCache(capacity=0)


class TestRedisDeduplicationCache:
    """Test the shared cache against a mocked client"""

    @pytest.mark.asyncio
    async def test_set_nx_with_expiry(self):
        client = AsyncMock()
        client.set.side_effect = [True, None]
        cache = RedisDeduplicationCache(client, ttl_seconds=3600)

        assert await cache.is_new("myjob:42") is True
        assert await cache.is_new("myjob:42") is False
        client.set.assert_awaited_with("xrayfix:build:myjob:42", "1", nx=True, ex=3600)

    @pytest.mark.asyncio
    async def test_close_releases_client(self):
        client = AsyncMock()
        cache = RedisDeduplicationCache(client, ttl_seconds=10)

        await cache.close()

        client.aclose.assert_awaited_once()
