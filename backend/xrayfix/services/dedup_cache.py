# backend/xrayfix/services/dedup_cache.py
"""
Deduplication of violation events by build identifier.

``is_new`` is an atomic check-and-insert: the first call for an identifier
returns True and records it, every later call within the retention window
returns False.
"""

import asyncio
import time
from abc import ABC, abstractmethod
from collections import OrderedDict
from typing import Callable, Optional

from redis import asyncio as aioredis

from xrayfix.core.config import settings
from xrayfix.core.logging import logger


class DeduplicationCache(ABC):
    """Records build identifiers that have already been processed"""

    @abstractmethod
    async def is_new(self, build_id: str) -> bool:
        pass

    async def close(self) -> None:
        pass


class InMemoryDeduplicationCache(DeduplicationCache):
    """Bounded LRU with a per-entry TTL, for a single process"""

    def __init__(
        self,
        capacity: int = 10000,
        ttl_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: "OrderedDict[str, float]" = OrderedDict()
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._entries)

    async def is_new(self, build_id: str) -> bool:
        async with self._lock:
            now = self._clock()
            seen_at = self._entries.get(build_id)
            if seen_at is not None and not self._expired(seen_at, now):
                self._entries.move_to_end(build_id)
                return False

            self._entries[build_id] = now
            self._entries.move_to_end(build_id)
            while len(self._entries) > self.capacity:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug(f"Evicted {evicted} from deduplication cache")
            return True

    def _expired(self, seen_at: float, now: float) -> bool:
        return self.ttl_seconds is not None and now - seen_at >= self.ttl_seconds


class RedisDeduplicationCache(DeduplicationCache):
    """Shared store: ``SET NX EX`` makes check-and-insert atomic across processes"""

    key_prefix = "xrayfix:build:"

    def __init__(self, client: "aioredis.Redis", ttl_seconds: int):
        self.redis = client
        self.ttl_seconds = ttl_seconds

    async def is_new(self, build_id: str) -> bool:
        created = await self.redis.set(
            f"{self.key_prefix}{build_id}",
            "1",
            nx=True,
            ex=self.ttl_seconds,
        )
        return bool(created)

    async def close(self) -> None:
        await self.redis.aclose()


def create_dedup_cache() -> DeduplicationCache:
    """Redis-backed when REDIS_URL is configured, in-memory otherwise"""
    if settings.REDIS_URL:
        logger.info("Using Redis deduplication cache")
        client = aioredis.from_url(settings.REDIS_URL, decode_responses=True)
        return RedisDeduplicationCache(client, settings.DEDUP_TTL_SECONDS)

    logger.info(f"Using in-memory deduplication cache (capacity {settings.DEDUP_CACHE_SIZE})")
    return InMemoryDeduplicationCache(
        capacity=settings.DEDUP_CACHE_SIZE,
        ttl_seconds=settings.DEDUP_TTL_SECONDS,
    )
