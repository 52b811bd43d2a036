"""Snapshot slots: where a cart's serialized contents live between sessions."""
from typing import Optional, Protocol

from storefront.db import RedisKeys, TTL, get_redis


class SnapshotSlot(Protocol):
    """A single named slot holding one serialized cart."""

    async def read(self) -> Optional[str]:
        ...

    async def write(self, payload: str) -> None:
        ...

    async def clear(self) -> None:
        ...


class RedisSnapshotSlot:
    """Cart snapshot stored under ``cart:{session_id}`` in Upstash Redis.

    Every write overwrites the whole snapshot and refreshes its TTL, so an
    abandoned cart simply expires.
    """

    def __init__(self, session_id: str, redis=None, ttl: int | None = None) -> None:
        self.key = RedisKeys.cart_key(session_id)
        self._redis = redis
        self._ttl = ttl or TTL.CART

    @property
    def redis(self):
        if self._redis is None:
            self._redis = get_redis()
        return self._redis

    async def read(self) -> Optional[str]:
        return await self.redis.get(self.key)

    async def write(self, payload: str) -> None:
        await self.redis.set(self.key, payload, ex=self._ttl)

    async def clear(self) -> None:
        await self.redis.delete(self.key)


class MemorySnapshotSlot:
    """Process-local slot for tests and local development."""

    def __init__(self, payload: Optional[str] = None) -> None:
        self.payload = payload
        self.writes = 0

    async def read(self) -> Optional[str]:
        return self.payload

    async def write(self, payload: str) -> None:
        self.payload = payload
        self.writes += 1

    async def clear(self) -> None:
        self.payload = None


__all__ = ["SnapshotSlot", "RedisSnapshotSlot", "MemorySnapshotSlot"]
