"""Redis cache backend.

Memcached-style conditional writes map onto SET NX (add) and SET XX
(replace). Every redis failure is reported as StoreUnavailableError so
the thread cache can degrade to a rebuild.
"""

from contextlib import contextmanager
from typing import Iterator, Optional

import logfire
import redis.asyncio as redis
from redis.exceptions import RedisError

from chatter.config import CacheSettings
from chatter.domain.error import StoreUnavailableError
from chatter.domain.repository import CacheBackend


def create_redis_client(settings: CacheSettings) -> redis.Redis:
    """Create an async redis client from settings.

    Args:
        settings: Cache settings

    Returns:
        Redis client with a lazily-opened connection pool
    """
    return redis.from_url(
        settings.redis_url,
        socket_timeout=settings.socket_timeout,
        socket_connect_timeout=settings.socket_timeout,
        decode_responses=True,
    )


@contextmanager
def _unavailable_on_error(operation: str, key: str) -> Iterator[None]:
    try:
        yield
    except RedisError as e:
        logfire.warn("Redis operation failed", operation=operation, key=key, error=str(e))
        raise StoreUnavailableError(f"Redis {operation} failed: {e}") from e


class RedisCacheBackend(CacheBackend):
    """Cache backend storing values in redis."""

    def __init__(self, client: redis.Redis) -> None:
        """Initialize redis backend.

        Args:
            client: Async redis client (decoding responses to str)
        """
        self.client = client

    async def get(self, key: str) -> Optional[str]:
        with _unavailable_on_error("get", key):
            return await self.client.get(key)

    async def set(self, key: str, value: str, ttl: Optional[int] = None) -> None:
        with _unavailable_on_error("set", key):
            await self.client.set(key, value, ex=ttl)

    async def add(self, key: str, value: str, ttl: Optional[int] = None) -> bool:
        with _unavailable_on_error("add", key):
            return bool(await self.client.set(key, value, ex=ttl, nx=True))

    async def replace(self, key: str, value: str) -> bool:
        with _unavailable_on_error("replace", key):
            return bool(await self.client.set(key, value, xx=True, keepttl=True))

    async def delete(self, key: str) -> None:
        with _unavailable_on_error("delete", key):
            await self.client.delete(key)

