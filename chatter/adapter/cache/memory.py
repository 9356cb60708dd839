"""In-process cache backend.

Used in tests and for single-process development setups. Values live in
a dict; expiry is checked on access.
"""

import time
from typing import Optional

from chatter.domain.error import StoreUnavailableError
from chatter.domain.repository import CacheBackend


class InMemoryCacheBackend(CacheBackend):
    """Dict-backed cache with memcached-style add/replace."""

    def __init__(self) -> None:
        self._values: dict[str, tuple[str, Optional[float]]] = {}
        # Set to True to simulate an unreachable backend
        self.unavailable = False

    async def get(self, key: str) -> Optional[str]:
        self._check()
        entry = self._values.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if expires_at is not None and expires_at <= time.monotonic():
            del self._values[key]
            return None
        return value

    async def set(self, key: str, value: str, ttl: Optional[int] = None) -> None:
        self._check()
        expires_at = time.monotonic() + ttl if ttl else None
        self._values[key] = (value, expires_at)

    async def add(self, key: str, value: str, ttl: Optional[int] = None) -> bool:
        if await self.get(key) is not None:
            return False
        await self.set(key, value, ttl)
        return True

    async def replace(self, key: str, value: str) -> bool:
        if await self.get(key) is None:
            return False
        _, expires_at = self._values[key]
        self._values[key] = (value, expires_at)
        return True

    async def delete(self, key: str) -> None:
        self._check()
        self._values.pop(key, None)

    def keys(self) -> list[str]:
        """Keys currently stored (expired entries included)."""
        return list(self._values)

    def _check(self) -> None:
        if self.unavailable:
            raise StoreUnavailableError("In-memory cache marked unavailable")
