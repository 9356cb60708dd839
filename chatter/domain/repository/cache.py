"""Cache backend interface."""

from abc import ABC, abstractmethod
from typing import Optional


class CacheBackend(ABC):
    """Generic key/value cache.

    No transactions are assumed. Implementations raise
    StoreUnavailableError on transient backend failures.
    """

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """Get a value, or None on a miss."""
        pass

    @abstractmethod
    async def set(self, key: str, value: str, ttl: Optional[int] = None) -> None:
        """Store a value unconditionally.

        Args:
            key: Cache key
            value: Serialized value
            ttl: Expiry in seconds (None for no expiry)
        """
        pass

    @abstractmethod
    async def add(self, key: str, value: str, ttl: Optional[int] = None) -> bool:
        """Store a value only if the key is absent.

        Returns:
            True if the value was stored
        """
        pass

    @abstractmethod
    async def replace(self, key: str, value: str) -> bool:
        """Store a value only if the key is present.

        Returns:
            True if the value was stored
        """
        pass

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Evict a key (no error if absent)."""
        pass
