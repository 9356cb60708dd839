"""Cache infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import redis.asyncio as redis

from chatter.adapter.cache.redis import RedisCacheBackend, create_redis_client
from chatter.adapter.edge import HttpEdgePurger
from chatter.config import CacheSettings
from chatter.domain.repository import CacheBackend
from chatter.domain.repository import EdgePurger
from chatter.util.di.base import ProviderBase
from chatter.util.observability import instrument_redis


class CacheProvider(ProviderBase):
    """Cache component base (thread cache backend and edge purging)."""

    __mock_component__ = "cache"


class ProdCacheProvider(CacheProvider):
    """Production cache provider using redis."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    async def get_redis_client(
        self, settings: CacheSettings
    ) -> AsyncIterator[redis.Redis]:
        """Provide redis client (closed on shutdown)."""
        instrument_redis()
        client = create_redis_client(settings)
        yield client
        await client.aclose()

    @provide(scope=Scope.APP)
    def get_cache_backend(self, client: redis.Redis) -> CacheBackend:
        """Provide redis-backed cache."""
        return RedisCacheBackend(client)

    @provide(scope=Scope.APP)
    def get_edge_purger(self, settings: CacheSettings) -> EdgePurger:
        """Provide edge cache purger for the configured URLs."""
        return HttpEdgePurger(settings.purge_urls)
