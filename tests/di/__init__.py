"""Mock providers for testing."""

from .cache import MockCacheProvider
from .notifications import MockNotificationsProvider
from .persistence import MockPersistenceProvider
from .container import build_test_container

__all__ = [
    "MockCacheProvider",
    "MockNotificationsProvider",
    "MockPersistenceProvider",
    "build_test_container",
]
