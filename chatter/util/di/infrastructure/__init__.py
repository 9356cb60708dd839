"""Infrastructure providers."""

# Import bases
from .cache import CacheProvider
from .notifications import NotificationsProvider
from .persistence import PersistenceProvider

# Import implementations (needed for __subclasses__())
from .cache import ProdCacheProvider  # noqa: F401
from .notifications import ProdNotificationsProvider  # noqa: F401
from .persistence import ProdPersistenceProvider  # noqa: F401

__all__ = [
    "CacheProvider",
    "NotificationsProvider",
    "PersistenceProvider",
    "ProdCacheProvider",
    "ProdNotificationsProvider",
    "ProdPersistenceProvider",
]
