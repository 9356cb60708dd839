"""Dependency injection wiring.

Providers are listed once in PROVIDERS. The production container and the
test container walk the same list and differ only in which
implementation of each mockable component they pick.
"""

from typing import Type

from chatter.util.di.application import ProdApplicationProvider
from chatter.util.di.base import Component, ProviderBase, select_provider
from chatter.util.di.core import ProdConfigProvider
from chatter.util.di.domain import ProdDomainProvider
from chatter.util.di.infrastructure import (
    CacheProvider,
    NotificationsProvider,
    PersistenceProvider,
)

PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    # Mockable
    PersistenceProvider,
    CacheProvider,
    NotificationsProvider,
]

__all__ = [
    "Component",
    "PROVIDERS",
    "ProviderBase",
    "select_provider",
]
