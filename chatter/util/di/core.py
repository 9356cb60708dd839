"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from chatter.config import (
    AuthSettings,
    CacheSettings,
    CommentSettings,
    NotificationSettings,
    Settings,
)
from chatter.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        """Provide auth settings."""
        return settings.auth

    @provide(scope=Scope.APP)
    def provide_cache_settings(self, settings: Settings) -> CacheSettings:
        """Provide cache settings."""
        return settings.cache

    @provide(scope=Scope.APP)
    def provide_comment_settings(self, settings: Settings) -> CommentSettings:
        """Provide comment settings."""
        return settings.comments

    @provide(scope=Scope.APP)
    def provide_notification_settings(
        self, settings: Settings
    ) -> NotificationSettings:
        """Provide notification settings."""
        return settings.notifications
