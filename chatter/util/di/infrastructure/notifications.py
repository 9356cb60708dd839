"""Notification infrastructure providers."""

from dishka import Scope, provide

from chatter.adapter.notification.dispatcher import LoggingNotificationDispatcher
from chatter.adapter.notification.webhook import WebhookNotificationDispatcher
from chatter.config import NotificationSettings
from chatter.domain.repository import NotificationDispatcher
from chatter.util.di.base import ProviderBase


class NotificationsProvider(ProviderBase):
    """Notifications component base."""

    __mock_component__ = "notifications"


class ProdNotificationsProvider(NotificationsProvider):
    """Production notifications provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_dispatcher(self, settings: NotificationSettings) -> NotificationDispatcher:
        """Provide notification dispatcher.

        Events go to the configured webhook; without one they are only
        logged.
        """
        if settings.webhook_url:
            return WebhookNotificationDispatcher(
                url=settings.webhook_url, timeout=settings.timeout_seconds
            )
        return LoggingNotificationDispatcher()
