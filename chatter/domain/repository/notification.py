"""Notification delivery interface."""

from abc import ABC, abstractmethod

from chatter.domain.model.notification import NotificationEvent


class NotificationDispatcher(ABC):
    """Delivers notification events to their recipients."""

    @abstractmethod
    async def dispatch(self, event: NotificationEvent) -> None:
        """Deliver one event.

        Args:
            event: The event to deliver
        """
        pass
