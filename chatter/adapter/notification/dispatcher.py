"""Local notification dispatchers."""

import logfire

from chatter.domain.model.notification import NotificationEvent
from chatter.domain.repository import NotificationDispatcher


class LoggingNotificationDispatcher(NotificationDispatcher):
    """Writes events to the log when no delivery endpoint is configured."""

    async def dispatch(self, event: NotificationEvent) -> None:
        logfire.info(
            "Notification event",
            type=event.type.value,
            recipient_id=event.recipient_id,
            comment_id=event.source_comment_id,
            page_id=event.page_id,
            actor=event.actor_name,
        )


class RecordingNotificationDispatcher(NotificationDispatcher):
    """Mock dispatcher keeping every event in memory for tests."""

    def __init__(self) -> None:
        self.events: list[NotificationEvent] = []

    async def dispatch(self, event: NotificationEvent) -> None:
        self.events.append(event)

    def clear(self) -> None:
        self.events.clear()
