"""Webhook notification delivery.

Posts each event as JSON to a configured endpoint owned by the
notification subsystem.
"""

import httpx
import logfire

from chatter.adapter.error import ProviderError
from chatter.domain.model.notification import NotificationEvent
from chatter.domain.repository import NotificationDispatcher


class WebhookNotificationDispatcher(NotificationDispatcher):
    """Delivers notification events over HTTP."""

    def __init__(self, url: str, timeout: float = 5.0) -> None:
        """Initialize webhook dispatcher.

        Args:
            url: Endpoint receiving events
            timeout: Request timeout in seconds
        """
        self.url = url
        self.timeout = timeout

    async def dispatch(self, event: NotificationEvent) -> None:
        """POST one event.

        Raises:
            ProviderError: If the endpoint is unreachable or rejects the event
        """
        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    self.url,
                    json=event.model_dump(mode="json"),
                    timeout=self.timeout,
                )
                response.raise_for_status()
        except httpx.HTTPError as e:
            raise ProviderError("webhook", str(e)) from e

        logfire.info(
            "Notification delivered",
            type=event.type.value,
            recipient_id=event.recipient_id,
            comment_id=event.source_comment_id,
        )
