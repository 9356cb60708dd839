"""Unit tests for HTTP-backed adapters (webhook and edge purge)."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from chatter.adapter.edge import HttpEdgePurger
from chatter.adapter.error import ProviderError
from chatter.adapter.notification.webhook import WebhookNotificationDispatcher
from chatter.domain.model import NotificationEvent
from chatter.domain.repository import EdgePurger, NotificationDispatcher
from chatter.domain.value import CommentId, NotificationType, PageId, UserId


@pytest.fixture
def event():
    return NotificationEvent(
        type=NotificationType.REPLY,
        recipient_id=UserId(1),
        source_comment_id=CommentId(2),
        page_id=PageId(3),
        excerpt="nice one",
        actor_name="bob",
    )


class TestWebhookNotificationDispatcher:
    """Tests for WebhookNotificationDispatcher."""

    @pytest.mark.asyncio
    async def test_posts_event_as_json(self, event):
        # Arrange
        dispatcher = WebhookNotificationDispatcher("https://notify.internal/events")
        mock_response = MagicMock()
        mock_response.raise_for_status = MagicMock()

        with patch("httpx.AsyncClient") as mock_client:
            post = AsyncMock(return_value=mock_response)
            mock_client.return_value.__aenter__.return_value.post = post

            # Act
            await dispatcher.dispatch(event)

        # Assert
        post.assert_awaited_once()
        assert post.call_args.args[0] == "https://notify.internal/events"
        assert post.call_args.kwargs["json"] == {
            "type": "reply",
            "recipient_id": 1,
            "source_comment_id": 2,
            "page_id": 3,
            "excerpt": "nice one",
            "actor_name": "bob",
        }

    @pytest.mark.asyncio
    async def test_http_failure_raises_provider_error(self, event):
        dispatcher = WebhookNotificationDispatcher("https://notify.internal/events")

        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.post = AsyncMock(
                side_effect=httpx.ConnectError("refused")
            )

            with pytest.raises(ProviderError):
                await dispatcher.dispatch(event)


class TestHttpEdgePurger:
    """Tests for HttpEdgePurger."""

    @pytest.mark.asyncio
    async def test_purges_every_template(self):
        # Arrange
        purger = HttpEdgePurger(
            ["http://edge-a/pages/{page_id}", "http://edge-b/p/{page_id}/comments"]
        )
        mock_response = MagicMock()
        mock_response.raise_for_status = MagicMock()

        with patch("httpx.AsyncClient") as mock_client:
            request = AsyncMock(return_value=mock_response)
            mock_client.return_value.__aenter__.return_value.request = request

            # Act
            await purger.purge_page(PageId(7))

        # Assert
        assert [call.args for call in request.call_args_list] == [
            ("PURGE", "http://edge-a/pages/7"),
            ("PURGE", "http://edge-b/p/7/comments"),
        ]

    @pytest.mark.asyncio
    async def test_failures_are_collected(self):
        """One failing edge does not stop the others from being purged."""
        # Arrange
        purger = HttpEdgePurger(["http://edge-a/{page_id}", "http://edge-b/{page_id}"])
        mock_response = MagicMock()
        mock_response.raise_for_status = MagicMock()

        with patch("httpx.AsyncClient") as mock_client:
            request = AsyncMock(
                side_effect=[httpx.ConnectError("refused"), mock_response]
            )
            mock_client.return_value.__aenter__.return_value.request = request

            # Act & Assert
            with pytest.raises(ProviderError, match="edge-a"):
                await purger.purge_page(PageId(7))

        assert request.await_count == 2

    @pytest.mark.asyncio
    async def test_no_templates_is_noop(self):
        with patch("httpx.AsyncClient") as mock_client:
            await HttpEdgePurger([]).purge_page(PageId(7))

        mock_client.assert_not_called()


class TestDeliveryPorts:
    """Adapters must implement the abstract delivery interfaces."""

    @pytest.mark.parametrize("port", [EdgePurger, NotificationDispatcher])
    def test_port_cannot_be_instantiated(self, port):
        with pytest.raises(TypeError):
            port()

    def test_incomplete_adapter_is_rejected(self):
        class HalfPurger(EdgePurger):
            pass

        with pytest.raises(TypeError):
            HalfPurger()

    def test_http_adapters_implement_ports(self):
        assert isinstance(HttpEdgePurger([]), EdgePurger)
        assert isinstance(
            WebhookNotificationDispatcher("https://notify.internal/events"),
            NotificationDispatcher,
        )
