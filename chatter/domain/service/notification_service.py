"""Notification domain service.

Builds reply, upvote and mention events from comment mutations and hands
them to the delivery collaborator. Delivery is fire-and-forget: failures
are logged and never reach the mutating caller.
"""

import re

import logfire

from chatter.domain.model.comment import Comment
from chatter.domain.model.notification import NotificationEvent
from chatter.domain.repository import CommentRepository, NotificationDispatcher
from chatter.domain.value import Actor, NotificationType, UserId

from .base import Service

MENTION_PATTERN = re.compile(r"(?<![\w@])@([^\s@]+)")

# Trailing punctuation is not part of a mentioned name
MENTION_TRAILING = ".,;:!?)\"'"

EXCERPT_LENGTH = 50


def find_mentions(text: str) -> list[str]:
    """Names mentioned as ``@name`` in a comment body, in order, no repeats."""
    names: list[str] = []
    for match in MENTION_PATTERN.finditer(text):
        name = match.group(1).rstrip(MENTION_TRAILING)
        if name and name not in names:
            names.append(name)
    return names


def make_excerpt(text: str, length: int = EXCERPT_LENGTH) -> str:
    """Shorten a comment body for notification payloads."""
    text = " ".join(text.split())
    if len(text) <= length:
        return text
    return text[:length].rstrip() + "..."


class NotificationService(Service):
    """Domain service emitting comment notifications."""

    def __init__(
        self,
        dispatcher: NotificationDispatcher,
        comment_repository: CommentRepository,
    ) -> None:
        """Initialize notification service.

        Args:
            dispatcher: Notification delivery
            comment_repository: Comment repository (for mention lookups)
        """
        self.dispatcher = dispatcher
        self.comment_repository = comment_repository

    async def notify_reply(self, reply: Comment, replied_to: Comment) -> None:
        """Tell a comment's author about a reply.

        Skipped for anonymous authors and for replies to oneself.
        """
        if replied_to.is_anonymous or replied_to.author_id == reply.author_id:
            return
        await self._send(
            NotificationEvent(
                type=NotificationType.REPLY,
                recipient_id=replied_to.author_id,
                source_comment_id=reply.id,
                page_id=reply.page_id,
                excerpt=make_excerpt(reply.text),
                actor_name=reply.author_name,
            )
        )

    async def notify_upvote(self, comment: Comment, voter: Actor) -> None:
        """Tell a comment's author about a new upvote."""
        if comment.is_anonymous:
            return
        await self._send(
            NotificationEvent(
                type=NotificationType.UPVOTE,
                recipient_id=comment.author_id,
                source_comment_id=comment.id,
                page_id=comment.page_id,
                excerpt=make_excerpt(comment.text),
                actor_name=voter.name,
            )
        )

    async def notify_mentions(self, comment: Comment) -> list[UserId]:
        """Tell every known commenter mentioned in a comment.

        Args:
            comment: The newly added comment

        Returns:
            User IDs that were notified
        """
        names = find_mentions(comment.text)
        if not names:
            return []

        try:
            known = await self.comment_repository.find_author_ids(names)
        except Exception as e:
            logfire.error(
                "Mention lookup failed", comment_id=comment.id, error=str(e)
            )
            return []

        recipients: list[UserId] = []
        for name in names:
            user_id = known.get(name)
            if user_id is None or user_id == comment.author_id:
                continue
            if user_id in recipients:
                continue
            recipients.append(user_id)
            await self._send(
                NotificationEvent(
                    type=NotificationType.MENTION,
                    recipient_id=user_id,
                    source_comment_id=comment.id,
                    page_id=comment.page_id,
                    excerpt=make_excerpt(comment.text),
                    actor_name=comment.author_name,
                )
            )
        return recipients

    async def _send(self, event: NotificationEvent) -> None:
        with logfire.span(
            "notification_service.send",
            type=event.type.value,
            recipient_id=event.recipient_id,
            comment_id=event.source_comment_id,
        ):
            try:
                await self.dispatcher.dispatch(event)
            except Exception as e:
                logfire.error(
                    "Notification dispatch failed",
                    type=event.type.value,
                    recipient_id=event.recipient_id,
                    error=str(e),
                )
