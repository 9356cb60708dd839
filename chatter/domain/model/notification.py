"""Notification events emitted by comment mutations."""

from chatter.domain.model.common import DomainModel
from chatter.domain.value import CommentId, NotificationType, PageId, UserId


class NotificationEvent(DomainModel):
    """Event handed to the notification delivery collaborator."""

    type: NotificationType
    recipient_id: UserId
    source_comment_id: CommentId
    page_id: PageId
    excerpt: str
    actor_name: str = ""  # Who triggered the event
