"""Domain model entities for threaded comments."""

from chatter.domain.model.comment import TOMBSTONE_IP, Comment, CommentDraft
from chatter.domain.model.notification import NotificationEvent
from chatter.domain.model.thread import PageThreads, Thread, ThreadPage
from chatter.domain.model.vote import Vote, VoteResult

__all__ = [
    "Comment",
    "CommentDraft",
    "NotificationEvent",
    "PageThreads",
    "Thread",
    "ThreadPage",
    "TOMBSTONE_IP",
    "Vote",
    "VoteResult",
]
