"""Test configuration and helpers."""

from datetime import datetime, timedelta, timezone

from chatter.domain.model import Comment, Thread
from chatter.domain.value import (
    ANONYMOUS_USER_ID,
    ROOT_PARENT_ID,
    Actor,
    Capability,
    CommentId,
    PageId,
    UserId,
)

BASE_TIME = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)

PAGE = PageId(100)


def make_comment(
    comment_id: int,
    parent_id: int = ROOT_PARENT_ID,
    page_id: int = PAGE,
    seconds: int | None = None,
    score: int = 0,
    author_id: int = 1,
    author_name: str = "alice",
    author_ip: str = "10.0.0.1",
    text: str | None = None,
) -> Comment:
    """Build a stored comment row.

    ``seconds`` is the offset from BASE_TIME; it defaults to the comment ID
    so creation order follows ID order.
    """
    return Comment(
        id=CommentId(comment_id),
        page_id=PageId(page_id),
        author_id=UserId(author_id),
        author_name=author_name,
        author_ip=author_ip,
        text=text if text is not None else f"comment {comment_id}",
        parent_id=CommentId(parent_id),
        created_at=BASE_TIME + timedelta(seconds=comment_id if seconds is None else seconds),
        score=score,
    )


def make_thread(root: Comment, *replies: Comment) -> Thread:
    """Build a thread from a root and its replies."""
    return Thread(root=root, replies=list(replies))


def make_actor(
    name: str = "alice",
    user_id: int = 1,
    ip: str = "10.0.0.1",
    capabilities: frozenset[Capability] = frozenset({Capability.COMMENT}),
) -> Actor:
    """Build a registered commenter."""
    return Actor(user_id=UserId(user_id), name=name, ip=ip, capabilities=capabilities)


def make_moderator(name: str = "mod", user_id: int = 99) -> Actor:
    """Build an actor holding both comment and moderation capabilities."""
    return make_actor(
        name=name,
        user_id=user_id,
        ip="10.0.0.99",
        capabilities=frozenset({Capability.COMMENT, Capability.MODERATE}),
    )


def make_anonymous(ip: str = "203.0.113.7") -> Actor:
    """Build an anonymous commenter identified by IP."""
    return Actor(
        user_id=ANONYMOUS_USER_ID,
        name=ip,
        ip=ip,
        capabilities=frozenset({Capability.COMMENT}),
    )
