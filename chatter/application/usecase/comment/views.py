"""Response shapes handed to the view layer.

Tombstoned comments keep their position but lose their author and text.
"""

from datetime import datetime

from pydantic import BaseModel

from chatter.domain.model import Comment, Thread
from chatter.domain.value import VoteValue, Visibility


class CommentView(BaseModel):
    """One comment with its derived display fields."""

    comment_id: int
    page_id: int
    thread_id: int
    parent_id: int
    author_id: int
    author_name: str
    text: str
    created_at: datetime
    score: int
    viewer_vote: int  # -1, 0 (no vote) or 1
    deleted: bool


class ThreadView(BaseModel):
    """A root comment (or its placeholder) and its visible replies."""

    thread_id: int
    visibility: Visibility
    root: CommentView
    replies: list[CommentView]


def comment_to_view(comment: Comment) -> CommentView:
    """Convert a comment to its view model."""
    deleted = comment.is_tombstoned
    return CommentView(
        comment_id=comment.id,
        page_id=comment.page_id,
        thread_id=comment.thread_id,
        parent_id=comment.parent_id,
        author_id=0 if deleted else comment.author_id,
        author_name="" if deleted else comment.author_name,
        text="" if deleted else comment.text,
        created_at=comment.created_at,
        score=comment.score,
        viewer_vote=VoteValue.to_store(comment.viewer_vote),
        deleted=deleted,
    )


def thread_to_view(thread: Thread) -> ThreadView:
    """Convert a thread to its view model (tombstoned replies dropped)."""
    return ThreadView(
        thread_id=thread.thread_id,
        visibility=thread.visibility,
        root=comment_to_view(thread.root),
        replies=[comment_to_view(reply) for reply in thread.visible_replies],
    )
