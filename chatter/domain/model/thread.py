"""Thread structures built from comment rows.

A thread is a root comment plus its direct replies ordered by creation
time. PageThreads is the unit stored in the thread cache.
"""

from typing import Optional

from chatter.domain.model.comment import Comment
from chatter.domain.model.common import DomainModel
from chatter.domain.value import CommentId, PageId, Visibility


class Thread(DomainModel):
    """A root comment and its replies (oldest reply first)."""

    root: Comment
    replies: list[Comment] = []

    @property
    def thread_id(self) -> CommentId:
        return self.root.id

    @property
    def comments(self) -> list[Comment]:
        """Root at position 0 followed by the replies."""
        return [self.root, *self.replies]

    @property
    def visible_replies(self) -> list[Comment]:
        return [reply for reply in self.replies if not reply.is_tombstoned]

    @property
    def visibility(self) -> Visibility:
        """Display state derived from {root tombstoned, has visible replies}."""
        if not self.root.is_tombstoned:
            return Visibility.VISIBLE
        if self.visible_replies:
            return Visibility.PLACEHOLDER
        return Visibility.ABSENT

    def with_score(self, comment_id: CommentId, score: int) -> Optional["Thread"]:
        """Return a copy with one comment's score replaced, or None if absent."""
        if self.root.id == comment_id:
            return self.model_copy(
                update={"root": self.root.model_copy(update={"score": score})}
            )
        for index, reply in enumerate(self.replies):
            if reply.id == comment_id:
                replies = list(self.replies)
                replies[index] = reply.model_copy(update={"score": score})
                return self.model_copy(update={"replies": replies})
        return None


class PageThreads(DomainModel):
    """All assembled threads of one page, keyed by thread id.

    Unsorted and unpaginated. Viewer votes are never stored here.
    """

    page_id: PageId
    threads: dict[CommentId, Thread] = {}

    def comment_ids(self) -> list[CommentId]:
        return [
            comment.id for thread in self.threads.values() for comment in thread.comments
        ]

    def with_score(
        self, comment_id: CommentId, score: int
    ) -> Optional["PageThreads"]:
        """Return a copy with one comment's score patched, or None if absent."""
        for thread_id, thread in self.threads.items():
            patched = thread.with_score(comment_id, score)
            if patched is not None:
                threads = dict(self.threads)
                threads[thread_id] = patched
                return self.model_copy(update={"threads": threads})
        return None


class ThreadPage(DomainModel):
    """One page window of sorted threads."""

    threads: list[Thread]
    page: int
    per_page: int
    total_pages: int
    total_threads: int
