"""Comment entity.

Comments are threaded two levels deep: a root comment (parent id 0) and a
flat list of replies that reference the root directly.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from chatter.domain.model.common import DomainModel
from chatter.domain.value import (
    ANONYMOUS_USER_ID,
    ROOT_PARENT_ID,
    CommentId,
    PageId,
    UserId,
    VoteValue,
)

# Written over author_ip when a moderator deletes a comment
TOMBSTONE_IP = "0"


class CommentDraft(DomainModel):
    """A comment that has not been stored yet (no id assigned)."""

    page_id: PageId
    author_id: UserId = ANONYMOUS_USER_ID
    author_name: str
    author_ip: str = ""
    text: str
    parent_id: CommentId = ROOT_PARENT_ID
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class Comment(DomainModel):
    """Comment entity.

    Represents one stored comment row together with its derived fields:
    - score: sum of all vote values on the comment
    - viewer_vote: the requesting viewer's vote (None when absent)

    A soft-deleted comment keeps its row; its author_ip carries the
    tombstone sentinel instead.
    """

    id: CommentId
    page_id: PageId
    author_id: UserId = ANONYMOUS_USER_ID
    author_name: str
    author_ip: str = ""
    text: str
    parent_id: CommentId = ROOT_PARENT_ID
    created_at: datetime
    score: int = 0
    viewer_vote: Optional[VoteValue] = None

    @property
    def is_root(self) -> bool:
        return self.parent_id == ROOT_PARENT_ID

    @property
    def thread_id(self) -> CommentId:
        """Id of the thread this comment belongs to."""
        return self.id if self.is_root else self.parent_id

    @property
    def is_tombstoned(self) -> bool:
        return self.author_ip == TOMBSTONE_IP

    @property
    def is_anonymous(self) -> bool:
        return self.author_id == ANONYMOUS_USER_ID

    @property
    def sort_key(self) -> tuple[datetime, int]:
        """Creation order; ids break ties between same-second timestamps."""
        return (self.created_at, self.id)
