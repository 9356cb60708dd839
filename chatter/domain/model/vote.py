"""Vote entity.

Each distinct voter can hold one vote per comment. A vote of None means
the voter has no vote (a toggled-off or never-cast vote).
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from chatter.domain.model.common import DomainModel
from chatter.domain.value import (
    ANONYMOUS_USER_ID,
    CommentId,
    PageId,
    UserId,
    VoteValue,
)


class Vote(DomainModel):
    """Vote entity.

    Business rules:
    - One vote per voter per comment (enforced by a unique constraint)
    - Repeating the current vote toggles it off
    """

    comment_id: CommentId
    voter: str  # Voting identity (user name, or IP for anonymous voters)
    voter_id: UserId = ANONYMOUS_USER_ID
    value: Optional[VoteValue] = None
    voted_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class VoteResult(DomainModel):
    """Outcome of a vote mutation."""

    comment_id: CommentId
    page_id: PageId
    score: int
    viewer_vote: Optional[VoteValue] = None
