"""Domain value objects for threaded comments."""

from chatter.domain.value.identifiers import (
    ANONYMOUS_USER_ID,
    ROOT_PARENT_ID,
    CommentId,
    PageId,
    UserId,
)
from chatter.domain.value.types import (
    Actor,
    Capability,
    NotificationType,
    SortOrder,
    Visibility,
    VoteValue,
    VotingMode,
)

__all__ = [
    # Identifiers
    "CommentId",
    "PageId",
    "UserId",
    "ROOT_PARENT_ID",
    "ANONYMOUS_USER_ID",
    # Types
    "Actor",
    "Capability",
    "NotificationType",
    "SortOrder",
    "Visibility",
    "VoteValue",
    "VotingMode",
]
