"""Comment repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Sequence

from chatter.domain.model.comment import Comment, CommentDraft
from chatter.domain.value import CommentId, PageId, UserId


class CommentRepository(ABC):
    """Repository for Comment entity.

    Defines the contract for comment persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment (with its aggregate score) if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_page(self, page_id: PageId) -> List[Comment]:
        """Find every comment row of a page, tombstoned rows included.

        Rows come back in no particular order, each joined with its
        aggregate vote score.

        Args:
            page_id: The page ID

        Returns:
            List of comments
        """
        pass

    @abstractmethod
    async def find_since(self, since: datetime) -> List[Comment]:
        """Find comments on any page created after a point in time.

        Args:
            since: Lower bound (exclusive) on creation time

        Returns:
            List of comments with their scores
        """
        pass

    @abstractmethod
    async def add(self, draft: CommentDraft) -> Comment:
        """Insert a new comment row.

        Args:
            draft: The comment to store

        Returns:
            The stored comment with its store-assigned ID
        """
        pass

    @abstractmethod
    async def tombstone(self, comment_id: CommentId) -> bool:
        """Soft-delete a comment by writing the tombstone sentinel.

        Args:
            comment_id: The comment ID

        Returns:
            True if a row was updated, False if no such comment exists
        """
        pass

    @abstractmethod
    async def count_by_page(self, page_id: PageId) -> int:
        """Count comment rows of a page.

        Args:
            page_id: The page ID

        Returns:
            Number of comments
        """
        pass

    @abstractmethod
    async def latest_id(self, page_id: PageId) -> CommentId:
        """ID of the most recently created comment on a page.

        Args:
            page_id: The page ID

        Returns:
            The latest comment ID, or 0 when the page has no comments
        """
        pass

    @abstractmethod
    async def find_author_ids(self, names: Sequence[str]) -> dict[str, UserId]:
        """Resolve registered commenter names to user IDs.

        Args:
            names: Author names to look up

        Returns:
            Mapping of each known name to its user ID
        """
        pass
