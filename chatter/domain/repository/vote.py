"""Vote repository interface."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from chatter.domain.model.vote import Vote
from chatter.domain.value import CommentId, VoteValue


class VoteRepository(ABC):
    """Repository for Vote entity.

    Votes are keyed by (comment ID, voter). Implementations convert between
    the stored integer 0 and the domain's None ("no vote").
    """

    @abstractmethod
    async def find_value(
        self, comment_id: CommentId, voter: str
    ) -> Optional[VoteValue]:
        """Find a voter's current vote on a comment.

        Args:
            comment_id: The comment ID
            voter: Voting identity

        Returns:
            The vote value, or None if the voter has no vote
        """
        pass

    @abstractmethod
    async def find_values(
        self, voter: str, comment_ids: Sequence[CommentId]
    ) -> dict[CommentId, VoteValue]:
        """Find a voter's votes on many comments (batch query).

        Args:
            voter: Voting identity
            comment_ids: Comments to check

        Returns:
            Mapping of comment ID to vote for comments the voter voted on
        """
        pass

    @abstractmethod
    async def upsert(self, vote: Vote) -> None:
        """Insert or update a vote row.

        A vote whose value is None is stored as "no vote".

        Args:
            vote: The vote to store
        """
        pass

    @abstractmethod
    async def delete_by_comment(self, comment_id: CommentId) -> int:
        """Delete every vote on a comment.

        Args:
            comment_id: The comment ID

        Returns:
            Number of vote rows removed
        """
        pass

    @abstractmethod
    async def score(self, comment_id: CommentId) -> int:
        """Sum of all vote values on a comment.

        Args:
            comment_id: The comment ID

        Returns:
            Aggregate score (0 without votes)
        """
        pass

    @abstractmethod
    async def scores(self, comment_ids: Sequence[CommentId]) -> dict[CommentId, int]:
        """Aggregate scores for many comments (batch query).

        Args:
            comment_ids: Comments to score

        Returns:
            Mapping of comment ID to score for comments with votes
        """
        pass
