"""PostgreSQL implementation of Vote repository."""

from typing import Optional, Sequence

from sqlalchemy import delete, func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from chatter.domain.model import Vote
from chatter.domain.repository import VoteRepository
from chatter.domain.value import CommentId, VoteValue
from chatter.persistence.database import store_errors
from chatter.persistence.mappers import vote_to_dict
from chatter.persistence.tables import comment_votes_table


class PostgresVoteRepository(VoteRepository):
    """PostgreSQL implementation of VoteRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_value(
        self, comment_id: CommentId, voter: str
    ) -> Optional[VoteValue]:
        """Find a voter's current vote on a comment."""
        stmt = select(comment_votes_table.c.value).where(
            comment_votes_table.c.comment_id == comment_id,
            comment_votes_table.c.voter == voter,
        )
        async with store_errors("select_vote"):
            result = await self.session.execute(stmt)
        return VoteValue.from_store(result.scalar_one_or_none())

    async def find_values(
        self, voter: str, comment_ids: Sequence[CommentId]
    ) -> dict[CommentId, VoteValue]:
        """Find a voter's votes on many comments (batch query)."""
        if not comment_ids:
            return {}

        stmt = select(comment_votes_table.c.comment_id, comment_votes_table.c.value).where(
            comment_votes_table.c.voter == voter,
            comment_votes_table.c.comment_id.in_(comment_ids),
            comment_votes_table.c.value != 0,
        )
        async with store_errors("select_votes"):
            result = await self.session.execute(stmt)
        return {
            CommentId(row.comment_id): VoteValue(row.value) for row in result.fetchall()
        }

    async def upsert(self, vote: Vote) -> None:
        """Insert or update a vote row (one row per comment and voter)."""
        values = vote_to_dict(vote)
        stmt = insert(comment_votes_table).values(**values)
        stmt = stmt.on_conflict_do_update(
            constraint="unique_comment_vote",
            set_={
                "value": stmt.excluded.value,
                "voter_id": stmt.excluded.voter_id,
                "voted_at": stmt.excluded.voted_at,
            },
        )
        async with store_errors("upsert_vote"):
            await self.session.execute(stmt)
            await self.session.flush()

    async def delete_by_comment(self, comment_id: CommentId) -> int:
        """Delete every vote on a comment."""
        stmt = delete(comment_votes_table).where(
            comment_votes_table.c.comment_id == comment_id
        )
        async with store_errors("delete_votes"):
            result = await self.session.execute(stmt)
            await self.session.flush()
        return result.rowcount  # type: ignore[attr-defined]

    async def score(self, comment_id: CommentId) -> int:
        """Sum of vote values on a comment."""
        stmt = select(func.coalesce(func.sum(comment_votes_table.c.value), 0)).where(
            comment_votes_table.c.comment_id == comment_id
        )
        async with store_errors("score"):
            result = await self.session.execute(stmt)
        return int(result.scalar_one())

    async def scores(self, comment_ids: Sequence[CommentId]) -> dict[CommentId, int]:
        """Aggregate scores for many comments (batch query)."""
        if not comment_ids:
            return {}

        stmt = (
            select(
                comment_votes_table.c.comment_id,
                func.sum(comment_votes_table.c.value).label("score"),
            )
            .where(comment_votes_table.c.comment_id.in_(comment_ids))
            .group_by(comment_votes_table.c.comment_id)
        )
        async with store_errors("scores"):
            result = await self.session.execute(stmt)
        return {CommentId(row.comment_id): int(row.score) for row in result.fetchall()}
