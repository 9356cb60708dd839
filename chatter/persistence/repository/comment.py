"""PostgreSQL implementation of Comment repository."""

from datetime import datetime
from typing import List, Optional, Sequence

from sqlalchemy import func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from chatter.domain.model import TOMBSTONE_IP, Comment, CommentDraft
from chatter.domain.repository import CommentRepository
from chatter.domain.value import ANONYMOUS_USER_ID, CommentId, PageId, UserId
from chatter.persistence.database import store_errors
from chatter.persistence.mappers import draft_to_dict, row_to_comment
from chatter.persistence.tables import comment_votes_table, comments_table

# Aggregate score of the outer comment row (uses the comment_id index)
_score = (
    select(func.coalesce(func.sum(comment_votes_table.c.value), 0))
    .where(comment_votes_table.c.comment_id == comments_table.c.id)
    .correlate(comments_table)
    .scalar_subquery()
    .label("score")
)


def _select_comments():
    return select(comments_table, _score)


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = _select_comments().where(comments_table.c.id == comment_id)
        async with store_errors("find_comment"):
            result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def find_by_page(self, page_id: PageId) -> List[Comment]:
        """Find every comment row of a page with its score."""
        stmt = _select_comments().where(comments_table.c.page_id == page_id)
        async with store_errors("select_comments_for_page"):
            result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def find_since(self, since: datetime) -> List[Comment]:
        """Find comments on any page created after a point in time."""
        stmt = _select_comments().where(comments_table.c.created_at > since)
        async with store_errors("select_recent_comments"):
            result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def add(self, draft: CommentDraft) -> Comment:
        """Insert a comment and return it with its assigned ID."""
        stmt = insert(comments_table).values(**draft_to_dict(draft)).returning(
            comments_table
        )
        async with store_errors("insert_comment"):
            result = await self.session.execute(stmt)
            await self.session.flush()
        return row_to_comment(result.one()._asdict())

    async def tombstone(self, comment_id: CommentId) -> bool:
        """Overwrite the author IP with the tombstone sentinel."""
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .values(author_ip=TOMBSTONE_IP)
        )
        async with store_errors("tombstone_comment"):
            result = await self.session.execute(stmt)
            await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def count_by_page(self, page_id: PageId) -> int:
        """Count comment rows of a page."""
        stmt = select(func.count()).where(comments_table.c.page_id == page_id)
        async with store_errors("count_comments_for_page"):
            result = await self.session.execute(stmt)
        return result.scalar_one()

    async def latest_id(self, page_id: PageId) -> CommentId:
        """Highest comment ID of a page (IDs follow insertion order)."""
        stmt = select(func.coalesce(func.max(comments_table.c.id), 0)).where(
            comments_table.c.page_id == page_id
        )
        async with store_errors("latest_comment_id"):
            result = await self.session.execute(stmt)
        return CommentId(result.scalar_one())

    async def find_author_ids(self, names: Sequence[str]) -> dict[str, UserId]:
        """Resolve registered commenter names to user IDs."""
        if not names:
            return {}

        stmt = (
            select(comments_table.c.author_name, comments_table.c.author_id)
            .where(
                comments_table.c.author_name.in_(names),
                comments_table.c.author_id != ANONYMOUS_USER_ID,
            )
            .distinct()
        )
        async with store_errors("find_author_ids"):
            result = await self.session.execute(stmt)
        return {row.author_name: UserId(row.author_id) for row in result.fetchall()}
