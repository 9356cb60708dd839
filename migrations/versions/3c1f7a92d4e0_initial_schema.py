"""initial_schema

Create the comment schema:
- Comments (two-level threads; soft delete via author_ip tombstone)
- Comment votes (one row per comment and voter, value in -1/0/1)

Revision ID: 3c1f7a92d4e0
Revises:
Create Date: 2026-10-19 10:12:44.518203

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1f7a92d4e0"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "comments",
        sa.Column("id", sa.BigInteger(), sa.Identity(), primary_key=True),
        sa.Column("page_id", sa.BigInteger(), nullable=False),
        sa.Column("author_id", sa.BigInteger(), nullable=False, server_default="0"),
        sa.Column("author_name", sa.String(length=255), nullable=False),
        sa.Column("author_ip", sa.String(length=64), nullable=False, server_default=""),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column("parent_id", sa.BigInteger(), nullable=False, server_default="0"),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
    )
    op.create_index("idx_comments_page_id", "comments", ["page_id"])
    op.create_index("idx_comments_parent_id", "comments", ["parent_id"])
    op.create_index("idx_comments_created_at", "comments", ["created_at"])
    op.create_index("idx_comments_author_name", "comments", ["author_name"])

    op.create_table(
        "comment_votes",
        sa.Column(
            "comment_id",
            sa.BigInteger(),
            sa.ForeignKey("comments.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("voter", sa.String(length=255), nullable=False),
        sa.Column("voter_id", sa.BigInteger(), nullable=False, server_default="0"),
        sa.Column("value", sa.SmallInteger(), nullable=False, server_default="0"),
        sa.Column(
            "voted_at",
            postgresql.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.UniqueConstraint("comment_id", "voter", name="unique_comment_vote"),
        sa.CheckConstraint("value IN (-1, 0, 1)", name="vote_value_range"),
    )
    op.create_index(
        "idx_comment_votes_comment_id", "comment_votes", ["comment_id"]
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_comment_votes_comment_id", table_name="comment_votes")
    op.drop_table("comment_votes")

    op.drop_index("idx_comments_author_name", table_name="comments")
    op.drop_index("idx_comments_created_at", table_name="comments")
    op.drop_index("idx_comments_parent_id", table_name="comments")
    op.drop_index("idx_comments_page_id", table_name="comments")
    op.drop_table("comments")
