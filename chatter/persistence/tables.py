"""SQLAlchemy table definitions for chatter.

They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    BigInteger,
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    MetaData,
    SmallInteger,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# COMMENTS TABLE
# ============================================================================
# Rows are never removed: a moderator delete overwrites author_ip with the
# tombstone sentinel "0". parent_id 0 marks a root comment.
comments_table = Table(
    "comments",
    metadata,
    Column("id", BigInteger, primary_key=True, autoincrement=True),
    Column("page_id", BigInteger, nullable=False),
    Column("author_id", BigInteger, nullable=False, server_default="0"),
    Column("author_name", String(255), nullable=False),
    Column("author_ip", String(64), nullable=False, server_default=""),
    Column("text", Text, nullable=False),
    Column("parent_id", BigInteger, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_comments_page_id", comments_table.c.page_id)
Index("idx_comments_parent_id", comments_table.c.parent_id)
Index("idx_comments_created_at", comments_table.c.created_at)
Index("idx_comments_author_name", comments_table.c.author_name)

# ============================================================================
# COMMENT VOTES TABLE
# ============================================================================
# One row per (comment, voter). value 0 is a cleared vote.
comment_votes_table = Table(
    "comment_votes",
    metadata,
    Column(
        "comment_id",
        BigInteger,
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("voter", String(255), nullable=False),  # User name, or IP if anonymous
    Column("voter_id", BigInteger, nullable=False, server_default="0"),
    Column("value", SmallInteger, nullable=False, server_default="0"),
    Column(
        "voted_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("comment_id", "voter", name="unique_comment_vote"),
    CheckConstraint("value IN (-1, 0, 1)", name="vote_value_range"),
)

Index("idx_comment_votes_comment_id", comment_votes_table.c.comment_id)
