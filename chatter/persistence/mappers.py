"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict

from chatter.domain.model import Comment, CommentDraft, Vote
from chatter.domain.value import CommentId, PageId, UserId, VoteValue


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model.

    Args:
        row: Database row as dict, optionally with a computed ``score``

    Returns:
        Comment domain model
    """
    return Comment(
        id=CommentId(row["id"]),
        page_id=PageId(row["page_id"]),
        author_id=UserId(row["author_id"]),
        author_name=row["author_name"],
        author_ip=row["author_ip"],
        text=row["text"],
        parent_id=CommentId(row["parent_id"]),
        created_at=row["created_at"],
        score=int(row.get("score") or 0),
    )


def draft_to_dict(draft: CommentDraft) -> Dict[str, Any]:
    """Convert a CommentDraft to an insertable database dict."""
    return {
        "page_id": draft.page_id,
        "author_id": draft.author_id,
        "author_name": draft.author_name,
        "author_ip": draft.author_ip,
        "text": draft.text,
        "parent_id": draft.parent_id,
        "created_at": draft.created_at,
    }


def vote_to_dict(vote: Vote) -> Dict[str, Any]:
    """Convert Vote domain model to database dict.

    A missing vote is stored as value 0.
    """
    return {
        "comment_id": vote.comment_id,
        "voter": vote.voter,
        "voter_id": vote.voter_id,
        "value": VoteValue.to_store(vote.value),
        "voted_at": vote.voted_at,
    }
