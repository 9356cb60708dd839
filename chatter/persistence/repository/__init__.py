"""PostgreSQL repository implementations."""

from chatter.persistence.repository.comment import PostgresCommentRepository
from chatter.persistence.repository.unit_of_work import PostgresUnitOfWork
from chatter.persistence.repository.vote import PostgresVoteRepository

__all__ = [
    "PostgresCommentRepository",
    "PostgresUnitOfWork",
    "PostgresVoteRepository",
]
