"""Repository interfaces for the comment domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from chatter.domain.repository.cache import CacheBackend
from chatter.domain.repository.comment import CommentRepository
from chatter.domain.repository.edge import EdgePurger
from chatter.domain.repository.notification import NotificationDispatcher
from chatter.domain.repository.unit_of_work import UnitOfWork
from chatter.domain.repository.vote import VoteRepository

__all__ = [
    "CacheBackend",
    "CommentRepository",
    "EdgePurger",
    "NotificationDispatcher",
    "UnitOfWork",
    "VoteRepository",
]
