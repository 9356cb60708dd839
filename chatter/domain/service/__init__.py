"""Domain services."""

from .base import Service, require_capability
from .comment_service import CommentService
from .jwt_service import JWTService
from .notification_service import (
    NotificationService,
    find_mentions,
    make_excerpt,
)
from .ordering import (
    hot_threads,
    pager_window,
    paginate,
    sort_and_paginate,
    sort_threads,
    visible_threads,
)
from .thread_assembler import assemble_threads
from .thread_cache import ThreadCache
from .vote_service import VoteService

__all__ = [
    "CommentService",
    "JWTService",
    "NotificationService",
    "Service",
    "ThreadCache",
    "VoteService",
    "assemble_threads",
    "find_mentions",
    "hot_threads",
    "make_excerpt",
    "pager_window",
    "paginate",
    "require_capability",
    "sort_and_paginate",
    "sort_threads",
    "visible_threads",
]
