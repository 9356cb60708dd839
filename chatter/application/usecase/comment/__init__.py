"""Comment use cases."""

from .comments_of_the_day import CommentsOfTheDayResponse, CommentsOfTheDayUseCase
from .count_comments import (
    CountCommentsRequest,
    CountCommentsResponse,
    CountCommentsUseCase,
)
from .create_comment import (
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
)
from .delete_comment import (
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
)
from .get_comments import GetCommentsRequest, GetCommentsResponse, GetCommentsUseCase
from .get_latest_id import GetLatestIdRequest, GetLatestIdResponse, GetLatestIdUseCase
from .hot_comments import HotCommentsRequest, HotCommentsResponse, HotCommentsUseCase
from .poll_comments import (
    PollCommentsRequest,
    PollCommentsResponse,
    PollCommentsUseCase,
)
from .views import CommentView, ThreadView, comment_to_view, thread_to_view

__all__ = [
    "CommentView",
    "CommentsOfTheDayResponse",
    "CommentsOfTheDayUseCase",
    "CountCommentsRequest",
    "CountCommentsResponse",
    "CountCommentsUseCase",
    "CreateCommentRequest",
    "CreateCommentResponse",
    "CreateCommentUseCase",
    "DeleteCommentRequest",
    "DeleteCommentResponse",
    "DeleteCommentUseCase",
    "GetCommentsRequest",
    "GetCommentsResponse",
    "GetCommentsUseCase",
    "GetLatestIdRequest",
    "GetLatestIdResponse",
    "GetLatestIdUseCase",
    "HotCommentsRequest",
    "HotCommentsResponse",
    "HotCommentsUseCase",
    "PollCommentsRequest",
    "PollCommentsResponse",
    "PollCommentsUseCase",
    "ThreadView",
    "comment_to_view",
    "thread_to_view",
]
