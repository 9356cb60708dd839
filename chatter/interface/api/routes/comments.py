"""Comment routes."""

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, HTTPException, Request, status
from pydantic import BaseModel, Field

from chatter.application.usecase.comment import (
    CommentsOfTheDayResponse,
    CommentsOfTheDayUseCase,
    CountCommentsRequest,
    CountCommentsResponse,
    CountCommentsUseCase,
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
    GetCommentsRequest,
    GetCommentsResponse,
    GetCommentsUseCase,
    GetLatestIdRequest,
    GetLatestIdResponse,
    GetLatestIdUseCase,
    HotCommentsRequest,
    HotCommentsResponse,
    HotCommentsUseCase,
    PollCommentsRequest,
    PollCommentsResponse,
    PollCommentsUseCase,
)
from chatter.domain.error import DomainError
from chatter.domain.value import SortOrder
from chatter.interface.error import to_http_exception

router = APIRouter(tags=["comments"], route_class=DishkaRoute)


def client_ip(request: Request) -> str:
    """IP address of the caller (identity of anonymous commenters)."""
    return request.client.host if request.client else ""


class CreateCommentAPIRequest(BaseModel):
    """API request for creating a comment."""

    text: str = Field(min_length=1)
    parent_id: int = 0  # Comment being replied to (0 for a root comment)


@router.get("/pages/{page_id}/comments", response_model=GetCommentsResponse)
async def get_comments(
    page_id: int,
    request: Request,
    get_comments_use_case: FromDishka[GetCommentsUseCase],
    order: SortOrder = SortOrder.RECENT,
    page: int = 1,
    auth_token: str | None = Cookie(default=None),
) -> GetCommentsResponse:
    """Get one page window of a page's comment threads.

    Args:
        page_id: Page ID
        request: HTTP request (for the client IP)
        get_comments_use_case: Get comments use case from DI
        order: Thread ordering
        page: Page number (out-of-range values are clamped)
        auth_token: JWT token from cookie (optional)

    Returns:
        Threads with pagination metadata and the viewer's votes
    """
    try:
        return await get_comments_use_case.execute(
            GetCommentsRequest(
                page_id=page_id,
                order=order,
                page=page,
                auth_token=auth_token,
                client_ip=client_ip(request),
            )
        )
    except DomainError as e:
        raise to_http_exception(e)


@router.post(
    "/pages/{page_id}/comments",
    response_model=CreateCommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    page_id: int,
    body: CreateCommentAPIRequest,
    request: Request,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
    auth_token: str | None = Cookie(default=None),
) -> CreateCommentResponse:
    """Add a comment to a page or reply to a comment.

    Anonymous callers may comment when the anonymous capabilities allow it.

    Raises:
        HTTPException: 400 on invalid text or parent, 403 without the
            comment capability
    """
    try:
        return await create_comment_use_case.execute(
            CreateCommentRequest(
                page_id=page_id,
                text=body.text,
                parent_id=body.parent_id,
                auth_token=auth_token,
                client_ip=client_ip(request),
            )
        )
    except DomainError as e:
        logfire.warn("Comment creation failed", page_id=page_id, error=str(e))
        raise to_http_exception(e)


@router.get("/pages/{page_id}/comments/latest", response_model=GetLatestIdResponse)
async def get_latest_id(
    page_id: int,
    get_latest_id_use_case: FromDishka[GetLatestIdUseCase],
) -> GetLatestIdResponse:
    """Get the freshness marker (latest comment ID) of a page."""
    try:
        return await get_latest_id_use_case.execute(GetLatestIdRequest(page_id=page_id))
    except DomainError as e:
        raise to_http_exception(e)


@router.get("/pages/{page_id}/comments/poll", response_model=PollCommentsResponse)
async def poll_comments(
    page_id: int,
    request: Request,
    poll_comments_use_case: FromDishka[PollCommentsUseCase],
    last_seen_id: int = 0,
    order: SortOrder = SortOrder.RECENT,
    page: int = 1,
    auth_token: str | None = Cookie(default=None),
) -> PollCommentsResponse:
    """Check whether a page has new comments.

    The full comment list is only included when the latest comment ID
    differs from ``last_seen_id``.
    """
    try:
        return await poll_comments_use_case.execute(
            PollCommentsRequest(
                page_id=page_id,
                last_seen_id=last_seen_id,
                order=order,
                page=page,
                auth_token=auth_token,
                client_ip=client_ip(request),
            )
        )
    except DomainError as e:
        raise to_http_exception(e)


@router.get("/pages/{page_id}/comments/count", response_model=CountCommentsResponse)
async def count_comments(
    page_id: int,
    count_comments_use_case: FromDishka[CountCommentsUseCase],
) -> CountCommentsResponse:
    """Count the comments of a page."""
    try:
        return await count_comments_use_case.execute(
            CountCommentsRequest(page_id=page_id)
        )
    except DomainError as e:
        raise to_http_exception(e)


@router.get("/pages/{page_id}/comments/hot", response_model=HotCommentsResponse)
async def hot_comments(
    page_id: int,
    request: Request,
    hot_comments_use_case: FromDishka[HotCommentsUseCase],
    auth_token: str | None = Cookie(default=None),
) -> HotCommentsResponse:
    """Get the best-scored threads of a busy page."""
    try:
        return await hot_comments_use_case.execute(
            HotCommentsRequest(
                page_id=page_id, auth_token=auth_token, client_ip=client_ip(request)
            )
        )
    except DomainError as e:
        raise to_http_exception(e)


@router.delete("/comments/{comment_id}", response_model=DeleteCommentResponse)
async def delete_comment(
    comment_id: int,
    request: Request,
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
    auth_token: str | None = Cookie(default=None),
) -> DeleteCommentResponse:
    """Soft-delete a comment.

    Requires the moderation capability.

    Raises:
        HTTPException: 401 without a token, 403 without the capability,
            404 if the comment does not exist
    """
    if not auth_token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required to delete comments",
        )

    try:
        return await delete_comment_use_case.execute(
            DeleteCommentRequest(
                comment_id=comment_id,
                auth_token=auth_token,
                client_ip=client_ip(request),
            )
        )
    except DomainError as e:
        logfire.warn("Comment deletion failed", comment_id=comment_id, error=str(e))
        raise to_http_exception(e)


@router.get("/comments/of-the-day", response_model=CommentsOfTheDayResponse)
async def comments_of_the_day(
    comments_of_the_day_use_case: FromDishka[CommentsOfTheDayUseCase],
) -> CommentsOfTheDayResponse:
    """Get the best comments of the last 24 hours."""
    try:
        return await comments_of_the_day_use_case.execute()
    except DomainError as e:
        raise to_http_exception(e)
