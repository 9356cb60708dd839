"""Vote routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Request
from pydantic import BaseModel

from chatter.application.usecase.vote import VoteRequest, VoteResponse, VoteUseCase
from chatter.domain.error import DomainError
from chatter.interface.api.routes.comments import client_ip
from chatter.interface.error import to_http_exception

router = APIRouter(prefix="/comments", tags=["votes"], route_class=DishkaRoute)


class VoteAPIRequest(BaseModel):
    """API request for voting."""

    value: int  # 1 up, -1 down, 0 clear; repeating a vote clears it


@router.post("/{comment_id}/vote", response_model=VoteResponse)
async def vote(
    comment_id: int,
    body: VoteAPIRequest,
    request: Request,
    vote_use_case: FromDishka[VoteUseCase],
    auth_token: str | None = Cookie(default=None),
) -> VoteResponse:
    """Vote on a comment.

    Args:
        comment_id: Comment ID
        body: Vote value
        request: HTTP request (for the client IP)
        vote_use_case: Vote use case from DI
        auth_token: JWT token from cookie (optional)

    Returns:
        The comment's new score and the caller's resulting vote

    Raises:
        HTTPException: 400 for disallowed votes, 403 without the comment
            capability, 404 for missing or deleted comments
    """
    try:
        return await vote_use_case.execute(
            VoteRequest(
                comment_id=comment_id,
                value=body.value,
                auth_token=auth_token,
                client_ip=client_ip(request),
            )
        )
    except DomainError as e:
        raise to_http_exception(e)
