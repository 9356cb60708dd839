"""Vote use case."""

from pydantic import BaseModel

from chatter.domain.service import JWTService, VoteService
from chatter.domain.value import CommentId, VoteValue


class VoteRequest(BaseModel):
    """Vote request."""

    comment_id: int
    value: int  # Sign decides the direction; 0 clears the vote
    auth_token: str | None = None
    client_ip: str = ""


class VoteResponse(BaseModel):
    """Vote response."""

    comment_id: int
    page_id: int
    score: int
    viewer_vote: int  # -1, 0 (no vote) or 1


class VoteUseCase:
    """Use case for casting, changing or clearing a vote."""

    def __init__(self, vote_service: VoteService, jwt_service: JWTService) -> None:
        """Initialize vote use case.

        Args:
            vote_service: Vote domain service
            jwt_service: JWT service for resolving the voter
        """
        self.vote_service = vote_service
        self.jwt_service = jwt_service

    async def execute(self, request: VoteRequest) -> VoteResponse:
        """Execute vote flow.

        Raises:
            NotAuthorizedError: If the caller cannot vote
            NotFoundError: If the comment does not exist or was deleted
            BusinessRuleViolationError: If the vote is not allowed
        """
        actor = self.jwt_service.get_actor(request.auth_token, request.client_ip)

        result = await self.vote_service.vote(
            CommentId(request.comment_id), actor, request.value
        )

        return VoteResponse(
            comment_id=result.comment_id,
            page_id=result.page_id,
            score=result.score,
            viewer_vote=VoteValue.to_store(result.viewer_vote),
        )
