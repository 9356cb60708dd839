"""Delete comment use case."""

from pydantic import BaseModel

from chatter.domain.service import CommentService, JWTService
from chatter.domain.value import CommentId


class DeleteCommentRequest(BaseModel):
    """Delete comment request."""

    comment_id: int
    auth_token: str | None = None
    client_ip: str = ""


class DeleteCommentResponse(BaseModel):
    """Delete comment response."""

    comment_id: int
    page_id: int
    deleted: bool


class DeleteCommentUseCase:
    """Use case for a moderator soft-deleting a comment."""

    def __init__(
        self, comment_service: CommentService, jwt_service: JWTService
    ) -> None:
        self.comment_service = comment_service
        self.jwt_service = jwt_service

    async def execute(self, request: DeleteCommentRequest) -> DeleteCommentResponse:
        """Execute delete comment flow.

        Raises:
            NotAuthorizedError: If the caller cannot moderate
            NotFoundError: If the comment does not exist
        """
        actor = self.jwt_service.get_actor(request.auth_token, request.client_ip)

        comment = await self.comment_service.delete_comment(
            CommentId(request.comment_id), actor
        )

        return DeleteCommentResponse(
            comment_id=comment.id,
            page_id=comment.page_id,
            deleted=comment.is_tombstoned,
        )
