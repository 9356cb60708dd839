"""Create comment use case."""

from pydantic import BaseModel

from chatter.domain.service import CommentService, JWTService
from chatter.domain.value import ROOT_PARENT_ID, CommentId, PageId

from .views import CommentView, comment_to_view


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    page_id: int
    text: str
    parent_id: int = ROOT_PARENT_ID  # Comment being replied to (0 for a root)
    auth_token: str | None = None
    client_ip: str = ""


class CreateCommentResponse(BaseModel):
    """Create comment response."""

    comment: CommentView
    latest_id: int  # New freshness marker of the page


class CreateCommentUseCase:
    """Use case for adding a comment or a reply to a page."""

    def __init__(
        self, comment_service: CommentService, jwt_service: JWTService
    ) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
            jwt_service: JWT service for resolving the author
        """
        self.comment_service = comment_service
        self.jwt_service = jwt_service

    async def execute(self, request: CreateCommentRequest) -> CreateCommentResponse:
        """Execute create comment flow.

        Raises:
            NotAuthorizedError: If the caller cannot comment
            ValidationError: If the text is empty or too long
            InvalidParentError: If the parent is missing or on another page
        """
        actor = self.jwt_service.get_actor(request.auth_token, request.client_ip)

        comment = await self.comment_service.add_comment(
            page_id=PageId(request.page_id),
            actor=actor,
            text=request.text,
            parent_id=CommentId(request.parent_id),
        )

        return CreateCommentResponse(
            comment=comment_to_view(comment),
            latest_id=comment.id,
        )
