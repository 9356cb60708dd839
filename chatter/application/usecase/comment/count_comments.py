"""Count comments use case."""

from pydantic import BaseModel

from chatter.domain.service import CommentService
from chatter.domain.value import PageId


class CountCommentsRequest(BaseModel):
    """Count comments request."""

    page_id: int


class CountCommentsResponse(BaseModel):
    """Count comments response."""

    page_id: int
    count: int


class CountCommentsUseCase:
    """Use case counting the comment rows of a page."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: CountCommentsRequest) -> CountCommentsResponse:
        count = await self.comment_service.count_comments(PageId(request.page_id))
        return CountCommentsResponse(page_id=request.page_id, count=count)
