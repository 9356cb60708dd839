"""Get latest comment ID use case."""

from pydantic import BaseModel

from chatter.domain.service import CommentService
from chatter.domain.value import PageId


class GetLatestIdRequest(BaseModel):
    """Get latest ID request."""

    page_id: int


class GetLatestIdResponse(BaseModel):
    """Get latest ID response."""

    page_id: int
    latest_id: int  # 0 when the page has no comments


class GetLatestIdUseCase:
    """Use case returning a page's freshness marker."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: GetLatestIdRequest) -> GetLatestIdResponse:
        latest_id = await self.comment_service.latest_id(PageId(request.page_id))
        return GetLatestIdResponse(page_id=request.page_id, latest_id=latest_id)
