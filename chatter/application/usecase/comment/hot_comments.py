"""Hot comments use case."""

from pydantic import BaseModel

from chatter.domain.service import CommentService, JWTService
from chatter.domain.value import PageId

from .views import ThreadView, thread_to_view


class HotCommentsRequest(BaseModel):
    """Hot comments request."""

    page_id: int
    auth_token: str | None = None
    client_ip: str = ""


class HotCommentsResponse(BaseModel):
    """Hot comments response."""

    page_id: int
    threads: list[ThreadView]  # Empty unless the page is busy


class HotCommentsUseCase:
    """Use case returning the best-scored threads of a busy page."""

    def __init__(
        self, comment_service: CommentService, jwt_service: JWTService
    ) -> None:
        self.comment_service = comment_service
        self.jwt_service = jwt_service

    async def execute(self, request: HotCommentsRequest) -> HotCommentsResponse:
        viewer = self.jwt_service.get_actor(request.auth_token, request.client_ip)
        threads = await self.comment_service.get_hot_threads(
            PageId(request.page_id), viewer
        )
        return HotCommentsResponse(
            page_id=request.page_id,
            threads=[thread_to_view(thread) for thread in threads],
        )
