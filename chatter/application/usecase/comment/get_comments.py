"""Get comments use case."""

from pydantic import BaseModel

from chatter.config import CommentSettings
from chatter.domain.service import CommentService, JWTService, pager_window
from chatter.domain.value import PageId, SortOrder

from .views import ThreadView, thread_to_view


class GetCommentsRequest(BaseModel):
    """Get comments request."""

    page_id: int
    order: SortOrder = SortOrder.RECENT
    page: int = 1
    auth_token: str | None = None  # JWT token for authentication (optional)
    client_ip: str = ""


class GetCommentsResponse(BaseModel):
    """Get comments response."""

    page_id: int
    order: SortOrder
    page: int
    total_pages: int
    total_threads: int
    pager: list[int]  # Page numbers to link to
    threads: list[ThreadView]


class GetCommentsUseCase:
    """Use case for getting one page window of a page's threads."""

    def __init__(
        self,
        comment_service: CommentService,
        jwt_service: JWTService,
        settings: CommentSettings,
    ) -> None:
        """Initialize get comments use case.

        Args:
            comment_service: Comment domain service
            jwt_service: JWT service for resolving the viewer
            settings: Comment settings (pager size)
        """
        self.comment_service = comment_service
        self.jwt_service = jwt_service
        self.settings = settings

    async def execute(self, request: GetCommentsRequest) -> GetCommentsResponse:
        """Execute get comments flow.

        Threads come from the page cache; the viewer's own votes are
        overlaid on the returned window only.

        Args:
            request: Get comments request

        Returns:
            The requested page window with pagination metadata
        """
        viewer = self.jwt_service.get_actor(request.auth_token, request.client_ip)

        window = await self.comment_service.get_thread_page(
            page_id=PageId(request.page_id),
            order=request.order,
            page=request.page,
            viewer=viewer,
        )

        return GetCommentsResponse(
            page_id=request.page_id,
            order=request.order,
            page=window.page,
            total_pages=window.total_pages,
            total_threads=window.total_threads,
            pager=pager_window(
                window.page, window.total_pages, self.settings.pager_limit
            ),
            threads=[thread_to_view(thread) for thread in window.threads],
        )
