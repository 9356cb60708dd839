"""Poll comments use case."""

from pydantic import BaseModel

from chatter.config import CommentSettings
from chatter.domain.service import CommentService
from chatter.domain.value import PageId, SortOrder

from .get_comments import GetCommentsRequest, GetCommentsResponse, GetCommentsUseCase


class PollCommentsRequest(BaseModel):
    """Poll comments request."""

    page_id: int
    last_seen_id: int = 0  # Freshness marker the client last saw
    order: SortOrder = SortOrder.RECENT
    page: int = 1
    auth_token: str | None = None
    client_ip: str = ""


class PollCommentsResponse(BaseModel):
    """Poll comments response."""

    page_id: int
    latest_id: int
    changed: bool
    poll_interval_ms: int
    comments: GetCommentsResponse | None = None  # Only when changed


class PollCommentsUseCase:
    """Use case answering "has anything new happened" for polling clients."""

    def __init__(
        self,
        comment_service: CommentService,
        get_comments: GetCommentsUseCase,
        settings: CommentSettings,
    ) -> None:
        """Initialize poll comments use case.

        Args:
            comment_service: Comment domain service
            get_comments: Use case producing the full comment list
            settings: Comment settings (poll interval)
        """
        self.comment_service = comment_service
        self.get_comments = get_comments
        self.settings = settings

    async def execute(self, request: PollCommentsRequest) -> PollCommentsResponse:
        """Execute poll flow.

        The freshness marker is read from the record store directly. The
        heavy comment list is only built when the marker differs from
        the client's.

        Args:
            request: Poll request with the client's last seen ID

        Returns:
            Current marker, and the comment list when it moved
        """
        latest_id = await self.comment_service.latest_id(PageId(request.page_id))
        changed = latest_id != request.last_seen_id

        comments = None
        if changed:
            comments = await self.get_comments.execute(
                GetCommentsRequest(
                    page_id=request.page_id,
                    order=request.order,
                    page=request.page,
                    auth_token=request.auth_token,
                    client_ip=request.client_ip,
                )
            )

        return PollCommentsResponse(
            page_id=request.page_id,
            latest_id=latest_id,
            changed=changed,
            poll_interval_ms=self.settings.poll_interval_ms,
            comments=comments,
        )
