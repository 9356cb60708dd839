"""Comments of the day use case."""

from pydantic import BaseModel

from chatter.domain.service import CommentService

from .views import CommentView, comment_to_view


class CommentsOfTheDayResponse(BaseModel):
    """Comments of the day response."""

    comments: list[CommentView]


class CommentsOfTheDayUseCase:
    """Use case listing the best comments of the last day across pages."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self) -> CommentsOfTheDayResponse:
        comments = await self.comment_service.comments_of_the_day()
        return CommentsOfTheDayResponse(
            comments=[comment_to_view(comment) for comment in comments]
        )
