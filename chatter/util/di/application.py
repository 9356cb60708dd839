"""Application layer DI providers."""

from dishka import Scope, provide

from chatter.application.usecase.comment import (
    CommentsOfTheDayUseCase,
    CountCommentsUseCase,
    CreateCommentUseCase,
    DeleteCommentUseCase,
    GetCommentsUseCase,
    GetLatestIdUseCase,
    HotCommentsUseCase,
    PollCommentsUseCase,
)
from chatter.application.usecase.vote import VoteUseCase
from chatter.config import CommentSettings
from chatter.domain.service import CommentService, JWTService, VoteService
from chatter.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Comment use cases
    @provide(scope=Scope.REQUEST)
    def get_comments_use_case(
        self,
        comment_service: CommentService,
        jwt_service: JWTService,
        settings: CommentSettings,
    ) -> GetCommentsUseCase:
        """Provide get comments use case."""
        return GetCommentsUseCase(
            comment_service=comment_service,
            jwt_service=jwt_service,
            settings=settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_create_comment_use_case(
        self, comment_service: CommentService, jwt_service: JWTService
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(
            comment_service=comment_service, jwt_service=jwt_service
        )

    @provide(scope=Scope.REQUEST)
    def get_delete_comment_use_case(
        self, comment_service: CommentService, jwt_service: JWTService
    ) -> DeleteCommentUseCase:
        """Provide delete comment use case."""
        return DeleteCommentUseCase(
            comment_service=comment_service, jwt_service=jwt_service
        )

    @provide(scope=Scope.REQUEST)
    def get_poll_comments_use_case(
        self,
        comment_service: CommentService,
        get_comments: GetCommentsUseCase,
        settings: CommentSettings,
    ) -> PollCommentsUseCase:
        """Provide poll comments use case."""
        return PollCommentsUseCase(
            comment_service=comment_service,
            get_comments=get_comments,
            settings=settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_latest_id_use_case(
        self, comment_service: CommentService
    ) -> GetLatestIdUseCase:
        """Provide latest comment ID use case."""
        return GetLatestIdUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_count_comments_use_case(
        self, comment_service: CommentService
    ) -> CountCommentsUseCase:
        """Provide count comments use case."""
        return CountCommentsUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_hot_comments_use_case(
        self, comment_service: CommentService, jwt_service: JWTService
    ) -> HotCommentsUseCase:
        """Provide hot comments use case."""
        return HotCommentsUseCase(
            comment_service=comment_service, jwt_service=jwt_service
        )

    @provide(scope=Scope.REQUEST)
    def get_comments_of_the_day_use_case(
        self, comment_service: CommentService
    ) -> CommentsOfTheDayUseCase:
        """Provide comments of the day use case."""
        return CommentsOfTheDayUseCase(comment_service=comment_service)

    # Vote use cases
    @provide(scope=Scope.REQUEST)
    def get_vote_use_case(
        self, vote_service: VoteService, jwt_service: JWTService
    ) -> VoteUseCase:
        """Provide vote use case."""
        return VoteUseCase(vote_service=vote_service, jwt_service=jwt_service)
