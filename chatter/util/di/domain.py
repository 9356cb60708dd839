"""Domain layer DI providers."""

from dishka import Scope, provide

from chatter.config import AuthSettings, CacheSettings, CommentSettings
from chatter.domain.repository import (
    CacheBackend,
    CommentRepository,
    EdgePurger,
    NotificationDispatcher,
    UnitOfWork,
    VoteRepository,
)
from chatter.domain.service import (
    CommentService,
    JWTService,
    NotificationService,
    ThreadCache,
    VoteService,
)
from chatter.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    The thread cache is APP-scoped: one instance per process, shared by
    every request.
    """

    scope = Scope.REQUEST

    @provide(scope=Scope.APP)
    def get_thread_cache(
        self, backend: CacheBackend, cache_settings: CacheSettings
    ) -> ThreadCache:
        """Provide the process-wide thread cache."""
        return ThreadCache(backend=backend, key_prefix=cache_settings.key_prefix)

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_notification_service(
        self,
        dispatcher: NotificationDispatcher,
        comment_repository: CommentRepository,
    ) -> NotificationService:
        """Provide notification domain service."""
        return NotificationService(
            dispatcher=dispatcher, comment_repository=comment_repository
        )

    @provide
    def get_comment_service(
        self,
        comment_repository: CommentRepository,
        vote_repository: VoteRepository,
        unit_of_work: UnitOfWork,
        thread_cache: ThreadCache,
        notification_service: NotificationService,
        edge_purger: EdgePurger,
        settings: CommentSettings,
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            comment_repository=comment_repository,
            vote_repository=vote_repository,
            unit_of_work=unit_of_work,
            thread_cache=thread_cache,
            notification_service=notification_service,
            edge_purger=edge_purger,
            settings=settings,
        )

    @provide
    def get_vote_service(
        self,
        vote_repository: VoteRepository,
        unit_of_work: UnitOfWork,
        comment_service: CommentService,
        thread_cache: ThreadCache,
        notification_service: NotificationService,
        settings: CommentSettings,
    ) -> VoteService:
        """Provide vote domain service."""
        return VoteService(
            vote_repository=vote_repository,
            unit_of_work=unit_of_work,
            comment_service=comment_service,
            thread_cache=thread_cache,
            notification_service=notification_service,
            settings=settings,
        )
