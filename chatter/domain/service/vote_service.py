"""Vote domain service."""

from typing import Optional

import logfire

from chatter.config import CommentSettings
from chatter.domain.error import BusinessRuleViolationError, NotFoundError
from chatter.domain.model.comment import Comment
from chatter.domain.model.vote import Vote, VoteResult
from chatter.domain.repository import UnitOfWork, VoteRepository
from chatter.domain.value import Actor, Capability, CommentId, VoteValue

from .base import Service, require_capability
from .comment_service import CommentService
from .notification_service import NotificationService
from .thread_cache import ThreadCache


class VoteService(Service):
    """Domain service for vote operations."""

    def __init__(
        self,
        vote_repository: VoteRepository,
        unit_of_work: UnitOfWork,
        comment_service: CommentService,
        thread_cache: ThreadCache,
        notification_service: NotificationService,
        settings: CommentSettings,
    ) -> None:
        """Initialize vote service.

        Args:
            vote_repository: Vote repository
            unit_of_work: Record store transaction boundary
            comment_service: Comment domain service
            thread_cache: Page thread cache
            notification_service: Notification domain service
            settings: Comment settings (voting mode)
        """
        self.vote_repository = vote_repository
        self.unit_of_work = unit_of_work
        self.comment_service = comment_service
        self.thread_cache = thread_cache
        self.notification_service = notification_service
        self.settings = settings

    async def vote(self, comment_id: CommentId, actor: Actor, value: int) -> VoteResult:
        """Cast, change or clear a vote.

        The value is clamped to up/down/clear. Repeating the current vote
        clears it. The new score is patched into the cached page instead
        of invalidating it.

        Args:
            comment_id: Comment ID
            actor: Voting identity
            value: Requested vote (any integer; sign decides the direction)

        Returns:
            The comment's new score and the actor's resulting vote

        Raises:
            NotAuthorizedError: If the actor cannot vote
            NotFoundError: If the comment does not exist or was deleted
            BusinessRuleViolationError: If the vote is on the actor's own
                comment or its direction is disabled
        """
        with logfire.span(
            "vote_service.vote", comment_id=comment_id, voter=actor.voter_key, value=value
        ):
            require_capability(actor, Capability.COMMENT, "vote")

            comment = await self.comment_service.get_comment_by_id(comment_id)
            if comment is None or comment.is_tombstoned:
                raise NotFoundError("Comment", str(comment_id))
            if self._is_own(comment, actor):
                logfire.warn(
                    "Vote on own comment rejected",
                    comment_id=comment_id,
                    voter=actor.voter_key,
                )
                raise BusinessRuleViolationError("Cannot vote on your own comment")

            requested = VoteValue.clamp(value)
            if requested is not None and not self.settings.voting.allows(requested):
                raise BusinessRuleViolationError(
                    f"{requested.name.lower()} votes are disabled"
                )

            current = await self.vote_repository.find_value(comment_id, actor.voter_key)
            new_value: Optional[VoteValue] = None if requested == current else requested

            await self.vote_repository.upsert(
                Vote(
                    comment_id=comment_id,
                    voter=actor.voter_key,
                    voter_id=actor.user_id,
                    value=new_value,
                )
            )
            score = await self.vote_repository.score(comment_id)
            await self.unit_of_work.commit()

            patched = await self.thread_cache.patch_score(
                comment.page_id, comment_id, score
            )

            logfire.info(
                "Vote recorded",
                comment_id=comment_id,
                previous=VoteValue.to_store(current),
                value=VoteValue.to_store(new_value),
                score=score,
                cache_patched=patched,
            )

            if new_value is VoteValue.UP and current is not VoteValue.UP:
                await self.notification_service.notify_upvote(comment, actor)

            return VoteResult(
                comment_id=comment_id,
                page_id=comment.page_id,
                score=score,
                viewer_vote=new_value,
            )

    @staticmethod
    def _is_own(comment: Comment, actor: Actor) -> bool:
        if actor.is_anonymous:
            return comment.is_anonymous and bool(actor.ip) and comment.author_ip == actor.ip
        return comment.author_id == actor.user_id
