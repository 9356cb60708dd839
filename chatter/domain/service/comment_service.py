"""Comment domain service."""

from datetime import datetime, timedelta, timezone
from functools import partial
from typing import Optional, Sequence

import logfire
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from chatter.config import CommentSettings
from chatter.domain.error import (
    InvalidParentError,
    NotFoundError,
    StoreUnavailableError,
    ValidationError,
)
from chatter.domain.model.comment import TOMBSTONE_IP, Comment, CommentDraft
from chatter.domain.model.thread import PageThreads, Thread, ThreadPage
from chatter.domain.repository import (
    CommentRepository,
    EdgePurger,
    UnitOfWork,
    VoteRepository,
)
from chatter.domain.value import (
    ROOT_PARENT_ID,
    Actor,
    Capability,
    CommentId,
    PageId,
    SortOrder,
)

from . import ordering
from .base import Service, require_capability
from .notification_service import NotificationService
from .thread_cache import ThreadCache

COMMENTS_OF_THE_DAY_LIMIT = 5
COMMENTS_OF_THE_DAY_WINDOW = timedelta(days=1)
COMMENTS_OF_THE_DAY_TTL = 60 * 60

_comment_list = TypeAdapter(list[Comment])


class CommentService(Service):
    """Domain service for comment reads and structural mutations."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        vote_repository: VoteRepository,
        unit_of_work: UnitOfWork,
        thread_cache: ThreadCache,
        notification_service: NotificationService,
        edge_purger: EdgePurger,
        settings: CommentSettings,
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            vote_repository: Vote repository (for viewer votes and vote cleanup)
            unit_of_work: Record store transaction boundary
            thread_cache: Page thread cache
            notification_service: Notification domain service
            edge_purger: Edge cache purger
            settings: Comment settings
        """
        self.comment_repository = comment_repository
        self.vote_repository = vote_repository
        self.unit_of_work = unit_of_work
        self.thread_cache = thread_cache
        self.notification_service = notification_service
        self.edge_purger = edge_purger
        self.settings = settings

    async def get_comment_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Get a comment by ID (with its score)."""
        return await self.comment_repository.find_by_id(comment_id)

    async def add_comment(
        self,
        page_id: PageId,
        actor: Actor,
        text: str,
        parent_id: CommentId = ROOT_PARENT_ID,
    ) -> Comment:
        """Add a root comment or a reply.

        A reply to a reply is stored against the root of its thread; the
        reply notification still goes to the author of the comment that
        was replied to.

        Args:
            page_id: Page ID
            actor: Commenting identity
            text: Raw comment body
            parent_id: Comment being replied to (0 for a root comment)

        Returns:
            The stored comment

        Raises:
            NotAuthorizedError: If the actor cannot comment
            ValidationError: If the text is empty or too long
            InvalidParentError: If the parent is missing or on another page
        """
        with logfire.span(
            "comment_service.add_comment",
            page_id=page_id,
            author=actor.name,
            parent_id=parent_id,
        ):
            require_capability(actor, Capability.COMMENT, "comment")
            text = self._validate_text(text)

            replied_to = None
            if parent_id != ROOT_PARENT_ID:
                replied_to = await self.comment_repository.find_by_id(parent_id)
                if replied_to is None or replied_to.page_id != page_id:
                    logfire.error(
                        "Invalid parent comment",
                        parent_id=parent_id,
                        page_id=page_id,
                        parent_page_id=replied_to.page_id if replied_to else None,
                    )
                    raise InvalidParentError(parent_id, page_id)
                parent_id = replied_to.thread_id

            comment = await self.comment_repository.add(
                CommentDraft(
                    page_id=page_id,
                    author_id=actor.user_id,
                    author_name=actor.name,
                    author_ip=actor.ip,
                    text=text,
                    parent_id=parent_id,
                )
            )
            await self.unit_of_work.commit()
            await self.thread_cache.invalidate(page_id)

            logfire.info(
                "Comment added",
                comment_id=comment.id,
                page_id=page_id,
                parent_id=parent_id,
            )

            if replied_to is not None:
                await self.notification_service.notify_reply(comment, replied_to)
            await self.notification_service.notify_mentions(comment)
            await self._purge(page_id)

            return comment

    async def delete_comment(self, comment_id: CommentId, actor: Actor) -> Comment:
        """Soft-delete a comment.

        The row is kept with a tombstone marker so replies keep their
        thread. Votes on the comment are removed.

        Args:
            comment_id: Comment ID
            actor: Moderating identity

        Returns:
            The tombstoned comment

        Raises:
            NotAuthorizedError: If the actor cannot moderate
            NotFoundError: If the comment does not exist
        """
        with logfire.span(
            "comment_service.delete_comment", comment_id=comment_id, actor=actor.name
        ):
            require_capability(actor, Capability.MODERATE, "delete comments")

            comment = await self.comment_repository.find_by_id(comment_id)
            if comment is None:
                raise NotFoundError("Comment", str(comment_id))
            if comment.is_tombstoned:
                logfire.info("Comment already deleted", comment_id=comment_id)
                return comment

            await self.comment_repository.tombstone(comment_id)
            removed_votes = await self.vote_repository.delete_by_comment(comment_id)
            await self.unit_of_work.commit()
            await self.thread_cache.invalidate(comment.page_id)

            logfire.info(
                "Comment deleted",
                comment_id=comment_id,
                page_id=comment.page_id,
                removed_votes=removed_votes,
            )
            await self._purge(comment.page_id)

            return comment.model_copy(update={"author_ip": TOMBSTONE_IP, "score": 0})

    async def get_page_threads(self, page_id: PageId) -> PageThreads:
        """Get the assembled (unsorted) threads of a page."""
        return await self.thread_cache.get(
            page_id, partial(self.comment_repository.find_by_page, page_id)
        )

    async def get_thread_page(
        self,
        page_id: PageId,
        order: SortOrder = SortOrder.RECENT,
        page: int = 1,
        viewer: Optional[Actor] = None,
    ) -> ThreadPage:
        """Get one page window of a page's visible threads.

        Args:
            page_id: Page ID
            order: Thread ordering
            page: Page number (clamped to the valid range)
            viewer: Identity whose votes are overlaid, if any

        Returns:
            The page window
        """
        with logfire.span(
            "comment_service.get_thread_page",
            page_id=page_id,
            order=order.value,
            page=page,
        ):
            page_threads = await self.get_page_threads(page_id)
            window = ordering.sort_and_paginate(
                page_threads,
                order,
                page,
                self.settings.threads_per_page,
                self.settings.sort_descending,
            )
            if viewer is not None:
                threads = await self.with_viewer_votes(window.threads, viewer)
                window = window.model_copy(update={"threads": threads})
            return window

    async def get_hot_threads(
        self, page_id: PageId, viewer: Optional[Actor] = None
    ) -> list[Thread]:
        """Get the highest-scored threads of a busy page."""
        with logfire.span("comment_service.get_hot_threads", page_id=page_id):
            page_threads = await self.get_page_threads(page_id)
            hot = ordering.hot_threads(
                ordering.visible_threads(page_threads.threads.values())
            )
            if viewer is not None and hot:
                hot = await self.with_viewer_votes(hot, viewer)
            return hot

    async def with_viewer_votes(
        self, threads: Sequence[Thread], viewer: Actor
    ) -> list[Thread]:
        """Overlay a viewer's own votes onto threads (one batched query)."""
        comment_ids = [comment.id for thread in threads for comment in thread.comments]
        if not comment_ids:
            return list(threads)

        votes = await self.vote_repository.find_values(viewer.voter_key, comment_ids)
        if not votes:
            return list(threads)

        def overlay(comment: Comment) -> Comment:
            vote = votes.get(comment.id)
            if vote is None:
                return comment
            return comment.model_copy(update={"viewer_vote": vote})

        return [
            Thread(
                root=overlay(thread.root),
                replies=[overlay(reply) for reply in thread.replies],
            )
            for thread in threads
        ]

    async def latest_id(self, page_id: PageId) -> CommentId:
        """Freshness marker of a page: its most recent comment ID (0 if none).

        Reads the record store directly, bypassing the thread cache.
        """
        with logfire.span("comment_service.latest_id", page_id=page_id):
            return await self.comment_repository.latest_id(page_id)

    async def count_comments(self, page_id: PageId) -> int:
        """Number of comment rows on a page."""
        with logfire.span("comment_service.count_comments", page_id=page_id):
            return await self.comment_repository.count_by_page(page_id)

    async def comments_of_the_day(self, now: Optional[datetime] = None) -> list[Comment]:
        """Best-scored comments of the last 24 hours across all pages.

        Cached for an hour under its own key.

        Args:
            now: Reference time (defaults to the current time)

        Returns:
            Up to five comments, highest score first
        """
        with logfire.span("comment_service.comments_of_the_day"):
            key = f"{self.thread_cache.key_prefix}:comment:oftheday"
            backend = self.thread_cache.backend

            try:
                raw = await backend.get(key)
                if raw is not None:
                    return _comment_list.validate_json(raw)
            except (StoreUnavailableError, PydanticValidationError) as e:
                logfire.warn("Comments of the day cache unreadable", error=str(e))

            now = now or datetime.now(timezone.utc)
            recent = await self.comment_repository.find_since(
                now - COMMENTS_OF_THE_DAY_WINDOW
            )
            best = sorted(
                (comment for comment in recent if not comment.is_tombstoned),
                key=lambda c: (c.score, c.sort_key),
                reverse=True,
            )[:COMMENTS_OF_THE_DAY_LIMIT]

            try:
                await backend.set(
                    key, _comment_list.dump_json(best).decode(), COMMENTS_OF_THE_DAY_TTL
                )
            except StoreUnavailableError as e:
                logfire.warn("Could not cache comments of the day", error=str(e))

            return best

    def _validate_text(self, text: str) -> str:
        text = text.strip()
        if not text:
            raise ValidationError("Comment text cannot be empty")
        if len(text) > self.settings.max_text_length:
            raise ValidationError(
                f"Comment text exceeds {self.settings.max_text_length} characters"
            )
        return text

    async def _purge(self, page_id: PageId) -> None:
        try:
            await self.edge_purger.purge_page(page_id)
        except Exception as e:
            logfire.warn("Edge purge failed", page_id=page_id, error=str(e))
