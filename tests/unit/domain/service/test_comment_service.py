"""Unit tests for CommentService."""

from datetime import datetime, timedelta, timezone

import pytest

from chatter.domain.error import (
    InvalidParentError,
    NotAuthorizedError,
    NotFoundError,
    StoreUnavailableError,
    ValidationError,
)
from chatter.domain.model import CommentDraft, PageThreads, Vote
from chatter.domain.repository import (
    CacheBackend,
    CommentRepository,
    EdgePurger,
    NotificationDispatcher,
    UnitOfWork,
    VoteRepository,
)
from chatter.domain.service import CommentService, ThreadCache, VoteService
from chatter.domain.value import (
    CommentId,
    NotificationType,
    PageId,
    SortOrder,
    UserId,
    VoteValue,
)
from tests.conftest import PAGE, make_actor, make_anonymous, make_moderator
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked
unit_env = create_env_fixture()


class TestAddComment:
    """Tests for add_comment method."""

    @pytest.mark.asyncio
    async def test_add_root_comment(self, unit_env):
        """Adding a root comment should store it and commit."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        unit_of_work = await unit_env.get(UnitOfWork)
        actor = make_actor()

        # Act
        comment = await comment_service.add_comment(PAGE, actor, "  First!  ")

        # Assert
        assert comment.id == 1
        assert comment.is_root
        assert comment.text == "First!"
        assert comment.author_name == "alice"
        assert comment.author_ip == "10.0.0.1"
        assert unit_of_work.commits == 1

    @pytest.mark.asyncio
    async def test_add_invalidates_cached_page(self, unit_env):
        """A new comment must show up on the next read."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        await comment_service.add_comment(PAGE, make_actor(), "one")
        await comment_service.get_page_threads(PAGE)

        # Act
        await comment_service.add_comment(PAGE, make_actor(), "two")
        threads = await comment_service.get_page_threads(PAGE)

        # Assert
        assert set(threads.threads) == {1, 2}
        assert comment_repo.page_reads[PAGE] == 2

    @pytest.mark.asyncio
    async def test_reply_joins_parent_thread(self, unit_env):
        """A reply should be stored under its parent's thread."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        root = await comment_service.add_comment(PAGE, make_actor(), "root")

        # Act
        reply = await comment_service.add_comment(
            PAGE, make_actor(name="bob", user_id=2), "reply", parent_id=root.id
        )

        # Assert
        threads = await comment_service.get_page_threads(PAGE)
        assert reply.parent_id == root.id
        assert [c.id for c in threads.threads[root.id].replies] == [reply.id]

    @pytest.mark.asyncio
    async def test_reply_to_reply_is_stored_against_root(self, unit_env):
        """Threads are two levels deep; a nested reply points at the root."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        root = await comment_service.add_comment(PAGE, make_actor(), "root")
        reply = await comment_service.add_comment(
            PAGE, make_actor(name="bob", user_id=2), "reply", parent_id=root.id
        )

        # Act
        nested = await comment_service.add_comment(
            PAGE, make_actor(name="carol", user_id=3), "nested", parent_id=reply.id
        )

        # Assert
        assert nested.parent_id == root.id

    @pytest.mark.asyncio
    async def test_reply_to_missing_parent_raises(self, unit_env):
        comment_service = await unit_env.get(CommentService)

        with pytest.raises(InvalidParentError):
            await comment_service.add_comment(
                PAGE, make_actor(), "reply", parent_id=CommentId(42)
            )

    @pytest.mark.asyncio
    async def test_reply_to_parent_on_other_page_raises(self, unit_env):
        """Replies must stay on their parent's page."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        other = await comment_service.add_comment(PageId(200), make_actor(), "elsewhere")

        # Act & Assert
        with pytest.raises(InvalidParentError):
            await comment_service.add_comment(
                PAGE, make_actor(), "reply", parent_id=other.id
            )

    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", ["", "   \n  "])
    async def test_empty_text_raises(self, unit_env, text):
        comment_service = await unit_env.get(CommentService)

        with pytest.raises(ValidationError, match="cannot be empty"):
            await comment_service.add_comment(PAGE, make_actor(), text)

    @pytest.mark.asyncio
    async def test_overlong_text_raises(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        text = "x" * (comment_service.settings.max_text_length + 1)

        with pytest.raises(ValidationError, match="exceeds"):
            await comment_service.add_comment(PAGE, make_actor(), text)

    @pytest.mark.asyncio
    async def test_actor_without_capability_raises(self, unit_env):
        """Readers without the comment capability cannot post."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        reader = make_actor(capabilities=frozenset())

        # Act & Assert
        with pytest.raises(NotAuthorizedError):
            await comment_service.add_comment(PAGE, reader, "hello")

    @pytest.mark.asyncio
    async def test_anonymous_comment_keeps_ip(self, unit_env):
        comment_service = await unit_env.get(CommentService)

        comment = await comment_service.add_comment(PAGE, make_anonymous(), "hi")

        assert comment.is_anonymous
        assert comment.author_name == "203.0.113.7"
        assert comment.author_ip == "203.0.113.7"

    @pytest.mark.asyncio
    async def test_reply_notifies_parent_author(self, unit_env):
        """Replying should notify the author of the replied-to comment."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        dispatcher = await unit_env.get(NotificationDispatcher)
        root = await comment_service.add_comment(PAGE, make_actor(), "root")

        # Act
        reply = await comment_service.add_comment(
            PAGE, make_actor(name="bob", user_id=2), "nice one", parent_id=root.id
        )

        # Assert
        assert len(dispatcher.events) == 1
        event = dispatcher.events[0]
        assert event.type is NotificationType.REPLY
        assert event.recipient_id == UserId(1)
        assert event.source_comment_id == reply.id
        assert event.actor_name == "bob"

    @pytest.mark.asyncio
    async def test_self_reply_does_not_notify(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        dispatcher = await unit_env.get(NotificationDispatcher)
        root = await comment_service.add_comment(PAGE, make_actor(), "root")

        # Act
        await comment_service.add_comment(
            PAGE, make_actor(), "adding more", parent_id=root.id
        )

        # Assert
        assert dispatcher.events == []

    @pytest.mark.asyncio
    async def test_mention_notifies_known_commenter(self, unit_env):
        """@name mentions should notify commenters known by that name."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        dispatcher = await unit_env.get(NotificationDispatcher)
        await comment_service.add_comment(PAGE, make_actor(name="bob", user_id=2), "hi")

        # Act
        await comment_service.add_comment(
            PAGE, make_actor(), "I agree with @bob, and @nobody."
        )

        # Assert
        assert [(e.type, e.recipient_id) for e in dispatcher.events] == [
            (NotificationType.MENTION, UserId(2))
        ]

    @pytest.mark.asyncio
    async def test_add_purges_edge_cache(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        purger = await unit_env.get(EdgePurger)

        await comment_service.add_comment(PAGE, make_actor(), "hello")

        assert purger.purged == [PAGE]

    @pytest.mark.asyncio
    async def test_add_fails_when_cache_cannot_be_invalidated(self, unit_env):
        """If the page cannot be evicted, the caller must see the failure."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        backend = await unit_env.get(CacheBackend)
        backend.unavailable = True

        # Act & Assert
        with pytest.raises(StoreUnavailableError):
            await comment_service.add_comment(PAGE, make_actor(), "hello")


class TestDeleteComment:
    """Tests for delete_comment method."""

    @pytest.mark.asyncio
    async def test_delete_tombstones_comment(self, unit_env):
        """Deleting should keep the row but mark it tombstoned."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment = await comment_service.add_comment(PAGE, make_actor(), "spam")

        # Act
        deleted = await comment_service.delete_comment(comment.id, make_moderator())

        # Assert
        stored = await comment_service.get_comment_by_id(comment.id)
        assert deleted.is_tombstoned
        assert stored is not None
        assert stored.is_tombstoned

    @pytest.mark.asyncio
    async def test_delete_removes_votes(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        vote_repo = await unit_env.get(VoteRepository)
        comment = await comment_service.add_comment(PAGE, make_actor(), "spam")
        await vote_repo.upsert(
            Vote(comment_id=comment.id, voter="bob", value=VoteValue.UP)
        )

        # Act
        deleted = await comment_service.delete_comment(comment.id, make_moderator())

        # Assert
        assert deleted.score == 0
        assert await vote_repo.score(comment.id) == 0

    @pytest.mark.asyncio
    async def test_deleted_root_without_replies_disappears(self, unit_env):
        """The deletion must be visible on the next read."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment = await comment_service.add_comment(PAGE, make_actor(), "spam")
        before = await comment_service.get_thread_page(PAGE)

        # Act
        await comment_service.delete_comment(comment.id, make_moderator())
        after = await comment_service.get_thread_page(PAGE)

        # Assert
        assert before.total_threads == 1
        assert after.total_threads == 0

    @pytest.mark.asyncio
    async def test_deleted_root_with_reply_stays_as_placeholder(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        root = await comment_service.add_comment(PAGE, make_actor(), "root")
        await comment_service.add_comment(
            PAGE, make_actor(name="bob", user_id=2), "reply", parent_id=root.id
        )

        # Act
        await comment_service.delete_comment(root.id, make_moderator())
        window = await comment_service.get_thread_page(PAGE)

        # Assert
        assert window.total_threads == 1
        assert window.threads[0].root.is_tombstoned
        assert len(window.threads[0].replies) == 1

    @pytest.mark.asyncio
    async def test_delete_requires_moderation(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment = await comment_service.add_comment(PAGE, make_actor(), "mine")

        # Act & Assert
        with pytest.raises(NotAuthorizedError):
            await comment_service.delete_comment(comment.id, make_actor())

    @pytest.mark.asyncio
    async def test_delete_missing_comment_raises(self, unit_env):
        comment_service = await unit_env.get(CommentService)

        with pytest.raises(NotFoundError):
            await comment_service.delete_comment(CommentId(42), make_moderator())

    @pytest.mark.asyncio
    async def test_delete_twice_is_idempotent(self, unit_env):
        """Deleting a tombstoned comment should not commit again."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        unit_of_work = await unit_env.get(UnitOfWork)
        comment = await comment_service.add_comment(PAGE, make_actor(), "spam")
        await comment_service.delete_comment(comment.id, make_moderator())
        commits = unit_of_work.commits

        # Act
        again = await comment_service.delete_comment(comment.id, make_moderator())

        # Assert
        assert again.is_tombstoned
        assert unit_of_work.commits == commits


class TestGetThreadPage:
    """Tests for get_thread_page method."""

    @pytest.mark.asyncio
    async def test_recent_order_newest_first(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        for text in ("one", "two", "three"):
            await comment_service.add_comment(PAGE, make_actor(), text)

        # Act
        window = await comment_service.get_thread_page(PAGE, SortOrder.RECENT)

        # Assert
        assert [t.root.text for t in window.threads] == ["three", "two", "one"]

    @pytest.mark.asyncio
    async def test_window_of_ten_threads(self, unit_env):
        """23 threads should split into three windows of ten."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        for i in range(23):
            await comment_service.add_comment(PAGE, make_actor(), f"comment {i}")

        # Act
        last = await comment_service.get_thread_page(PAGE, page=3)
        clamped = await comment_service.get_thread_page(PAGE, page=9)

        # Assert
        assert last.total_pages == 3
        assert len(last.threads) == 3
        assert clamped.page == 3

    @pytest.mark.asyncio
    async def test_viewer_votes_are_overlaid_not_cached(self, unit_env):
        """Each viewer sees their own vote; the cache holds none."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        vote_repo = await unit_env.get(VoteRepository)
        thread_cache = await unit_env.get(ThreadCache)
        backend = await unit_env.get(CacheBackend)
        comment = await comment_service.add_comment(PAGE, make_actor(), "vote me")
        await vote_repo.upsert(
            Vote(comment_id=comment.id, voter="bob", value=VoteValue.DOWN)
        )

        # Act
        as_bob = await comment_service.get_thread_page(
            PAGE, viewer=make_actor(name="bob", user_id=2)
        )
        as_carol = await comment_service.get_thread_page(
            PAGE, viewer=make_actor(name="carol", user_id=3)
        )
        cached = PageThreads.model_validate_json(
            await backend.get(thread_cache.key(PAGE))
        )

        # Assert
        assert as_bob.threads[0].root.viewer_vote is VoteValue.DOWN
        assert as_carol.threads[0].root.viewer_vote is None
        assert cached.threads[comment.id].root.viewer_vote is None


class TestFreshness:
    """Tests for latest_id and count_comments."""

    @pytest.mark.asyncio
    async def test_latest_id_tracks_newest_comment(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        empty = await comment_service.latest_id(PAGE)
        await comment_service.add_comment(PAGE, make_actor(), "one")
        second = await comment_service.add_comment(PAGE, make_actor(), "two")
        await comment_service.add_comment(PageId(200), make_actor(), "elsewhere")

        # Act
        latest = await comment_service.latest_id(PAGE)

        # Assert
        assert empty == 0
        assert latest == second.id

    @pytest.mark.asyncio
    async def test_latest_id_increases_with_every_add(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        markers = [await comment_service.latest_id(PAGE)]

        # Act
        for text in ("one", "two", "three"):
            await comment_service.add_comment(PAGE, make_actor(), text)
            markers.append(await comment_service.latest_id(PAGE))

        # Assert
        assert all(later > earlier for earlier, later in zip(markers, markers[1:]))

    @pytest.mark.asyncio
    async def test_latest_id_unaffected_by_vote_and_delete(self, unit_env):
        """Polling clients only learn about new comments, not votes or deletes."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        vote_service = await unit_env.get(VoteService)
        root = await comment_service.add_comment(PAGE, make_actor(), "A")
        reply = await comment_service.add_comment(
            PAGE, make_actor(name="bob", user_id=2), "B", parent_id=root.id
        )
        before = await comment_service.latest_id(PAGE)

        # Act
        await vote_service.vote(root.id, make_actor(name="carol", user_id=3), 1)
        after_vote = await comment_service.latest_id(PAGE)
        await comment_service.delete_comment(reply.id, make_moderator())
        after_delete = await comment_service.latest_id(PAGE)

        # Assert
        assert before == reply.id
        assert after_vote == before
        assert after_delete == before

    @pytest.mark.asyncio
    async def test_latest_id_bypasses_cache(self, unit_env):
        """The freshness marker should never read the thread cache."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        backend = await unit_env.get(CacheBackend)
        await comment_service.add_comment(PAGE, make_actor(), "one")
        backend.unavailable = True

        # Act
        latest = await comment_service.latest_id(PAGE)

        # Assert
        assert latest == 1

    @pytest.mark.asyncio
    async def test_count_includes_tombstoned_rows(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment = await comment_service.add_comment(PAGE, make_actor(), "one")
        await comment_service.add_comment(PAGE, make_actor(), "two")
        await comment_service.delete_comment(comment.id, make_moderator())

        # Act
        count = await comment_service.count_comments(PAGE)

        # Assert
        assert count == 2


class TestCommentsOfTheDay:
    """Tests for comments_of_the_day method."""

    @pytest.mark.asyncio
    async def test_best_recent_comments_first(self, unit_env):
        """Only comments from the last day count, best score first."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        vote_repo = await unit_env.get(VoteRepository)
        now = datetime.now(timezone.utc)

        old = await comment_repo.add(
            CommentDraft(
                page_id=PAGE,
                author_name="alice",
                text="old",
                created_at=now - timedelta(days=2),
            )
        )
        quiet = await comment_repo.add(
            CommentDraft(page_id=PAGE, author_name="alice", text="quiet")
        )
        loved = await comment_repo.add(
            CommentDraft(page_id=PageId(200), author_name="bob", text="loved")
        )
        for voter in ("x", "y"):
            await vote_repo.upsert(
                Vote(comment_id=loved.id, voter=voter, value=VoteValue.UP)
            )
            await vote_repo.upsert(
                Vote(comment_id=old.id, voter=voter, value=VoteValue.UP)
            )

        # Act
        best = await comment_service.comments_of_the_day(now=now)

        # Assert
        assert [c.id for c in best] == [loved.id, quiet.id]
        assert best[0].score == 2

    @pytest.mark.asyncio
    async def test_result_is_cached(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        await comment_repo.add(CommentDraft(page_id=PAGE, author_name="a", text="one"))
        first = await comment_service.comments_of_the_day()
        await comment_repo.add(CommentDraft(page_id=PAGE, author_name="a", text="two"))

        # Act
        second = await comment_service.comments_of_the_day()

        # Assert
        assert [c.text for c in second] == [c.text for c in first] == ["one"]
