"""Unit tests for thread assembly."""

from datetime import timedelta

from chatter.domain.service import assemble_threads
from chatter.domain.value import CommentId
from tests.conftest import BASE_TIME, PAGE, make_comment


class TestAssembleThreads:
    """Tests for assemble_threads."""

    def test_groups_replies_under_their_root(self):
        """Replies should end up in their root's thread, oldest first."""
        # Arrange
        rows = [
            make_comment(1),
            make_comment(2),
            make_comment(3, parent_id=1),
            make_comment(4, parent_id=2),
            make_comment(5, parent_id=1),
        ]

        # Act
        result = assemble_threads(PAGE, rows)

        # Assert
        assert set(result.threads) == {1, 2}
        assert [c.id for c in result.threads[CommentId(1)].replies] == [3, 5]
        assert [c.id for c in result.threads[CommentId(2)].replies] == [4]

    def test_input_order_does_not_matter(self):
        """A reply seen before its root should still be attached."""
        # Arrange
        rows = [
            make_comment(5, parent_id=1),
            make_comment(3, parent_id=1),
            make_comment(1),
        ]

        # Act
        result = assemble_threads(PAGE, rows)

        # Assert
        assert [c.id for c in result.threads[CommentId(1)].replies] == [3, 5]

    def test_same_timestamp_replies_ordered_by_id(self):
        """Replies created in the same second should follow their IDs."""
        # Arrange
        rows = [
            make_comment(1),
            make_comment(9, parent_id=1, seconds=60),
            make_comment(7, parent_id=1, seconds=60),
            make_comment(8, parent_id=1, seconds=60),
        ]

        # Act
        result = assemble_threads(PAGE, rows)

        # Assert
        assert [c.id for c in result.threads[CommentId(1)].replies] == [7, 8, 9]

    def test_reply_to_reply_joins_root_thread(self):
        """Replies are two levels deep: a nested reply joins the root."""
        # Arrange
        rows = [
            make_comment(1),
            make_comment(2, parent_id=1),
            make_comment(3, parent_id=2),
        ]

        # Act
        result = assemble_threads(PAGE, rows)

        # Assert
        assert list(result.threads) == [1]
        assert [c.id for c in result.threads[CommentId(1)].replies] == [2, 3]

    def test_orphan_replies_are_dropped(self):
        """Replies whose root is missing should not produce a thread."""
        # Arrange
        rows = [make_comment(1), make_comment(4, parent_id=42)]

        # Act
        result = assemble_threads(PAGE, rows)

        # Assert
        assert list(result.threads) == [1]
        assert result.comment_ids() == [1]

    def test_empty_page(self):
        """A page without rows has no threads."""
        result = assemble_threads(PAGE, [])

        assert result.page_id == PAGE
        assert result.threads == {}

    def test_tombstoned_rows_are_kept(self):
        """Assembly keeps tombstoned rows; visibility is decided later."""
        # Arrange
        rows = [
            make_comment(1, author_ip="0"),
            make_comment(2, parent_id=1),
        ]

        # Act
        result = assemble_threads(PAGE, rows)

        # Assert
        thread = result.threads[CommentId(1)]
        assert thread.root.is_tombstoned
        assert thread.root.created_at == BASE_TIME + timedelta(seconds=1)
        assert len(thread.replies) == 1
