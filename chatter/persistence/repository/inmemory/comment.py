"""In-memory comment repository for testing."""

from datetime import datetime
from typing import Optional, Sequence

from chatter.domain.model.comment import TOMBSTONE_IP, Comment, CommentDraft
from chatter.domain.repository.comment import CommentRepository
from chatter.domain.repository.vote import VoteRepository
from chatter.domain.value import CommentId, PageId, UserId


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing.

    Scores are joined from the vote repository on every read, like the
    SQL implementation does.
    """

    def __init__(self, vote_repository: VoteRepository) -> None:
        self.vote_repository = vote_repository
        self._comments: dict[CommentId, Comment] = {}
        self._next_id = 1
        # Read calls per page, for asserting cache rebuilds
        self.page_reads: dict[PageId, int] = {}

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        comment = self._comments.get(comment_id)
        if comment is None:
            return None
        return (await self._with_scores([comment]))[0]

    async def find_by_page(self, page_id: PageId) -> list[Comment]:
        self.page_reads[page_id] = self.page_reads.get(page_id, 0) + 1
        return await self._with_scores(
            [c for c in self._comments.values() if c.page_id == page_id]
        )

    async def find_since(self, since: datetime) -> list[Comment]:
        return await self._with_scores(
            [c for c in self._comments.values() if c.created_at > since]
        )

    async def add(self, draft: CommentDraft) -> Comment:
        comment = Comment(id=CommentId(self._next_id), **draft.model_dump())
        self._comments[comment.id] = comment
        self._next_id += 1
        return comment

    async def tombstone(self, comment_id: CommentId) -> bool:
        comment = self._comments.get(comment_id)
        if comment is None:
            return False
        self._comments[comment_id] = comment.model_copy(
            update={"author_ip": TOMBSTONE_IP}
        )
        return True

    async def count_by_page(self, page_id: PageId) -> int:
        return sum(1 for c in self._comments.values() if c.page_id == page_id)

    async def latest_id(self, page_id: PageId) -> CommentId:
        ids = [c.id for c in self._comments.values() if c.page_id == page_id]
        return max(ids, default=CommentId(0))

    async def find_author_ids(self, names: Sequence[str]) -> dict[str, UserId]:
        wanted = set(names)
        return {
            c.author_name: c.author_id
            for c in self._comments.values()
            if c.author_name in wanted and not c.is_anonymous
        }

    async def _with_scores(self, comments: list[Comment]) -> list[Comment]:
        scores = await self.vote_repository.scores([c.id for c in comments])
        return [
            c.model_copy(update={"score": scores.get(c.id, 0)}) for c in comments
        ]
