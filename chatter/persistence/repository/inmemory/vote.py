"""In-memory vote repository for testing."""

from typing import Optional, Sequence

from chatter.domain.model.vote import Vote
from chatter.domain.repository.vote import VoteRepository
from chatter.domain.value import CommentId, VoteValue


class InMemoryVoteRepository(VoteRepository):
    """In-memory implementation of VoteRepository for testing."""

    def __init__(self) -> None:
        self._votes: dict[tuple[CommentId, str], Vote] = {}

    async def find_value(
        self, comment_id: CommentId, voter: str
    ) -> Optional[VoteValue]:
        vote = self._votes.get((comment_id, voter))
        return vote.value if vote else None

    async def find_values(
        self, voter: str, comment_ids: Sequence[CommentId]
    ) -> dict[CommentId, VoteValue]:
        values = {}
        for comment_id in comment_ids:
            value = await self.find_value(comment_id, voter)
            if value is not None:
                values[comment_id] = value
        return values

    async def upsert(self, vote: Vote) -> None:
        self._votes[(vote.comment_id, vote.voter)] = vote

    async def delete_by_comment(self, comment_id: CommentId) -> int:
        keys = [key for key in self._votes if key[0] == comment_id]
        for key in keys:
            del self._votes[key]
        return len(keys)

    async def score(self, comment_id: CommentId) -> int:
        return (await self.scores([comment_id])).get(comment_id, 0)

    async def scores(self, comment_ids: Sequence[CommentId]) -> dict[CommentId, int]:
        wanted = set(comment_ids)
        totals: dict[CommentId, int] = {}
        for (comment_id, _), vote in self._votes.items():
            if comment_id in wanted and vote.value is not None:
                totals[comment_id] = totals.get(comment_id, 0) + int(vote.value)
        return totals
