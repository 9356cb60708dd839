"""Domain value objects for threaded comments.

Value objects are immutable and defined by their values, not identity.
"""

from enum import Enum, IntEnum

from pydantic import Field

from chatter.domain.value.common import ValueObject
from chatter.domain.value.identifiers import ANONYMOUS_USER_ID, UserId


class VoteValue(IntEnum):
    """A cast vote.

    "No vote" is represented by ``None``; the numeric 0 only exists in
    store rows.
    """

    UP = 1
    DOWN = -1

    @classmethod
    def clamp(cls, value: int) -> "VoteValue | None":
        """Clamp an arbitrary integer to a vote (0 clears the vote)."""
        if value > 0:
            return cls.UP
        if value < 0:
            return cls.DOWN
        return None

    @classmethod
    def from_store(cls, value: int | None) -> "VoteValue | None":
        """Convert a stored vote value, where 0 means no vote."""
        if not value:
            return None
        return cls(value)

    @staticmethod
    def to_store(value: "VoteValue | None") -> int:
        """Convert a vote to its stored integer."""
        return int(value) if value is not None else 0


class SortOrder(str, Enum):
    """Thread ordering modes."""

    RECENT = "recent"
    SCORE = "score"


class Visibility(str, Enum):
    """How a comment or thread is displayed.

    Computed from the tombstone flag and whether visible replies remain.
    """

    VISIBLE = "visible"
    PLACEHOLDER = "placeholder"  # Tombstoned root that still has replies
    ABSENT = "absent"


class NotificationType(str, Enum):
    """Types of notification events emitted by comment mutations."""

    REPLY = "reply"
    UPVOTE = "upvote"
    MENTION = "mention"


class Capability(str, Enum):
    """Capabilities granted to actors by the authorization collaborator."""

    COMMENT = "comment"
    MODERATE = "commentadmin"


class VotingMode(str, Enum):
    """Which vote directions a site allows."""

    BOTH = "both"
    PLUS = "plus"
    MINUS = "minus"
    OFF = "off"

    def allows(self, value: VoteValue) -> bool:
        """Check whether a vote direction is allowed."""
        if self is VotingMode.OFF:
            return False
        if value is VoteValue.UP:
            return self in (VotingMode.BOTH, VotingMode.PLUS)
        return self in (VotingMode.BOTH, VotingMode.MINUS)


class Actor(ValueObject):
    """The identity performing a request.

    Registered users are identified by name; anonymous users (user id 0)
    by their IP address.
    """

    user_id: UserId = ANONYMOUS_USER_ID
    name: str = Field(min_length=1, max_length=255)
    ip: str = ""
    capabilities: frozenset[Capability] = frozenset()

    @property
    def is_anonymous(self) -> bool:
        return self.user_id == ANONYMOUS_USER_ID

    @property
    def voter_key(self) -> str:
        """Identity used to enforce one vote per commenter per comment."""
        if self.is_anonymous:
            return self.ip or self.name
        return self.name

    def can(self, capability: Capability) -> bool:
        return capability in self.capabilities
