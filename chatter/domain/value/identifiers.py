"""Strongly typed identifiers for comment domain entities.

Comment ids are assigned by the record store in insertion order, so they
double as sequence numbers for freshness checks.
"""

from typing import NewType

CommentId = NewType("CommentId", int)
PageId = NewType("PageId", int)
UserId = NewType("UserId", int)

# Parent id of a root comment
ROOT_PARENT_ID = CommentId(0)

# Author id of an anonymous commenter
ANONYMOUS_USER_ID = UserId(0)
