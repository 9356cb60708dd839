"""Thread assembly.

Groups the flat comment rows of a page into threads: a root comment and
the flat list of its replies. Nesting is two levels deep by design; a
reply to a reply joins the root's thread.
"""

from collections import defaultdict
from typing import Iterable

import logfire

from chatter.domain.model.comment import Comment
from chatter.domain.model.thread import PageThreads, Thread
from chatter.domain.value import CommentId, PageId


def assemble_threads(page_id: PageId, rows: Iterable[Comment]) -> PageThreads:
    """Build the thread map of a page from its comment rows.

    Input order does not matter: replies are attached to their thread even
    when they are seen before the root, and end up ordered by creation
    time (comment id breaks timestamp ties).

    Args:
        page_id: Page the rows belong to
        rows: Every comment row of the page

    Returns:
        Mapping of thread id to thread
    """
    rows = list(rows)
    by_id = {row.id: row for row in rows}

    roots: dict[CommentId, Comment] = {}
    replies: dict[CommentId, list[Comment]] = defaultdict(list)

    for row in rows:
        if row.is_root:
            roots[row.id] = row
            continue
        parent = by_id.get(row.parent_id)
        thread_id = parent.thread_id if parent is not None else row.parent_id
        replies[thread_id].append(row)

    threads: dict[CommentId, Thread] = {}
    for thread_id, root in roots.items():
        thread_replies = sorted(replies.pop(thread_id, []), key=lambda c: c.sort_key)
        threads[thread_id] = Thread(root=root, replies=thread_replies)

    if replies:
        logfire.warn(
            "Dropping replies without a root on this page",
            page_id=page_id,
            thread_ids=sorted(replies),
            count=sum(len(orphans) for orphans in replies.values()),
        )

    return PageThreads(page_id=page_id, threads=threads)
