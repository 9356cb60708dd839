"""Sorting and pagination of assembled threads.

Everything here is pure: no I/O and no cache access.
"""

import math
from typing import Iterable, Sequence

from chatter.domain.model.thread import PageThreads, Thread, ThreadPage
from chatter.domain.value import SortOrder, Visibility


def visible_threads(threads: Iterable[Thread]) -> list[Thread]:
    """Drop absent threads and strip tombstoned replies.

    A tombstoned root stays (as a placeholder) only while it has at least
    one visible reply.
    """
    result = []
    for thread in threads:
        if thread.visibility is Visibility.ABSENT:
            continue
        visible = thread.visible_replies
        if len(visible) != len(thread.replies):
            thread = thread.model_copy(update={"replies": visible})
        result.append(thread)
    return result


def sort_threads(
    threads: Iterable[Thread], order: SortOrder, descending: bool = True
) -> list[Thread]:
    """Order threads by their root comment.

    Args:
        threads: Threads to order
        order: RECENT sorts by root creation time, SCORE by root score
            (highest first, newest first on ties)
        descending: Direction of RECENT ordering (site-wide setting)

    Returns:
        New sorted list
    """
    if order is SortOrder.SCORE:
        return sorted(
            threads,
            key=lambda t: (t.root.score, t.root.sort_key),
            reverse=True,
        )
    return sorted(threads, key=lambda t: t.root.sort_key, reverse=descending)


def paginate(threads: Sequence[Thread], page: int, per_page: int) -> ThreadPage:
    """Slice one page window out of an ordered thread list.

    Out-of-range page numbers clamp to the nearest valid page.

    Args:
        threads: Ordered threads
        page: Requested page number (1-indexed)
        per_page: Window size

    Returns:
        The page window with pagination metadata
    """
    if per_page < 1:
        raise ValueError("per_page must be at least 1")

    total = len(threads)
    total_pages = math.ceil(total / per_page)
    page = min(max(page, 1), max(total_pages, 1))
    start = (page - 1) * per_page

    return ThreadPage(
        threads=list(threads[start : start + per_page]),
        page=page,
        per_page=per_page,
        total_pages=total_pages,
        total_threads=total,
    )


def sort_and_paginate(
    page_threads: PageThreads,
    order: SortOrder,
    page: int,
    per_page: int,
    descending: bool = True,
) -> ThreadPage:
    """Visible threads of a page, ordered and cut to one page window."""
    ordered = sort_threads(
        visible_threads(page_threads.threads.values()), order, descending
    )
    return paginate(ordered, page, per_page)


def pager_window(current: int, total_pages: int, limit: int = 9) -> list[int]:
    """Page numbers a pager shows, centred on the current page.

    Args:
        current: Current page number
        total_pages: Number of pages
        limit: Maximum number of page links

    Returns:
        Consecutive page numbers (empty when there are no pages)
    """
    middle = math.ceil(limit / 2)
    first = current - middle + 1
    last = current + limit - middle

    if last > total_pages:
        first += total_pages - last
        last = total_pages
    if first <= 0:
        last += 1 - first
        first = 1

    return list(range(first, min(last, total_pages) + 1))


def hot_threads(
    threads: Sequence[Thread], limit: int = 3, min_threads: int = 10
) -> list[Thread]:
    """Highest-scored threads, shown only on busy pages.

    Args:
        threads: All threads of a page
        limit: Maximum threads to return
        min_threads: The page needs more threads than this

    Returns:
        Up to ``limit`` threads with live roots, best score first
    """
    if len(threads) <= min_threads:
        return []
    live = [thread for thread in threads if not thread.root.is_tombstoned]
    return sort_threads(live, SortOrder.SCORE)[:limit]
