"""Per-page cache of assembled threads.

The cache holds one PageThreads entry per page. Entries are built lazily
on a miss, evicted wholesale on structural changes (add, delete) and
patched in place on score changes (vote).

Consistency rules:
- Population is "store if absent", so it never overwrites a newer entry.
- A rebuild that started before an invalidate() in this process is
  returned to its caller but never published. Epochs are only tracked
  for pages with a rebuild in flight.
- Patches use "store if present", so a patch never resurrects an
  evicted entry.
"""

import asyncio
import weakref
from typing import Awaitable, Callable, Iterable, Optional

import logfire
from pydantic import ValidationError as PydanticValidationError

from chatter.domain.error import StoreUnavailableError
from chatter.domain.model.comment import Comment
from chatter.domain.model.thread import PageThreads
from chatter.domain.repository import CacheBackend
from chatter.domain.value import CommentId, PageId

from .base import Service
from .thread_assembler import assemble_threads

RowLoader = Callable[[], Awaitable[Iterable[Comment]]]


class ThreadCache(Service):
    """Process-wide thread cache over an injected key/value backend."""

    def __init__(self, backend: CacheBackend, key_prefix: str = "chatter") -> None:
        """Initialize thread cache.

        Args:
            backend: Key/value cache backend
            key_prefix: Prefix for every cache key
        """
        self.backend = backend
        self.key_prefix = key_prefix
        self._epochs: dict[PageId, int] = {}
        self._rebuilds: dict[PageId, int] = {}
        self._locks: weakref.WeakValueDictionary[PageId, asyncio.Lock] = (
            weakref.WeakValueDictionary()
        )

    def key(self, page_id: PageId) -> str:
        """Cache key of a page's thread map."""
        return f"{self.key_prefix}:comment:pagethreadlist:{page_id}"

    async def get(self, page_id: PageId, load: RowLoader) -> PageThreads:
        """Get a page's threads, assembling them on a miss.

        Backend failures are treated as a miss: the threads are rebuilt
        from the rows returned by ``load``. Failures of ``load`` itself
        propagate.

        Args:
            page_id: Page ID
            load: Coroutine function returning every comment row of the page

        Returns:
            The page's thread map
        """
        with logfire.span("thread_cache.get", page_id=page_id):
            cached = await self._read(page_id)
            if cached is not None:
                return cached

            self._begin_rebuild(page_id)
            try:
                epoch = self._epochs[page_id]
                rows = await load()
                assembled = assemble_threads(page_id, rows)
                stale = self._epochs[page_id] != epoch
            finally:
                self._end_rebuild(page_id)

            if stale:
                logfire.info(
                    "Page invalidated during rebuild, not publishing",
                    page_id=page_id,
                )
                return assembled

            try:
                stored = await self.backend.add(
                    self.key(page_id), assembled.model_dump_json()
                )
            except StoreUnavailableError as e:
                logfire.warn(
                    "Cache backend unavailable, serving uncached threads",
                    page_id=page_id,
                    error=str(e),
                )
                return assembled

            logfire.info(
                "Thread cache rebuilt",
                page_id=page_id,
                threads=len(assembled.threads),
                published=stored,
            )
            return assembled

    async def invalidate(self, page_id: PageId) -> None:
        """Evict a page's entry.

        Raises:
            StoreUnavailableError: If the backend cannot delete the entry
        """
        with logfire.span("thread_cache.invalidate", page_id=page_id):
            if page_id in self._epochs:
                self._epochs[page_id] += 1
            async with self._lock(page_id):
                await self.backend.delete(self.key(page_id))
            logfire.info("Thread cache invalidated", page_id=page_id)

    async def patch_score(
        self, page_id: PageId, comment_id: CommentId, score: int
    ) -> bool:
        """Update one comment's score inside a cached entry.

        No-op on a miss. If the backend fails mid-patch, the entry is
        evicted instead so no stale score survives.

        Args:
            page_id: Page the comment belongs to
            comment_id: Comment whose score changed
            score: New aggregate score

        Returns:
            True if a cached entry was patched
        """
        with logfire.span(
            "thread_cache.patch_score",
            page_id=page_id,
            comment_id=comment_id,
            score=score,
        ):
            try:
                async with self._lock(page_id):
                    return await self._patch(page_id, comment_id, score)
            except StoreUnavailableError as e:
                logfire.warn(
                    "Score patch failed, evicting page",
                    page_id=page_id,
                    comment_id=comment_id,
                    error=str(e),
                )
            await self.invalidate(page_id)
            return False

    async def _patch(self, page_id: PageId, comment_id: CommentId, score: int) -> bool:
        raw = await self.backend.get(self.key(page_id))
        if raw is None:
            return False
        cached = self._decode(page_id, raw)
        if cached is None:
            await self.backend.delete(self.key(page_id))
            return False

        patched = cached.with_score(comment_id, score)
        if patched is None:
            logfire.warn(
                "Patched comment missing from cached page",
                page_id=page_id,
                comment_id=comment_id,
            )
            return False
        return await self.backend.replace(self.key(page_id), patched.model_dump_json())

    async def _read(self, page_id: PageId) -> Optional[PageThreads]:
        try:
            raw = await self.backend.get(self.key(page_id))
        except StoreUnavailableError as e:
            logfire.warn(
                "Cache backend unavailable, rebuilding from store",
                page_id=page_id,
                error=str(e),
            )
            return None
        if raw is None:
            return None
        cached = self._decode(page_id, raw)
        if cached is None:
            try:
                await self.backend.delete(self.key(page_id))
            except StoreUnavailableError as e:
                logfire.warn(
                    "Could not evict unreadable entry", page_id=page_id, error=str(e)
                )
        return cached

    def _decode(self, page_id: PageId, raw: str) -> Optional[PageThreads]:
        try:
            return PageThreads.model_validate_json(raw)
        except PydanticValidationError as e:
            logfire.error("Unreadable thread cache entry", page_id=page_id, error=str(e))
            return None

    def _begin_rebuild(self, page_id: PageId) -> None:
        self._rebuilds[page_id] = self._rebuilds.get(page_id, 0) + 1
        self._epochs.setdefault(page_id, 0)

    def _end_rebuild(self, page_id: PageId) -> None:
        self._rebuilds[page_id] -= 1
        if not self._rebuilds[page_id]:
            del self._rebuilds[page_id]
            del self._epochs[page_id]

    def _lock(self, page_id: PageId) -> asyncio.Lock:
        lock = self._locks.get(page_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[page_id] = lock
        return lock
