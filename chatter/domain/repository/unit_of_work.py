"""Unit of work interface."""

from abc import ABC, abstractmethod


class UnitOfWork(ABC):
    """Transaction boundary of the record store.

    Mutations commit their store writes before reconciling the thread
    cache, so a concurrent rebuild can never read rows older than the
    invalidation that follows them.
    """

    @abstractmethod
    async def commit(self) -> None:
        """Commit pending writes.

        Raises:
            StoreUnavailableError: If the store cannot commit
        """
        pass
