"""Edge cache purge interface."""

from abc import ABC, abstractmethod

from chatter.domain.value import PageId


class EdgePurger(ABC):
    """Purges rendered pages from caches in front of the service."""

    @abstractmethod
    async def purge_page(self, page_id: PageId) -> None:
        """Purge every cached rendering of a page.

        Args:
            page_id: Page whose comments changed
        """
        pass
