"""Edge cache purging.

Rendered pages may be cached by reverse proxies in front of the service.
After a structural change the page's URLs are purged with HTTP PURGE
requests. Purging is best-effort.
"""

import httpx
import logfire

from chatter.adapter.error import ProviderError
from chatter.domain.repository import EdgePurger
from chatter.domain.value import PageId


class HttpEdgePurger(EdgePurger):
    """Sends PURGE requests for every configured URL template."""

    def __init__(self, url_templates: list[str], timeout: float = 5.0) -> None:
        """Initialize edge purger.

        Args:
            url_templates: URLs with a ``{page_id}`` placeholder
            timeout: Request timeout in seconds
        """
        self.url_templates = url_templates
        self.timeout = timeout

    async def purge_page(self, page_id: PageId) -> None:
        """Purge a page from every edge cache.

        Raises:
            ProviderError: If any purge request failed (after trying all)
        """
        if not self.url_templates:
            return

        failures = []
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            for template in self.url_templates:
                url = template.format(page_id=page_id)
                try:
                    response = await client.request("PURGE", url)
                    response.raise_for_status()
                except httpx.HTTPError as e:
                    failures.append(f"{url}: {e}")

        if failures:
            raise ProviderError("edge", "; ".join(failures))
        logfire.info("Edge caches purged", page_id=page_id, urls=len(self.url_templates))


class RecordingEdgePurger(EdgePurger):
    """Mock purger keeping purged page IDs for tests."""

    def __init__(self) -> None:
        self.purged: list[PageId] = []

    async def purge_page(self, page_id: PageId) -> None:
        self.purged.append(page_id)
