"""
Paginated crawl of catalog collection endpoints
"""

import asyncio
from typing import List, Optional

from core.config import Settings
from ingestion.transport import Strategy, Transport
from schemas.resources import NamedResource, ResourceList
import logging

logger = logging.getLogger(__name__)


class ResourceCrawler:
    """
    Turns a collection endpoint into the full, ordered list of references.

    Pages are requested sequentially with ``limit``/``offset`` until a page
    returns fewer than ``page_size`` results or ``max_pages`` pages were read.
    """

    def __init__(self, transport: Transport, settings: Settings):
        self.transport = transport
        self.settings = settings

    async def crawl(
        self,
        endpoint: str,
        strategy: Strategy,
        page_size: Optional[int] = None,
        max_pages: Optional[int] = None
    ) -> List[NamedResource]:
        page_size = page_size or self.settings.CRAWL_PAGE_SIZE
        max_pages = max_pages or self.settings.CRAWL_MAX_PAGES
        delay = (
            self.settings.CRAWL_PAGE_DELAY_TUNNEL_SECONDS
            if strategy == Strategy.TUNNEL
            else self.settings.CRAWL_PAGE_DELAY_PROXY_SECONDS
        )

        references: List[NamedResource] = []

        for page in range(max_pages):
            if page > 0:
                await asyncio.sleep(delay)

            url = (
                f"{self.settings.POKEAPI_BASE_URL}{endpoint}"
                f"?limit={page_size}&offset={page * page_size}"
            )
            listing = ResourceList.model_validate(await self.transport.fetch(url, strategy))
            references.extend(listing.results)

            if len(listing.results) < page_size:
                logger.debug(f"Crawled {len(references)} {endpoint} references in {page + 1} pages")
                return references

        logger.warning(
            f"Stopped crawling {endpoint} after {max_pages} pages "
            f"({len(references)} references); collection may be incomplete"
        )
        return references
