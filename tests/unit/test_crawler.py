"""
Unit tests for the paginated collection crawler
"""

import pytest
from unittest.mock import AsyncMock

from ingestion.crawler import ResourceCrawler
from ingestion.transport import Strategy


def page(start: int, size: int) -> dict:
    return {
        "count": 450,
        "results": [
            {"name": f"move-{i}", "url": f"https://pokeapi.co/api/v2/move/{i}/"}
            for i in range(start, start + size)
        ],
    }


class TestResourceCrawler:
    """Test pagination over collection endpoints"""

    @pytest.mark.asyncio
    async def test_stops_on_short_page(self, test_settings):
        """450 entries at page size 200 take exactly three requests"""
        transport = AsyncMock()
        transport.fetch.side_effect = [page(1, 200), page(201, 200), page(401, 50)]
        crawler = ResourceCrawler(transport, test_settings)

        references = await crawler.crawl("move", Strategy.PROXY)

        assert len(references) == 450
        assert transport.fetch.await_count == 3
        assert [ref.id for ref in references[:2]] == [1, 2]
        assert references[-1].id == 450

        urls = [call.args[0] for call in transport.fetch.await_args_list]
        assert urls == [
            "https://pokeapi.co/api/v2/move?limit=200&offset=0",
            "https://pokeapi.co/api/v2/move?limit=200&offset=200",
            "https://pokeapi.co/api/v2/move?limit=200&offset=400",
        ]

    @pytest.mark.asyncio
    async def test_exact_multiple_needs_an_empty_page(self, test_settings):
        transport = AsyncMock()
        transport.fetch.side_effect = [page(1, 200), page(201, 0)]
        crawler = ResourceCrawler(transport, test_settings)

        references = await crawler.crawl("move", Strategy.TUNNEL)

        assert len(references) == 200
        assert transport.fetch.await_count == 2

    @pytest.mark.asyncio
    async def test_page_cap_is_respected(self, test_settings):
        """Full pages forever stop at the configured page cap"""
        transport = AsyncMock()
        transport.fetch.side_effect = lambda url, strategy: page(1, 10)
        crawler = ResourceCrawler(transport, test_settings)

        references = await crawler.crawl("pokemon", Strategy.PROXY, page_size=10, max_pages=3)

        assert transport.fetch.await_count == 3
        assert len(references) == 30

    @pytest.mark.asyncio
    async def test_empty_collection(self, test_settings):
        transport = AsyncMock()
        transport.fetch.return_value = {"count": 0, "results": []}
        crawler = ResourceCrawler(transport, test_settings)

        assert await crawler.crawl("language", Strategy.PROXY) == []
