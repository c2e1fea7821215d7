"""
Shared test doubles and payload builders
"""

from typing import Any, Dict, List, Tuple
from unittest.mock import AsyncMock, MagicMock

BASE_URL = "https://pokeapi.co/api/v2/"


def resource_url(endpoint: str, resource_id: int) -> str:
    return f"{BASE_URL}{endpoint}/{resource_id}/"


def ref(endpoint: str, resource_id: int, name: str = None) -> Dict[str, Any]:
    """A ``{name, url}`` reference as the catalog sends it"""
    return {"name": name or f"{endpoint}-{resource_id}", "url": resource_url(endpoint, resource_id)}


def make_session_factory(execute_result: Any = None) -> Tuple[MagicMock, MagicMock]:
    """
    Session factory whose sessions all share one mocked AsyncSession.

    Returns:
        (factory, session)
    """
    session = MagicMock()
    session.execute = AsyncMock(return_value=execute_result if execute_result is not None else MagicMock())
    session.commit = AsyncMock()
    session.add = MagicMock()
    session.refresh = AsyncMock()
    session.get = AsyncMock(return_value=None)

    factory = MagicMock()
    factory.return_value.__aenter__ = AsyncMock(return_value=session)
    factory.return_value.__aexit__ = AsyncMock(return_value=False)
    return factory, session


class FakeTransport:
    """
    Transport double serving canned payloads by URL.

    Records every requested URL; unknown URLs raise KeyError.
    """

    def __init__(self, payloads: Dict[str, Any]):
        self.payloads = payloads
        self.requested: List[str] = []
        self.closed = False

    async def fetch(self, url, strategy):
        self.requested.append(url)
        return self.payloads[url]

    async def fetch_resource(self, url, strategy, schema):
        return schema.model_validate(await self.fetch(url, strategy))

    async def fetch_resource_list(self, url, strategy, schema):
        return [schema.model_validate(element) for element in await self.fetch(url, strategy)]

    async def aclose(self):
        self.closed = True
