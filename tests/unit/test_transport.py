"""
Unit tests for the catalog transport
"""

import asyncio
import json
import warnings
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from core.exceptions import NetworkError, SchemaValidationError, TunnelConfigurationError
from ingestion.context import RunContext
from ingestion.transport import Strategy, Transport
from models.base import SeedMode
from schemas.resources import NamedResource

POKEMON_URL = "https://pokeapi.co/api/v2/pokemon/1/"


def make_transport(settings) -> Transport:
    return Transport(settings, RunContext(settings=settings))


class TestStrategySelection:
    """Test the mode to strategy mapping"""

    def test_premium_uses_tunnel(self):
        assert Strategy.for_mode(SeedMode.PREMIUM) == Strategy.TUNNEL

    def test_standard_uses_proxy(self):
        assert Strategy.for_mode(SeedMode.STANDARD) == Strategy.PROXY


class TestRetry:
    """Test the bounded retry loop"""

    @pytest.mark.asyncio
    async def test_gives_up_after_ceiling_plus_one_attempts(self, test_settings):
        """A permanently failing URL is attempted MAX_RETRIES + 1 times"""
        transport = make_transport(test_settings)
        failing = AsyncMock(side_effect=httpx.ConnectError("connection refused"))

        with patch.object(transport, "_request_via_proxy", failing):
            with pytest.raises(NetworkError) as exc_info:
                await transport.fetch(POKEMON_URL, Strategy.PROXY)

        assert failing.await_count == test_settings.MAX_RETRIES + 1
        assert exc_info.value.context["url"] == POKEMON_URL
        assert exc_info.value.context["attempts"] == test_settings.MAX_RETRIES + 1

        stats = transport.context.stats
        assert stats.total_requests == test_settings.MAX_RETRIES + 1
        assert stats.failed_requests == test_settings.MAX_RETRIES + 1
        assert len(stats.errors) == 1
        assert stats.errors[0]["url"] == POKEMON_URL
        assert POKEMON_URL not in transport.context.cache

    @pytest.mark.asyncio
    async def test_recovers_after_transient_failure(self, test_settings):
        """A failure followed by a success returns the body"""
        transport = make_transport(test_settings)
        flaky = AsyncMock(side_effect=[httpx.ReadTimeout("slow"), {"id": 1}])

        with patch.object(transport, "_request_via_tunnel", flaky):
            body = await transport.fetch(POKEMON_URL, Strategy.TUNNEL)

        assert body == {"id": 1}
        assert flaky.await_count == 2
        assert transport.context.stats.failed_requests == 1
        assert transport.context.stats.errors == []

    @pytest.mark.asyncio
    async def test_non_retryable_error_is_raised_on_first_attempt(self, test_settings):
        transport = make_transport(test_settings)
        misconfigured = AsyncMock(side_effect=TunnelConfigurationError("proxy rejected credentials"))

        with patch.object(transport, "_request_via_tunnel", misconfigured):
            with pytest.raises(TunnelConfigurationError):
                await transport.fetch(POKEMON_URL, Strategy.TUNNEL)

        assert misconfigured.await_count == 1
        assert transport.context.stats.total_requests == 1
        assert len(transport.context.stats.errors) == 1
        assert POKEMON_URL not in transport.context.cache


class TestCache:
    """Test response caching and request de-duplication"""

    @pytest.mark.asyncio
    async def test_cached_url_is_not_requested_again(self, test_settings):
        transport = make_transport(test_settings)
        request = AsyncMock(return_value={"id": 1, "name": "bulbasaur"})

        with patch.object(transport, "_request_via_proxy", request):
            first = await transport.fetch(POKEMON_URL, Strategy.PROXY)
            second = await transport.fetch(POKEMON_URL, Strategy.PROXY)

        assert first == second
        assert request.await_count == 1
        assert POKEMON_URL in transport.context.cache

    @pytest.mark.asyncio
    async def test_cache_is_shared_between_strategies(self, test_settings):
        """A body fetched via the proxy satisfies a tunnel request"""
        transport = make_transport(test_settings)
        transport.context.cache.set(POKEMON_URL, {"id": 1})
        tunnel = AsyncMock()

        with patch.object(transport, "_request_via_tunnel", tunnel):
            body = await transport.fetch(POKEMON_URL, Strategy.TUNNEL)

        assert body == {"id": 1}
        tunnel.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_concurrent_fetches_share_one_request(self, test_settings):
        transport = make_transport(test_settings)
        calls = []

        async def slow_request(url):
            calls.append(url)
            await asyncio.sleep(0.01)
            return {"id": 1}

        with patch.object(transport, "_request_via_proxy", side_effect=slow_request):
            results = await asyncio.gather(*[
                transport.fetch(POKEMON_URL, Strategy.PROXY) for _ in range(5)
            ])

        assert calls == [POKEMON_URL]
        assert all(result == {"id": 1} for result in results)

    @pytest.mark.asyncio
    async def test_concurrent_waiters_see_the_failure(self, test_settings):
        transport = make_transport(test_settings)

        async def failing_request(url):
            await asyncio.sleep(0.01)
            raise httpx.ConnectError("down")

        with patch.object(transport, "_request_via_proxy", side_effect=failing_request):
            results = await asyncio.gather(
                transport.fetch(POKEMON_URL, Strategy.PROXY),
                transport.fetch(POKEMON_URL, Strategy.PROXY),
                return_exceptions=True
            )

        assert all(isinstance(result, NetworkError) for result in results)


class TestTunnelConfiguration:
    """Test the tunnel credential check"""

    @pytest.mark.asyncio
    async def test_missing_credentials_fail_before_any_request(self, test_settings):
        settings = test_settings.model_copy(update={"PROXY_PASSWORD": ""})
        transport = make_transport(settings)
        tunnel = AsyncMock()

        with patch.object(transport, "_request_via_tunnel", tunnel):
            with pytest.raises(TunnelConfigurationError) as exc_info:
                await transport.fetch(POKEMON_URL, Strategy.TUNNEL)

        tunnel.assert_not_awaited()
        assert exc_info.value.context["password_set"] is False
        assert transport.context.stats.total_requests == 0

    @pytest.mark.asyncio
    async def test_proxy_does_not_need_tunnel_credentials(self, test_settings):
        settings = test_settings.model_copy(update={"PROXY_HOST": ""})
        transport = make_transport(settings)

        with patch.object(transport, "_request_via_proxy", AsyncMock(return_value={"id": 1})):
            assert await transport.fetch(POKEMON_URL, Strategy.PROXY) == {"id": 1}


class TestProxyEnvelope:
    """Test unwrapping of the forwarding proxy envelope"""

    @pytest.mark.asyncio
    async def test_contents_are_decoded(self, test_settings):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.url.params["url"])
            return httpx.Response(200, json={"contents": json.dumps({"id": 1, "name": "bulbasaur"})})

        transport = make_transport(test_settings)
        transport._proxy_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))

        body = await transport.fetch(POKEMON_URL, Strategy.PROXY)
        await transport.aclose()

        assert body == {"id": 1, "name": "bulbasaur"}
        assert seen == [POKEMON_URL]

    @pytest.mark.asyncio
    async def test_empty_contents_are_retried(self, test_settings):
        responses = [
            httpx.Response(200, json={"contents": ""}),
            httpx.Response(200, json={"contents": json.dumps({"id": 1})}),
        ]

        def handler(request: httpx.Request) -> httpx.Response:
            return responses.pop(0)

        transport = make_transport(test_settings)
        transport._proxy_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))

        body = await transport.fetch(POKEMON_URL, Strategy.PROXY)
        await transport.aclose()

        assert body == {"id": 1}
        assert transport.context.stats.failed_requests == 1

    @pytest.mark.asyncio
    async def test_server_error_exhausts_retries(self, test_settings):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(503)

        transport = make_transport(test_settings)
        transport._proxy_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))

        with pytest.raises(NetworkError):
            await transport.fetch(POKEMON_URL, Strategy.PROXY)
        await transport.aclose()

        assert transport.context.stats.failed_requests == test_settings.MAX_RETRIES + 1


class TestSchemaValidation:
    """Test validated fetches"""

    @pytest.mark.asyncio
    async def test_valid_payload_is_parsed(self, test_settings):
        transport = make_transport(test_settings)
        transport.context.cache.set(POKEMON_URL, {"name": "bulbasaur", "url": POKEMON_URL})

        resource = await transport.fetch_resource(POKEMON_URL, Strategy.PROXY, NamedResource)

        assert resource.name == "bulbasaur"

    @pytest.mark.asyncio
    async def test_validation_emits_no_deprecation_warnings(self, test_settings):
        transport = make_transport(test_settings)
        transport.context.cache.set(POKEMON_URL, [{"name": "bulbasaur", "url": POKEMON_URL}])

        with warnings.catch_warnings():
            warnings.simplefilter("error", DeprecationWarning)
            resources = await transport.fetch_resource_list(
                POKEMON_URL, Strategy.PROXY, NamedResource
            )

        assert resources[0].id == 1

    @pytest.mark.asyncio
    async def test_invalid_payload_raises(self, test_settings):
        transport = make_transport(test_settings)
        transport.context.cache.set(POKEMON_URL, {"unexpected": True})

        with pytest.raises(SchemaValidationError) as exc_info:
            await transport.fetch_resource(POKEMON_URL, Strategy.PROXY, NamedResource)

        assert exc_info.value.context["schema"] == "NamedResource"

    @pytest.mark.asyncio
    async def test_list_payload_must_be_a_list(self, test_settings):
        transport = make_transport(test_settings)
        transport.context.cache.set(POKEMON_URL, {"name": "bulbasaur", "url": POKEMON_URL})

        with pytest.raises(SchemaValidationError):
            await transport.fetch_resource_list(POKEMON_URL, Strategy.PROXY, NamedResource)
