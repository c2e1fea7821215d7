"""
HTTP transport for the remote catalog with two interchangeable strategies.

- PROXY: the target URL is wrapped by a forwarding proxy which answers with
  an envelope ``{"contents": "<json string>"}``.
- TUNNEL: the target URL is requested directly through an authenticated
  HTTP CONNECT tunnel.

Both strategies share one response cache keyed by the original URL, pace
every attempt and retry a fixed number of times before giving up.
Non-retryable errors are raised on the first attempt.
"""

import asyncio
import enum
import json
import random
from typing import Any, Dict, List, Optional, Type, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError

from core.config import Settings
from core.exceptions import (
    EmptyResponseError,
    NetworkError,
    NonRetryableError,
    ProxyEnvelopeError,
    SchemaValidationError,
    TunnelConfigurationError,
)
from ingestion.context import RunContext
from models.base import SeedMode
import logging

logger = logging.getLogger(__name__)

SchemaT = TypeVar("SchemaT", bound=BaseModel)


class Strategy(str, enum.Enum):
    PROXY = "proxy"
    TUNNEL = "tunnel"

    @classmethod
    def for_mode(cls, mode: SeedMode) -> "Strategy":
        return cls.TUNNEL if mode == SeedMode.PREMIUM else cls.PROXY


class Transport:
    """
    Fetch catalog resources with retry, pacing and de-duplication.

    Attributes:
        max_retries: Retries after the first attempt (ceiling + 1 calls in total)
    """

    def __init__(self, settings: Settings, context: RunContext):
        self.settings = settings
        self.context = context
        self.max_retries = settings.MAX_RETRIES
        self._proxy_client: Optional[httpx.AsyncClient] = None
        self._tunnel_client: Optional[httpx.AsyncClient] = None
        self._inflight: Dict[str, asyncio.Future] = {}

    async def fetch(self, url: str, strategy: Strategy) -> Any:
        """
        Return the decoded JSON body of ``url``.

        Cached bodies are returned without a request; concurrent callers of
        the same URL share one request.

        Raises:
            TunnelConfigurationError: Tunnel credentials are incomplete
            NetworkError: Every attempt failed
        """
        cached = self.context.cache.get(url)
        if cached is not None:
            return cached

        pending = self._inflight.get(url)
        if pending is not None:
            return await asyncio.shield(pending)

        if strategy == Strategy.TUNNEL:
            self._check_tunnel_configuration()

        future = asyncio.get_running_loop().create_future()
        self._inflight[url] = future
        try:
            body = await self._fetch_with_retry(url, strategy)
        except asyncio.CancelledError:
            future.cancel()
            raise
        except Exception as e:
            future.set_exception(e)
            # Mark retrieved so an unshared failure is not reported as unhandled
            future.exception()
            raise
        else:
            future.set_result(body)
            return body
        finally:
            self._inflight.pop(url, None)

    async def fetch_resource(
        self,
        url: str,
        strategy: Strategy,
        schema: Type[SchemaT]
    ) -> SchemaT:
        """Fetch ``url`` and validate it against ``schema``"""
        body = await self.fetch(url, strategy)
        try:
            return schema.model_validate(body)
        except ValidationError as e:
            raise SchemaValidationError(
                f"Payload from {url} does not match {schema.__name__}",
                context={"url": url, "schema": schema.__name__, "errors": e.errors()},
                original_exception=e
            )

    async def fetch_resource_list(
        self,
        url: str,
        strategy: Strategy,
        schema: Type[SchemaT]
    ) -> List[SchemaT]:
        """Fetch a JSON array from ``url`` and validate each element"""
        body = await self.fetch(url, strategy)
        if not isinstance(body, list):
            raise SchemaValidationError(
                f"Payload from {url} is not a list",
                context={"url": url, "schema": schema.__name__}
            )
        try:
            return [schema.model_validate(element) for element in body]
        except ValidationError as e:
            raise SchemaValidationError(
                f"Payload from {url} does not match {schema.__name__}",
                context={"url": url, "schema": schema.__name__, "errors": e.errors()},
                original_exception=e
            )

    async def _fetch_with_retry(self, url: str, strategy: Strategy) -> Any:
        attempts = self.max_retries + 1
        retry_delay = (
            self.settings.TUNNEL_RETRY_DELAY_SECONDS
            if strategy == Strategy.TUNNEL
            else self.settings.PROXY_RETRY_DELAY_SECONDS
        )

        for attempt in range(attempts):
            self.context.stats.total_requests += 1
            await asyncio.sleep(self._pacing_delay(strategy))

            try:
                if strategy == Strategy.TUNNEL:
                    body = await self._request_via_tunnel(url)
                else:
                    body = await self._request_via_proxy(url)
            except NonRetryableError as e:
                self.context.stats.failed_requests += 1
                self.context.stats.record_error(url, e)
                logger.error(f"Not retrying {url}: {e}")
                raise
            except Exception as e:
                self.context.stats.failed_requests += 1

                if attempt < attempts - 1:
                    logger.warning(
                        f"Request failed for {url} ({type(e).__name__}: {e}). "
                        f"Retrying in {retry_delay}s (attempt {attempt + 1}/{attempts})"
                    )
                    await asyncio.sleep(retry_delay)
                    continue

                self.context.stats.record_error(url, e)
                logger.error(f"Failed to fetch {url} after {attempts} attempts: {e}")
                raise NetworkError(
                    f"Failed to fetch {url} after {attempts} attempts",
                    context={
                        "url": url,
                        "strategy": strategy.value,
                        "attempts": attempts
                    },
                    original_exception=e,
                    max_retries=self.max_retries,
                    retry_delay=retry_delay
                )

            self.context.cache.set(url, body)
            return body

    def _pacing_delay(self, strategy: Strategy) -> float:
        if strategy == Strategy.TUNNEL:
            return random.uniform(
                self.settings.TUNNEL_PACING_MIN_MS,
                self.settings.TUNNEL_PACING_MAX_MS
            ) / 1000
        return self.settings.RATE_LIMIT_MS / 1000

    def _check_tunnel_configuration(self) -> None:
        if not self.settings.tunnel_configured:
            raise TunnelConfigurationError(
                "Tunnel transport requires PROXY_HOST, PROXY_PORT, PROXY_USERNAME and PROXY_PASSWORD",
                context={
                    "host_set": bool(self.settings.PROXY_HOST),
                    "port_set": bool(self.settings.PROXY_PORT),
                    "username_set": bool(self.settings.PROXY_USERNAME),
                    "password_set": bool(self.settings.PROXY_PASSWORD),
                }
            )

    # ------------------------------------------------------------------
    # Strategies
    # ------------------------------------------------------------------

    async def _request_via_proxy(self, url: str) -> Any:
        proxy_url = f"{self.settings.STANDARD_PROXY_BASE_URL}{quote(url, safe='')}"
        response = await self._get_proxy_client().get(proxy_url)
        response.raise_for_status()

        envelope = response.json()
        contents = envelope.get("contents") if isinstance(envelope, dict) else None
        if not contents:
            raise ProxyEnvelopeError(
                "Proxy response has no contents",
                context={"url": url, "proxy_url": proxy_url}
            )

        try:
            return json.loads(contents)
        except (TypeError, ValueError) as e:
            raise ProxyEnvelopeError(
                "Proxy contents are not valid JSON",
                context={"url": url, "proxy_url": proxy_url},
                original_exception=e
            )

    async def _request_via_tunnel(self, url: str) -> Any:
        response = await self._get_tunnel_client().get(url)
        response.raise_for_status()

        if not response.content:
            raise EmptyResponseError(
                "Empty response body",
                context={"url": url, "status_code": response.status_code}
            )
        return response.json()

    def _get_proxy_client(self) -> httpx.AsyncClient:
        if self._proxy_client is None:
            self._proxy_client = httpx.AsyncClient(
                timeout=self.settings.REQUEST_TIMEOUT_SECONDS
            )
        return self._proxy_client

    def _get_tunnel_client(self) -> httpx.AsyncClient:
        if self._tunnel_client is None:
            s = self.settings
            proxy = f"http://{s.PROXY_USERNAME}:{s.PROXY_PASSWORD}@{s.PROXY_HOST}:{s.PROXY_PORT}"
            self._tunnel_client = httpx.AsyncClient(
                proxy=proxy,
                timeout=s.REQUEST_TIMEOUT_SECONDS
            )
        return self._tunnel_client

    async def aclose(self) -> None:
        for client in (self._proxy_client, self._tunnel_client):
            if client is not None:
                await client.aclose()
        self._proxy_client = None
        self._tunnel_client = None
