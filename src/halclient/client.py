# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HAL request dispatchers.

``HalClient`` and ``AsyncHalClient`` issue requests through an injected transport and
hand every response to a shared ``ResponseInterpreter``. Redirects are followed as
plain GETs in a bounded loop.
"""

from __future__ import annotations

import logging
from typing import Any

from .config import HalClientSettings, load_settings
from .errors import RedirectError
from .http.client import (
    AsyncHttpClient,
    HttpClient,
    create_default_async_http_client,
    create_default_http_client,
)
from .http.models import HttpRequest, HttpResponse
from .interpreter import Redirect, ResponseInterpreter
from .parser import HalParser
from .resources import RootResource
from .result import HalResult

logger = logging.getLogger(__name__)


class _DispatcherBase:
    def __init__(self, settings: HalClientSettings | None, parser: HalParser | None):
        self.settings = settings or load_settings()
        self.interpreter = ResponseInterpreter(parser)
        # Opaque slot for callers memoizing an API entry point.
        self.cached_api_root_resource: RootResource | None = None
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def _check_open(self) -> None:
        if self._closed:
            raise RuntimeError(f"{type(self).__name__} is closed")

    def _next_hop(self, outcome: Redirect, hops: int) -> HalResult | HttpRequest:
        if hops > self.settings.max_redirects:
            return HalResult.failure(
                RedirectError(
                    f"Exceeded maximum of {self.settings.max_redirects} redirects",
                    location=outcome.location,
                )
            )
        logger.debug("Following %s redirect to %s (hop %d)", outcome.status_code, outcome.location, hops)
        return HttpRequest(url=outcome.location, method="GET")

    def _log_failure(self, request: HttpRequest, result: HalResult) -> None:
        if result.error is not None:
            logger.debug("%s %s failed: %s", request.method, request.url, result.error)


class HalClient(_DispatcherBase):
    """Synchronous HAL client over an HttpClient transport."""

    def __init__(
        self,
        http_client: HttpClient | None = None,
        *,
        settings: HalClientSettings | None = None,
        parser: HalParser | None = None,
    ):
        super().__init__(settings, parser)
        self._http = http_client or create_default_http_client(self.settings)

    @property
    def http(self) -> HttpClient:
        """Raw transport; responses obtained here are never interpreted."""
        return self._http

    def get(self, uri: str) -> HalResult:
        return self.send(HttpRequest(url=uri, method="GET"))

    def post(self, uri: str, data: Any) -> HalResult:
        return self.send(HttpRequest(url=uri, method="POST", json=data))

    def put(self, uri: str, data: Any) -> HalResult:
        return self.send(HttpRequest(url=uri, method="PUT", json=data))

    def delete(self, uri: str) -> HalResult:
        return self.send(HttpRequest(url=uri, method="DELETE"))

    def send(self, request: HttpRequest) -> HalResult:
        self._check_open()
        result = self._process(self._http.request(request))
        self._log_failure(request, result)
        return result

    def _process(self, response: HttpResponse) -> HalResult:
        hops = 0
        while True:
            outcome = self.interpreter.interpret(response)
            if isinstance(outcome, HalResult):
                return outcome
            hops += 1
            follow_up = self._next_hop(outcome, hops)
            if isinstance(follow_up, HalResult):
                return follow_up
            response = self._http.request(follow_up)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._http.close()

    def __enter__(self) -> HalClient:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.close()


class AsyncHalClient(_DispatcherBase):
    """Asynchronous HAL client; each call suspends only on network I/O."""

    def __init__(
        self,
        http_client: AsyncHttpClient | None = None,
        *,
        settings: HalClientSettings | None = None,
        parser: HalParser | None = None,
    ):
        super().__init__(settings, parser)
        self._http = http_client or create_default_async_http_client(self.settings)

    @property
    def http(self) -> AsyncHttpClient:
        """Raw transport; responses obtained here are never interpreted."""
        return self._http

    async def get(self, uri: str) -> HalResult:
        return await self.send(HttpRequest(url=uri, method="GET"))

    async def post(self, uri: str, data: Any) -> HalResult:
        return await self.send(HttpRequest(url=uri, method="POST", json=data))

    async def put(self, uri: str, data: Any) -> HalResult:
        return await self.send(HttpRequest(url=uri, method="PUT", json=data))

    async def delete(self, uri: str) -> HalResult:
        return await self.send(HttpRequest(url=uri, method="DELETE"))

    async def send(self, request: HttpRequest) -> HalResult:
        self._check_open()
        result = await self._process(await self._http.request(request))
        self._log_failure(request, result)
        return result

    async def _process(self, response: HttpResponse) -> HalResult:
        hops = 0
        while True:
            outcome = self.interpreter.interpret(response)
            if isinstance(outcome, HalResult):
                return outcome
            hops += 1
            follow_up = self._next_hop(outcome, hops)
            if isinstance(follow_up, HalResult):
                return follow_up
            response = await self._http.request(follow_up)

    async def aclose(self) -> None:
        if self._closed:
            return
        self._closed = True
        await self._http.aclose()

    async def __aenter__(self) -> AsyncHalClient:
        return self

    async def __aexit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        await self.aclose()


def create_client(
    settings: HalClientSettings | None = None,
    *,
    parser: HalParser | None = None,
    http_client: HttpClient | None = None,
) -> HalClient:
    """Build a HalClient, defaulting to an httpx transport configured from ``settings``."""
    return HalClient(http_client, settings=settings, parser=parser)


def create_async_client(
    settings: HalClientSettings | None = None,
    *,
    parser: HalParser | None = None,
    http_client: AsyncHttpClient | None = None,
) -> AsyncHalClient:
    """Async counterpart of create_client."""
    return AsyncHalClient(http_client, settings=settings, parser=parser)


__all__ = ["AsyncHalClient", "HalClient", "create_async_client", "create_client"]
