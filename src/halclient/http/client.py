# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP transport abstraction and factories."""

from __future__ import annotations

from typing import Protocol

from ..config import HalClientSettings, load_settings
from .models import HttpRequest, HttpResponse


class HttpClient(Protocol):
    """Minimal protocol for issuing HTTP requests."""

    def request(self, request: HttpRequest) -> HttpResponse: ...

    def close(self) -> None:  # pragma: no cover - optional for adapters
        ...


class AsyncHttpClient(Protocol):
    """Awaitable counterpart of HttpClient."""

    async def request(self, request: HttpRequest) -> HttpResponse: ...

    async def aclose(self) -> None:  # pragma: no cover - optional for adapters
        ...


def create_default_http_client(settings: HalClientSettings | None = None) -> HttpClient:
    """Factory for the default httpx-backed client."""
    from .httpx_client import HttpxClient

    return HttpxClient(settings or load_settings())


def create_default_async_http_client(settings: HalClientSettings | None = None) -> AsyncHttpClient:
    """Factory for the default httpx-backed async client."""
    from .httpx_client import AsyncHttpxClient

    return AsyncHttpxClient(settings or load_settings())
