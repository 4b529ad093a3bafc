# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed HttpClient implementations."""

from __future__ import annotations

from typing import Any

import httpx

from ..config import HalClientSettings, load_settings
from ..errors import categorize_exception
from .client import AsyncHttpClient, HttpClient
from .headers import normalize_headers
from .models import HttpRequest, HttpResponse


def _client_kwargs(settings: HalClientSettings, transport: Any = None) -> dict[str, Any]:
    # Redirects are never followed here; the dispatcher decides what a 3xx means.
    kwargs: dict[str, Any] = {
        "follow_redirects": False,
        "timeout": settings.timeout,
        "verify": settings.verify_ssl,
        "headers": settings.default_headers(),
    }
    if settings.base_url:
        kwargs["base_url"] = settings.base_url
    if transport is not None:
        kwargs["transport"] = transport
    return kwargs


def _stream_kwargs(request: HttpRequest, settings: HalClientSettings) -> dict[str, Any]:
    kwargs: dict[str, Any] = {
        "headers": request.headers,
        "timeout": request.timeout if request.timeout is not None else settings.timeout,
    }
    if request.has_json:
        kwargs["json"] = request.json
    elif request.body is not None:
        kwargs["content"] = request.body
    return kwargs


class _BodyBuffer:
    """Collects streamed chunks up to a byte limit."""

    def __init__(self, limit: int):
        self.limit = limit if limit > 0 else 16 * 1024 * 1024
        self.content = bytearray()
        self.truncated = False

    def feed(self, chunk: bytes) -> bool:
        """Append a chunk; returns False once the limit is reached."""
        if not chunk:
            return True
        remaining = self.limit - len(self.content)
        if len(chunk) > remaining:
            self.content.extend(chunk[: max(remaining, 0)])
            self.truncated = True
            return False
        self.content.extend(chunk)
        return True

    def build(self, resp: httpx.Response) -> HttpResponse:
        content = bytes(self.content)
        encoding = resp.encoding or "utf-8"
        try:
            text = content.decode(encoding, errors="replace")
        except LookupError:
            text = content.decode("utf-8", errors="replace")
        return HttpResponse(
            ok=True,
            status_code=resp.status_code,
            reason=resp.reason_phrase,
            headers=normalize_headers(resp.headers),
            text=text,
            content=content,
            url=str(resp.url),
            meta={
                "body_truncated": self.truncated,
                "body_bytes_read": len(content),
                "body_bytes_limit": self.limit,
            },
        )


def _failure(exc: Exception) -> HttpResponse:
    return HttpResponse(
        ok=False,
        error_message=str(exc) or type(exc).__name__,
        error_type=type(exc).__name__,
        error_category=categorize_exception(exc).value,
    )


class HttpxClient(HttpClient):
    """Synchronous httpx client wrapper."""

    def __init__(
        self,
        settings: HalClientSettings | None = None,
        client: httpx.Client | None = None,
        *,
        transport: httpx.BaseTransport | None = None,
    ):
        self.settings = settings or load_settings()
        self._client = client or httpx.Client(**_client_kwargs(self.settings, transport))

    @property
    def client(self) -> httpx.Client:
        """The underlying httpx.Client, for callers that need transport-level control."""
        return self._client

    def request(self, request: HttpRequest) -> HttpResponse:
        buffer = _BodyBuffer(self.settings.max_body_bytes)
        try:
            with self._client.stream(request.method, request.url, **_stream_kwargs(request, self.settings)) as resp:
                for chunk in resp.iter_bytes():
                    if not buffer.feed(chunk):
                        break
                return buffer.build(resp)
        except (httpx.HTTPError, httpx.InvalidURL, OSError) as exc:
            return _failure(exc)

    def close(self) -> None:
        self._client.close()


class AsyncHttpxClient(AsyncHttpClient):
    """Asynchronous httpx client wrapper."""

    def __init__(
        self,
        settings: HalClientSettings | None = None,
        client: httpx.AsyncClient | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.settings = settings or load_settings()
        self._client = client or httpx.AsyncClient(**_client_kwargs(self.settings, transport))

    @property
    def client(self) -> httpx.AsyncClient:
        """The underlying httpx.AsyncClient, for callers that need transport-level control."""
        return self._client

    async def request(self, request: HttpRequest) -> HttpResponse:
        buffer = _BodyBuffer(self.settings.max_body_bytes)
        try:
            async with self._client.stream(
                request.method, request.url, **_stream_kwargs(request, self.settings)
            ) as resp:
                async for chunk in resp.aiter_bytes():
                    if not buffer.feed(chunk):
                        break
                return buffer.build(resp)
        except (httpx.HTTPError, httpx.InvalidURL, OSError) as exc:
            return _failure(exc)

    async def aclose(self) -> None:
        await self._client.aclose()
