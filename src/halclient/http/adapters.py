# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""In-memory HttpClient implementations for tests and offline use."""

from __future__ import annotations

from .client import AsyncHttpClient, HttpClient
from .models import HttpRequest, HttpResponse


class StubHttpClient(HttpClient):
    """Deterministic, programmable HttpClient for tests.

    Responses are registered per URL, optionally narrowed to one method.
    """

    def __init__(self, responses: dict[str, HttpResponse] | None = None):
        self._responses: dict[tuple[str | None, str], HttpResponse] = {
            (None, url): response for url, response in (responses or {}).items()
        }
        self.requests: list[HttpRequest] = []
        self.closed = False

    def add(self, url: str, response: HttpResponse, *, method: str | None = None) -> None:
        self._responses[(method.upper() if method else None, url)] = response

    def _lookup(self, request: HttpRequest) -> HttpResponse:
        self.requests.append(request)
        for key in ((request.method.upper(), request.url), (None, request.url)):
            if key in self._responses:
                return self._responses[key]
        return HttpResponse(
            ok=False,
            error_message=f"No stubbed response configured for {request.method} {request.url}",
            error_type="LookupError",
        )

    def request(self, request: HttpRequest) -> HttpResponse:
        return self._lookup(request)

    def close(self) -> None:
        self.closed = True


class AsyncStubHttpClient(StubHttpClient, AsyncHttpClient):
    """Awaitable variant of StubHttpClient sharing the same registry."""

    async def request(self, request: HttpRequest) -> HttpResponse:  # type: ignore[override]
        return self._lookup(request)

    async def aclose(self) -> None:
        self.closed = True
