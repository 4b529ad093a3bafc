# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP transport exports."""

from .adapters import AsyncStubHttpClient, StubHttpClient
from .client import (
    AsyncHttpClient,
    HttpClient,
    create_default_async_http_client,
    create_default_http_client,
)
from .headers import header_value, media_type, normalize_headers
from .httpx_client import AsyncHttpxClient, HttpxClient
from .models import Headers, HttpRequest, HttpResponse

__all__ = [
    "AsyncHttpClient",
    "AsyncHttpxClient",
    "AsyncStubHttpClient",
    "Headers",
    "HttpClient",
    "HttpRequest",
    "HttpResponse",
    "HttpxClient",
    "StubHttpClient",
    "create_default_async_http_client",
    "create_default_http_client",
    "header_value",
    "media_type",
    "normalize_headers",
]
