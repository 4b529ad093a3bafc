# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
halclient package entrypoint.

A HAL (``application/hal+json``) client: requests go out through an injectable
transport, and each response is interpreted into a navigable ``RootResource`` or a
typed error that may still carry the HAL body the server sent back.
"""

from .client import AsyncHalClient, HalClient, create_async_client, create_client
from .config import HAL_JSON_MEDIA_TYPE, HalClientSettings, load_settings
from .errors import (
    ErrorCategory,
    HalClientError,
    HalHttpRequestError,
    HalParseError,
    RedirectError,
    ResponseTooLargeError,
    TransportError,
    UnsupportedResponseError,
)
from .http import (
    AsyncHttpClient,
    AsyncHttpxClient,
    HttpClient,
    HttpRequest,
    HttpResponse,
    HttpxClient,
)
from .interpreter import Redirect, ResponseInterpreter
from .log import setup_logging
from .parser import HalJsonParser, HalParser
from .resources import Link, ParseResult, ResourceObject, RootResource
from .result import HalResult
from .version import __version__

__all__ = [
    "HAL_JSON_MEDIA_TYPE",
    "AsyncHalClient",
    "AsyncHttpClient",
    "AsyncHttpxClient",
    "ErrorCategory",
    "HalClient",
    "HalClientError",
    "HalClientSettings",
    "HalHttpRequestError",
    "HalJsonParser",
    "HalParseError",
    "HalParser",
    "HalResult",
    "HttpClient",
    "HttpRequest",
    "HttpResponse",
    "HttpxClient",
    "Link",
    "ParseResult",
    "Redirect",
    "RedirectError",
    "ResponseTooLargeError",
    "ResourceObject",
    "ResponseInterpreter",
    "RootResource",
    "TransportError",
    "UnsupportedResponseError",
    "create_async_client",
    "create_client",
    "load_settings",
    "setup_logging",
    "__version__",
]
