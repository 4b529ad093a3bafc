# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

import socket
import ssl
from enum import Enum
from typing import TYPE_CHECKING

import httpx

if TYPE_CHECKING:
    from .resources import RootResource


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    REDIRECT_ERROR = "REDIRECT_ERROR"
    BODY_TOO_LARGE = "BODY_TOO_LARGE"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


def categorize_exception(exc: BaseException) -> ErrorCategory:
    """
    Map Python/httpx exceptions to ErrorCategory.
    """
    if isinstance(exc, httpx.TimeoutException):
        return ErrorCategory.TIMEOUT

    # httpx wraps TLS and resolver failures in ConnectError; look at the cause first.
    cause = exc.__cause__ or exc.__context__
    if isinstance(exc, (ssl.SSLError, ssl.CertificateError)) or isinstance(cause, (ssl.SSLError, ssl.CertificateError)):
        return ErrorCategory.SSL_ERROR

    if isinstance(exc, (socket.gaierror, socket.herror)) or isinstance(cause, (socket.gaierror, socket.herror)):
        return ErrorCategory.DNS_ERROR

    if isinstance(exc, (httpx.ConnectError, httpx.RemoteProtocolError, httpx.NetworkError, httpx.ProxyError)):
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, ConnectionError):
        return ErrorCategory.CONNECTION_ERROR

    return ErrorCategory.UNKNOWN_ERROR


class HalClientError(Exception):
    """Base class for every failure surfaced by halclient."""


class UnsupportedResponseError(HalClientError):
    """A successful response whose body is not declared as HAL JSON."""

    def __init__(self, media_type: str | None = None):
        self.media_type = media_type or None
        if self.media_type is None:
            message = "The response is missing the 'Content-Type' header"
        else:
            message = f"The response contains an unsupported 'Content-Type' header value: {self.media_type}"
        super().__init__(message)


class HalHttpRequestError(HalClientError):
    """A non-success, non-redirect response.

    ``resource`` holds the parsed HAL body when the server sent one.
    """

    def __init__(self, status_code: int, reason: str = "", resource: RootResource | None = None):
        self.status_code = status_code
        self.reason = reason
        self.resource = resource
        super().__init__(f"Response status code does not indicate success: {status_code} ({reason})")


class HalParseError(HalClientError, ValueError):
    """The body text could not be parsed as a HAL document."""


class TransportError(HalClientError):
    """The request never produced an HTTP response."""

    def __init__(
        self,
        message: str,
        *,
        error_type: str | None = None,
        category: ErrorCategory = ErrorCategory.UNKNOWN_ERROR,
    ):
        self.error_type = error_type
        self.category = category
        super().__init__(message)


class RedirectError(TransportError):
    """A redirect without a usable Location, or one hop too many."""

    def __init__(self, message: str, *, location: str | None = None):
        self.location = location
        super().__init__(message, error_type=type(self).__name__, category=ErrorCategory.REDIRECT_ERROR)


class ResponseTooLargeError(TransportError):
    """The body exceeded the configured read limit and was cut short."""

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(
            f"The response body exceeds the {limit} byte limit (max_body_bytes)",
            error_type=type(self).__name__,
            category=ErrorCategory.BODY_TOO_LARGE,
        )


__all__ = [
    "ErrorCategory",
    "HalClientError",
    "HalHttpRequestError",
    "HalParseError",
    "RedirectError",
    "ResponseTooLargeError",
    "TransportError",
    "UnsupportedResponseError",
    "categorize_exception",
]
