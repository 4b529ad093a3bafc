# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Maps a completed HTTP response onto a HAL resource, a failure, or a redirect."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urljoin

from .config import HAL_JSON_MEDIA_TYPE
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
from .http.headers import header_value, media_type
from .http.models import HttpResponse
from .parser import HalJsonParser, HalParser
from .resources import RootResource
from .result import HalResult

NO_CONTENT = 204
# Found, See Other and Temporary Redirect; all re-issued as GET.
REDIRECT_STATUS_CODES = frozenset({302, 303, 307})


@dataclass(frozen=True)
class Redirect:
    """Instruction to GET ``location`` and interpret that response instead."""

    location: str
    status_code: int


def is_hal_media_type(value: str | None) -> bool:
    return value is not None and value.lower() == HAL_JSON_MEDIA_TYPE


class ResponseInterpreter:
    """
    Decides what a response means for a HAL client.

    The interpreter performs no I/O: redirects come back as ``Redirect`` so the
    sync and async dispatchers can each issue the follow-up request.
    """

    def __init__(self, parser: HalParser | None = None):
        self.parser = parser or HalJsonParser()

    def interpret(self, response: HttpResponse) -> HalResult | Redirect:
        if not response.ok or response.status_code is None:
            return HalResult.failure(self._transport_error(response))

        status = response.status_code
        if status in REDIRECT_STATUS_CODES:
            return self._redirect(response)

        declared = media_type(response.headers)
        is_hal = is_hal_media_type(declared)

        if response.is_success:
            if status == NO_CONTENT:
                return HalResult.success(RootResource.empty())
            if declared is None:
                return HalResult.failure(UnsupportedResponseError())
            if not is_hal:
                return HalResult.failure(UnsupportedResponseError(declared))
            parsed = self._parse_body(response)
            if isinstance(parsed, HalClientError):
                return HalResult.failure(parsed)
            return HalResult.success(parsed)

        if not is_hal:
            return HalResult.failure(HalHttpRequestError(status, response.reason))
        parsed = self._parse_body(response)
        if isinstance(parsed, HalClientError):
            return HalResult.failure(parsed)
        return HalResult.failure(HalHttpRequestError(status, response.reason, parsed))

    def parse(self, response: HttpResponse) -> RootResource:
        return RootResource.from_parse_result(self.parser.parse(response.text))

    def _parse_body(self, response: HttpResponse) -> RootResource | HalClientError:
        # A capped read holds only a prefix of the document.
        if response.meta.get("body_truncated"):
            return ResponseTooLargeError(int(response.meta.get("body_bytes_limit") or len(response.content)))
        try:
            return self.parse(response)
        except HalParseError as exc:
            return exc

    @staticmethod
    def _redirect(response: HttpResponse) -> HalResult | Redirect:
        location = header_value(response.headers, "location")
        if not location:
            return HalResult.failure(
                RedirectError(f"Redirect response {response.status_code} is missing the 'Location' header")
            )
        if response.url:
            location = urljoin(response.url, location)
        return Redirect(location=location, status_code=response.status_code or 0)

    @staticmethod
    def _transport_error(response: HttpResponse) -> TransportError:
        try:
            category = ErrorCategory(response.error_category or ErrorCategory.UNKNOWN_ERROR)
        except ValueError:
            category = ErrorCategory.UNKNOWN_ERROR
        return TransportError(
            response.error_message or "Request failed without a response",
            error_type=response.error_type,
            category=category,
        )


__all__ = ["NO_CONTENT", "REDIRECT_STATUS_CODES", "Redirect", "ResponseInterpreter", "is_hal_media_type"]
