# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP request/response data models shared by transports and the interpreter."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

Headers = dict[str, str]

_UNSET: Any = object()


@dataclass
class HttpRequest:
    """Normalized request representation consumed by HttpClient implementations."""

    url: str
    method: str = "GET"
    headers: Headers | None = None
    body: bytes | str | None = None
    json: Any = _UNSET
    timeout: float | None = None

    @property
    def has_json(self) -> bool:
        return self.json is not _UNSET


@dataclass
class HttpResponse:
    """A completed HTTP exchange, or a transport failure when ``ok`` is False.

    ``text``/``content`` hold the body as read once by the transport.
    """

    ok: bool
    status_code: int | None = None
    reason: str = ""
    headers: Headers = field(default_factory=dict)
    text: str = ""
    content: bytes = b""
    url: str | None = None
    error_message: str | None = None
    error_type: str | None = None
    error_category: str | None = None
    meta: dict[str, Any] = field(default_factory=dict)

    @property
    def is_success(self) -> bool:
        return self.status_code is not None and 200 <= self.status_code < 300
