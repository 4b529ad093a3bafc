# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HAL JSON parsing.

The interpreter only depends on the ``HalParser`` protocol; ``HalJsonParser`` is the
default implementation and reads ``_links``/``_embedded`` without expanding CURIEs
or URI templates.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any, Protocol

from .errors import HalParseError
from .resources import Link, ParseResult, ResourceObject

LINKS_KEY = "_links"
EMBEDDED_KEY = "_embedded"

_LINK_ATTRIBUTES = ("type", "deprecation", "name", "profile", "title", "hreflang")


class HalParser(Protocol):
    """Turns HAL JSON text into a ParseResult or raises HalParseError."""

    def parse(self, text: str) -> ParseResult: ...


class HalJsonParser(HalParser):
    """Default parser built on the standard json module."""

    def parse(self, text: str) -> ParseResult:
        try:
            document = json.loads(text)
        except json.JSONDecodeError as exc:
            raise HalParseError(f"Invalid HAL JSON: {exc.msg} (line {exc.lineno}, column {exc.colno})") from exc
        if not isinstance(document, dict):
            raise HalParseError(f"HAL document must be a JSON object, got {type(document).__name__}")
        return self._parse_document(document)

    def _parse_document(self, document: Mapping[str, Any]) -> ParseResult:
        links = self._parse_links(document.get(LINKS_KEY))
        embedded = self._parse_embedded(document.get(EMBEDDED_KEY))
        state = {key: value for key, value in document.items() if key not in (LINKS_KEY, EMBEDDED_KEY)}
        return ParseResult(links=links, embedded=embedded, state=state)

    def _parse_links(self, raw: Any) -> dict[str, list[Link]]:
        if raw is None:
            return {}
        if not isinstance(raw, dict):
            raise HalParseError(f"'{LINKS_KEY}' must be an object")
        links: dict[str, list[Link]] = {}
        for rel, value in raw.items():
            items = value if isinstance(value, list) else [value]
            links[rel] = [self._parse_link(rel, item) for item in items]
        return links

    def _parse_link(self, rel: str, raw: Any) -> Link:
        if not isinstance(raw, dict):
            raise HalParseError(f"Link '{rel}' must be an object")
        href = raw.get("href")
        if not isinstance(href, str):
            raise HalParseError(f"Link '{rel}' is missing a string 'href'")
        extras = {key: str(raw[key]) for key in _LINK_ATTRIBUTES if raw.get(key) is not None}
        return Link(rel=rel, href=href, templated=raw.get("templated") is True, **extras)

    def _parse_embedded(self, raw: Any) -> dict[str, list[ResourceObject]]:
        if raw is None:
            return {}
        if not isinstance(raw, dict):
            raise HalParseError(f"'{EMBEDDED_KEY}' must be an object")
        embedded: dict[str, list[ResourceObject]] = {}
        for rel, value in raw.items():
            items = value if isinstance(value, list) else [value]
            resources = []
            for item in items:
                if not isinstance(item, dict):
                    raise HalParseError(f"Embedded resource '{rel}' must be an object")
                part = self._parse_document(item)
                resources.append(ResourceObject(links=part.links, embedded=part.embedded, state=part.state))
            embedded[rel] = resources
        return embedded


__all__ = ["EMBEDDED_KEY", "LINKS_KEY", "HalJsonParser", "HalParser"]
