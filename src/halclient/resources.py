# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HAL resource models returned by the client.

Resources are immutable once built: link/embedded/state mappings are read-only
views, nested JSON objects and arrays in state become read-only mappings and tuples,
and the empty sentinel is recognised by how it was constructed rather
than by looking at its (absent) fields.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

LinkMap = Mapping[str, "tuple[Link, ...]"]
EmbeddedMap = Mapping[str, "tuple[ResourceObject, ...]"]

_EMPTY: Mapping[str, Any] = MappingProxyType({})


@dataclass(frozen=True)
class Link:
    """A single HAL link object."""

    rel: str
    href: str
    templated: bool = False
    type: str | None = None
    deprecation: str | None = None
    name: str | None = None
    profile: str | None = None
    title: str | None = None
    hreflang: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"href": self.href}
        if self.templated:
            data["templated"] = True
        for key in ("type", "deprecation", "name", "profile", "title", "hreflang"):
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        return data


@dataclass(frozen=True)
class ParseResult:
    """Output of a HalParser: the three parts of a HAL document."""

    links: LinkMap = field(default_factory=dict)
    embedded: EmbeddedMap = field(default_factory=dict)
    state: Mapping[str, Any] = field(default_factory=dict)


def _freeze(mapping: Mapping[str, Any] | None) -> Mapping[str, Any]:
    if not mapping:
        return _EMPTY
    return MappingProxyType(dict(mapping))


def _deep_freeze(value: Any) -> Any:
    if isinstance(value, Mapping):
        return MappingProxyType({key: _deep_freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(_deep_freeze(item) for item in value)
    return value


def _thaw(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {key: _thaw(item) for key, item in value.items()}
    if isinstance(value, tuple):
        return [_thaw(item) for item in value]
    return value


@dataclass(frozen=True)
class ResourceObject:
    """A HAL resource: links, embedded resources and state properties."""

    links: LinkMap = field(default_factory=lambda: _EMPTY)
    embedded: EmbeddedMap = field(default_factory=lambda: _EMPTY)
    state: Mapping[str, Any] = field(default_factory=lambda: _EMPTY)

    def __post_init__(self) -> None:
        object.__setattr__(self, "links", _freeze({rel: tuple(items) for rel, items in self.links.items()}))
        object.__setattr__(self, "embedded", _freeze({rel: tuple(items) for rel, items in self.embedded.items()}))
        object.__setattr__(self, "state", _freeze({key: _deep_freeze(value) for key, value in self.state.items()}))

    def link(self, rel: str) -> Link | None:
        """Return the first link for ``rel`` or None."""
        links = self.links.get(rel)
        return links[0] if links else None

    def links_for(self, rel: str) -> tuple[Link, ...]:
        return self.links.get(rel, ())

    def embedded_for(self, rel: str) -> tuple[ResourceObject, ...]:
        return self.embedded.get(rel, ())

    def get(self, key: str, default: Any = None) -> Any:
        return self.state.get(key, default)

    def __getitem__(self, key: str) -> Any:
        return self.state[key]

    def __contains__(self, key: object) -> bool:
        return key in self.state

    def __iter__(self) -> Iterator[str]:
        return iter(self.state)

    def to_dict(self) -> dict[str, Any]:
        """Render back into a HAL-shaped dict (single-item relations stay lists)."""
        data: dict[str, Any] = _thaw(self.state)
        if self.links:
            data["_links"] = {rel: [link.to_dict() for link in links] for rel, links in self.links.items()}
        if self.embedded:
            data["_embedded"] = {rel: [item.to_dict() for item in items] for rel, items in self.embedded.items()}
        return data


@dataclass(frozen=True)
class RootResource(ResourceObject):
    """Top-level resource handed to callers, one per interpreted response."""

    is_empty: bool = field(default=False, compare=False)

    @classmethod
    def empty(cls) -> RootResource:
        """The "no content" sentinel used for 204 responses."""
        return cls(is_empty=True)

    @classmethod
    def from_parse_result(cls, result: ParseResult) -> RootResource:
        return cls(
            links=result.links,
            embedded=result.embedded,
            state=result.state,
            is_empty=False,
        )


__all__ = ["Link", "ParseResult", "ResourceObject", "RootResource"]
