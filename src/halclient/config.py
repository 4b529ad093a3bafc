# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for halclient."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from .version import __version__

HAL_JSON_MEDIA_TYPE = "application/hal+json"
DEFAULT_USER_AGENT = f"halclient/{__version__}"
DEFAULT_MAX_REDIRECTS = 10
DEFAULT_MAX_BODY_BYTES = 16 * 1024 * 1024


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        return int(value) if value is not None else default
    except ValueError:
        return default


def _positive_int_env(name: str, default: int) -> int:
    value = _int_env(name, default)
    return value if value > 0 else default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class HalClientSettings:
    """Transport and dispatcher defaults.

    Passed by value to the client at construction; the client never writes to a
    process-wide header table.
    """

    base_url: str = ""
    timeout: float = 10.0
    user_agent: str = DEFAULT_USER_AGENT
    accept: str = HAL_JSON_MEDIA_TYPE
    verify_ssl: bool = True
    max_redirects: int = DEFAULT_MAX_REDIRECTS
    max_body_bytes: int = DEFAULT_MAX_BODY_BYTES
    headers: dict[str, str] = field(default_factory=dict)

    def default_headers(self) -> dict[str, str]:
        """Headers applied to every request, including raw pass-through ones."""
        merged = {"Accept": self.accept, "User-Agent": self.user_agent}
        merged.update(self.headers)
        return merged

    @classmethod
    def from_env(cls) -> HalClientSettings:
        """Create settings from environment variables (evaluated at call time)."""
        return cls(
            base_url=os.getenv("HALCLIENT_BASE_URL", cls.base_url),
            timeout=_float_env("HALCLIENT_HTTP_TIMEOUT", cls.timeout),
            user_agent=os.getenv("HALCLIENT_USER_AGENT", cls.user_agent),
            accept=os.getenv("HALCLIENT_ACCEPT", cls.accept),
            verify_ssl=_bool_env("HALCLIENT_HTTP_VERIFY_SSL", cls.verify_ssl),
            max_redirects=_positive_int_env("HALCLIENT_MAX_REDIRECTS", cls.max_redirects),
            max_body_bytes=_positive_int_env("HALCLIENT_HTTP_MAX_BODY_BYTES", cls.max_body_bytes),
        )


def load_settings() -> HalClientSettings:
    """Load client settings from environment with sensible defaults."""
    return HalClientSettings.from_env()
