# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging helpers for halclient."""

from __future__ import annotations

import logging
import os

DEFAULT_LOG_LEVEL = os.getenv("HALCLIENT_LOG_LEVEL", "WARNING").upper()

# httpx logs every request at INFO; keep it below our own output unless asked.
TRANSPORT_LOGGERS = ("httpx", "httpcore")


def _resolve_level(name: str | None, default: int) -> int:
    if not name:
        return default
    return getattr(logging, name.strip().upper(), default)


def setup_logging(level: str | None = None, *, transport_level: str | None = None) -> None:
    """Configure standard logging for CLI/library use.

    ``transport_level`` controls the httpx/httpcore loggers separately; it defaults
    to WARNING so redirect hops logged by the dispatcher are not buried in
    per-request transport lines.
    """
    effective_level = _resolve_level(level or DEFAULT_LOG_LEVEL, logging.WARNING)
    logging.basicConfig(
        level=effective_level,
        format="%(levelname)s %(name)s: %(message)s",
    )
    wire_level = _resolve_level(transport_level, logging.WARNING)
    for name in TRANSPORT_LOGGERS:
        logging.getLogger(name).setLevel(wire_level)


__all__ = ["setup_logging"]
