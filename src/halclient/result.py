# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Tagged outcome of a dispatched HAL request."""

from __future__ import annotations

from dataclasses import dataclass

from .errors import HalClientError
from .resources import RootResource


@dataclass(frozen=True)
class HalResult:
    """Either a resource (``ok``) or the error that prevented one.

    Exactly one of ``resource`` and ``error`` is set. HTTP errors may still carry
    a resource on ``error.resource``.
    """

    resource: RootResource | None = None
    error: HalClientError | None = None

    def __post_init__(self) -> None:
        if (self.resource is None) == (self.error is None):
            raise ValueError("HalResult needs exactly one of resource or error")

    @classmethod
    def success(cls, resource: RootResource) -> HalResult:
        return cls(resource=resource)

    @classmethod
    def failure(cls, error: HalClientError) -> HalResult:
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> RootResource:
        """Return the resource or raise the carried error."""
        if self.error is not None:
            raise self.error
        assert self.resource is not None
        return self.resource


__all__ = ["HalResult"]
