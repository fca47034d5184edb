"""Product domain exceptions.

Raised by the Service Layer when a request is invalid or a business
rule is violated.  The RPC layer catches these and translates them
into gRPC status codes.
"""

from __future__ import annotations

from typing import Sequence


class InvalidProductRequest(Exception):
    """The request failed validation.

    Carries every violation found; the message joins them with ``", "``.
    """

    def __init__(self, violations: Sequence[str]) -> None:
        self.violations = list(violations)
        super().__init__(", ".join(self.violations))


class ProductAlreadyExists(Exception):
    """Another product already uses the requested name."""


class ProductNotFound(Exception):
    """No product exists with the requested ID."""
