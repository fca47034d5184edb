from __future__ import annotations

from decimal import Decimal
from typing import Any, Optional, Sequence, Tuple

import pytest

from modules.products.models import Product


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


class RpcAborted(Exception):
    """Raised by ``FakeServicerContext.abort`` like grpc's real context does."""

    def __init__(self, code: Any, details: str) -> None:
        super().__init__(f"{code}: {details}")
        self.code = code
        self.details = details


class FakeServicerContext:
    """Minimal stand-in for ``grpc.ServicerContext``.

    ``cancel_after=N`` makes the call look active for the first N
    ``is_active()`` checks and cancelled afterwards.
    """

    def __init__(
        self,
        metadata: Sequence[Tuple[str, str]] = (),
        cancel_after: Optional[int] = None,
    ) -> None:
        self._metadata = tuple(metadata)
        self._cancel_after = cancel_after
        self.active_checks = 0

    def invocation_metadata(self) -> Tuple[Tuple[str, str], ...]:
        return self._metadata

    def is_active(self) -> bool:
        self.active_checks += 1
        return self._cancel_after is None or self.active_checks <= self._cancel_after

    def abort(self, code: Any, details: str) -> None:
        raise RpcAborted(code, details)


@pytest.fixture()
def rpc_context():
    return FakeServicerContext()


@pytest.fixture()
def cancelling_context():
    """Factory for contexts that report cancellation after N active checks."""
    return lambda cancel_after: FakeServicerContext(cancel_after=cancel_after)


@pytest.fixture()
def rpc_aborted():
    """Exception type raised when a servicer aborts the fake call."""
    return RpcAborted


@pytest.fixture()
def make_product():
    """Factory that persists a Product with sensible defaults."""

    def _make(**overrides) -> Product:
        defaults = {
            "name": "Widget",
            "description": "",
            "price": Decimal("9.99"),
            "stock": 5,
            "category": "Tools",
        }
        defaults.update(overrides)
        return Product.objects.create(**defaults)

    return _make
