"""Product RPC messages.

Framework-agnostic data transfer objects using Pydantic v2.  They are the
contracts between the gRPC adapter and the Service layer, and they carry
their own wire codec: camelCase JSON (``pageNumber``, ``isActive``, ...).

Request messages follow proto3 conventions: every field has a zero
default, so an omitted field arrives as ``0``, ``""`` or ``False``.
Only structural typing is checked here; the business rules are the
rule models in ``validators.py``.

- ``GetProductRequest`` / ``DeleteProductRequest``: point look-ups by id.
- ``GetProductsRequest``: paginated listing.
- ``SearchProductsRequest``: ranked text search.
- ``CreateProductRequest`` / ``UpdateProductRequest``: mutations.
- ``ProductResponse`` / ``DeleteProductResponse``: outputs.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

if TYPE_CHECKING:
    from modules.products.models import Product

M = TypeVar("M", bound="RpcMessage")


class RpcMessage(BaseModel):
    """Immutable base message with the JSON wire codec."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    @classmethod
    def from_wire(cls: type[M], data: bytes) -> M:
        return cls.model_validate_json(data)

    def to_wire(self) -> bytes:
        return self.model_dump_json(by_alias=True).encode("utf-8")


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


class GetProductRequest(RpcMessage):
    id: int = 0


class GetProductsRequest(RpcMessage):
    page_number: int = 0
    page_size: int = 0
    active_only: bool = False


class SearchProductsRequest(RpcMessage):
    search_term: str = ""
    page_number: int = 0
    page_size: int = 0


class CreateProductRequest(RpcMessage):
    name: str = ""
    description: str = ""
    price: float = 0.0
    stock: int = 0
    category: str = ""


class UpdateProductRequest(RpcMessage):
    """Full update: every mutable field is overwritten, including ``is_active``."""

    id: int = 0
    name: str = ""
    description: str = ""
    price: float = 0.0
    stock: int = 0
    category: str = ""
    is_active: bool = False


class DeleteProductRequest(RpcMessage):
    id: int = 0


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


class ProductResponse(RpcMessage):
    """Wire representation of a product.

    ``price`` is a float regardless of the fixed-point storage, so values
    may pick up binary rounding.  ``updated_at`` is ``""`` until the first
    update.
    """

    id: int
    name: str
    description: str
    price: float
    stock: int
    category: str
    created_at: str
    updated_at: str
    is_active: bool

    @classmethod
    def from_entity(cls, product: Product) -> ProductResponse:
        """Build a response message from a Product model instance."""
        return cls(
            id=product.id,
            name=product.name,
            description=product.description,
            price=float(product.price),
            stock=product.stock,
            category=product.category,
            created_at=product.created_at.isoformat(),
            updated_at=product.updated_at.isoformat() if product.updated_at else "",
            is_active=product.is_active,
        )


class DeleteProductResponse(RpcMessage):
    success: bool
    message: str
