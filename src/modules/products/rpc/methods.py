"""RPC method table for the ``products.Products`` service.

Shared by the server-side handler and the client stub so both agree on
paths, message types and cardinality.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Type

from modules.products.constants import RPC_SERVICE_NAME
from modules.products.dtos import (
    CreateProductRequest,
    DeleteProductRequest,
    DeleteProductResponse,
    GetProductRequest,
    GetProductsRequest,
    ProductResponse,
    RpcMessage,
    SearchProductsRequest,
    UpdateProductRequest,
)


@dataclass(frozen=True)
class RpcMethod:
    name: str
    request_type: Type[RpcMessage]
    response_type: Type[RpcMessage]
    server_streaming: bool = False

    @property
    def path(self) -> str:
        return f"/{RPC_SERVICE_NAME}/{self.name}"


METHODS: Tuple[RpcMethod, ...] = (
    RpcMethod("GetProduct", GetProductRequest, ProductResponse),
    RpcMethod("GetProducts", GetProductsRequest, ProductResponse, server_streaming=True),
    RpcMethod(
        "SearchProducts", SearchProductsRequest, ProductResponse, server_streaming=True
    ),
    RpcMethod("CreateProduct", CreateProductRequest, ProductResponse),
    RpcMethod("UpdateProduct", UpdateProductRequest, ProductResponse),
    RpcMethod("DeleteProduct", DeleteProductRequest, DeleteProductResponse),
)
