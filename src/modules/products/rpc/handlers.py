"""Server-side registration of the ``products.Products`` service."""

from __future__ import annotations

import grpc

from modules.products.constants import RPC_SERVICE_NAME
from modules.products.rpc.methods import METHODS
from modules.products.rpc.servicer import ProductsServicer


def build_handler(servicer: ProductsServicer) -> grpc.GenericRpcHandler:
    """Bind every method in ``METHODS`` to the servicer with the JSON codec."""
    method_handlers = {}
    for method in METHODS:
        factory = (
            grpc.unary_stream_rpc_method_handler
            if method.server_streaming
            else grpc.unary_unary_rpc_method_handler
        )
        method_handlers[method.name] = factory(
            getattr(servicer, method.name),
            request_deserializer=method.request_type.from_wire,
            response_serializer=method.response_type.to_wire,
        )
    return grpc.method_handlers_generic_handler(RPC_SERVICE_NAME, method_handlers)
