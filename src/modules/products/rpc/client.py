"""Client stub for the ``products.Products`` service.

Mirrors a generated protobuf stub: one multi-callable attribute per RPC,
named after the method (``stub.GetProduct(request)``), using the same
JSON codec as the server.
"""

from __future__ import annotations

import grpc

from modules.products.rpc.methods import METHODS


class ProductsStub:
    def __init__(self, channel: grpc.Channel) -> None:
        for method in METHODS:
            factory = channel.unary_stream if method.server_streaming else channel.unary_unary
            setattr(
                self,
                method.name,
                factory(
                    method.path,
                    request_serializer=method.request_type.to_wire,
                    response_deserializer=method.response_type.from_wire,
                ),
            )
