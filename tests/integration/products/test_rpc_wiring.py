"""Tests for the gRPC plumbing around ProductsServicer.

Covers:
- generic handler lookup and JSON (de)serialization per method.
- ProductsStub multi-callables and their paths.
- DatabaseConnectionInterceptor for unary and streaming handlers.
- create_server binding.
"""

from __future__ import annotations

import json
from collections import namedtuple
from unittest.mock import MagicMock, call, patch

import grpc
import pytest

from modules.products.dtos import GetProductsRequest, ProductResponse
from modules.products.rpc.client import ProductsStub
from modules.products.rpc.handlers import build_handler
from modules.products.rpc.interceptors import DatabaseConnectionInterceptor
from modules.products.rpc.methods import METHODS
from modules.products.rpc.server import create_server
from modules.products.rpc.servicer import ProductsServicer

pytestmark = pytest.mark.integration

CallDetails = namedtuple("CallDetails", ["method", "invocation_metadata"])


def _details(name: str) -> CallDetails:
    return CallDetails(method=f"/products.Products/{name}", invocation_metadata=())


class TestMethodTable:
    def test_paths(self):
        assert [m.path for m in METHODS] == [
            "/products.Products/GetProduct",
            "/products.Products/GetProducts",
            "/products.Products/SearchProducts",
            "/products.Products/CreateProduct",
            "/products.Products/UpdateProduct",
            "/products.Products/DeleteProduct",
        ]

    def test_only_listing_rpcs_stream(self):
        assert {m.name for m in METHODS if m.server_streaming} == {
            "GetProducts",
            "SearchProducts",
        }


class TestGenericHandler:
    def test_streaming_method_handler(self):
        handler = build_handler(ProductsServicer()).service(_details("GetProducts"))

        assert handler.response_streaming is True
        assert handler.unary_stream is not None
        request = handler.request_deserializer(b'{"pageSize": 4, "activeOnly": true}')
        assert request == GetProductsRequest(page_size=4, active_only=True)

    def test_unary_method_handler(self):
        handler = build_handler(ProductsServicer()).service(_details("DeleteProduct"))

        assert handler.response_streaming is False
        assert handler.unary_unary is not None

    def test_unknown_method(self):
        assert build_handler(ProductsServicer()).service(_details("DropTable")) is None

    def test_end_to_end_through_handler(self, make_product, rpc_context):
        make_product(name="Widget")
        handler = build_handler(ProductsServicer()).service(_details("SearchProducts"))

        request = handler.request_deserializer(b'{"searchTerm": "widg"}')
        payloads = [
            json.loads(handler.response_serializer(response))
            for response in handler.unary_stream(request, rpc_context)
        ]

        assert [p["name"] for p in payloads] == ["Widget"]
        assert payloads[0]["isActive"] is True


class TestProductsStub:
    def test_binds_one_callable_per_method(self):
        channel = MagicMock()

        stub = ProductsStub(channel)

        assert stub.GetProducts is channel.unary_stream.return_value
        assert stub.GetProduct is channel.unary_unary.return_value
        unary_paths = [c.args[0] for c in channel.unary_unary.call_args_list]
        stream_paths = [c.args[0] for c in channel.unary_stream.call_args_list]
        assert stream_paths == [
            "/products.Products/GetProducts",
            "/products.Products/SearchProducts",
        ]
        assert "/products.Products/CreateProduct" in unary_paths
        assert len(unary_paths) == 4

    def test_uses_json_codec(self):
        channel = MagicMock()

        ProductsStub(channel)

        kwargs = channel.unary_stream.call_args_list[0].kwargs
        assert kwargs["request_serializer"](GetProductsRequest(page_size=2)) == (
            GetProductsRequest(page_size=2).to_wire()
        )
        response = kwargs["response_deserializer"](
            json.dumps(
                {
                    "id": 1,
                    "name": "Widget",
                    "description": "",
                    "price": 9.99,
                    "stock": 5,
                    "category": "Tools",
                    "createdAt": "2024-01-01T00:00:00+00:00",
                    "updatedAt": "",
                    "isActive": True,
                }
            ).encode()
        )
        assert isinstance(response, ProductResponse)
        assert response.is_active is True


class TestDatabaseConnectionInterceptor:
    @patch("modules.products.rpc.interceptors.close_old_connections")
    def test_wraps_unary_calls(self, close_old):
        behavior = MagicMock(return_value="reply")
        interceptor = DatabaseConnectionInterceptor()

        handler = interceptor.intercept_service(
            lambda details: grpc.unary_unary_rpc_method_handler(behavior),
            _details("GetProduct"),
        )

        assert handler.unary_unary("request", "context") == "reply"
        behavior.assert_called_once_with("request", "context")
        assert close_old.call_args_list == [call(), call()]

    @patch("modules.products.rpc.interceptors.close_old_connections")
    def test_wraps_streaming_calls(self, close_old):
        interceptor = DatabaseConnectionInterceptor()

        handler = interceptor.intercept_service(
            lambda details: grpc.unary_stream_rpc_method_handler(
                lambda request, context: iter([1, 2])
            ),
            _details("GetProducts"),
        )

        stream = handler.unary_stream("request", "context")
        close_old.assert_not_called()
        assert list(stream) == [1, 2]
        assert close_old.call_count == 2

    @patch("modules.products.rpc.interceptors.close_old_connections")
    def test_closes_connections_when_behavior_fails(self, close_old):
        interceptor = DatabaseConnectionInterceptor()

        def boom(request, context):
            raise RuntimeError("boom")

        handler = interceptor.intercept_service(
            lambda details: grpc.unary_unary_rpc_method_handler(boom),
            _details("GetProduct"),
        )

        with pytest.raises(RuntimeError):
            handler.unary_unary("request", "context")
        assert close_old.call_count == 2

    def test_unknown_method_passes_through(self):
        interceptor = DatabaseConnectionInterceptor()
        assert interceptor.intercept_service(lambda details: None, _details("X")) is None


class TestCreateServer:
    def test_binds_ephemeral_port(self):
        server, port = create_server(port=0, max_workers=1)
        try:
            assert port > 0
        finally:
            server.stop(None)
