"""gRPC servicer for the product catalog.

Exposes ``ProductService`` over gRPC.  Each RPC runs inside ``rpc_call``,
which binds a correlation id for logging and translates exceptions into
gRPC statuses exactly once, at the boundary.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator, Optional

import grpc
import structlog

from modules.core.correlation import bind_correlation_id
from modules.products.dtos import (
    CreateProductRequest,
    DeleteProductRequest,
    DeleteProductResponse,
    GetProductRequest,
    GetProductsRequest,
    ProductResponse,
    SearchProductsRequest,
    UpdateProductRequest,
)
from modules.products.pagination import stream_page
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.rpc.status import status_for
from modules.products.services import ProductService

logger = structlog.get_logger(__name__)

CORRELATION_METADATA_KEY = "x-request-id"


def _metadata_value(context: grpc.ServicerContext, key: str) -> Optional[str]:
    for item_key, value in context.invocation_metadata() or ():
        if item_key == key:
            return value
    return None


@contextmanager
def rpc_call(context: grpc.ServicerContext, method: str, **fields: Any) -> Iterator[None]:
    """Scope one RPC: logging context plus exception-to-status translation.

    ``context.abort`` raises, so nothing after a failed call body runs.
    """
    bind_correlation_id(
        _metadata_value(context, CORRELATION_METADATA_KEY), rpc_method=method
    )
    log = logger.bind(**fields)
    log.info("rpc.started")
    try:
        yield
    except Exception as exc:
        code, details = status_for(exc)
        if code is grpc.StatusCode.INTERNAL:
            log.exception("rpc.internal_error")
        else:
            log.warning("rpc.rejected", status=code.name, details=details)
        context.abort(code, details)
    else:
        log.info("rpc.finished")


class ProductsServicer:
    """Implementation of the ``products.Products`` gRPC service.

    Uses ``ProductService`` with ``ProductDjangoRepository`` unless another
    service is injected.
    """

    def __init__(self, service: Optional[ProductService] = None) -> None:
        self._service = service or ProductService(repository=ProductDjangoRepository())

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def GetProduct(
        self, request: GetProductRequest, context: grpc.ServicerContext
    ) -> ProductResponse:
        with rpc_call(context, "GetProduct", product_id=request.id):
            product = self._service.get_product(request)
            return ProductResponse.from_entity(product)

    def GetProducts(
        self, request: GetProductsRequest, context: grpc.ServicerContext
    ) -> Iterator[ProductResponse]:
        with rpc_call(
            context,
            "GetProducts",
            page_number=request.page_number,
            page_size=request.page_size,
        ):
            products = self._service.list_products(request)
            for product in stream_page(
                products, lambda: not context.is_active(), "GetProducts"
            ):
                yield ProductResponse.from_entity(product)

    def SearchProducts(
        self, request: SearchProductsRequest, context: grpc.ServicerContext
    ) -> Iterator[ProductResponse]:
        with rpc_call(context, "SearchProducts", search_term=request.search_term):
            products = self._service.search_products(request)
            for product in stream_page(
                products, lambda: not context.is_active(), "SearchProducts"
            ):
                yield ProductResponse.from_entity(product)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def CreateProduct(
        self, request: CreateProductRequest, context: grpc.ServicerContext
    ) -> ProductResponse:
        with rpc_call(context, "CreateProduct", name=request.name):
            product = self._service.create_product(request)
            return ProductResponse.from_entity(product)

    def UpdateProduct(
        self, request: UpdateProductRequest, context: grpc.ServicerContext
    ) -> ProductResponse:
        with rpc_call(context, "UpdateProduct", product_id=request.id):
            product = self._service.update_product(request)
            return ProductResponse.from_entity(product)

    def DeleteProduct(
        self, request: DeleteProductRequest, context: grpc.ServicerContext
    ) -> DeleteProductResponse:
        with rpc_call(context, "DeleteProduct", product_id=request.id):
            self._service.delete_product(request)
            return DeleteProductResponse(
                success=True,
                message=f"Product with ID {request.id} deleted successfully",
            )
