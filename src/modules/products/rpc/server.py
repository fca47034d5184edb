"""gRPC server factory."""

from __future__ import annotations

from concurrent import futures
from typing import Optional, Tuple

import grpc
from django.conf import settings

from modules.products.rpc.handlers import build_handler
from modules.products.rpc.interceptors import DatabaseConnectionInterceptor
from modules.products.rpc.servicer import ProductsServicer


def create_server(
    servicer: Optional[ProductsServicer] = None,
    *,
    address: str = "[::]",
    port: Optional[int] = None,
    max_workers: Optional[int] = None,
) -> Tuple[grpc.Server, int]:
    """Build an unstarted server and bind it; returns ``(server, bound_port)``.

    Unset arguments fall back to the ``GRPC_*`` settings.  Port ``0`` binds
    an ephemeral port.
    """
    max_message_length = settings.GRPC_MAX_MESSAGE_LENGTH
    server = grpc.server(
        futures.ThreadPoolExecutor(max_workers=max_workers or settings.GRPC_MAX_WORKERS),
        interceptors=(DatabaseConnectionInterceptor(),),
        options=[
            ("grpc.max_receive_message_length", max_message_length),
            ("grpc.max_send_message_length", max_message_length),
        ],
    )
    server.add_generic_rpc_handlers((build_handler(servicer or ProductsServicer()),))
    bound_port = server.add_insecure_port(
        f"{address}:{settings.GRPC_PORT if port is None else port}"
    )
    return server, bound_port
