"""Server interceptors."""

from __future__ import annotations

from typing import Any, Callable, Iterator

import grpc
from django.db import close_old_connections


def _wrap_unary(behavior: Callable[..., Any]) -> Callable[..., Any]:
    def wrapper(request: Any, context: grpc.ServicerContext) -> Any:
        close_old_connections()
        try:
            return behavior(request, context)
        finally:
            close_old_connections()

    return wrapper


def _wrap_stream(behavior: Callable[..., Iterator[Any]]) -> Callable[..., Iterator[Any]]:
    def wrapper(request: Any, context: grpc.ServicerContext) -> Iterator[Any]:
        close_old_connections()
        try:
            yield from behavior(request, context)
        finally:
            close_old_connections()

    return wrapper


class DatabaseConnectionInterceptor(grpc.ServerInterceptor):
    """Give each RPC the connection hygiene Django applies to HTTP requests.

    Worker threads are reused across calls, so stale or broken database
    connections are discarded before and after every RPC, honouring
    ``CONN_MAX_AGE``.
    """

    def intercept_service(self, continuation, handler_call_details):
        handler = continuation(handler_call_details)
        if handler is None:
            return None
        if handler.unary_unary is not None:
            return handler._replace(unary_unary=_wrap_unary(handler.unary_unary))
        if handler.unary_stream is not None:
            return handler._replace(unary_stream=_wrap_stream(handler.unary_stream))
        return handler
