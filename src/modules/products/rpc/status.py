"""Translation of pipeline outcomes to gRPC status codes.

Classified domain errors keep their message; every other exception
becomes ``INTERNAL`` with a fixed message so no internal detail leaks.
"""

from __future__ import annotations

from typing import Dict, Tuple, Type

import grpc

from modules.products.constants import INTERNAL_ERROR_MESSAGE
from modules.products.exceptions import (
    InvalidProductRequest,
    ProductAlreadyExists,
    ProductNotFound,
)

STATUS_BY_EXCEPTION: Dict[Type[Exception], grpc.StatusCode] = {
    InvalidProductRequest: grpc.StatusCode.INVALID_ARGUMENT,
    ProductNotFound: grpc.StatusCode.NOT_FOUND,
    ProductAlreadyExists: grpc.StatusCode.ALREADY_EXISTS,
}


def status_for(exc: Exception) -> Tuple[grpc.StatusCode, str]:
    """Return the ``(code, details)`` pair to report for ``exc``."""
    for exc_type, code in STATUS_BY_EXCEPTION.items():
        if isinstance(exc, exc_type):
            return code, str(exc)
    return grpc.StatusCode.INTERNAL, INTERNAL_ERROR_MESSAGE
