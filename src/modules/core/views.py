import time
from typing import Any, Dict

import structlog
from django.conf import settings
from django.db import connections
from django.http import HttpRequest, JsonResponse
from django.utils import timezone
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from modules.products.constants import RPC_OPERATIONS, RPC_SERVICE_NAME

logger = structlog.get_logger()


def health_check(request: HttpRequest) -> JsonResponse:
    services: Dict[str, Dict[str, Any]] = {}
    overall_healthy = True

    # Check database
    try:
        start = time.monotonic()
        conn = connections["default"]
        conn.ensure_connection()
        with conn.cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()
        services["database"] = {
            "status": "up",
            "response_time_ms": round((time.monotonic() - start) * 1000, 2),
        }
    except Exception:
        services["database"] = {"status": "down"}
        overall_healthy = False
        logger.exception("health_check_db_failure")

    status_code = 200 if overall_healthy else 503

    logger.info(
        "health_check_completed", status="healthy" if overall_healthy else "unhealthy"
    )

    return JsonResponse(
        {
            "status": "healthy" if overall_healthy else "unhealthy",
            "service": settings.SERVICE_NAME,
            "timestamp": timezone.now().isoformat(),
            "services": services,
        },
        status=status_code,
    )


class ServiceInfoView(APIView):
    """Static description of the service and the RPCs it exposes."""

    permission_classes = [AllowAny]

    def get(self, request: HttpRequest) -> Response:
        return Response(
            {
                "service": settings.SERVICE_NAME,
                "version": settings.SERVICE_VERSION,
                "description": "Product catalog management over gRPC",
                "grpc_service": RPC_SERVICE_NAME,
                "endpoints": [
                    f"{name} - {description}"
                    for name, description in RPC_OPERATIONS.items()
                ],
                "grpc_port": settings.GRPC_PORT,
                "health_check": "/health",
            }
        )
