import time
from typing import Any, Dict

import structlog
from django.db import connections
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.utils import timezone

from modules.core.exception_handler import GENERIC_ERROR_MESSAGE, error_envelope

logger = structlog.get_logger()

HEALTH_MESSAGE = "Application is running"


def health_check(request: HttpRequest) -> HttpResponse:
    return HttpResponse(HEALTH_MESSAGE, content_type="text/plain; charset=utf-8")


def readiness_check(request: HttpRequest) -> JsonResponse:
    services: Dict[str, Dict[str, Any]] = {}
    ready = True

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
        ready = False
        logger.error("readiness_check_db_failure", exc_info=True)

    logger.info("readiness_check_completed", status="ready" if ready else "unavailable")

    return JsonResponse(
        {
            "status": "ready" if ready else "unavailable",
            "timestamp": timezone.now().isoformat(),
            "services": services,
        },
        status=200 if ready else 503,
    )


def not_found(request: HttpRequest, exception: Exception) -> JsonResponse:
    """``handler404`` for routes that never reach a DRF view."""
    return JsonResponse(
        error_envelope(404, "Not found.", request.path),
        status=404,
    )


def server_error(request: HttpRequest) -> JsonResponse:
    """``handler500`` for failures outside DRF views."""
    return JsonResponse(
        error_envelope(500, GENERIC_ERROR_MESSAGE, request.path),
        status=500,
    )
