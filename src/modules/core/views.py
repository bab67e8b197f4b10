import time
from typing import Any, Dict

import structlog
from django.db import connections
from django.http import Http404, HttpRequest, JsonResponse

from modules.core.exceptions import build_error, utc_timestamp

logger = structlog.get_logger()


class _UnhandledServerError(Exception):
    """Stand-in for the error Django already logged before calling ``handler500``."""


def health_check(request: HttpRequest) -> JsonResponse:
    services: Dict[str, Dict[str, Any]] = {}
    healthy = True

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
        healthy = False
        logger.exception("health_check_db_failure")

    logger.info("health_check_completed", status="healthy" if healthy else "unhealthy")

    return JsonResponse(
        {
            "status": "healthy" if healthy else "unhealthy",
            "timestamp": utc_timestamp(),
            "services": services,
        },
        status=200 if healthy else 503,
    )


def not_found(request: HttpRequest, exception: Exception) -> JsonResponse:
    """``handler404``: unmatched routes answer with the standard error body."""
    error = build_error(Http404(), request)
    return JsonResponse(error.body, status=error.status)


def server_error(request: HttpRequest) -> JsonResponse:
    """``handler500``: errors raised outside DRF views."""
    error = build_error(_UnhandledServerError(), request)
    return JsonResponse(error.body, status=error.status)
