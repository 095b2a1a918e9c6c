"""Operational endpoints: the health probe and the caller identity."""

from __future__ import annotations

import time
from typing import Any, Callable, Dict

import structlog
from django.core.cache import cache
from django.db import connection
from django.http import HttpRequest, JsonResponse
from django.utils import timezone
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from modules.core.caller import Caller

logger = structlog.get_logger(__name__)

HEALTH_CACHE_KEY = "health:ping"


def _ping_database() -> None:
    with connection.cursor() as cursor:
        cursor.execute("SELECT 1")
        cursor.fetchone()


def _ping_cache() -> None:
    cache.set(HEALTH_CACHE_KEY, "pong", 10)
    if cache.get(HEALTH_CACHE_KEY) != "pong":
        raise ConnectionError("cache round-trip returned a stale value")


def _probe(name: str, ping: Callable[[], None]) -> Dict[str, Any]:
    started = time.monotonic()
    try:
        ping()
    except Exception as exc:
        logger.error("health_check.dependency_down", dependency=name, error=repr(exc))
        return {"status": "down"}
    return {
        "status": "up",
        "response_time_ms": round((time.monotonic() - started) * 1000, 2),
    }


def health_check(request: HttpRequest) -> JsonResponse:
    """``GET /health``: 200 when the database and cache answer, else 503."""
    services = {
        "database": _probe("database", _ping_database),
        "cache": _probe("cache", _ping_cache),
    }
    healthy = all(service["status"] == "up" for service in services.values())
    overall = "healthy" if healthy else "unhealthy"
    logger.info("health_check.completed", status=overall)
    return JsonResponse(
        {
            "status": overall,
            "timestamp": timezone.now().isoformat(),
            "services": services,
        },
        status=200 if healthy else 503,
    )


class MeView(APIView):
    """``GET /api/v1/me``: who the order endpoints will act as (401 without a valid JWT)."""

    permission_classes = [IsAuthenticated]

    def get(self, request: Request) -> Response:
        caller = Caller.from_user(request.user)
        return Response({"id": caller.id, "email": caller.email, "role": caller.role})
