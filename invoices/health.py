"""Health probes for the load balancer and container orchestrator."""

import os
import time
import logging

from django.core.cache import cache
from django.db import DatabaseError, connections
from django.http import JsonResponse
from django.utils import timezone
from django.views.decorators.http import require_GET

logger = logging.getLogger(__name__)

APP_VERSION = os.environ.get("APP_VERSION", "1.0.0")
APP_START_TIME = time.time()


def _no_store(response):
    response["Cache-Control"] = "no-cache, no-store, must-revalidate, max-age=0"
    return response


@require_GET
def liveness_check(request):
    """Process is up. Does not touch the database."""
    return _no_store(JsonResponse({
        "status": "alive",
        "timestamp": timezone.now().isoformat(),
        "uptime_seconds": int(time.time() - APP_START_TIME),
        "version": APP_VERSION,
    }))


@require_GET
def readiness_check(request):
    """Database reachable and cache answering."""
    checks = {"database": "up", "cache": "up"}
    try:
        with connections['default'].cursor() as cursor:
            cursor.execute("SELECT 1")
    except DatabaseError as e:
        logger.error(f"Readiness: database check failed: {e}")
        checks["database"] = "down"

    try:
        cache.set("health:ping", "pong", 5)
        if cache.get("health:ping") != "pong":
            checks["cache"] = "down"
    except Exception as e:
        logger.error(f"Readiness: cache check failed: {e}")
        checks["cache"] = "down"

    ready = all(state == "up" for state in checks.values())
    return _no_store(JsonResponse(
        {"status": "ready" if ready else "not_ready", **checks},
        status=200 if ready else 503,
    ))
