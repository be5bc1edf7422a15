# cc/views.py
from __future__ import annotations

from typing import Any

from django.db import connection
from django.http import HttpRequest, JsonResponse


# ==============================================================================
# Single Source of Truth: JSON error envelope
# ==============================================================================
def json_error(request: HttpRequest | None, status: int, code: str, message: str, **extra: Any) -> JsonResponse:
    """
    Shared error body for every API view and handler:
        {"ok": false, "error": <code>, "message": <text>, "request_id": ...}
    """
    body: dict[str, Any] = {"ok": False, "error": code, "message": message}
    rid = getattr(request, "request_id", None)
    if rid:
        body["request_id"] = rid
    body.update(extra)
    return JsonResponse(body, status=status)


# ==============================================================================
# Health
# ==============================================================================
def healthz(_request: HttpRequest) -> JsonResponse:
    """
    Liveness/readiness probe: confirms DB connectivity with SELECT 1.
    Returns 200 if OK, else 503.
    """
    db_ok = True
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()
    except Exception:
        db_ok = False

    return JsonResponse({"ok": db_ok}, status=200 if db_ok else 503)


# ==============================================================================
# Error handlers (wired in cc/urls.py)
# ==============================================================================
def bad_request(request, exception=None):
    return json_error(request, 400, "bad_request", "Invalid request")


def permission_denied(request, exception=None):
    return json_error(request, 403, "forbidden", str(exception or "") or "Insufficient permissions")


def page_not_found(request, exception=None):
    return json_error(request, 404, "not_found", "Not found")


def server_error(request):
    return json_error(request, 500, "server_error", "Internal server error")
