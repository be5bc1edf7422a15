# cc/middleware.py
from __future__ import annotations

import logging
import time
import uuid
from typing import Optional

from django.conf import settings
from django.http import HttpRequest, HttpResponse
from django.utils.deprecation import MiddlewareMixin

access_logger = logging.getLogger("access")

REQUEST_ID_META = "HTTP_X_REQUEST_ID"
REQUEST_ID_HEADER = "X-Request-ID"


def _user_id(request: HttpRequest) -> Optional[int]:
    user = getattr(request, "user", None)
    if user is None or not user.is_authenticated:
        return None
    return user.pk


# ------------------------------------------------------------------
# Request ID
# ------------------------------------------------------------------
class RequestIDMiddleware(MiddlewareMixin):
    """
    request.request_id comes from an upstream X-Request-ID or a fresh UUID4;
    it is echoed on the response and included in JSON error bodies.
    """

    def process_request(self, request: HttpRequest):
        request.request_id = (request.META.get(REQUEST_ID_META) or "").strip()[:64] or uuid.uuid4().hex

    def process_response(self, request: HttpRequest, response: HttpResponse):
        rid = getattr(request, "request_id", None)
        if rid:
            response[REQUEST_ID_HEADER] = rid
        return response


# ------------------------------------------------------------------
# Access log
# ------------------------------------------------------------------
class AccessLogMiddleware(MiddlewareMixin):
    """
    One `access` line per API request: method, path, status, latency,
    user and the agency the request was scoped to (set by agency_required).
    """
    prefixes = tuple(getattr(settings, "ACCESS_LOG_PREFIXES", ("/api/", "/healthz/")))

    def process_request(self, request: HttpRequest):
        request._started = time.monotonic()

    def process_response(self, request: HttpRequest, response: HttpResponse):
        if not request.path.startswith(self.prefixes):
            return response
        started = getattr(request, "_started", None)
        latency_ms = int((time.monotonic() - started) * 1000) if started is not None else -1
        agency = getattr(request, "agency", None)
        access_logger.info(
            "http_request",
            extra={
                "request_id": getattr(request, "request_id", None),
                "method": request.method,
                "path": request.get_full_path(),
                "status": response.status_code,
                "latency_ms": latency_ms,
                "user_id": _user_id(request),
                "agency_id": getattr(agency, "pk", None),
            },
        )
        return response
