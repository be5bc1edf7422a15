# tenants/decorators.py
from __future__ import annotations

from functools import wraps
from typing import Iterable, Optional

from cc.views import json_error

from .models import Agency, Membership


def resolve_agency(request) -> Optional[Agency]:
    """
    Agency scope for the request:
      - SYSTEM_ADMIN: the ?agencyId= query parameter when given, else its own agency (if any)
      - everyone else: the agency of their membership (query parameter ignored)
    """
    membership = getattr(request.user, "membership", None)
    if membership is None:
        return None
    if membership.is_system_admin():
        raw = (request.GET.get("agencyId") or "").strip()
        if raw:
            try:
                return Agency.objects.filter(pk=int(raw)).first()
            except ValueError:
                return None
    return membership.agency


def agency_required(roles: Iterable[str] | None = None):
    """
    JSON-API guard. Sets request.agency and request.membership, or answers
    401 (anonymous), 403 (wrong role / no membership) or 400 (no agency scope).
    """
    allowed = {r.upper() for r in roles} if roles else None

    def decorator(view):
        @wraps(view)
        def _wrap(request, *a, **kw):
            if not request.user.is_authenticated:
                return json_error(request, 401, "unauthorized", "Not authenticated")
            try:
                membership = request.user.membership
            except Membership.DoesNotExist:
                return json_error(request, 403, "forbidden", "No agency membership")
            if allowed is not None and (membership.role or "").upper() not in allowed:
                return json_error(request, 403, "forbidden", "Insufficient permissions")

            agency = resolve_agency(request)
            if agency is None:
                return json_error(request, 400, "invalid_agency", "No agency selected")

            request.membership = membership
            request.agency = agency
            return view(request, *a, **kw)
        return _wrap
    return decorator
