# scheduling/views.py
from __future__ import annotations

import json

from django.conf import settings
from django.core.exceptions import ValidationError
from django.http import Http404, HttpRequest, JsonResponse
from django.views.decorators.http import require_GET, require_http_methods

from cc.views import json_error
from tenants.decorators import agency_required

from . import services
from .suggestions import suggest_days


# -------------------------------
# Helpers
# -------------------------------
def _read_json(request: HttpRequest) -> dict:
    try:
        data = json.loads(request.body or b"{}")
    except (ValueError, UnicodeDecodeError):
        raise ValidationError("Request body must be valid JSON")
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def _validation_message(exc: ValidationError) -> str:
    if hasattr(exc, "error_dict"):
        return "; ".join(f"{k}: {' '.join(v)}" for k, v in exc.message_dict.items())
    return "; ".join(exc.messages)


def _run(request, fn, *args, status: int = 200):
    """Call a service function and map its Django exceptions onto JSON errors."""
    try:
        payload = fn(*args)
    except ValidationError as e:
        return json_error(request, 400, "validation_error", _validation_message(e))
    except Http404 as e:
        return json_error(request, 404, "not_found", str(e) or "Not found")
    if payload is None:
        return JsonResponse({"ok": True}, status=status)
    if isinstance(payload, list):
        return JsonResponse(payload, status=status, safe=False)
    return JsonResponse(payload, status=status)


# -------------------------------
# Allocation CRUD
# -------------------------------
@require_http_methods(["GET", "POST"])
@agency_required()
def allocations(request: HttpRequest):
    if request.method == "GET":
        return _run(request, services.list_allocations, request.agency)

    def _create():
        alloc = services.create_allocation(request.agency, _read_json(request))
        return services.get_allocation(request.agency, alloc.pk)

    return _run(request, _create, status=201)


@require_http_methods(["GET", "PUT", "PATCH", "DELETE"])
@agency_required()
def allocation_detail(request: HttpRequest, pk: int):
    if request.method == "GET":
        return _run(request, services.get_allocation, request.agency, pk)
    if request.method == "DELETE":
        return _run(request, services.delete_allocation, request.agency, pk)

    def _update():
        alloc = services.update_allocation(request.agency, pk, _read_json(request))
        return services.get_allocation(request.agency, alloc.pk)

    return _run(request, _update)


# -------------------------------
# Day suggestions
# -------------------------------
def _frequency_param(request: HttpRequest) -> int:
    conf = getattr(settings, "FIELDPLAN", {}) or {}
    default = int(conf.get("SUGGESTION_DEFAULT_FREQUENCY", 1))
    ceiling = int(conf.get("SUGGESTION_MAX_FREQUENCY", 7))
    try:
        value = int(request.GET.get("frequency") or 0)
    except ValueError:
        value = 0
    if value <= 0:
        return default
    return min(value, ceiling)


@require_GET
@agency_required()
def allocation_suggestions(request: HttpRequest, promoter_id: int, brand_id: int, store_id: int):
    def _suggest():
        promoter = services.promoter_for_agency(request.agency, promoter_id)
        services.brand_for_agency(request.agency, brand_id)
        services.store_for_agency(request.agency, store_id)
        return suggest_days(promoter, brand_id, store_id, _frequency_param(request)).as_dict()

    return _run(request, _suggest)
