# insights/views.py
from __future__ import annotations

from django.http import HttpRequest, JsonResponse
from django.views.decorators.http import require_GET

from cc.views import json_error
from tenants.decorators import agency_required
from tenants.models import Membership

from .periods import ReportPeriod
from .services import brands_without_allocations, calculate_planned_visits


REPORT_ROLES = (Membership.AGENCY, Membership.SYSTEM_ADMIN)


@require_GET
@agency_required(roles=REPORT_ROLES)
def api_planned_visits(request: HttpRequest) -> JsonResponse:
    """
    GET ?startDate=YYYY-MM-DD&endDate=YYYY-MM-DD (ISO timestamps also accepted).
    Defaults to the first day of the current month through today.
    """
    try:
        period = ReportPeriod.from_query(request.GET)
    except ValueError:
        return json_error(request, 400, "invalid_date", "startDate/endDate must be ISO dates (YYYY-MM-DD)")

    result = calculate_planned_visits(request.agency, period)
    if not result.ok:
        return json_error(request, 503, "report_unavailable", "Planned visits report could not be computed")
    return JsonResponse(result.report.as_dict())


@require_GET
@agency_required(roles=REPORT_ROLES)
def api_brands_without_allocations(request: HttpRequest) -> JsonResponse:
    return JsonResponse(brands_without_allocations(request.agency), safe=False)
