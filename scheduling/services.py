# scheduling/services.py
from __future__ import annotations

import logging
from typing import Any, Iterable

from django.core.exceptions import ValidationError
from django.db import transaction
from django.http import Http404

from .models import WEEKDAYS, Allocation, Brand, BrandStore, Promoter, PromoterBrand, PromoterStore, Store

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------
# Agency-scoped lookups (anything outside the agency is "not found")
# ---------------------------------------------------------------------
def promoter_for_agency(agency, promoter_id) -> Promoter:
    p = Promoter.objects.filter(pk=promoter_id, user__membership__agency=agency).first()
    if p is None:
        raise Http404("Promoter not found or does not belong to your agency")
    return p


def brand_for_agency(agency, brand_id) -> Brand:
    b = Brand.objects.for_agency(agency).filter(pk=brand_id).first()
    if b is None:
        raise Http404("Brand not found or does not belong to your agency")
    return b


def store_for_agency(agency, store_id) -> Store:
    s = Store.objects.for_agency(agency).filter(pk=store_id).first()
    if s is None:
        raise Http404("Store not found or does not belong to your agency")
    return s


def _allocation_in(agency, allocation_id) -> Allocation:
    a = (
        Allocation.objects.for_agency(agency)
        .select_related("promoter", "brand", "store")
        .filter(pk=allocation_id)
        .first()
    )
    if a is None:
        raise Http404("Allocation not found")
    return a


# ---------------------------------------------------------------------
# Field validation
# ---------------------------------------------------------------------
def _as_int(value, field: str) -> int:
    if isinstance(value, bool):
        raise ValidationError({field: "Must be an integer."})
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError({field: "Must be an integer."})


def clean_days(days: Any) -> list[int]:
    """Validate a weekday list (0=Sunday … 6=Saturday); returns it deduplicated and sorted."""
    if not isinstance(days, (list, tuple)) or len(days) == 0:
        raise ValidationError({"days_of_week": "At least one day must be selected"})
    out = set()
    for d in days:
        if isinstance(d, bool) or not isinstance(d, int) or d not in WEEKDAYS:
            raise ValidationError(
                {"days_of_week": "Invalid day value. Days must be between 0 (Sunday) and 6 (Saturday)"}
            )
        out.add(d)
    return sorted(out)


def _check_frequency(freq, days: Iterable[int]) -> int:
    n = len(list(days))
    freq = _as_int(freq, "frequency_per_week")
    if freq != n:
        raise ValidationError(
            {"frequency_per_week": f"Frequency per week ({freq}) must match number of selected days ({n})"}
        )
    return freq


def _check_active(value) -> bool:
    if not isinstance(value, bool):
        raise ValidationError({"active": "Must be true or false."})
    return value


# ---------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------
def allocation_to_dict(a: Allocation) -> dict:
    return {
        "id": a.id,
        "promoter_id": a.promoter_id,
        "promoter_name": a.promoter.name,
        "brand_id": a.brand_id,
        "brand_name": a.brand.name,
        "store_id": a.store_id,
        "store_name": a.store.chain_name,
        "days_of_week": list(a.days_of_week or []),
        "frequency_per_week": a.frequency_per_week,
        "active": a.active,
        "created_at": a.created_at.isoformat() if a.created_at else None,
        "updated_at": a.updated_at.isoformat() if a.updated_at else None,
    }


# ---------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------
def list_allocations(agency) -> list[dict]:
    qs = Allocation.objects.for_agency(agency).select_related("promoter", "brand", "store")
    return [allocation_to_dict(a) for a in qs.order_by("-created_at", "-id")]


def get_allocation(agency, allocation_id) -> dict:
    return allocation_to_dict(_allocation_in(agency, allocation_id))


@transaction.atomic
def create_allocation(agency, data: dict) -> Allocation:
    """
    Create the schedule for one promoter ↔ brand ↔ store.

    Raises ValidationError for bad input, missing authorizations, a brand not
    present in the store, or an existing allocation for the same triple.
    Raises Http404 when promoter/brand/store is not part of `agency`.
    """
    missing = [k for k in ("promoter_id", "brand_id", "store_id", "days_of_week") if data.get(k) in (None, "")]
    if missing:
        raise ValidationError({k: "This field is required." for k in missing})

    days = clean_days(data["days_of_week"])
    freq = _check_frequency(data.get("frequency_per_week", len(days)), days)
    active = _check_active(data.get("active", True))

    promoter = promoter_for_agency(agency, _as_int(data["promoter_id"], "promoter_id"))
    brand = brand_for_agency(agency, _as_int(data["brand_id"], "brand_id"))
    store = store_for_agency(agency, _as_int(data["store_id"], "store_id"))

    if not PromoterBrand.objects.filter(promoter=promoter, brand=brand).exists():
        raise ValidationError("Promoter is not authorized for this brand")
    if not PromoterStore.objects.filter(promoter=promoter, store=store).exists():
        raise ValidationError("Promoter is not authorized for this store")
    if not BrandStore.objects.filter(brand=brand, store=store).exists():
        raise ValidationError("Brand is not present in this store")

    # Lock the promoter row so concurrent creates for the same triple serialize.
    Promoter.objects.select_for_update().get(pk=promoter.pk)
    if Allocation.objects.filter(promoter=promoter, brand=brand, store=store).exists():
        raise ValidationError("Allocation already exists for this promoter-brand-store combination")

    alloc = Allocation.objects.create(
        promoter=promoter,
        brand=brand,
        store=store,
        days_of_week=days,
        frequency_per_week=freq,
        active=active,
    )
    log.info(
        "allocation_created id=%s promoter=%s brand=%s store=%s days=%s",
        alloc.id, promoter.id, brand.id, store.id, days,
    )
    return alloc


@transaction.atomic
def update_allocation(agency, allocation_id, data: dict) -> Allocation:
    """
    Partial update of days_of_week / frequency_per_week / active.
    A new day list without an explicit frequency re-derives the frequency.
    """
    alloc = _allocation_in(agency, allocation_id)
    fields = []

    if "days_of_week" in data:
        alloc.days_of_week = clean_days(data["days_of_week"])
        fields.append("days_of_week")
        if "frequency_per_week" not in data:
            alloc.frequency_per_week = len(alloc.days_of_week)
            fields.append("frequency_per_week")

    if "frequency_per_week" in data:
        alloc.frequency_per_week = _check_frequency(data["frequency_per_week"], alloc.days_of_week or [])
        fields.append("frequency_per_week")

    if "active" in data:
        alloc.active = _check_active(data["active"])
        fields.append("active")

    if fields:
        alloc.save(update_fields=fields + ["updated_at"])
        log.info("allocation_updated id=%s fields=%s", alloc.id, ",".join(fields))
    return alloc


@transaction.atomic
def delete_allocation(agency, allocation_id) -> None:
    alloc = _allocation_in(agency, allocation_id)
    alloc_id = alloc.id
    alloc.delete()
    log.info("allocation_deleted id=%s", alloc_id)
