# scheduling/models.py
from __future__ import annotations

from django.conf import settings
from django.db import models
from django.utils import timezone

from tenants.models import BaseAgencyModel

User = settings.AUTH_USER_MODEL

# Sunday-based weekday numbering used by every schedule field
WEEKDAYS = (0, 1, 2, 3, 4, 5, 6)
WEEKDAY_NAMES = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


# ===============================
# Brands / Stores
# ===============================

class Brand(BaseAgencyModel):
    name = models.CharField(max_length=160)
    # default visits per week for every store the brand is present in
    visit_frequency = models.PositiveIntegerField(default=1)
    price_per_visit = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name", "id"]
        indexes = [models.Index(fields=["agency", "name"], name="brand_agency_name_idx")]

    def __str__(self) -> str:
        return self.name


class Store(BaseAgencyModel):
    TYPE_CHOICES = [
        ("retail", "Retail"),
        ("wholesale", "Wholesale"),
    ]

    chain_name = models.CharField(max_length=160)
    type = models.CharField(max_length=12, choices=TYPE_CHOICES, default="retail")
    address = models.CharField(max_length=255, blank=True, default="")
    gps_latitude = models.FloatField(null=True, blank=True)
    gps_longitude = models.FloatField(null=True, blank=True)
    radius_meters = models.PositiveIntegerField(default=100)
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["chain_name", "id"]
        indexes = [models.Index(fields=["agency", "chain_name"], name="store_agency_chain_idx")]

    def __str__(self) -> str:
        return self.chain_name


class BrandStore(models.Model):
    """Presence of a brand in a store, with an optional per-pair weekly frequency."""
    brand = models.ForeignKey(Brand, on_delete=models.CASCADE, related_name="store_links")
    store = models.ForeignKey(Store, on_delete=models.CASCADE, related_name="brand_links")
    visit_frequency = models.PositiveIntegerField(null=True, blank=True)

    class Meta:
        unique_together = [("brand", "store")]

    def __str__(self) -> str:
        return f"{self.brand} @ {self.store}"


# ===============================
# Promoters & authorizations
# ===============================

class Promoter(models.Model):
    """
    Field promoter. Belongs to an agency through the membership of `user`.
    """
    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name="promoter")
    name = models.CharField(max_length=160)
    phone = models.CharField(max_length=32, blank=True, default="")
    city = models.CharField(max_length=120, blank=True, default="")
    active = models.BooleanField(default=True, db_index=True)
    # Sunday-based weekdays the promoter can work, e.g. [1, 2, 3, 4, 5]; [] means unset
    availability_days = models.JSONField(default=list, blank=True)
    # {"<brand_id>": visits_per_week} overrides of the brand default
    visit_frequency_per_brand = models.JSONField(default=dict, blank=True)
    payment_per_visit = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    brands = models.ManyToManyField(Brand, through="PromoterBrand", related_name="promoters")
    stores = models.ManyToManyField(Store, through="PromoterStore", related_name="promoters")

    class Meta:
        ordering = ["name", "id"]

    def __str__(self) -> str:
        return self.name

    def frequency_override_for(self, brand_id) -> int | None:
        """Per-brand weekly frequency override, or None when unset / not positive."""
        raw = (self.visit_frequency_per_brand or {}).get(str(brand_id))
        try:
            value = int(raw)
        except (TypeError, ValueError):
            return None
        return value if value > 0 else None


class PromoterBrand(models.Model):
    promoter = models.ForeignKey(Promoter, on_delete=models.CASCADE, related_name="brand_auths")
    brand = models.ForeignKey(Brand, on_delete=models.CASCADE, related_name="promoter_auths")

    class Meta:
        unique_together = [("promoter", "brand")]


class PromoterStore(models.Model):
    promoter = models.ForeignKey(Promoter, on_delete=models.CASCADE, related_name="store_auths")
    store = models.ForeignKey(Store, on_delete=models.CASCADE, related_name="promoter_auths")

    class Meta:
        unique_together = [("promoter", "store")]


# ===============================
# Allocation (the schedule unit)
# ===============================

class AllocationQuerySet(models.QuerySet):
    def active(self):
        return self.filter(active=True)

    def for_agency(self, agency):
        """Allocations whose promoter, brand and store all belong to `agency`."""
        return self.filter(
            promoter__user__membership__agency=agency,
            brand__agency=agency,
            store__agency=agency,
        )


class Allocation(models.Model):
    """
    Scheduled promoter ↔ brand ↔ store assignment.

    At most one row per (promoter, brand, store): enforced by the write path
    in scheduling.services, not by a database constraint.
    frequency_per_week == len(days_of_week) is checked at write time only.
    """
    promoter = models.ForeignKey(Promoter, on_delete=models.CASCADE, related_name="allocations")
    brand = models.ForeignKey(Brand, on_delete=models.CASCADE, related_name="allocations")
    store = models.ForeignKey(Store, on_delete=models.CASCADE, related_name="allocations")
    days_of_week = models.JSONField(default=list)
    frequency_per_week = models.PositiveSmallIntegerField(default=1)
    active = models.BooleanField(default=True, db_index=True)
    created_at = models.DateTimeField(default=timezone.now, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = AllocationQuerySet.as_manager()

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["promoter", "brand", "store"], name="alloc_triple_idx"),
            models.Index(fields=["promoter", "active"], name="alloc_promoter_active_idx"),
        ]

    def __str__(self) -> str:
        days = ",".join(WEEKDAY_NAMES[d] for d in self.days_of_week if d in WEEKDAYS)
        return f"{self.promoter} → {self.brand} @ {self.store} [{days}]"

    @property
    def triple(self) -> tuple[int, int, int]:
        return (self.promoter_id, self.brand_id, self.store_id)
