# tenants/models.py
from __future__ import annotations

from typing import Optional

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.utils import timezone
from django.utils.text import slugify

User = settings.AUTH_USER_MODEL


# ===============================
# Agency / Membership
# ===============================

class Agency(models.Model):
    """
    A tenant: the merchandising agency that owns brands, stores and
    (through its users) promoters.
    """
    name = models.CharField(max_length=120, unique=True)
    slug = models.SlugField(max_length=140, unique=True)
    created_at = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        ordering = ["name"]
        verbose_name_plural = "agencies"

    def __str__(self) -> str:
        return self.name

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = slugify(self.name)[:140]
        super().save(*args, **kwargs)


class Membership(models.Model):
    """
    User → Agency with a role. One membership per user.

    NOTE:
    - SYSTEM_ADMIN: agency may be NULL (cross-agency operator).
    - AGENCY / PROMOTER: agency MUST be set. A promoter belongs to the
      agency of its owning user through this row.
    """
    SYSTEM_ADMIN = "SYSTEM_ADMIN"
    AGENCY = "AGENCY"
    PROMOTER = "PROMOTER"
    ROLE_CHOICES = [
        (SYSTEM_ADMIN, "System admin"),
        (AGENCY, "Agency"),
        (PROMOTER, "Promoter"),
    ]

    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name="membership")
    agency = models.ForeignKey(
        Agency,
        null=True,
        blank=True,
        on_delete=models.CASCADE,
        related_name="memberships",
    )
    role = models.CharField(max_length=16, choices=ROLE_CHOICES, db_index=True)
    created_at = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        indexes = [
            models.Index(fields=["agency", "role"], name="memb_agency_role_idx"),
        ]
        ordering = ["-created_at", "-id"]

    def __str__(self) -> str:
        return f"{self.user} @ {self.agency or '-'} ({self.role})"

    # ---- Role helpers ----
    def is_system_admin(self) -> bool:
        return (self.role or "").upper() == self.SYSTEM_ADMIN

    # ---- Validation: enforce agency rules by role ----
    def clean(self):
        role = (self.role or "").upper()
        if role not in {r for r, _ in self.ROLE_CHOICES}:
            raise ValidationError({"role": f"Unknown role {self.role!r}."})
        if role in (self.AGENCY, self.PROMOTER) and not self.agency_id:
            raise ValidationError({"agency": "Agency and promoter users must belong to an agency."})

    def save(self, *args, **kwargs):
        self.full_clean()
        return super().save(*args, **kwargs)


# ===============================
# Agency-owned rows
# ===============================

class AgencyQuerySet(models.QuerySet):
    def for_agency(self, agency: Optional[Agency] | int):
        """Scope a queryset to one agency (None -> empty)."""
        aid = agency.pk if isinstance(agency, Agency) else agency
        if not aid:
            return self.none()
        return self.filter(agency_id=aid)


class BaseAgencyModel(models.Model):
    """
    Inherit this for agency-owned tables (brands, stores).
    Always includes a ForeignKey to Agency named 'agency'.
    """
    agency = models.ForeignKey(
        Agency,
        on_delete=models.CASCADE,
        related_name="%(app_label)s_%(class)s_set",
        db_index=True,
    )

    objects = AgencyQuerySet.as_manager()

    class Meta:
        abstract = True
