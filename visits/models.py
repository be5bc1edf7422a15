# visits/models.py
from __future__ import annotations

from django.db import models
from django.utils import timezone

from scheduling.models import Brand, Promoter, Store


class Visit(models.Model):
    """
    A recorded field visit. Append-only from the planning engine's point of view:
    executed counts and coverage are derived from these rows.
    """
    STATUS_COMPLETED = "completed"
    STATUS_EDITED = "edited"
    STATUS_CHOICES = [
        (STATUS_COMPLETED, "Completed"),
        (STATUS_EDITED, "Edited"),
    ]

    promoter = models.ForeignKey(Promoter, on_delete=models.CASCADE, related_name="visits")
    brand = models.ForeignKey(Brand, on_delete=models.CASCADE, related_name="visits")
    store = models.ForeignKey(Store, on_delete=models.CASCADE, related_name="visits")
    timestamp = models.DateTimeField(default=timezone.now, db_index=True)
    gps_latitude = models.FloatField(null=True, blank=True)
    gps_longitude = models.FloatField(null=True, blank=True)
    status = models.CharField(max_length=12, choices=STATUS_CHOICES, default=STATUS_COMPLETED)
    notes = models.TextField(blank=True, default="")

    class Meta:
        ordering = ["-timestamp", "-id"]
        indexes = [
            models.Index(fields=["promoter", "timestamp"], name="visit_promoter_ts_idx"),
            models.Index(fields=["brand", "store"], name="visit_brand_store_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.promoter} / {self.brand} @ {self.store} ({self.timestamp:%Y-%m-%d %H:%M})"
