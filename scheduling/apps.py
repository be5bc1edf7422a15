from __future__ import annotations

from django.apps import AppConfig


class SchedulingConfig(AppConfig):
    """Brands, stores, promoters and the allocations that schedule them."""
    default_auto_field = "django.db.models.BigAutoField"

    name = "scheduling"
    label = "scheduling"
    verbose_name = "Scheduling"
