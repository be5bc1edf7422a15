from __future__ import annotations

from django.apps import AppConfig


class TenantsConfig(AppConfig):
    """
    AppConfig for the Tenants app.

    - `name` matches the top-level Python package ("tenants").
    - `label` stays "tenants" so FK references like "tenants.Agency" are stable.
    """
    default_auto_field = "django.db.models.BigAutoField"

    name = "tenants"
    label = "tenants"
    verbose_name = "Tenants"
