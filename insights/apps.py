from django.apps import AppConfig


class InsightsConfig(AppConfig):
    """Planned-vs-executed visit reporting."""
    default_auto_field = "django.db.models.BigAutoField"
    name = "insights"
    verbose_name = "Insights"
