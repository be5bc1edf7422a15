from django.contrib import admin
from .models import Visit


@admin.register(Visit)
class VisitAdmin(admin.ModelAdmin):
    list_display = ("id", "promoter", "brand", "store", "timestamp", "status")
    list_filter = ("status",)
    date_hierarchy = "timestamp"
    search_fields = ("promoter__name", "brand__name", "store__chain_name")
    list_select_related = ("promoter", "brand", "store")
