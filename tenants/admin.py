# tenants/admin.py
from django.contrib import admin
from .models import Agency, Membership

@admin.register(Agency)
class AgencyAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "slug", "created_at")
    search_fields = ("name", "slug")

@admin.register(Membership)
class MembershipAdmin(admin.ModelAdmin):
    list_display = ("id", "user", "agency", "role", "created_at")
    list_filter = ("role",)
    search_fields = ("user__username", "agency__name")
