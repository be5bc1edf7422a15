# scheduling/admin.py
from django.contrib import admin
from .models import Allocation, Brand, BrandStore, Promoter, PromoterBrand, PromoterStore, Store


class BrandStoreInline(admin.TabularInline):
    model = BrandStore
    extra = 0


@admin.register(Brand)
class BrandAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "agency", "visit_frequency", "price_per_visit")
    list_filter = ("agency",)
    search_fields = ("name",)
    inlines = [BrandStoreInline]


@admin.register(Store)
class StoreAdmin(admin.ModelAdmin):
    list_display = ("id", "chain_name", "agency", "type", "address")
    list_filter = ("agency", "type")
    search_fields = ("chain_name", "address")


class PromoterBrandInline(admin.TabularInline):
    model = PromoterBrand
    extra = 0


class PromoterStoreInline(admin.TabularInline):
    model = PromoterStore
    extra = 0


@admin.register(Promoter)
class PromoterAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "user", "city", "active")
    list_filter = ("active",)
    search_fields = ("name", "user__username", "city")
    inlines = [PromoterBrandInline, PromoterStoreInline]


@admin.register(Allocation)
class AllocationAdmin(admin.ModelAdmin):
    list_display = ("id", "promoter", "brand", "store", "days_of_week", "frequency_per_week", "active", "created_at")
    list_filter = ("active",)
    search_fields = ("promoter__name", "brand__name", "store__chain_name")
    list_select_related = ("promoter", "brand", "store")
