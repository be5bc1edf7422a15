from django.urls import path

from . import views

app_name = "insights"

urlpatterns = [
    path("planned-visits/", views.api_planned_visits, name="planned_visits"),
    path("brands-without-allocations/", views.api_brands_without_allocations, name="brands_without_allocations"),
]
