# scheduling/urls.py
from django.urls import path

from . import views

app_name = "scheduling"

urlpatterns = [
    path("", views.allocations, name="allocations"),
    path(
        "suggestions/<int:promoter_id>/<int:brand_id>/<int:store_id>/",
        views.allocation_suggestions,
        name="suggestions",
    ),
    path("<int:pk>/", views.allocation_detail, name="allocation_detail"),
]
