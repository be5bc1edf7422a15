# cc/urls.py
from __future__ import annotations

from django.contrib import admin
from django.urls import include, path

from cc import views as core_views

urlpatterns = [
    path("admin/", admin.site.urls),
    path("healthz/", core_views.healthz, name="healthz"),

    path("api/allocations/", include(("scheduling.urls", "scheduling"), namespace="scheduling")),
    path("api/reports/", include(("insights.urls", "insights"), namespace="insights")),
]

# Error handlers
handler400 = "cc.views.bad_request"
handler403 = "cc.views.permission_denied"
handler404 = "cc.views.page_not_found"
handler500 = "cc.views.server_error"
