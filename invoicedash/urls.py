from django.contrib import admin
from django.urls import path, include
from invoices import health

handler404 = "invoices.views.errors.not_found_view"
handler500 = "invoices.views.errors.server_error_view"

urlpatterns = [
    path("admin/", admin.site.urls),
    path("health/live", health.liveness_check, name="liveness_check"),
    path("health/ready", health.readiness_check, name="readiness_check"),
    path("", include("invoices.urls", namespace="invoices")),
]
