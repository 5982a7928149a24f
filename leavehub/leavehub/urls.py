"""
URL configuration for the leavehub project.

- /admin/        Django admin (source tables + read-only snapshot)
- /api/          leave_mgmt API
- /api/schema/   OpenAPI schema, /api/docs/ Swagger UI
"""
from django.contrib import admin
from django.urls import path, include
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path("api/docs/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),
    path("api/", include("leave_mgmt.urls")),
]
