from django.contrib import admin
from django.urls import path, include
from rest_framework import permissions

from drf_spectacular.views import (
    SpectacularSwaggerView,
    SpectacularRedocView,
)
from config.schema_view import CustomSpectacularAPIView

# ================================
# URL PATTERNS
# ================================
urlpatterns = [

    # -------------------------
    # Django Admin
    # -------------------------
    path("admin/", admin.site.urls),

    # -------------------------
    # Platform services
    # /api/v1/partner-settings/...
    # -------------------------
    path("api/v1/", include("app.platform.flac.urls")),

    # -------------------------
    # Workspace modules
    # /api/v1/buyers/, /api/v1/sellers/, /api/v1/partner-portal/, /api/v1/dashboard/
    # /api/v1/industries/
    # -------------------------
    path("api/v1/", include("app.workspace.prospects.urls")),
    path("api/v1/", include("app.workspace.industries.urls")),

    # -------------------------
    # OpenAPI / Swagger / Redoc
    # -------------------------
    path("api/schema/", CustomSpectacularAPIView.as_view(), name="schema"),
    path(
        "api/schema/swagger-ui/",
        SpectacularSwaggerView.as_view(url_name="schema", permission_classes=[permissions.AllowAny]),
        name="swagger-ui",
    ),
    path(
        "api/schema/redoc/",
        SpectacularRedocView.as_view(url_name="schema", permission_classes=[permissions.AllowAny]),
        name="redoc",
    ),
]
