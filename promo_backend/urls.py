"""
urls.py — Root URL configuration for the Promo Offers backend

Purpose
===============================================================================
- /admin/...   → authenticated admin API (login, offers CRUD, upload)
- /api/...     → public read API (visible offers only)
- /uploads/... → uploaded offer assets, at exactly the path /admin/upload returns
- /health      → liveness probe
- Interactive API docs:
    * /api/docs/   → Swagger UI
    * /api/schema/ → OpenAPI JSON (machine-readable)
"""

from django.conf import settings
from django.urls import path, re_path, include
from rest_framework import permissions

from offers import views

# ----------------------------------------------------------------------------- #
# API Docs (Swagger/OpenAPI via drf-yasg)                                       #
# ----------------------------------------------------------------------------- #
from drf_yasg.views import get_schema_view
from drf_yasg import openapi

schema_view = get_schema_view(
    openapi.Info(
        title="Promo Offers API",
        default_version="v1",
        description=(
            "Admin endpoints use a Bearer token from POST /admin/login. "
            "Click 'Authorize' and paste: Bearer <TOKEN>. "
            "The public listing at /api/offers needs no authentication."
        ),
    ),
    public=True,
    permission_classes=[permissions.AllowAny],
    authentication_classes=[],
)

_asset_prefix = settings.OFFERS_ASSET_URL.strip("/")

# ----------------------------------------------------------------------------- #
# URL Patterns                                                                  #
# ----------------------------------------------------------------------------- #
urlpatterns = [
    path("health", views.health, name="health"),

    path("admin/", include("offers.admin_urls")),
    path("api/", include("offers.urls", namespace="offers")),

    re_path(rf"^{_asset_prefix}/(?P<path>.+)$", views.serve_asset, name="asset"),

    # API docs
    path("api/docs/",   schema_view.with_ui("swagger", cache_timeout=0), name="api-docs-swagger"),
    path("api/schema/", schema_view.without_ui(cache_timeout=0),         name="openapi-schema"),
]
