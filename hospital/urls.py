"""
URL configuration for the hospital backend project.

The `urlpatterns` list routes URLs to views.  This module includes
the Django admin, the core API (auth, health, audit) and the inventory
API.  OpenAPI documentation is exposed at ``/swagger/`` and ``/redoc/``.
"""
from django.contrib import admin
from django.urls import path, include

from rest_framework import permissions
from drf_yasg.views import get_schema_view
from drf_yasg import openapi

# API metadata for Swagger/OpenAPI documentation
api_info = openapi.Info(
    title="Hospital HIS API",
    default_version='v1',
    description="Inventory management and account services for the hospital information system.",
)

schema_view = get_schema_view(
    api_info,
    public=True,
    permission_classes=(permissions.AllowAny,),
)

urlpatterns = [
    # Django admin site (useful for development)
    path('admin/', admin.site.urls),
    # Prometheus exposes /metrics
    path('', include('django_prometheus.urls')),
    path('', include('core.routers')),
    path('api/v1/inventory/', include('inventory.routers')),
    # Swagger and ReDoc
    path('swagger/', schema_view.with_ui('swagger', cache_timeout=0), name='schema-swagger-ui'),
    path('redoc/', schema_view.with_ui('redoc', cache_timeout=0), name='schema-redoc'),
]
