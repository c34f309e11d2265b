"""
URL mappings for the core API (authentication, health, audit).

Trailing slashes are deliberately omitted; the frontend calls the API
without them.
"""
from django.urls import path

from .auth_views import login_view, jwt_refresh_view, jwt_logout_view, me_view, change_password_view
from .views import health
from .views.audit import audit_events


urlpatterns = [
    path('healthz', health.healthz),
    # Authentication
    path('api/v1/auth/login', login_view, name='login_view'),
    path('api/v1/auth/refresh', jwt_refresh_view, name='jwt_refresh_view'),
    path('api/v1/auth/logout', jwt_logout_view, name='jwt_logout_view'),
    path('api/v1/auth/me', me_view, name='me_view'),
    path('api/v1/auth/change-password', change_password_view, name='change_password_view'),
    # Audit trail
    path('api/v1/audit', audit_events, name='audit_events'),
]
