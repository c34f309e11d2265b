"""
Custom permission classes for role based access control.
"""
from rest_framework.permissions import BasePermission, SAFE_METHODS

INVENTORY_WRITE_ROLES = {"admin", "inventory_manager"}


class IsAdminRole(BasePermission):
    """Allow access only to hospital administrators."""
    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        user = getattr(request, "user", None)
        return bool(user and user.is_authenticated and getattr(user, "role", None) == "admin")


class IsInventoryManagerOrReadOnly(BasePermission):
    """Any signed-in staff member may read; admins and inventory managers may write."""
    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        user = getattr(request, "user", None)
        if not (user and user.is_authenticated):
            return False
        if request.method in SAFE_METHODS:
            return True
        return getattr(user, "role", None) in INVENTORY_WRITE_ROLES
