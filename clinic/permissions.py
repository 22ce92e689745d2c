"""
Permission classes for the clinic back office.
"""
from rest_framework.permissions import BasePermission, SAFE_METHODS

CLINIC_ROLES = {"admin", "staff"}


class IsAdminRole(BasePermission):
    """Allow access only to clinic accounts (admin or staff role)."""
    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        user = getattr(request, "user", None)
        return bool(user and user.is_authenticated and getattr(user, "role", None) in CLINIC_ROLES)


class IsAdminOrReadOnly(BasePermission):
    """Anyone may read; only clinic accounts may write."""
    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        if request.method in SAFE_METHODS:
            return True
        return IsAdminRole().has_permission(request, view)


class IsAdminOrCreateOnly(BasePermission):
    """Anyone may submit (POST); everything else needs a clinic account."""
    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        if request.method == "POST":
            return True
        return IsAdminRole().has_permission(request, view)
