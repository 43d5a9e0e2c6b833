"""
DRF Permission Classes for RBAC
"""

from rest_framework import permissions
from .utils import is_partner, is_admin


class IsPartner(permissions.BasePermission):
    """Only partner-class users (partner portal endpoints)."""

    message = "Partner access only."

    def has_permission(self, request, view):
        return is_partner(request.user)


class IsAdminRole(permissions.BasePermission):
    """Only administrators (partner sharing configuration)."""

    message = "Administrator access only."

    def has_permission(self, request, view):
        return is_admin(request.user)
