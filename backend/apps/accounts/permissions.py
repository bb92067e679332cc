from __future__ import annotations

from rest_framework import permissions

from .models import UserRole, role_for


class HasPanelAccess(permissions.BasePermission):
    """Admins and editors may use the admin panel API."""

    message = "Nu aveți acces la panoul de administrare."

    def has_permission(self, request, view):
        return role_for(request.user) in (UserRole.ROLE_ADMIN, UserRole.ROLE_EDITOR)

