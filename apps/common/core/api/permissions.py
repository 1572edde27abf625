"""Common Core - DRF Permissions."""
from rest_framework import permissions


class IsMarketplaceMember(permissions.BasePermission):
    """Authenticated client or master."""
    message = 'Access denied'

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and getattr(user, 'is_member', False))
