from rest_framework import permissions


class IsAdministrator(permissions.BasePermission):
    """Only users with the Administrator role."""

    message = 'Only administrators can manage users.'

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and user.is_administrator)
