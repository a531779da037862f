from rest_framework.permissions import BasePermission

from .principal import principal_for


class HasRoleScope(BasePermission):
    message = 'User has no role scope assigned'

    def has_permission(self, request, view):
        return (
            request.user is not None and
            request.user.is_authenticated and
            principal_for(request.user).scope is not None
        )


class IsAdminRole(BasePermission):
    message = 'Admin privileges required'

    def has_permission(self, request, view):
        return (
            request.user is not None and
            request.user.is_authenticated and
            principal_for(request.user).is_admin
        )


class HasRole(BasePermission):
    """Checks the caller's role against the view's ``allowed_roles``."""

    message = 'Role not allowed for this resource'

    def has_permission(self, request, view):
        if request.user is None or not request.user.is_authenticated:
            return False

        principal = principal_for(request.user)
        if principal.scope is None:
            return False

        allowed_roles = getattr(view, 'allowed_roles', None)
        if not allowed_roles:
            return True
        return principal.role in allowed_roles
