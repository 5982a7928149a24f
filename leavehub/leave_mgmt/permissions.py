from django.conf import settings
from rest_framework import permissions

from leave_mgmt.exceptions import InsufficientRole


def allowed_stats_roles():
    return list(getattr(settings, "ORG_STATS_ALLOWED_ROLES", ["admin", "hr"]))


class HasStatisticsRole(permissions.BasePermission):
    """
    Caller's role must be in ORG_STATS_ALLOWED_ROLES.
    Anonymous callers fall through to DRF's 401; authenticated ones get a 403 naming both roles.
    """

    def has_permission(self, request, view):
        user = request.user
        if not user or not getattr(user, "is_authenticated", False):
            return False
        roles = allowed_stats_roles()
        if getattr(user, "role", None) in roles:
            return True
        raise InsufficientRole(required_roles=roles, current_role=getattr(user, "role", None))
