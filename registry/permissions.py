"""
Role based permission classes.

``ADMIN`` users manage the administrative hierarchy; ``FACILITY`` users
work inside the single facility they are bound to.
"""
from rest_framework.permissions import BasePermission

ADMIN_ROLE = "ADMIN"
FACILITY_ROLE = "FACILITY"


class IsAdminRole(BasePermission):
    """Allow access only to users with the administrator role."""
    message = "Administrator access required"

    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        user = getattr(request, "user", None)
        return bool(user and user.is_authenticated and getattr(user, "role", None) == ADMIN_ROLE)


class IsFacilityUser(BasePermission):
    """Facility role and bound to a facility."""
    message = "Facility account bound to a facility required"

    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        user = getattr(request, "user", None)
        return bool(
            user and user.is_authenticated
            and getattr(user, "role", None) == FACILITY_ROLE
            and getattr(user, "facility_id", None)
        )


class IsOwnFacility(BasePermission):
    """Object must belong to the user's facility (expects `obj.facility_id`)."""
    message = "This record belongs to another facility"

    def has_object_permission(self, request, view, obj) -> bool:
        user = getattr(request, "user", None)
        if not (user and user.is_authenticated):
            return False
        return bool(getattr(user, "facility_id", None)) and getattr(obj, "facility_id", None) == user.facility_id
