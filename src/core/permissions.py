"""Role and ownership permission classes shared by every API view."""

from rest_framework import permissions


def is_admin(user) -> bool:
    """Return True for an authenticated user holding the admin role."""
    return bool(user and getattr(user, "is_authenticated", False) and getattr(user, "role", None) == "admin")


def resolve_owner_id(obj, owner_field: str):
    """Follow a dotted ``owner_field`` path on ``obj`` and return the owner's id."""
    value = obj
    for part in owner_field.split("."):
        value = getattr(value, part, None)
        if value is None:
            return None
    return getattr(value, "pk", value)


class IsAuthenticated(permissions.BasePermission):
    """Allow only requests carrying a valid bearer token."""

    message = "Authentication credentials were not provided or are invalid."

    def has_permission(self, request, view) -> bool:
        user = getattr(request, "user", None)
        return bool(user and getattr(user, "is_authenticated", False))


class IsAdmin(permissions.BasePermission):
    """Allow only authenticated users with the admin role."""

    message = "You do not have permission to perform this action on this resource."

    def has_permission(self, request, view) -> bool:
        return is_admin(getattr(request, "user", None))


class IsOwnerOrAdmin(permissions.BasePermission):
    """Reads follow the view's own visibility rules; writes need owner or admin.

    Views using this permission declare ``owner_field``: the attribute path
    (dotted for related objects) leading from the object to its owning user.
    Anonymous callers may read but never write.
    """

    message = "You do not have permission to perform this action on this resource."

    def has_permission(self, request, view) -> bool:
        if request.method in permissions.SAFE_METHODS:
            return True
        user = getattr(request, "user", None)
        return bool(user and getattr(user, "is_authenticated", False))

    def has_object_permission(self, request, view, obj) -> bool:
        if request.method in permissions.SAFE_METHODS:
            return True
        user = request.user
        if is_admin(user):
            return True
        owner_field = getattr(view, "owner_field", None)
        if not owner_field:
            return False
        owner_id = resolve_owner_id(obj, owner_field)
        return owner_id is not None and str(owner_id) == str(user.pk)


__all__ = ["is_admin", "resolve_owner_id", "IsAuthenticated", "IsAdmin", "IsOwnerOrAdmin"]
