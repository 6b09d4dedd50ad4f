"""Role-based permissions.

Roles:
- admin:     everything, including catalog maintenance
- clinician: every subject, no catalog changes
- member:    only the subjects they own (their own profile and dependents)

Object-level ownership is decided per app (see ``subjects.permissions``);
this module only answers "may this role read/write this kind of endpoint".
"""

from rest_framework.permissions import BasePermission, SAFE_METHODS

STAFF_ROLES = frozenset({"admin", "clinician"})


def role_name_of(user):
    """Role name of ``user`` or ``None`` (anonymous or no role assigned)."""
    role = getattr(user, "role", None)
    return getattr(role, "name", None)


def is_staff_role(user) -> bool:
    return role_name_of(user) in STAFF_ROLES


class RBACPermission(BasePermission):
    """Allow a request when the caller's role is listed for the method type.

    Subclasses set ``read_roles`` (GET/HEAD/OPTIONS) and ``write_roles``
    (everything else). Users without a role are always denied.
    """

    read_roles: set = set()
    write_roles: set = set()

    def _role_name(self, request):
        return role_name_of(getattr(request, "user", None))

    def has_permission(self, request, view):
        user = getattr(request, "user", None)
        if not user or not user.is_authenticated:
            return False

        role_name = self._role_name(request)
        if not role_name:
            return False

        allowed = self.read_roles if request.method in SAFE_METHODS else self.write_roles
        return role_name in allowed
