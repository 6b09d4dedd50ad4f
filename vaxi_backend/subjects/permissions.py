from vaxi_backend.core.permissions import RBACPermission, is_staff_role


class SubjectPermission(RBACPermission):
    """RBAC for subject endpoints and everything hanging off a subject.

    - admin: full access
    - clinician: full access
    - member: full access to subjects they own, nothing else
    """

    read_roles = {"admin", "clinician", "member"}
    write_roles = {"admin", "clinician", "member"}

    def has_object_permission(self, request, view, obj):
        if is_staff_role(request.user):
            return True

        # obj is a Subject, or a dose/planner entry/reminder hanging off one
        subject = getattr(obj, "subject", None)
        if subject is None and hasattr(obj, "dose"):
            subject = obj.dose.subject
        if subject is None:
            subject = obj
        return getattr(subject, "owner_id", None) == request.user.id
