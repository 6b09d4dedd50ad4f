from django.db import transaction

from .models import Role

ROLE_DEFINITIONS = [
    (Role.ADMIN, "Admin"),
    (Role.CLINICIAN, "Clinician"),
    (Role.MEMBER, "Member"),
]


def seed_core(flush: bool = False) -> dict:
    """
    Seeds the RBAC roles.

    Roles are never deleted (users reference them with PROTECT); ``flush`` is
    accepted for symmetry with the other seeders.
    """
    stats: dict[str, int] = {}

    with transaction.atomic():
        roles = []
        for name, label in ROLE_DEFINITIONS:
            role, _ = Role.objects.update_or_create(name=name, defaults={"label": label})
            roles.append(role)
        stats["core_roles"] = len(roles)

    return stats
