"""Subject Profile Provider.

The vaccine engine only needs a subject's id, date of birth and country.
These helpers are its sole entry point into the subjects app.
"""

from __future__ import annotations

from vaxi_backend.core.permissions import is_staff_role
from vaxi_backend.subjects.models import Subject


def get_subject(subject_id: int | None, *, for_update: bool = False) -> Subject | None:
    """Return the active subject with ``subject_id`` or ``None``.

    ``for_update`` locks the row; it must be called inside ``transaction.atomic()``.
    """
    if subject_id is None:
        return None
    qs = Subject.objects.filter(is_active=True)
    if for_update:
        qs = qs.select_for_update()
    return qs.filter(pk=subject_id).first()


def subjects_for_user(user):
    """Subjects visible to ``user``: all for staff roles, otherwise own ones."""
    qs = Subject.objects.filter(is_active=True)
    if is_staff_role(user):
        return qs
    return qs.filter(owner=user)
