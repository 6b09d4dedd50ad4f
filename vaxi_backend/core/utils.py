import logging

from django.db import DatabaseError

from vaxi_backend.core.models import AuditLog
from vaxi_backend.core.permissions import role_name_of

logger = logging.getLogger(__name__)


def log_subject_action(user, action, subject_id=None, meta=None):
    """Append an audit row for ``action`` (optionally about one subject).

    Audit failures are logged and never break the request that triggered them.
    """
    actor = user if getattr(user, 'is_authenticated', False) else None
    try:
        AuditLog.objects.create(
            user=actor,
            role_name=role_name_of(user) or '',
            action=action,
            subject_id=subject_id,
            meta=meta,
        )
    except DatabaseError:
        logger.exception('Audit log write failed (action=%s, subject_id=%s)', action, subject_id)
