"""Per-account reminder channel permissions (notification, calendar, email)."""

from __future__ import annotations

import logging

from django.contrib.auth import get_user_model

from vaxi_backend.vaccines.exceptions import NotFoundError, ValidationError
from vaxi_backend.vaccines.models import NotificationPermission
from vaxi_backend.vaccines.services.results import ServiceResult, service_boundary

logger = logging.getLogger(__name__)


def _require_user(user_id: int) -> None:
    if not get_user_model().objects.filter(pk=user_id, is_active=True).exists():
        raise NotFoundError('User', user_id)


@service_boundary('get_notification_permissions')
def get_notification_permissions(user_id: int) -> ServiceResult:
    """Permissions of ``user_id``; an all-off row is created on first access."""
    _require_user(user_id)
    permission, created = NotificationPermission.objects.get_or_create(user_id=user_id)
    if created:
        logger.info('Default notification permissions created for user %s', user_id)
    return ServiceResult.ok(permissions=permission)


@service_boundary('update_notification_permissions')
def update_notification_permissions(user_id: int, **channels) -> ServiceResult:
    """Set any of ``notification``, ``calendar`` or ``email``; ``None`` leaves a channel unchanged."""
    unknown = set(channels) - set(NotificationPermission.CHANNELS)
    if unknown:
        raise ValidationError(f"Unknown channel(s): {', '.join(sorted(unknown))}")
    for name, value in channels.items():
        if value is not None and not isinstance(value, bool):
            raise ValidationError(f'{name} must be true or false', field=name)

    _require_user(user_id)
    permission, _ = NotificationPermission.objects.get_or_create(user_id=user_id)
    for name, value in channels.items():
        if value is not None:
            setattr(permission, name, value)
    permission.save()
    return ServiceResult.ok(permissions=permission)


@service_boundary('delete_notification_permissions')
def delete_notification_permissions(user_id: int) -> ServiceResult:
    """Drop the row; the next read recreates it with every channel off."""
    deleted, _ = NotificationPermission.objects.filter(user_id=user_id).delete()
    return ServiceResult.ok(deleted=bool(deleted))


@service_boundary('has_any_notification_permission')
def has_any_notification_permission(user_id: int) -> ServiceResult:
    """``any_enabled`` is False when no row exists yet."""
    permission = NotificationPermission.objects.filter(user_id=user_id).first()
    return ServiceResult.ok(any_enabled=bool(permission and permission.any_enabled))
