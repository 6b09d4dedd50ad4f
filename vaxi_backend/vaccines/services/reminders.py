"""Reminder metadata on dose instances. Delivery happens elsewhere."""

from __future__ import annotations

import logging

from django.conf import settings

from vaxi_backend.subjects.providers import get_subject
from vaxi_backend.vaccines.exceptions import NotFoundError, ValidationError
from vaxi_backend.vaccines.models import DEFAULT_REMINDER_TIME, DoseInstance, VaccineReminder
from vaxi_backend.vaccines.services import dates
from vaxi_backend.vaccines.services.results import ServiceResult, service_boundary

logger = logging.getLogger(__name__)

VALID_FREQUENCIES = [choice[0] for choice in VaccineReminder.FREQUENCY_CHOICES]


def default_reminder_time():
    configured = getattr(settings, 'VAXI_DEFAULT_REMINDER_TIME', None)
    return dates.parse_time(configured, field='VAXI_DEFAULT_REMINDER_TIME') or DEFAULT_REMINDER_TIME


def _validate_frequency(frequency: str) -> None:
    if frequency not in VALID_FREQUENCIES:
        raise ValidationError(
            f"Invalid frequency. Use one of: {', '.join(VALID_FREQUENCIES)}",
            field='frequency',
        )


def _ensure_unique_slot(dose_id: int, reminder_date, reminder_time, exclude_id: int | None = None) -> None:
    clash = VaccineReminder.objects.filter(
        dose_id=dose_id,
        is_active=True,
        status=VaccineReminder.STATUS_ACTIVE,
        reminder_date=reminder_date,
        reminder_time=reminder_time,
    )
    if exclude_id is not None:
        clash = clash.exclude(pk=exclude_id)
    if clash.exists():
        raise ValidationError('A reminder already exists for this date and time', field='reminder_time')


def _active_reminder(reminder_id: int) -> VaccineReminder:
    reminder = (
        VaccineReminder.objects.select_related('dose', 'dose__vaccine')
        .filter(pk=reminder_id, is_active=True)
        .first()
    )
    if reminder is None:
        raise NotFoundError('VaccineReminder', reminder_id)
    return reminder


@service_boundary('add_reminder')
def add_reminder(
    dose_id: int,
    *,
    reminder_date=None,
    reminder_time=None,
    title: str | None = None,
    message: str = '',
    frequency: str = VaccineReminder.FREQUENCY_ONCE,
) -> ServiceResult:
    dose = (
        DoseInstance.objects.select_related('vaccine')
        .filter(pk=dose_id, is_active=True)
        .first()
    )
    if dose is None:
        raise NotFoundError('DoseInstance', dose_id)

    parsed_date = dates.parse_date(reminder_date, field='reminder_date')
    if parsed_date is None:
        raise ValidationError('reminder_date is required', field='reminder_date')
    parsed_time = dates.parse_time(reminder_time, field='reminder_time') or default_reminder_time()
    _validate_frequency(frequency)
    _ensure_unique_slot(dose.id, parsed_date, parsed_time)

    reminder = VaccineReminder.objects.create(
        dose=dose,
        title=title or f'{dose.vaccine.name} Reminder',
        message=message or '',
        reminder_date=parsed_date,
        reminder_time=parsed_time,
        frequency=frequency,
    )
    logger.info('Reminder %s added to dose %s', reminder.id, dose.id)
    return ServiceResult.ok(reminder=reminder)


@service_boundary('update_reminder')
def update_reminder(
    reminder_id: int,
    *,
    reminder_date=None,
    reminder_time=None,
    title: str | None = None,
    message: str | None = None,
    frequency: str | None = None,
    status: str | None = None,
) -> ServiceResult:
    """Partial update; ``None`` leaves a field unchanged."""
    reminder = _active_reminder(reminder_id)
    slot_before = (reminder.reminder_date, reminder.reminder_time, reminder.status)

    if reminder_date is not None:
        reminder.reminder_date = dates.parse_date(reminder_date, field='reminder_date')
        if reminder.reminder_date is None:
            raise ValidationError('reminder_date is required', field='reminder_date')
    if reminder_time is not None:
        reminder.reminder_time = dates.parse_time(reminder_time, field='reminder_time')
        if reminder.reminder_time is None:
            raise ValidationError('reminder_time is required', field='reminder_time')
    if title is not None:
        reminder.title = title
    if message is not None:
        reminder.message = message
    if frequency is not None:
        _validate_frequency(frequency)
        reminder.frequency = frequency
    if status is not None:
        valid = [choice[0] for choice in VaccineReminder.STATUS_CHOICES]
        if status not in valid:
            raise ValidationError(f"Invalid status. Use one of: {', '.join(valid)}", field='status')
        reminder.status = status

    slot_after = (reminder.reminder_date, reminder.reminder_time, reminder.status)
    if reminder.status == VaccineReminder.STATUS_ACTIVE and slot_after != slot_before:
        _ensure_unique_slot(reminder.dose_id, reminder.reminder_date, reminder.reminder_time, exclude_id=reminder.id)

    reminder.save()
    return ServiceResult.ok(reminder=reminder)


@service_boundary('delete_reminder')
def delete_reminder(reminder_id: int) -> ServiceResult:
    """Soft delete: the reminder is cancelled and hidden."""
    reminder = _active_reminder(reminder_id)
    reminder.status = VaccineReminder.STATUS_CANCELLED
    reminder.is_active = False
    reminder.save(update_fields=['status', 'is_active', 'updated_at'])
    logger.info('Reminder %s cancelled', reminder.id)
    return ServiceResult.ok(reminder=reminder)


@service_boundary('list_subject_reminders')
def list_subject_reminders(subject_id: int) -> ServiceResult:
    """Active reminders across every active dose of a subject, soonest first."""
    if get_subject(subject_id) is None:
        raise NotFoundError('Subject', subject_id)
    reminders = list(
        VaccineReminder.objects.select_related('dose', 'dose__vaccine')
        .filter(
            dose__subject_id=subject_id,
            dose__is_active=True,
            is_active=True,
            status=VaccineReminder.STATUS_ACTIVE,
        )
        .order_by('reminder_date', 'reminder_time', 'id')
    )
    return ServiceResult.ok(reminders=reminders)
