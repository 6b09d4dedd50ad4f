"""Vaccine-level vaccination records and dose completion."""

from __future__ import annotations

import logging
from datetime import date

from django.db import transaction
from django.utils import timezone

from vaxi_backend.subjects.providers import get_subject
from vaxi_backend.vaccines.exceptions import NotFoundError, ValidationError
from vaxi_backend.vaccines.models import DoseInstance, VaccinationRecord, Vaccine, VaccineReminder
from vaxi_backend.vaccines.services import dates
from vaxi_backend.vaccines.services.results import ServiceResult, service_boundary

logger = logging.getLogger(__name__)

VALID_RECORD_STATUSES = [choice[0] for choice in VaccinationRecord.STATUS_CHOICES]
RECORD_FIELDS = ('status', 'given_date', 'scheduled_date', 'notes')


def _validate_record_status(status: str) -> None:
    if status not in VALID_RECORD_STATUSES:
        raise ValidationError(
            f"Invalid status. Use one of: {', '.join(VALID_RECORD_STATUSES)}",
            field='status',
        )


def record_completion(subject_id: int, vaccine_id: int, given_date: date | None, notes: str | None = None) -> VaccinationRecord:
    """Upsert a ``Completed`` record for ``(subject, vaccine)``."""
    defaults = {
        'status': VaccinationRecord.STATUS_COMPLETED,
        'given_date': given_date,
        'is_active': True,
    }
    if notes:
        defaults['notes'] = notes
    record, _ = VaccinationRecord.objects.update_or_create(
        subject_id=subject_id,
        vaccine_id=vaccine_id,
        defaults=defaults,
    )
    return record


@service_boundary('complete_dose')
def complete_dose(
    dose_id: int,
    *,
    completed_date=None,
    city: str | None = None,
    notes: str | None = None,
    image: str | None = None,
    today: date | None = None,
) -> ServiceResult:
    """Mark a dose instance completed.

    Active reminders of the dose are completed with it. When this was the last
    pending dose of the vaccine for the subject, a ``Completed`` vaccination
    record is written as well.
    """
    completed_on = dates.parse_date(completed_date, field='completed_date') or today or dates.today()

    with transaction.atomic():
        dose = (
            DoseInstance.objects.select_for_update()
            .filter(pk=dose_id, is_active=True, subject__is_active=True)
            .first()
        )
        if dose is None:
            raise NotFoundError('DoseInstance', dose_id)
        if dose.is_completed:
            raise ValidationError('Dose is already completed', field='status')

        dose.status = DoseInstance.STATUS_COMPLETED
        dose.completed_date = completed_on
        if city is not None:
            dose.city = city
        if notes is not None:
            dose.notes = notes
        if image is not None:
            dose.image = image
        dose.save(update_fields=['status', 'completed_date', 'city', 'notes', 'image', 'updated_at'])

        completed_reminders = dose.reminders.filter(
            is_active=True, status=VaccineReminder.STATUS_ACTIVE,
        ).update(status=VaccineReminder.STATUS_COMPLETED, updated_at=timezone.now())

        vaccine_completed = not (
            DoseInstance.objects.filter(subject_id=dose.subject_id, vaccine_id=dose.vaccine_id, is_active=True)
            .exclude(status=DoseInstance.STATUS_COMPLETED)
            .exists()
        )
        if vaccine_completed:
            record_completion(dose.subject_id, dose.vaccine_id, completed_on)

    logger.info(
        'Dose %s completed for subject %s (%s reminders closed, vaccine completed: %s)',
        dose.id, dose.subject_id, completed_reminders, vaccine_completed,
    )
    return ServiceResult.ok(dose=dose, vaccine_completed=vaccine_completed)


@service_boundary('list_vaccination_records')
def list_vaccination_records(subject_id: int, *, status: str | None = None) -> ServiceResult:
    """Active records of a subject, optionally only those with ``status``."""
    if get_subject(subject_id) is None:
        raise NotFoundError('Subject', subject_id)
    records = VaccinationRecord.objects.filter(subject_id=subject_id, is_active=True).select_related('vaccine')
    if status is not None:
        _validate_record_status(status)
        records = records.filter(status=status)
    return ServiceResult.ok(records=list(records))


@service_boundary('add_vaccination_record')
def add_vaccination_record(
    subject_id: int,
    vaccine_id: int,
    *,
    status: str = VaccinationRecord.STATUS_COMPLETED,
    given_date=None,
    scheduled_date=None,
    notes: str = '',
) -> ServiceResult:
    """Record a vaccination for a subject.

    An active record for the same vaccine is a duplicate; an inactive one is
    reactivated with the new values.
    """
    if get_subject(subject_id) is None:
        raise NotFoundError('Subject', subject_id)
    if not Vaccine.objects.filter(pk=vaccine_id, is_active=True).exists():
        raise NotFoundError('Vaccine', vaccine_id)
    _validate_record_status(status)

    values = {
        'status': status,
        'given_date': dates.parse_date(given_date, field='given_date'),
        'scheduled_date': dates.parse_date(scheduled_date, field='scheduled_date'),
        'notes': notes or '',
    }

    existing = VaccinationRecord.objects.filter(subject_id=subject_id, vaccine_id=vaccine_id).first()
    if existing is not None and existing.is_active:
        raise ValidationError('Vaccination record already exists for this vaccine', field='vaccine_id')

    if existing is not None:
        for name, value in values.items():
            setattr(existing, name, value)
        existing.is_active = True
        existing.save()
        record = existing
    else:
        record = VaccinationRecord.objects.create(subject_id=subject_id, vaccine_id=vaccine_id, **values)

    logger.info('Vaccination record %s saved for subject %s vaccine %s', record.id, subject_id, vaccine_id)
    return ServiceResult.ok(record=record)


@service_boundary('update_vaccination_record')
def update_vaccination_record(record_id: int, *, subject_id: int | None = None, **changes) -> ServiceResult:
    """Update ``status``, ``given_date``, ``scheduled_date`` or ``notes`` of an active record."""
    qs = VaccinationRecord.objects.filter(pk=record_id, is_active=True)
    if subject_id is not None:
        qs = qs.filter(subject_id=subject_id)
    record = qs.first()
    if record is None:
        raise NotFoundError('VaccinationRecord', record_id)

    unknown = set(changes) - set(RECORD_FIELDS)
    if unknown:
        raise ValidationError(f"Unknown field(s): {', '.join(sorted(unknown))}")

    if 'status' in changes:
        _validate_record_status(changes['status'])
        record.status = changes['status']
    for name in ('given_date', 'scheduled_date'):
        if name in changes:
            setattr(record, name, dates.parse_date(changes[name], field=name))
    if 'notes' in changes:
        record.notes = changes['notes'] or ''
    record.save()

    return ServiceResult.ok(record=record)


@service_boundary('delete_vaccination_record')
def delete_vaccination_record(record_id: int, *, subject_id: int | None = None) -> ServiceResult:
    """Soft delete; a later ``add_vaccination_record`` for the vaccine reactivates the row."""
    qs = VaccinationRecord.objects.filter(pk=record_id, is_active=True)
    if subject_id is not None:
        qs = qs.filter(subject_id=subject_id)
    record = qs.first()
    if record is None:
        raise NotFoundError('VaccinationRecord', record_id)

    record.is_active = False
    record.save(update_fields=['is_active', 'updated_at'])
    logger.info('Vaccination record %s removed for subject %s', record.id, record.subject_id)
    return ServiceResult.ok(record=record)
