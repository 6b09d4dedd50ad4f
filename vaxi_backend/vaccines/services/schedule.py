"""
Schedule Generator.

Builds the full set of dated dose instances for a subject from the catalog and
the subject's date of birth, and reconciles it with what is already stored:

- missing ``(vaccine, dose_number)`` rows are created,
- rows whose date moved are re-dated (notes, image, city and completion kept),
- pending rows that are no longer part of the schedule are removed.

Completed rows are history and are never deleted by regeneration.
"""

from __future__ import annotations

import logging
from collections import OrderedDict
from datetime import date, timedelta

from django.conf import settings
from django.db import transaction
from django.db.models import Prefetch
from django.utils import timezone

from vaxi_backend.subjects.providers import get_subject
from vaxi_backend.vaccines.exceptions import NotFoundError, ValidationError
from vaxi_backend.vaccines.models import DoseInstance, Vaccine, VaccineReminder
from vaxi_backend.vaccines.services import dates
from vaxi_backend.vaccines.services.frequency import parse_dose_offsets
from vaxi_backend.vaccines.services.results import ServiceResult, service_boundary
from vaxi_backend.vaccines.services.status import sync_subject_doses

logger = logging.getLogger(__name__)

VALID_DOSE_STATUSES = [choice[0] for choice in DoseInstance.STATUS_CHOICES]


def _horizon_years() -> int:
    return getattr(settings, 'VAXI_SCHEDULE_HORIZON_YEARS', 100)


def eligible_vaccines(horizon_days: int):
    """Active catalog vaccines whose first dose can fall inside the horizon."""
    return (
        Vaccine.objects.filter(
            is_active=True,
            min_age_months__lte=horizon_days // dates.DAYS_PER_MONTH,
        )
        .order_by('min_age_months', 'id')
        .prefetch_related('dose_offsets')
    )


def build_target_schedule(date_of_birth: date, vaccines) -> OrderedDict:
    """``{(vaccine_id, dose_number): scheduled_date}`` for every dose inside the horizon."""
    horizon = dates.add_years(date_of_birth, _horizon_years())
    target: OrderedDict = OrderedDict()
    for vaccine in vaccines:
        for offset in parse_dose_offsets(vaccine, list(vaccine.dose_offsets.all())):
            scheduled_date = date_of_birth + timedelta(days=offset.min_age_days)
            if scheduled_date > horizon:
                continue
            target[(vaccine.id, offset.dose_number)] = scheduled_date
    return target


@service_boundary('generate_schedule')
def generate_schedule(subject_id: int, *, today: date | None = None) -> ServiceResult:
    """(Re)generate the dose schedule of a subject.

    Returns ``added_count``: the number of dose instances that did not exist
    (or were inactive) before this run. Running it twice without catalog or
    birth-date changes adds nothing.
    """
    if subject_id is None:
        raise ValidationError('subject_id is required', field='subject_id')

    current_date = today or dates.today()

    with transaction.atomic():
        subject = get_subject(subject_id, for_update=True)
        if subject is None:
            raise NotFoundError('Subject', subject_id)
        if subject.date_of_birth is None:
            raise ValidationError('Subject has no date of birth', field='date_of_birth')

        date_of_birth = subject.date_of_birth
        horizon_days = (dates.add_years(date_of_birth, _horizon_years()) - date_of_birth).days
        target = build_target_schedule(date_of_birth, eligible_vaccines(horizon_days))

        existing = {
            (dose.vaccine_id, dose.dose_number): dose
            for dose in DoseInstance.objects.filter(subject=subject)
        }

        now = timezone.now()
        to_create = []
        to_update = []
        reactivated = 0
        for key, scheduled_date in target.items():
            dose = existing.get(key)
            if dose is None:
                vaccine_id, dose_number = key
                to_create.append(DoseInstance(
                    subject=subject,
                    vaccine_id=vaccine_id,
                    dose_number=dose_number,
                    scheduled_date=scheduled_date,
                    status=DoseInstance.STATUS_UPCOMING,
                ))
                continue
            if dose.scheduled_date != scheduled_date or not dose.is_active:
                if not dose.is_active:
                    reactivated += 1
                dose.scheduled_date = scheduled_date
                dose.is_active = True
                dose.updated_at = now
                to_update.append(dose)

        stale_ids = [
            dose.id for key, dose in existing.items()
            if key not in target and dose.status != DoseInstance.STATUS_COMPLETED
        ]

        if to_create:
            DoseInstance.objects.bulk_create(to_create)
        if to_update:
            DoseInstance.objects.bulk_update(to_update, ['scheduled_date', 'is_active', 'updated_at'])
        if stale_ids:
            DoseInstance.objects.filter(id__in=stale_ids).delete()

        added_count = len(to_create) + reactivated
        if to_create or to_update:
            sync_subject_doses(subject.id, current_date)

    logger.info(
        'Schedule generated for subject %s: %s added, %s re-dated, %s removed',
        subject_id, added_count, len(to_update), len(stale_ids),
    )
    return ServiceResult.ok(added_count=added_count)


def _schedule_queryset(subject_id: int):
    return (
        DoseInstance.objects.filter(subject_id=subject_id, is_active=True)
        .select_related('vaccine')
        .prefetch_related(Prefetch(
            'reminders',
            queryset=VaccineReminder.objects.filter(is_active=True, status=VaccineReminder.STATUS_ACTIVE),
            to_attr='active_reminders',
        ))
        .order_by('scheduled_date', 'dose_number', 'id')
    )


@service_boundary('list_schedule')
def list_schedule(
    subject_id: int,
    *,
    status: str | None = None,
    vaccine_id: int | None = None,
    grouped: bool = False,
) -> ServiceResult:
    """Active dose instances of a subject, each with its active reminders.

    ``grouped=True`` returns ``[{'vaccine': Vaccine, 'doses': [...]}, ...]`` in
    order of each vaccine's first scheduled dose.
    """
    if get_subject(subject_id) is None:
        raise NotFoundError('Subject', subject_id)
    if status and status not in VALID_DOSE_STATUSES:
        raise ValidationError(
            f"Invalid status. Use one of: {', '.join(VALID_DOSE_STATUSES)}",
            field='status',
        )

    qs = _schedule_queryset(subject_id)
    if status:
        qs = qs.filter(status=status)
    if vaccine_id:
        qs = qs.filter(vaccine_id=vaccine_id)

    doses = list(qs)
    if not grouped:
        return ServiceResult.ok(schedule=doses)

    groups: OrderedDict = OrderedDict()
    for dose in doses:
        group = groups.setdefault(dose.vaccine_id, {'vaccine': dose.vaccine, 'doses': []})
        group['doses'].append(dose)
    return ServiceResult.ok(schedule=list(groups.values()))
