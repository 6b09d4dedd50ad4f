"""
Status Calculator and Status Synchronizer.

``calculate_status`` is a pure function of the scheduled date and the current
date. ``completed`` is never computed; it is set only by an explicit
completion and is terminal.

The synchronizer reads a subject's pending dose instances once, diffs them in
memory and writes only the changed rows in a single batched update.
"""

from __future__ import annotations

import logging
from datetime import date

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from vaxi_backend.vaccines.exceptions import NotFoundError, ValidationError
from vaxi_backend.vaccines.models import DoseInstance
from vaxi_backend.vaccines.services import dates
from vaxi_backend.vaccines.services.results import ServiceResult, service_boundary
from vaxi_backend.subjects.providers import get_subject

logger = logging.getLogger(__name__)


def _due_soon_days() -> int:
    return getattr(settings, 'VAXI_DUE_SOON_DAYS', 30)


def calculate_status(scheduled_date: date, current_date: date) -> str:
    """Status of a pending dose scheduled on ``scheduled_date`` as of ``current_date``.

    - diff < 0            -> overdue
    - 0 <= diff <= 30     -> due_soon
    - diff > 30           -> upcoming
    """
    if scheduled_date is None or current_date is None:
        raise ValidationError('scheduled_date and current_date are required', field='scheduled_date')

    diff_days = dates.days_until(scheduled_date, current_date)
    if diff_days < 0:
        return DoseInstance.STATUS_OVERDUE
    if diff_days <= _due_soon_days():
        return DoseInstance.STATUS_DUE_SOON
    return DoseInstance.STATUS_UPCOMING


def refresh_statuses(instances, current_date: date) -> list[DoseInstance]:
    """Recompute status in memory; return the instances whose status changed.

    Completed instances are skipped.
    """
    changed = []
    for instance in instances:
        if instance.status == DoseInstance.STATUS_COMPLETED:
            continue
        new_status = calculate_status(instance.scheduled_date, current_date)
        if new_status != instance.status:
            instance.status = new_status
            changed.append(instance)
    return changed


def sync_subject_doses(subject_id: int, current_date: date) -> int:
    pending = list(
        DoseInstance.objects.filter(subject_id=subject_id, is_active=True)
        .exclude(status=DoseInstance.STATUS_COMPLETED)
        .only('id', 'scheduled_date', 'status')
    )
    changed = refresh_statuses(pending, current_date)
    now = timezone.now()
    for instance in changed:
        instance.updated_at = now
    if changed:
        with transaction.atomic():
            DoseInstance.objects.bulk_update(changed, ['status', 'updated_at'])
    return len(changed)


@service_boundary('synchronize_status')
def synchronize_status(subject_id: int, *, today: date | None = None) -> ServiceResult:
    """Re-evaluate status of every pending dose instance of a subject.

    Returns ``updated_count``: the number of rows whose status actually changed.
    """
    if subject_id is None:
        raise ValidationError('subject_id is required', field='subject_id')
    if get_subject(subject_id) is None:
        raise NotFoundError('Subject', subject_id)

    current_date = today or dates.today()
    updated_count = sync_subject_doses(subject_id, current_date)

    logger.info('Dose statuses synchronized for subject %s: %s updated', subject_id, updated_count)
    return ServiceResult.ok(updated_count=updated_count)


@service_boundary('synchronize_all_statuses')
def synchronize_all_statuses(*, today: date | None = None) -> ServiceResult:
    """Run the synchronizer for every subject that has pending dose instances."""
    current_date = today or dates.today()
    subject_ids = (
        DoseInstance.objects.filter(is_active=True, subject__is_active=True)
        .exclude(status=DoseInstance.STATUS_COMPLETED)
        .values_list('subject_id', flat=True)
        .distinct()
    )

    subjects = 0
    updated_count = 0
    for subject_id in sorted(set(subject_ids)):
        updated_count += sync_subject_doses(subject_id, current_date)
        subjects += 1

    logger.info('Daily status sync: %s subjects, %s dose instances updated', subjects, updated_count)
    return ServiceResult.ok(subject_count=subjects, updated_count=updated_count)
