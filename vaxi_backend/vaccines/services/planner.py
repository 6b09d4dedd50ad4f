"""
Planner Generator.

A vaccine-level view of what is due for a subject in the next two years.
Unlike the dose schedule it handles recurring vaccines:

- "Annual": this year's and next year's occurrence on a fixed calendar date
- "Every N years": the next booster boundary counted from birth
- anything else: one occurrence at ``DOB + min_age_months``

Each occurrence gets a priority and reminder text. The planner is rebuilt
from scratch on every run and does not look at dose instances.
"""

from __future__ import annotations

import calendar
import logging
from dataclasses import dataclass
from datetime import date, time, timedelta

from django.conf import settings
from django.db import transaction
from django.db.models import Q

from vaxi_backend.subjects.providers import get_subject
from vaxi_backend.vaccines.exceptions import NotFoundError, ValidationError
from vaxi_backend.vaccines.models import PlannerEntry, VaccinationRecord, Vaccine
from vaxi_backend.vaccines.services import dates
from vaxi_backend.vaccines.services.records import record_completion
from vaxi_backend.vaccines.services.reminders import default_reminder_time
from vaxi_backend.vaccines.services.results import ServiceResult, service_boundary

logger = logging.getLogger(__name__)

VALID_PLANNER_STATUSES = [choice[0] for choice in PlannerEntry.STATUS_CHOICES]

STATUS_ORDER = {
    PlannerEntry.STATUS_OVERDUE: 1,
    PlannerEntry.STATUS_UPCOMING: 2,
    PlannerEntry.STATUS_COMPLETED: 3,
}

NEXT_YEAR_WINDOW_DAYS = 730

# (days before the scheduled date, time of day)
ANNUAL_REMINDER = (5, time(9, 0))
INTERVAL_REMINDER = (10, time(10, 0))
ONE_TIME_REMINDER = (7, time(9, 0))


@dataclass
class Occurrence:
    vaccine: Vaccine
    scheduled_date: date
    status: str
    reminder_lead_days: int
    reminder_time: time


def determine_priority(status: str, days_from_today: int, vaccine_type: str) -> str:
    if status == PlannerEntry.STATUS_OVERDUE:
        return PlannerEntry.PRIORITY_URGENT
    if status == PlannerEntry.STATUS_UPCOMING:
        if days_from_today <= 30 and vaccine_type == Vaccine.TYPE_MANDATORY:
            return PlannerEntry.PRIORITY_HIGH
        if days_from_today <= 90:
            return PlannerEntry.PRIORITY_MEDIUM
        return PlannerEntry.PRIORITY_LOW
    return PlannerEntry.PRIORITY_MEDIUM


def reminder_message(vaccine_name: str, status: str, days_from_today: int) -> str:
    if status == PlannerEntry.STATUS_OVERDUE:
        return f'URGENT: {vaccine_name} is {abs(days_from_today)} days overdue'
    if status == PlannerEntry.STATUS_UPCOMING:
        if days_from_today <= 7:
            return f'REMINDER: {vaccine_name} is due in {days_from_today} days'
        if days_from_today <= 30:
            return f'{vaccine_name} is due in {days_from_today} days'
        return f'{vaccine_name} is scheduled for {days_from_today} days from now'
    return f'{vaccine_name} vaccination reminder'


def reminder_title(vaccine_name: str) -> str:
    return f'{vaccine_name} Reminder'


def annual_due_date(year: int) -> date:
    """Configured annual due date in ``year``; Feb 29 falls back to Feb 28 in non-leap years."""
    month = int(getattr(settings, 'VAXI_ANNUAL_DUE_MONTH', 3))
    day = int(getattr(settings, 'VAXI_ANNUAL_DUE_DAY', 15))
    if not 1 <= month <= 12 or not 1 <= day <= 31:
        raise ValidationError('VAXI_ANNUAL_DUE_MONTH/DAY do not form a calendar date', field='VAXI_ANNUAL_DUE_DAY')
    return date(year, month, min(day, calendar.monthrange(year, month)[1]))


def _status_by_date(scheduled_date: date, current_date: date) -> str:
    if scheduled_date <= current_date:
        return PlannerEntry.STATUS_OVERDUE
    return PlannerEntry.STATUS_UPCOMING


def plan_vaccine(vaccine: Vaccine, date_of_birth: date, age_months: int, current_date: date,
                 completed: bool) -> list[Occurrence]:
    """Occurrences of one vaccine that belong in the planner."""
    lookahead = dates.add_years(current_date, getattr(settings, 'VAXI_PLANNER_LOOKAHEAD_YEARS', 2))

    if vaccine.is_annual:
        this_year = annual_due_date(current_date.year)
        status = PlannerEntry.STATUS_OVERDUE if this_year < current_date else PlannerEntry.STATUS_UPCOMING
        occurrences = [Occurrence(vaccine, this_year, status, *ANNUAL_REMINDER)]
        next_year = annual_due_date(current_date.year + 1)
        if dates.days_until(next_year, current_date) <= NEXT_YEAR_WINDOW_DAYS:
            occurrences.append(Occurrence(vaccine, next_year, PlannerEntry.STATUS_UPCOMING, *ANNUAL_REMINDER))
        return occurrences

    interval = vaccine.booster_interval_years
    if interval is not None:
        interval = interval or 10
        boundary = age_months // (interval * 12) * interval + interval
        booster = dates.add_years(date_of_birth, boundary)
        if booster > lookahead:
            return []
        return [Occurrence(vaccine, booster, _status_by_date(booster, current_date), *INTERVAL_REMINDER)]

    if completed:
        return []
    scheduled = dates.add_months(date_of_birth, vaccine.min_age_months or 0)
    if scheduled > lookahead:
        return []
    return [Occurrence(vaccine, scheduled, _status_by_date(scheduled, current_date), *ONE_TIME_REMINDER)]


def build_entry(subject, occurrence: Occurrence, current_date: date) -> PlannerEntry:
    vaccine = occurrence.vaccine
    days = dates.days_until(occurrence.scheduled_date, current_date)
    if occurrence.status == PlannerEntry.STATUS_OVERDUE:
        remind_on = current_date
    else:
        remind_on = occurrence.scheduled_date - timedelta(days=occurrence.reminder_lead_days)
    return PlannerEntry(
        subject=subject,
        vaccine=vaccine,
        scheduled_date=occurrence.scheduled_date,
        status=occurrence.status,
        priority=determine_priority(occurrence.status, days, vaccine.type),
        reminder_title=reminder_title(vaccine.name),
        reminder_message=reminder_message(vaccine.name, occurrence.status, days),
        reminder_date=remind_on,
        reminder_time=occurrence.reminder_time,
    )


def completed_vaccine_ids(subject_id: int) -> set[int]:
    return set(
        VaccinationRecord.objects.filter(
            subject_id=subject_id,
            status=VaccinationRecord.STATUS_COMPLETED,
            is_active=True,
        ).values_list('vaccine_id', flat=True)
    )


@service_boundary('generate_planner')
def generate_planner(subject_id: int, *, today: date | None = None) -> ServiceResult:
    """Rebuild the planner of a subject. Returns ``planned_count``."""
    if subject_id is None:
        raise ValidationError('subject_id is required', field='subject_id')

    current_date = today or dates.today()

    with transaction.atomic():
        subject = get_subject(subject_id, for_update=True)
        if subject is None:
            raise NotFoundError('Subject', subject_id)
        if subject.date_of_birth is None:
            raise ValidationError('Date of birth is required for vaccine planning', field='date_of_birth')

        age_months = dates.age_in_months(subject.date_of_birth, current_date)
        vaccines = (
            Vaccine.objects.filter(is_active=True, min_age_months__lte=age_months)
            .filter(Q(max_age_months__isnull=True) | Q(max_age_months__gte=age_months))
            .order_by('min_age_months', 'type', 'id')
        )
        completed = completed_vaccine_ids(subject.id)

        entries = []
        for vaccine in vaccines:
            is_completed = vaccine.id in completed
            if is_completed and not vaccine.is_recurring:
                continue
            for occurrence in plan_vaccine(vaccine, subject.date_of_birth, age_months, current_date, is_completed):
                entries.append(build_entry(subject, occurrence, current_date))

        PlannerEntry.objects.filter(subject=subject).delete()
        PlannerEntry.objects.bulk_create(entries)

    logger.info('Vaccine planner generated for subject %s: %s vaccines planned', subject_id, len(entries))
    return ServiceResult.ok(planned_count=len(entries))


def planner_entry_payload(entry: PlannerEntry, current_date: date) -> dict:
    vaccine = entry.vaccine
    reminder = None
    if entry.is_reminder:
        reminder = {
            'title': entry.reminder_title or reminder_title(vaccine.name),
            'message': entry.reminder_message or f'{vaccine.name} vaccine is {entry.status}',
            'reminder_date': entry.reminder_date,
            'reminder_time': (entry.reminder_time or default_reminder_time()).strftime('%H:%M'),
        }
    return {
        'planner_id': entry.id,
        'vaccine_id': vaccine.id,
        'vaccine_name': vaccine.name,
        'category': vaccine.category,
        'sub_category': vaccine.sub_category,
        'status': entry.status,
        'scheduled_date': entry.scheduled_date,
        'days_from_today': dates.days_until(entry.scheduled_date, current_date),
        'priority': entry.priority,
        'dose': vaccine.dose,
        'route': vaccine.route,
        'site': vaccine.site,
        'notes': vaccine.notes or f'{vaccine.name} vaccination',
        'completed_date': entry.completed_date,
        'given_at': entry.given_at,
        'reminder': reminder,
    }


@service_boundary('get_planner')
def get_planner(subject_id: int, *, today: date | None = None) -> ServiceResult:
    """Active planner entries: overdue, upcoming, completed, then the rest; by date within each."""
    if get_subject(subject_id) is None:
        raise NotFoundError('Subject', subject_id)

    current_date = today or dates.today()
    entries = PlannerEntry.objects.filter(subject_id=subject_id, is_active=True).select_related('vaccine')
    ordered = sorted(entries, key=lambda e: (STATUS_ORDER.get(e.status, 4), e.scheduled_date, e.id))
    return ServiceResult.ok(planner=[planner_entry_payload(entry, current_date) for entry in ordered])


def _active_entry(planner_id: int, subject_id: int | None = None) -> PlannerEntry:
    qs = PlannerEntry.objects.select_related('vaccine').filter(pk=planner_id, is_active=True)
    if subject_id is not None:
        qs = qs.filter(subject_id=subject_id)
    entry = qs.first()
    if entry is None:
        raise NotFoundError('PlannerEntry', planner_id, 'Planner entry not found')
    return entry


@service_boundary('update_planner_status')
def update_planner_status(
    planner_id: int,
    status: str,
    *,
    completed_date=None,
    given_at: str | None = None,
    notes: str | None = None,
    today: date | None = None,
) -> ServiceResult:
    """Set the status of a planner entry.

    Completing an entry also records the vaccine as completed for the subject.
    """
    if status not in VALID_PLANNER_STATUSES:
        raise ValidationError(
            f"Invalid status. Use one of: {', '.join(VALID_PLANNER_STATUSES)}",
            field='status',
        )
    completed_on = dates.parse_date(completed_date, field='completed_date')

    with transaction.atomic():
        entry = _active_entry(planner_id)
        if status == PlannerEntry.STATUS_COMPLETED and completed_on is None:
            completed_on = today or dates.today()

        entry.status = status
        entry.completed_date = completed_on
        entry.given_at = given_at or ''
        entry.notes = notes or ''
        entry.save(update_fields=['status', 'completed_date', 'given_at', 'notes', 'updated_at'])

        if status == PlannerEntry.STATUS_COMPLETED:
            record_completion(entry.subject_id, entry.vaccine_id, completed_on, notes)

    logger.info('Planner entry %s set to %s', entry.id, status)
    return ServiceResult.ok(entry=planner_entry_payload(entry, today or dates.today()))


@service_boundary('update_planner_reminder')
def update_planner_reminder(
    subject_id: int,
    planner_id: int,
    *,
    is_reminder: bool = True,
    title: str | None = None,
    message: str | None = None,
    reminder_date=None,
    reminder_time=None,
    today: date | None = None,
) -> ServiceResult:
    """Replace the reminder settings of a planner entry owned by ``subject_id``.

    Empty title/message fall back to generated text when the planner is read.
    """
    entry = _active_entry(planner_id, subject_id=subject_id)

    entry.is_reminder = bool(is_reminder)
    entry.reminder_title = title or ''
    entry.reminder_message = message or ''
    entry.reminder_date = dates.parse_date(reminder_date, field='date')
    entry.reminder_time = dates.parse_time(reminder_time, field='time') or default_reminder_time()
    entry.save(update_fields=[
        'is_reminder', 'reminder_title', 'reminder_message', 'reminder_date', 'reminder_time', 'updated_at',
    ])

    return ServiceResult.ok(entry=planner_entry_payload(entry, today or dates.today()))
