"""Domain models for the vaccine catalog, dose schedules and the planner.

Two independent views of a subject's vaccinations live here:

- ``DoseInstance``: one dated row per dose of every catalog vaccine, generated
  from the subject's date of birth and kept in sync with the current date.
- ``PlannerEntry``: one row per vaccine *occurrence* in the near future
  (recurring vaccines may have several), carrying priority and reminder text.

``VaccinationRecord`` is the vaccine-level completion history the planner
consults to decide whether a vaccine is already done.
"""

import re
from datetime import time

from django.conf import settings
from django.db import models

from vaxi_backend.subjects.models import Subject


DEFAULT_REMINDER_TIME = time(9, 0)

ANNUAL_RE = re.compile(r'\bannual', re.IGNORECASE)
EVERY_N_YEARS_RE = re.compile(r'\bevery\s+(\d+)\s+years?\b', re.IGNORECASE)


class Vaccine(models.Model):
	"""Catalog vaccine (reference data maintained by administrators).

	``when_to_give`` is free text ("0, 1, and 6 months schedule"); structured
	offsets in ``VaccineDoseOffset`` take precedence over it when present.
	"""
	TYPE_MANDATORY = 'Mandatory'
	TYPE_OPTIONAL = 'Optional'
	TYPE_HIGH_RISK = 'High-risk'
	TYPE_TRAVEL = 'Travel'

	name = models.CharField(max_length=200)
	type = models.CharField(max_length=50, default=TYPE_MANDATORY, db_index=True)
	category = models.CharField(max_length=50, blank=True, default='')
	sub_category = models.CharField(max_length=50, blank=True, default='')
	min_age_months = models.IntegerField(default=0)
	max_age_months = models.IntegerField(blank=True, null=True)
	total_doses = models.PositiveSmallIntegerField(blank=True, null=True)
	frequency = models.CharField(max_length=200, blank=True, default='')
	when_to_give = models.TextField(blank=True, default='')
	dose = models.CharField(max_length=50, blank=True, default='')
	route = models.CharField(max_length=50, blank=True, default='')
	site = models.CharField(max_length=100, blank=True, default='')
	notes = models.TextField(blank=True, default='')
	is_active = models.BooleanField(default=True)
	created_at = models.DateTimeField(auto_now_add=True)
	updated_at = models.DateTimeField(auto_now=True)

	class Meta:
		ordering = ["min_age_months", "name", "id"]

	def __str__(self) -> str:
		return self.name

	@property
	def is_annual(self) -> bool:
		return bool(ANNUAL_RE.search(self.frequency or ''))

	@property
	def booster_interval_years(self):
		"""N of an "Every N years" frequency, else ``None``."""
		match = EVERY_N_YEARS_RE.search(self.frequency or '')
		return int(match.group(1)) if match else None

	@property
	def is_recurring(self) -> bool:
		return self.is_annual or self.booster_interval_years is not None


class VaccineDoseOffset(models.Model):
	"""Structured dose offset from birth for one dose of a catalog vaccine."""
	vaccine = models.ForeignKey(Vaccine, on_delete=models.CASCADE, related_name='dose_offsets')
	dose_number = models.PositiveSmallIntegerField()
	min_age_days = models.IntegerField()
	notes = models.CharField(max_length=255, blank=True, default='')

	class Meta:
		ordering = ["vaccine_id", "dose_number"]
		constraints = [
			models.UniqueConstraint(fields=['vaccine', 'dose_number'], name='uniq_offset_per_vaccine_dose'),
		]

	def __str__(self) -> str:
		return f"VaccineDoseOffset vaccine_id={self.vaccine_id} dose={self.dose_number} day={self.min_age_days}"


class DoseInstance(models.Model):
	"""One concrete, dated dose of one vaccine for one subject.

	Lifecycle:
	- created/re-dated by the schedule generator,
	- ``status`` kept current by the status synchronizer,
	- ``completed`` is set only by an explicit completion and is terminal.
	"""
	STATUS_UPCOMING = 'upcoming'
	STATUS_DUE_SOON = 'due_soon'
	STATUS_OVERDUE = 'overdue'
	STATUS_COMPLETED = 'completed'

	STATUS_CHOICES = (
		(STATUS_UPCOMING, STATUS_UPCOMING),
		(STATUS_DUE_SOON, STATUS_DUE_SOON),
		(STATUS_OVERDUE, STATUS_OVERDUE),
		(STATUS_COMPLETED, STATUS_COMPLETED),
	)

	subject = models.ForeignKey(Subject, on_delete=models.CASCADE, related_name='dose_instances')
	vaccine = models.ForeignKey(Vaccine, on_delete=models.CASCADE, related_name='dose_instances')
	dose_number = models.PositiveSmallIntegerField()
	scheduled_date = models.DateField()
	status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_UPCOMING)
	completed_date = models.DateField(blank=True, null=True)
	city = models.CharField(max_length=100, blank=True, default='')
	image = models.CharField(max_length=255, blank=True, default='')
	notes = models.TextField(blank=True, default='')
	is_active = models.BooleanField(default=True)
	created_at = models.DateTimeField(auto_now_add=True)
	updated_at = models.DateTimeField(auto_now=True)

	class Meta:
		ordering = ["subject_id", "scheduled_date", "vaccine_id", "dose_number"]
		constraints = [
			models.UniqueConstraint(fields=['subject', 'vaccine', 'dose_number'], name='uniq_dose_per_subject_vaccine'),
		]
		indexes = [
			models.Index(fields=['subject', 'scheduled_date'], name='vaccines_dose_subj_date_idx'),
			models.Index(fields=['status'], name='vaccines_dose_status_idx'),
		]

	def __str__(self) -> str:
		return f"DoseInstance subject_id={self.subject_id} vaccine_id={self.vaccine_id} dose={self.dose_number} {self.scheduled_date}"

	@property
	def is_completed(self) -> bool:
		return self.status == self.STATUS_COMPLETED


class VaccineReminder(models.Model):
	"""Reminder metadata attached to a dose instance (no delivery here)."""
	FREQUENCY_ONCE = 'once'
	FREQUENCY_DAILY = 'daily'
	FREQUENCY_WEEKLY = 'weekly'
	FREQUENCY_MONTHLY = 'monthly'

	FREQUENCY_CHOICES = (
		(FREQUENCY_ONCE, FREQUENCY_ONCE),
		(FREQUENCY_DAILY, FREQUENCY_DAILY),
		(FREQUENCY_WEEKLY, FREQUENCY_WEEKLY),
		(FREQUENCY_MONTHLY, FREQUENCY_MONTHLY),
	)

	STATUS_ACTIVE = 'active'
	STATUS_COMPLETED = 'completed'
	STATUS_CANCELLED = 'cancelled'

	STATUS_CHOICES = (
		(STATUS_ACTIVE, STATUS_ACTIVE),
		(STATUS_COMPLETED, STATUS_COMPLETED),
		(STATUS_CANCELLED, STATUS_CANCELLED),
	)

	dose = models.ForeignKey(DoseInstance, on_delete=models.CASCADE, related_name='reminders')
	title = models.CharField(max_length=200)
	message = models.TextField(blank=True, default='')
	reminder_date = models.DateField()
	reminder_time = models.TimeField(default=DEFAULT_REMINDER_TIME)
	frequency = models.CharField(max_length=10, choices=FREQUENCY_CHOICES, default=FREQUENCY_ONCE)
	status = models.CharField(max_length=10, choices=STATUS_CHOICES, default=STATUS_ACTIVE)
	is_active = models.BooleanField(default=True)
	created_at = models.DateTimeField(auto_now_add=True)
	updated_at = models.DateTimeField(auto_now=True)

	class Meta:
		ordering = ["reminder_date", "reminder_time", "id"]
		indexes = [
			models.Index(fields=['dose', 'status'], name='vaccines_rem_dose_status_idx'),
			models.Index(fields=['reminder_date', 'status'], name='vaccines_rem_date_status_idx'),
		]

	def __str__(self) -> str:
		return f"VaccineReminder dose_id={self.dose_id} {self.reminder_date} {self.reminder_time}"


class VaccinationRecord(models.Model):
	"""Vaccine-level vaccination history of a subject."""
	STATUS_PENDING = 'Pending'
	STATUS_COMPLETED = 'Completed'
	STATUS_MISSED = 'Missed'
	STATUS_SCHEDULED = 'Scheduled'

	STATUS_CHOICES = (
		(STATUS_PENDING, STATUS_PENDING),
		(STATUS_COMPLETED, STATUS_COMPLETED),
		(STATUS_MISSED, STATUS_MISSED),
		(STATUS_SCHEDULED, STATUS_SCHEDULED),
	)

	subject = models.ForeignKey(Subject, on_delete=models.CASCADE, related_name='vaccination_records')
	vaccine = models.ForeignKey(Vaccine, on_delete=models.CASCADE, related_name='vaccination_records')
	status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING)
	given_date = models.DateField(blank=True, null=True)
	scheduled_date = models.DateField(blank=True, null=True)
	notes = models.TextField(blank=True, default='')
	is_active = models.BooleanField(default=True)
	created_at = models.DateTimeField(auto_now_add=True)
	updated_at = models.DateTimeField(auto_now=True)

	class Meta:
		ordering = ["subject_id", "-given_date", "id"]
		constraints = [
			models.UniqueConstraint(fields=['subject', 'vaccine'], name='uniq_record_per_subject_vaccine'),
		]

	def __str__(self) -> str:
		return f"VaccinationRecord subject_id={self.subject_id} vaccine_id={self.vaccine_id} {self.status}"


class PlannerEntry(models.Model):
	"""Vaccine-level occurrence in a subject's planner.

	Regenerated wholesale for a subject on each planner run; independent of
	``DoseInstance`` state.
	"""
	STATUS_UPCOMING = 'upcoming'
	STATUS_OVERDUE = 'overdue'
	STATUS_COMPLETED = 'completed'
	STATUS_SKIPPED = 'skipped'

	STATUS_CHOICES = (
		(STATUS_UPCOMING, STATUS_UPCOMING),
		(STATUS_OVERDUE, STATUS_OVERDUE),
		(STATUS_COMPLETED, STATUS_COMPLETED),
		(STATUS_SKIPPED, STATUS_SKIPPED),
	)

	PRIORITY_LOW = 'low'
	PRIORITY_MEDIUM = 'medium'
	PRIORITY_HIGH = 'high'
	PRIORITY_URGENT = 'urgent'

	PRIORITY_CHOICES = (
		(PRIORITY_LOW, PRIORITY_LOW),
		(PRIORITY_MEDIUM, PRIORITY_MEDIUM),
		(PRIORITY_HIGH, PRIORITY_HIGH),
		(PRIORITY_URGENT, PRIORITY_URGENT),
	)

	subject = models.ForeignKey(Subject, on_delete=models.CASCADE, related_name='planner_entries')
	vaccine = models.ForeignKey(Vaccine, on_delete=models.CASCADE, related_name='planner_entries')
	scheduled_date = models.DateField()
	status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_UPCOMING)
	priority = models.CharField(max_length=10, choices=PRIORITY_CHOICES, default=PRIORITY_MEDIUM)
	completed_date = models.DateField(blank=True, null=True)
	given_at = models.CharField(max_length=100, blank=True, default='')
	notes = models.TextField(blank=True, default='')
	reminder_title = models.CharField(max_length=200, blank=True, default='')
	reminder_message = models.TextField(blank=True, default='')
	reminder_date = models.DateField(blank=True, null=True)
	reminder_time = models.TimeField(default=DEFAULT_REMINDER_TIME)
	is_reminder = models.BooleanField(default=True)
	is_active = models.BooleanField(default=True)
	created_at = models.DateTimeField(auto_now_add=True)
	updated_at = models.DateTimeField(auto_now=True)

	class Meta:
		ordering = ["subject_id", "scheduled_date", "id"]
		constraints = [
			models.UniqueConstraint(fields=['subject', 'vaccine', 'scheduled_date'], name='uniq_planner_subject_vaccine_date'),
		]
		indexes = [
			models.Index(fields=['subject', 'scheduled_date'], name='vaccines_plan_subj_date_idx'),
			models.Index(fields=['reminder_date'], name='vaccines_plan_reminder_idx'),
		]

	def __str__(self) -> str:
		return f"PlannerEntry subject_id={self.subject_id} vaccine_id={self.vaccine_id} {self.scheduled_date} {self.status}"


class NotificationPermission(models.Model):
	"""Channels an account allows reminders on. Every channel is off until opted in."""
	CHANNELS = ('notification', 'calendar', 'email')

	user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='notification_permission')
	notification = models.BooleanField(default=False)
	calendar = models.BooleanField(default=False)
	email = models.BooleanField(default=False)
	created_at = models.DateTimeField(auto_now_add=True)
	updated_at = models.DateTimeField(auto_now=True)

	def __str__(self) -> str:
		return f"NotificationPermission user_id={self.user_id}"

	@property
	def any_enabled(self) -> bool:
		return any(getattr(self, channel) for channel in self.CHANNELS)
