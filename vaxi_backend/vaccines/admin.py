"""
Vaccines App - Admin

The catalog (Vaccine, VaccineDoseOffset) is maintained here; dose instances,
reminders and planner entries are shown mostly read-only because the engine
owns them.
"""

from django.contrib import admin

from vaxi_backend.vaccines.models import (
	DoseInstance,
	NotificationPermission,
	PlannerEntry,
	VaccinationRecord,
	Vaccine,
	VaccineDoseOffset,
	VaccineReminder,
)


class VaccineDoseOffsetInline(admin.TabularInline):
	model = VaccineDoseOffset
	extra = 0
	ordering = ("dose_number",)


@admin.register(Vaccine)
class VaccineAdmin(admin.ModelAdmin):
	list_display = ("name", "type", "category", "min_age_months", "max_age_months", "total_doses", "frequency", "is_active")
	list_filter = ("type", "category", "is_active")
	search_fields = ("name", "when_to_give", "frequency")
	ordering = ("min_age_months", "name")
	inlines = [VaccineDoseOffsetInline]


@admin.register(DoseInstance)
class DoseInstanceAdmin(admin.ModelAdmin):
	list_display = ("id", "subject", "vaccine", "dose_number", "scheduled_date", "status", "completed_date", "is_active")
	list_filter = ("status", "is_active")
	search_fields = ("subject__full_name", "vaccine__name")
	date_hierarchy = "scheduled_date"
	list_per_page = 50
	readonly_fields = ("subject", "vaccine", "dose_number", "scheduled_date", "created_at", "updated_at")


@admin.register(VaccineReminder)
class VaccineReminderAdmin(admin.ModelAdmin):
	list_display = ("id", "dose", "title", "reminder_date", "reminder_time", "frequency", "status")
	list_filter = ("status", "frequency")
	search_fields = ("title",)


@admin.register(VaccinationRecord)
class VaccinationRecordAdmin(admin.ModelAdmin):
	list_display = ("id", "subject", "vaccine", "status", "given_date", "is_active")
	list_filter = ("status", "is_active")
	search_fields = ("subject__full_name", "vaccine__name")


@admin.register(PlannerEntry)
class PlannerEntryAdmin(admin.ModelAdmin):
	list_display = ("id", "subject", "vaccine", "scheduled_date", "status", "priority", "reminder_date", "is_reminder")
	list_filter = ("status", "priority", "is_reminder")
	search_fields = ("subject__full_name", "vaccine__name")
	readonly_fields = ("subject", "vaccine", "scheduled_date", "created_at", "updated_at")


@admin.register(NotificationPermission)
class NotificationPermissionAdmin(admin.ModelAdmin):
	list_display = ("user", "notification", "calendar", "email", "updated_at")
	list_filter = ("notification", "calendar", "email")
	search_fields = ("user__username", "user__email")
