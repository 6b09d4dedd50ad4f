from rest_framework import serializers

from vaxi_backend.vaccines.models import (
    DoseInstance,
    NotificationPermission,
    PlannerEntry,
    VaccinationRecord,
    Vaccine,
    VaccineReminder,
)


class VaccineSerializer(serializers.ModelSerializer):
    class Meta:
        model = Vaccine
        fields = [
            'id',
            'name',
            'type',
            'category',
            'sub_category',
            'min_age_months',
            'max_age_months',
            'total_doses',
            'frequency',
            'when_to_give',
            'dose',
            'route',
            'site',
            'notes',
        ]
        read_only_fields = fields


class VaccineReminderSerializer(serializers.ModelSerializer):
    class Meta:
        model = VaccineReminder
        fields = [
            'id',
            'dose',
            'title',
            'message',
            'reminder_date',
            'reminder_time',
            'frequency',
            'status',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class SubjectReminderSerializer(serializers.ModelSerializer):
    """Reminder together with the dose and vaccine it belongs to."""

    vaccine_id = serializers.IntegerField(source='dose.vaccine_id', read_only=True)
    vaccine_name = serializers.CharField(source='dose.vaccine.name', read_only=True)
    dose_number = serializers.IntegerField(source='dose.dose_number', read_only=True)
    dose_status = serializers.CharField(source='dose.status', read_only=True)
    scheduled_date = serializers.DateField(source='dose.scheduled_date', read_only=True)

    class Meta:
        model = VaccineReminder
        fields = [
            'id',
            'dose',
            'vaccine_id',
            'vaccine_name',
            'dose_number',
            'dose_status',
            'scheduled_date',
            'title',
            'message',
            'reminder_date',
            'reminder_time',
            'frequency',
            'status',
        ]
        read_only_fields = fields


class NotificationPermissionSerializer(serializers.ModelSerializer):
    any_enabled = serializers.BooleanField(read_only=True)

    class Meta:
        model = NotificationPermission
        fields = ['notification', 'calendar', 'email', 'any_enabled', 'updated_at']
        read_only_fields = fields


class NotificationPermissionUpdateSerializer(serializers.Serializer):
    notification = serializers.BooleanField(required=False)
    calendar = serializers.BooleanField(required=False)
    email = serializers.BooleanField(required=False)


class DoseInstanceSerializer(serializers.ModelSerializer):
    """Dose instance with its vaccine's display fields and active reminders."""

    vaccine_name = serializers.CharField(source='vaccine.name', read_only=True)
    vaccine_type = serializers.CharField(source='vaccine.type', read_only=True)
    reminders = serializers.SerializerMethodField()

    class Meta:
        model = DoseInstance
        fields = [
            'id',
            'subject',
            'vaccine',
            'vaccine_name',
            'vaccine_type',
            'dose_number',
            'scheduled_date',
            'status',
            'completed_date',
            'city',
            'image',
            'notes',
            'reminders',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_reminders(self, obj):
        reminders = getattr(obj, 'active_reminders', None)
        if reminders is None:
            reminders = obj.reminders.filter(is_active=True, status=VaccineReminder.STATUS_ACTIVE)
        return VaccineReminderSerializer(reminders, many=True).data


class ScheduleGroupSerializer(serializers.Serializer):
    vaccine = VaccineSerializer()
    doses = DoseInstanceSerializer(many=True)


class VaccinationRecordSerializer(serializers.ModelSerializer):
    vaccine_name = serializers.CharField(source='vaccine.name', read_only=True)

    class Meta:
        model = VaccinationRecord
        fields = [
            'id',
            'subject',
            'vaccine',
            'vaccine_name',
            'status',
            'given_date',
            'scheduled_date',
            'notes',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class VaccinationRecordCreateSerializer(serializers.Serializer):
    vaccine_id = serializers.IntegerField()
    status = serializers.ChoiceField(
        choices=[c[0] for c in VaccinationRecord.STATUS_CHOICES],
        default=VaccinationRecord.STATUS_COMPLETED,
    )
    given_date = serializers.DateField(required=False, allow_null=True)
    scheduled_date = serializers.DateField(required=False, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True, default='')


class VaccinationRecordUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=[c[0] for c in VaccinationRecord.STATUS_CHOICES], required=False)
    given_date = serializers.DateField(required=False, allow_null=True)
    scheduled_date = serializers.DateField(required=False, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True)


class DoseCompleteSerializer(serializers.Serializer):
    completed_date = serializers.DateField(required=False, allow_null=True)
    city = serializers.CharField(required=False, allow_blank=True, max_length=100)
    notes = serializers.CharField(required=False, allow_blank=True)
    image = serializers.CharField(required=False, allow_blank=True, max_length=255)


class ReminderCreateSerializer(serializers.Serializer):
    reminder_date = serializers.DateField()
    reminder_time = serializers.TimeField(required=False, allow_null=True)
    title = serializers.CharField(required=False, allow_blank=True, max_length=200)
    message = serializers.CharField(required=False, allow_blank=True, default='')
    frequency = serializers.ChoiceField(
        choices=[c[0] for c in VaccineReminder.FREQUENCY_CHOICES],
        default=VaccineReminder.FREQUENCY_ONCE,
    )


class ReminderUpdateSerializer(serializers.Serializer):
    reminder_date = serializers.DateField(required=False)
    reminder_time = serializers.TimeField(required=False)
    title = serializers.CharField(required=False, max_length=200)
    message = serializers.CharField(required=False, allow_blank=True)
    frequency = serializers.ChoiceField(choices=[c[0] for c in VaccineReminder.FREQUENCY_CHOICES], required=False)
    status = serializers.ChoiceField(choices=[c[0] for c in VaccineReminder.STATUS_CHOICES], required=False)


class PlannerStatusUpdateSerializer(serializers.Serializer):
    status = serializers.CharField()
    completed_date = serializers.DateField(required=False, allow_null=True)
    given_at = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=100)
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class PlannerReminderUpdateSerializer(serializers.Serializer):
    is_reminder = serializers.BooleanField(default=True)
    title = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=200)
    message = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    date = serializers.DateField(required=False, allow_null=True)
    time = serializers.TimeField(required=False, allow_null=True)


class PlannerReminderSerializer(serializers.Serializer):
    title = serializers.CharField()
    message = serializers.CharField()
    reminder_date = serializers.DateField(allow_null=True)
    reminder_time = serializers.CharField()


class PlannerEntrySerializer(serializers.Serializer):
    """Shape of a planner entry as returned by ``get_planner``."""

    planner_id = serializers.IntegerField()
    vaccine_id = serializers.IntegerField()
    vaccine_name = serializers.CharField()
    category = serializers.CharField(allow_blank=True)
    sub_category = serializers.CharField(allow_blank=True)
    status = serializers.ChoiceField(choices=[c[0] for c in PlannerEntry.STATUS_CHOICES])
    scheduled_date = serializers.DateField()
    days_from_today = serializers.IntegerField()
    priority = serializers.ChoiceField(choices=[c[0] for c in PlannerEntry.PRIORITY_CHOICES])
    dose = serializers.CharField(allow_blank=True)
    route = serializers.CharField(allow_blank=True)
    site = serializers.CharField(allow_blank=True)
    notes = serializers.CharField(allow_blank=True)
    completed_date = serializers.DateField(allow_null=True)
    given_at = serializers.CharField(allow_blank=True)
    reminder = PlannerReminderSerializer(allow_null=True)
