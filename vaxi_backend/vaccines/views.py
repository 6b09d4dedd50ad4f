from rest_framework import generics, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from vaxi_backend.core.utils import log_subject_action
from vaxi_backend.subjects.permissions import SubjectPermission
from vaxi_backend.subjects.providers import subjects_for_user
from vaxi_backend.vaccines.exceptions import NotFoundError, PersistenceError, ValidationError
from vaxi_backend.vaccines.models import DoseInstance, PlannerEntry, Vaccine, VaccineReminder
from vaxi_backend.vaccines.permissions import VaccineCatalogPermission
from vaxi_backend.vaccines.serializers import (
	DoseCompleteSerializer,
	DoseInstanceSerializer,
	NotificationPermissionSerializer,
	NotificationPermissionUpdateSerializer,
	PlannerEntrySerializer,
	PlannerReminderUpdateSerializer,
	PlannerStatusUpdateSerializer,
	ReminderCreateSerializer,
	ReminderUpdateSerializer,
	ScheduleGroupSerializer,
	SubjectReminderSerializer,
	VaccinationRecordCreateSerializer,
	VaccinationRecordSerializer,
	VaccinationRecordUpdateSerializer,
	VaccineReminderSerializer,
	VaccineSerializer,
)
from vaxi_backend.vaccines.services import (
	add_reminder,
	add_vaccination_record,
	complete_dose,
	delete_notification_permissions,
	delete_reminder,
	delete_vaccination_record,
	generate_planner,
	generate_schedule,
	get_notification_permissions,
	get_planner,
	has_any_notification_permission,
	list_schedule,
	list_subject_reminders,
	list_vaccination_records,
	synchronize_status,
	update_notification_permissions,
	update_planner_reminder,
	update_planner_status,
	update_reminder,
	update_vaccination_record,
)


def _error_response(result):
	"""Translate a failed ServiceResult into an HTTP response."""
	error = result.error
	if isinstance(error, ValidationError):
		code = status.HTTP_400_BAD_REQUEST
	elif isinstance(error, NotFoundError):
		code = status.HTTP_404_NOT_FOUND
	elif isinstance(error, PersistenceError):
		code = status.HTTP_500_INTERNAL_SERVER_ERROR
	else:
		code = status.HTTP_400_BAD_REQUEST
	return Response(error.to_dict(), status=code)


def _is_truthy(value) -> bool:
	return str(value or '').strip().lower() in ('1', 'true', 'yes')


class VaccineListView(generics.ListAPIView):
	"""
	Vaccine catalog.

	Query params:
	- type: exact vaccine type ("Mandatory", "Optional", ...)
	- age: age in months; only vaccines eligible at that age
	"""
	permission_classes = [VaccineCatalogPermission]
	serializer_class = VaccineSerializer

	def get_queryset(self):
		qs = Vaccine.objects.filter(is_active=True)
		vaccine_type = self.request.query_params.get('type')
		if vaccine_type:
			qs = qs.filter(type=vaccine_type)
		age = self.request.query_params.get('age')
		if age not in (None, ''):
			try:
				age_months = int(age)
			except (TypeError, ValueError):
				return qs.none()
			qs = qs.filter(min_age_months__lte=age_months).exclude(max_age_months__lt=age_months)
		return qs.order_by('min_age_months', 'name', 'id')


class _SubjectScopedView(generics.GenericAPIView):
	"""Resolves ``<subject_id>`` against the subjects visible to the caller."""
	permission_classes = [SubjectPermission]

	def get_subject(self):
		subject = subjects_for_user(self.request.user).filter(pk=self.kwargs['subject_id']).first()
		if subject is None:
			return None
		self.check_object_permissions(self.request, subject)
		return subject

	def subject_not_found(self):
		return Response({'detail': 'Subject not found', 'code': 'not_found'}, status=status.HTTP_404_NOT_FOUND)


class ScheduleGenerateView(_SubjectScopedView):
	def post(self, request, subject_id: int, *args, **kwargs):
		subject = self.get_subject()
		if subject is None:
			return self.subject_not_found()

		result = generate_schedule(subject.id)
		if not result.success:
			return _error_response(result)

		log_subject_action(request.user, 'schedule_generated', subject_id=subject.id, meta={'added': result['added_count']})
		return Response({'added_count': result['added_count']}, status=status.HTTP_200_OK)


class ScheduleListView(_SubjectScopedView):
	"""
	Dose schedule of a subject.

	Query params: status, vaccine_id, grouped=1
	"""

	def get(self, request, subject_id: int, *args, **kwargs):
		subject = self.get_subject()
		if subject is None:
			return self.subject_not_found()

		params = request.query_params
		vaccine_id = params.get('vaccine_id')
		if vaccine_id not in (None, ''):
			try:
				vaccine_id = int(vaccine_id)
			except (TypeError, ValueError):
				return Response({'detail': 'vaccine_id must be an integer.', 'code': 'validation_error', 'field': 'vaccine_id'},
								status=status.HTTP_400_BAD_REQUEST)
		else:
			vaccine_id = None
		grouped = _is_truthy(params.get('grouped'))

		result = list_schedule(subject.id, status=params.get('status') or None, vaccine_id=vaccine_id, grouped=grouped)
		if not result.success:
			return _error_response(result)

		context = {'request': request}
		if grouped:
			data = ScheduleGroupSerializer(result['schedule'], many=True, context=context).data
		else:
			data = DoseInstanceSerializer(result['schedule'], many=True, context=context).data
		return Response(data, status=status.HTTP_200_OK)


class ScheduleSyncView(_SubjectScopedView):
	def post(self, request, subject_id: int, *args, **kwargs):
		subject = self.get_subject()
		if subject is None:
			return self.subject_not_found()

		result = synchronize_status(subject.id)
		if not result.success:
			return _error_response(result)
		return Response({'updated_count': result['updated_count']}, status=status.HTTP_200_OK)


class PlannerGenerateView(_SubjectScopedView):
	def post(self, request, subject_id: int, *args, **kwargs):
		subject = self.get_subject()
		if subject is None:
			return self.subject_not_found()

		result = generate_planner(subject.id)
		if not result.success:
			return _error_response(result)

		log_subject_action(request.user, 'planner_generated', subject_id=subject.id, meta={'planned': result['planned_count']})
		return Response({'planned_count': result['planned_count']}, status=status.HTTP_200_OK)


class PlannerListView(_SubjectScopedView):
	def get(self, request, subject_id: int, *args, **kwargs):
		subject = self.get_subject()
		if subject is None:
			return self.subject_not_found()

		result = get_planner(subject.id)
		if not result.success:
			return _error_response(result)
		return Response(PlannerEntrySerializer(result['planner'], many=True).data, status=status.HTTP_200_OK)


class VaccinationRecordListCreateView(_SubjectScopedView):
	serializer_class = VaccinationRecordCreateSerializer

	def get(self, request, subject_id: int, *args, **kwargs):
		subject = self.get_subject()
		if subject is None:
			return self.subject_not_found()

		result = list_vaccination_records(subject.id, status=request.query_params.get('status') or None)
		if not result.success:
			return _error_response(result)
		return Response(VaccinationRecordSerializer(result['records'], many=True).data, status=status.HTTP_200_OK)

	def post(self, request, subject_id: int, *args, **kwargs):
		subject = self.get_subject()
		if subject is None:
			return self.subject_not_found()

		ser = self.get_serializer(data=request.data)
		ser.is_valid(raise_exception=True)
		data = ser.validated_data
		vaccine_id = data.pop('vaccine_id')

		result = add_vaccination_record(subject.id, vaccine_id, **data)
		if not result.success:
			return _error_response(result)

		record = result['record']
		log_subject_action(request.user, 'vaccination_record_added', subject_id=subject.id, meta={'vaccine_id': vaccine_id, 'status': record.status})
		return Response(VaccinationRecordSerializer(record).data, status=status.HTTP_201_CREATED)


class VaccinationRecordDetailView(_SubjectScopedView):
	serializer_class = VaccinationRecordUpdateSerializer

	def patch(self, request, subject_id: int, record_id: int, *args, **kwargs):
		subject = self.get_subject()
		if subject is None:
			return self.subject_not_found()

		ser = self.get_serializer(data=request.data, partial=True)
		ser.is_valid(raise_exception=True)

		result = update_vaccination_record(record_id, subject_id=subject.id, **ser.validated_data)
		if not result.success:
			return _error_response(result)

		record = result['record']
		log_subject_action(request.user, 'vaccination_record_updated', subject_id=subject.id, meta={'record_id': record.id, 'status': record.status})
		return Response(VaccinationRecordSerializer(record).data, status=status.HTTP_200_OK)

	def delete(self, request, subject_id: int, record_id: int, *args, **kwargs):
		subject = self.get_subject()
		if subject is None:
			return self.subject_not_found()

		result = delete_vaccination_record(record_id, subject_id=subject.id)
		if not result.success:
			return _error_response(result)

		log_subject_action(request.user, 'vaccination_record_deleted', subject_id=subject.id, meta={'record_id': record_id})
		return Response(status=status.HTTP_204_NO_CONTENT)


class SubjectReminderListView(_SubjectScopedView):
	"""Active reminders of every dose of a subject, plus whether the owner allows any channel."""

	def get(self, request, subject_id: int, *args, **kwargs):
		subject = self.get_subject()
		if subject is None:
			return self.subject_not_found()

		result = list_subject_reminders(subject.id)
		if not result.success:
			return _error_response(result)
		channels = has_any_notification_permission(subject.owner_id)
		if not channels.success:
			return _error_response(channels)

		return Response(
			{
				'notifications_enabled': channels['any_enabled'],
				'reminders': SubjectReminderSerializer(result['reminders'], many=True).data,
			},
			status=status.HTTP_200_OK,
		)


class _OwnedObjectView(generics.GenericAPIView):
	"""Object endpoints (dose, reminder, planner entry) restricted to visible subjects."""
	permission_classes = [SubjectPermission]
	subject_lookup = 'subject'

	def get_queryset(self):
		subjects = subjects_for_user(self.request.user)
		return self.model.objects.filter(**{f'{self.subject_lookup}__in': subjects, 'is_active': True})

	def get_owned_object(self):
		obj = self.get_queryset().filter(pk=self.kwargs['pk']).first()
		if obj is not None:
			self.check_object_permissions(self.request, obj)
		return obj

	def not_found(self):
		return Response({'detail': f'{self.model.__name__} not found', 'code': 'not_found'}, status=status.HTTP_404_NOT_FOUND)


class DoseCompleteView(_OwnedObjectView):
	model = DoseInstance
	serializer_class = DoseCompleteSerializer

	def post(self, request, pk: int, *args, **kwargs):
		dose = self.get_owned_object()
		if dose is None:
			return self.not_found()

		ser = self.get_serializer(data=request.data)
		ser.is_valid(raise_exception=True)

		result = complete_dose(dose.id, **ser.validated_data)
		if not result.success:
			return _error_response(result)

		dose = result['dose']
		log_subject_action(
			request.user,
			'dose_completed',
			subject_id=dose.subject_id,
			meta={'dose_id': dose.id, 'vaccine_id': dose.vaccine_id, 'vaccine_completed': result['vaccine_completed']},
		)
		return Response(DoseInstanceSerializer(dose, context={'request': request}).data, status=status.HTTP_200_OK)


class DoseReminderCreateView(_OwnedObjectView):
	model = DoseInstance
	serializer_class = ReminderCreateSerializer

	def post(self, request, pk: int, *args, **kwargs):
		dose = self.get_owned_object()
		if dose is None:
			return self.not_found()

		ser = self.get_serializer(data=request.data)
		ser.is_valid(raise_exception=True)

		result = add_reminder(dose.id, **ser.validated_data)
		if not result.success:
			return _error_response(result)
		return Response(VaccineReminderSerializer(result['reminder']).data, status=status.HTTP_201_CREATED)


class ReminderDetailView(_OwnedObjectView):
	model = VaccineReminder
	subject_lookup = 'dose__subject'
	serializer_class = ReminderUpdateSerializer

	def put(self, request, pk: int, *args, **kwargs):
		reminder = self.get_owned_object()
		if reminder is None:
			return self.not_found()

		ser = self.get_serializer(data=request.data, partial=True)
		ser.is_valid(raise_exception=True)

		result = update_reminder(reminder.id, **ser.validated_data)
		if not result.success:
			return _error_response(result)
		return Response(VaccineReminderSerializer(result['reminder']).data, status=status.HTTP_200_OK)

	def patch(self, request, *args, **kwargs):
		return self.put(request, *args, **kwargs)

	def delete(self, request, pk: int, *args, **kwargs):
		reminder = self.get_owned_object()
		if reminder is None:
			return self.not_found()

		result = delete_reminder(reminder.id)
		if not result.success:
			return _error_response(result)
		return Response(status=status.HTTP_204_NO_CONTENT)


class PlannerStatusUpdateView(_OwnedObjectView):
	model = PlannerEntry
	serializer_class = PlannerStatusUpdateSerializer

	def patch(self, request, pk: int, *args, **kwargs):
		entry = self.get_owned_object()
		if entry is None:
			return self.not_found()

		ser = self.get_serializer(data=request.data)
		ser.is_valid(raise_exception=True)
		data = ser.validated_data
		old_status = entry.status

		result = update_planner_status(
			entry.id,
			data['status'],
			completed_date=data.get('completed_date'),
			given_at=data.get('given_at'),
			notes=data.get('notes'),
		)
		if not result.success:
			return _error_response(result)

		log_subject_action(
			request.user,
			'planner_status_update',
			subject_id=entry.subject_id,
			meta={'planner_id': entry.id, 'from': old_status, 'to': data['status']},
		)
		return Response(PlannerEntrySerializer(result['entry']).data, status=status.HTTP_200_OK)


class PlannerReminderUpdateView(_OwnedObjectView):
	model = PlannerEntry
	serializer_class = PlannerReminderUpdateSerializer

	def patch(self, request, pk: int, *args, **kwargs):
		entry = self.get_owned_object()
		if entry is None:
			return self.not_found()

		ser = self.get_serializer(data=request.data)
		ser.is_valid(raise_exception=True)
		data = ser.validated_data

		result = update_planner_reminder(
			entry.subject_id,
			entry.id,
			is_reminder=data.get('is_reminder', True),
			title=data.get('title'),
			message=data.get('message'),
			reminder_date=data.get('date'),
			reminder_time=data.get('time'),
		)
		if not result.success:
			return _error_response(result)
		return Response(PlannerEntrySerializer(result['entry']).data, status=status.HTTP_200_OK)


class NotificationPermissionView(generics.GenericAPIView):
	"""
	Reminder channels of the signed-in account.

	GET creates the all-off defaults on first access; PUT/PATCH set any of
	notification, calendar, email; DELETE resets to the defaults.
	"""
	permission_classes = [IsAuthenticated]
	serializer_class = NotificationPermissionUpdateSerializer

	def get(self, request, *args, **kwargs):
		result = get_notification_permissions(request.user.id)
		if not result.success:
			return _error_response(result)
		return Response(NotificationPermissionSerializer(result['permissions']).data, status=status.HTTP_200_OK)

	def put(self, request, *args, **kwargs):
		ser = self.get_serializer(data=request.data)
		ser.is_valid(raise_exception=True)

		result = update_notification_permissions(request.user.id, **ser.validated_data)
		if not result.success:
			return _error_response(result)

		log_subject_action(request.user, 'notification_permissions_updated', meta=dict(ser.validated_data))
		return Response(NotificationPermissionSerializer(result['permissions']).data, status=status.HTTP_200_OK)

	def patch(self, request, *args, **kwargs):
		return self.put(request, *args, **kwargs)

	def delete(self, request, *args, **kwargs):
		result = delete_notification_permissions(request.user.id)
		if not result.success:
			return _error_response(result)
		return Response(status=status.HTTP_204_NO_CONTENT)
