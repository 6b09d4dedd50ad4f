"""Vaccines App URLs.

Prefix: /api/
Routes:
    GET         /api/vaccines/                               - Vaccine catalog (?type=, ?age=)
    POST        /api/subjects/<subject_id>/schedule/generate/ - Generate dose schedule
    GET         /api/subjects/<subject_id>/schedule/          - List dose schedule
    POST        /api/subjects/<subject_id>/schedule/sync/     - Synchronize dose statuses
    POST        /api/subjects/<subject_id>/planner/generate/  - Generate planner
    GET         /api/subjects/<subject_id>/planner/           - Get planner
    GET/POST    /api/subjects/<subject_id>/records/           - Vaccination records (?status=)
    PATCH/DELETE /api/subjects/<subject_id>/records/<record_id>/ - Update/remove a vaccination record
    GET         /api/subjects/<subject_id>/reminders/         - Active reminders of a subject
    GET/PUT/DELETE /api/notification-permissions/            - Reminder channels of the caller
    POST        /api/doses/<pk>/complete/                     - Complete a dose
    POST        /api/doses/<pk>/reminders/                    - Add a reminder to a dose
    PUT/DELETE  /api/reminders/<pk>/                          - Update/cancel a reminder
    PATCH       /api/planner/<pk>/                            - Update planner entry status
    PATCH       /api/planner/<pk>/reminder/                   - Update planner entry reminder
"""

from django.urls import path

from vaxi_backend.vaccines.views import (
    DoseCompleteView,
    DoseReminderCreateView,
    NotificationPermissionView,
    PlannerGenerateView,
    PlannerListView,
    PlannerReminderUpdateView,
    PlannerStatusUpdateView,
    ReminderDetailView,
    ScheduleGenerateView,
    ScheduleListView,
    ScheduleSyncView,
    SubjectReminderListView,
    VaccinationRecordDetailView,
    VaccinationRecordListCreateView,
    VaccineListView,
)

app_name = 'vaccines'

urlpatterns = [
    path('vaccines/', VaccineListView.as_view(), name='catalog'),
    path('subjects/<int:subject_id>/schedule/generate/', ScheduleGenerateView.as_view(), name='schedule_generate'),
    path('subjects/<int:subject_id>/schedule/sync/', ScheduleSyncView.as_view(), name='schedule_sync'),
    path('subjects/<int:subject_id>/schedule/', ScheduleListView.as_view(), name='schedule'),
    path('subjects/<int:subject_id>/planner/generate/', PlannerGenerateView.as_view(), name='planner_generate'),
    path('subjects/<int:subject_id>/planner/', PlannerListView.as_view(), name='planner'),
    path('subjects/<int:subject_id>/records/', VaccinationRecordListCreateView.as_view(), name='records'),
    path('subjects/<int:subject_id>/records/<int:record_id>/', VaccinationRecordDetailView.as_view(), name='record_detail'),
    path('subjects/<int:subject_id>/reminders/', SubjectReminderListView.as_view(), name='subject_reminders'),
    path('doses/<int:pk>/complete/', DoseCompleteView.as_view(), name='dose_complete'),
    path('doses/<int:pk>/reminders/', DoseReminderCreateView.as_view(), name='dose_reminders'),
    path('reminders/<int:pk>/', ReminderDetailView.as_view(), name='reminder_detail'),
    path('notification-permissions/', NotificationPermissionView.as_view(), name='notification_permissions'),
    path('planner/<int:pk>/', PlannerStatusUpdateView.as_view(), name='planner_status'),
    path('planner/<int:pk>/reminder/', PlannerReminderUpdateView.as_view(), name='planner_reminder'),
]
