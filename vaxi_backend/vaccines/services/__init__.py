"""
Vaccine Engine Services.

This package contains the service-layer logic for the vaccines app:
- frequency: dosing text / structured offsets -> dose offsets from birth
- schedule: dated dose instances per subject (generate, list)
- status: status calculation and synchronization against the current date
- planner: vaccine-level planner with priorities and reminder text
- records: dose completion and vaccination records
- reminders: reminder metadata on dose instances
- notifications: per-account reminder channel permissions
- lifecycle: regeneration after a subject's date of birth changes

Every public operation returns a ``ServiceResult``.
"""

from vaxi_backend.vaccines.services.frequency import (
    DoseOffset,
    extract_text_offsets,
    parse_dose_offsets,
)
from vaxi_backend.vaccines.services.lifecycle import regenerate_for_subject
from vaxi_backend.vaccines.services.notifications import (
    delete_notification_permissions,
    get_notification_permissions,
    has_any_notification_permission,
    update_notification_permissions,
)
from vaxi_backend.vaccines.services.planner import (
    determine_priority,
    generate_planner,
    get_planner,
    reminder_message,
    update_planner_reminder,
    update_planner_status,
)
from vaxi_backend.vaccines.services.records import (
    add_vaccination_record,
    complete_dose,
    delete_vaccination_record,
    list_vaccination_records,
    update_vaccination_record,
)
from vaxi_backend.vaccines.services.reminders import (
    add_reminder,
    delete_reminder,
    list_subject_reminders,
    update_reminder,
)
from vaxi_backend.vaccines.services.results import ServiceResult
from vaxi_backend.vaccines.services.schedule import (
    generate_schedule,
    list_schedule,
)
from vaxi_backend.vaccines.services.status import (
    calculate_status,
    synchronize_all_statuses,
    synchronize_status,
)

__all__ = [
    # frequency
    'DoseOffset',
    'extract_text_offsets',
    'parse_dose_offsets',
    # schedule
    'generate_schedule',
    'list_schedule',
    # status
    'calculate_status',
    'synchronize_status',
    'synchronize_all_statuses',
    # planner
    'determine_priority',
    'reminder_message',
    'generate_planner',
    'get_planner',
    'update_planner_status',
    'update_planner_reminder',
    # lifecycle
    'regenerate_for_subject',
    # records
    'complete_dose',
    'add_vaccination_record',
    'update_vaccination_record',
    'delete_vaccination_record',
    'list_vaccination_records',
    # reminders
    'add_reminder',
    'update_reminder',
    'delete_reminder',
    'list_subject_reminders',
    # notifications
    'get_notification_permissions',
    'update_notification_permissions',
    'delete_notification_permissions',
    'has_any_notification_permission',
    # results
    'ServiceResult',
]
