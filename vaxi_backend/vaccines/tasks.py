import logging

from celery import shared_task

from vaxi_backend.vaccines.services import synchronize_all_statuses

logger = logging.getLogger(__name__)


@shared_task(name='vaxi_backend.vaccines.tasks.synchronize_all_statuses_task')
def synchronize_all_statuses_task():
    """Daily beat job: keep overdue/due_soon/upcoming current for every subject."""
    result = synchronize_all_statuses()
    if not result.success:
        logger.error('Daily status sync failed: %s', result.error.to_dict())
        return result.to_dict()
    return {'subject_count': result['subject_count'], 'updated_count': result['updated_count']}
