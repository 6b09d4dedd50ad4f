"""
Re-evaluate the status of every pending dose instance.

Usage:
    python manage.py sync_dose_statuses
    python manage.py sync_dose_statuses --date 2025-03-01

Same work as the daily Celery beat task, for deployments without a worker.
"""

from django.core.management.base import BaseCommand, CommandError

from vaxi_backend.vaccines.exceptions import ValidationError
from vaxi_backend.vaccines.services import dates, synchronize_all_statuses


class Command(BaseCommand):
    help = "Synchronize dose instance statuses against the current date"

    def add_arguments(self, parser):
        parser.add_argument("--date", type=str, default=None, help="Evaluate as of YYYY-MM-DD instead of today.")

    def handle(self, *args, **options):
        raw = options.get("date")
        try:
            as_of = dates.parse_date(raw, field="date")
        except ValidationError as e:
            raise CommandError(str(e))

        result = synchronize_all_statuses(today=as_of)
        if not result.success:
            raise CommandError(str(result.error))

        self.stdout.write(self.style.SUCCESS(
            f"{result['updated_count']} dose instances updated across {result['subject_count']} subjects"
        ))
