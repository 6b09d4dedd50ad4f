from datetime import date
from io import StringIO

from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import TestCase

from vaxi_backend.core.models import Role
from vaxi_backend.vaccines.catalog_data import VACCINE_CATALOG
from vaxi_backend.vaccines.models import DoseInstance, Vaccine, VaccineDoseOffset
from vaxi_backend.vaccines.tasks import synchronize_all_statuses_task
from vaxi_backend.vaccines.tests.mixins import VaccineTestMixin


class SeedCommandTest(TestCase):
    databases = {"default"}

    def test_seed_is_idempotent(self):
        call_command("seed", stdout=StringIO())
        call_command("seed", stdout=StringIO())

        self.assertEqual(Vaccine.objects.count(), len(VACCINE_CATALOG))
        self.assertEqual(set(Role.objects.values_list("name", flat=True)), {"admin", "clinician", "member"})
        hep_b = Vaccine.objects.get(name="Hepatitis B")
        self.assertEqual(
            list(VaccineDoseOffset.objects.filter(vaccine=hep_b).order_by("dose_number").values_list("min_age_days", flat=True)),
            [0, 42, 98],
        )

    def test_flush_rebuilds_catalog(self):
        call_command("seed", stdout=StringIO())
        Vaccine.objects.create(name="Local Extra", total_doses=1)

        call_command("seed", "--flush", stdout=StringIO())

        self.assertFalse(Vaccine.objects.filter(name="Local Extra").exists())
        self.assertEqual(Vaccine.objects.count(), len(VACCINE_CATALOG))


class SyncDoseStatusesTest(VaccineTestMixin, TestCase):
    databases = {"default"}

    def setUp(self):
        super().setUp()
        bcg = self.make_vaccine("BCG", when_to_give="At birth")
        self.dose = DoseInstance.objects.create(
            subject=self.subject, vaccine=bcg, dose_number=1, scheduled_date=date(2024, 1, 1),
            status=DoseInstance.STATUS_UPCOMING,
        )

    def test_command_with_date(self):
        out = StringIO()

        call_command("sync_dose_statuses", "--date", "2024-02-01", stdout=out)

        self.dose.refresh_from_db()
        self.assertEqual(self.dose.status, DoseInstance.STATUS_OVERDUE)
        self.assertIn("1 dose instances updated", out.getvalue())

    def test_command_rejects_bad_date(self):
        with self.assertRaises(CommandError):
            call_command("sync_dose_statuses", "--date", "01.02.2024", stdout=StringIO())

    def test_task_runs_synchronously(self):
        result = synchronize_all_statuses_task()

        self.assertEqual(result["updated_count"], 1)
        self.assertEqual(result["subject_count"], 1)
