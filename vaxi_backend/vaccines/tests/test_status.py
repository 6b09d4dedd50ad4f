from datetime import date, timedelta

from django.test import SimpleTestCase, TestCase, override_settings

from vaxi_backend.vaccines.exceptions import NotFoundError, ValidationError
from vaxi_backend.vaccines.models import DoseInstance
from vaxi_backend.vaccines.services.status import (
    calculate_status,
    synchronize_all_statuses,
    synchronize_status,
)
from vaxi_backend.vaccines.tests.mixins import VaccineTestMixin


TODAY = date(2025, 6, 1)


class CalculateStatusTest(SimpleTestCase):
    def test_past_date_is_overdue(self):
        self.assertEqual(calculate_status(TODAY - timedelta(days=1), TODAY), DoseInstance.STATUS_OVERDUE)

    def test_today_is_due_soon(self):
        self.assertEqual(calculate_status(TODAY, TODAY), DoseInstance.STATUS_DUE_SOON)

    def test_thirty_days_is_due_soon(self):
        self.assertEqual(calculate_status(TODAY + timedelta(days=30), TODAY), DoseInstance.STATUS_DUE_SOON)

    def test_thirty_one_days_is_upcoming(self):
        self.assertEqual(calculate_status(TODAY + timedelta(days=31), TODAY), DoseInstance.STATUS_UPCOMING)

    def test_first_dose_ten_days_late(self):
        # one-month vaccine for a subject born 40 days ago
        dob = TODAY - timedelta(days=40)
        self.assertEqual(calculate_status(dob + timedelta(days=30), TODAY), DoseInstance.STATUS_OVERDUE)

    def test_never_completed(self):
        for offset in range(-400, 400, 37):
            self.assertNotEqual(
                calculate_status(TODAY + timedelta(days=offset), TODAY),
                DoseInstance.STATUS_COMPLETED,
            )

    def test_missing_dates_rejected(self):
        with self.assertRaises(ValidationError):
            calculate_status(None, TODAY)

    @override_settings(VAXI_DUE_SOON_DAYS=7)
    def test_due_soon_window_is_configurable(self):
        self.assertEqual(calculate_status(TODAY + timedelta(days=8), TODAY), DoseInstance.STATUS_UPCOMING)


class SynchronizeStatusTest(VaccineTestMixin, TestCase):
    databases = {"default"}

    def setUp(self):
        super().setUp()
        self.vaccine = self.make_vaccine("Hepatitis B", total_doses=3)

    def _dose(self, dose_number, scheduled_date, status=DoseInstance.STATUS_UPCOMING, **extra):
        return DoseInstance.objects.create(
            subject=self.subject,
            vaccine=self.vaccine,
            dose_number=dose_number,
            scheduled_date=scheduled_date,
            status=status,
            **extra,
        )

    def test_updates_only_changed_rows(self):
        past = self._dose(1, TODAY - timedelta(days=5))
        soon = self._dose(2, TODAY + timedelta(days=10))
        later = self._dose(3, TODAY + timedelta(days=90))

        result = synchronize_status(self.subject.id, today=TODAY)

        self.assertTrue(result.success)
        self.assertEqual(result["updated_count"], 2)
        past.refresh_from_db()
        soon.refresh_from_db()
        later.refresh_from_db()
        self.assertEqual(past.status, DoseInstance.STATUS_OVERDUE)
        self.assertEqual(soon.status, DoseInstance.STATUS_DUE_SOON)
        self.assertEqual(later.status, DoseInstance.STATUS_UPCOMING)

    def test_second_run_changes_nothing(self):
        self._dose(1, TODAY - timedelta(days=5))
        synchronize_status(self.subject.id, today=TODAY)

        result = synchronize_status(self.subject.id, today=TODAY)
        self.assertEqual(result["updated_count"], 0)

    def test_completed_rows_untouched(self):
        done = self._dose(
            1,
            TODAY - timedelta(days=100),
            status=DoseInstance.STATUS_COMPLETED,
            completed_date=TODAY - timedelta(days=99),
        )

        result = synchronize_status(self.subject.id, today=TODAY)

        self.assertEqual(result["updated_count"], 0)
        done.refresh_from_db()
        self.assertEqual(done.status, DoseInstance.STATUS_COMPLETED)
        self.assertEqual(done.completed_date, TODAY - timedelta(days=99))

    def test_unknown_subject(self):
        result = synchronize_status(999999, today=TODAY)
        self.assertFalse(result.success)
        self.assertIsInstance(result.error, NotFoundError)

    def test_inactive_subject_not_found(self):
        self.subject.is_active = False
        self.subject.save()
        result = synchronize_status(self.subject.id, today=TODAY)
        self.assertIsInstance(result.error, NotFoundError)

    def test_synchronize_all_subjects(self):
        self._dose(1, TODAY - timedelta(days=1))
        other = self.subject.__class__.objects.create(
            owner=self.member, relation="child", full_name="Ravi Rao", date_of_birth=date(2025, 1, 1),
        )
        DoseInstance.objects.create(
            subject=other, vaccine=self.vaccine, dose_number=1, scheduled_date=TODAY + timedelta(days=3),
        )

        result = synchronize_all_statuses(today=TODAY)

        self.assertTrue(result.success)
        self.assertEqual(result["subject_count"], 2)
        self.assertEqual(result["updated_count"], 2)
