from datetime import date, time

from django.test import SimpleTestCase, TestCase, override_settings

from vaxi_backend.subjects.models import Subject
from vaxi_backend.vaccines.exceptions import NotFoundError, ValidationError
from vaxi_backend.vaccines.models import PlannerEntry, VaccinationRecord, Vaccine
from vaxi_backend.vaccines.services.planner import (
    determine_priority,
    generate_planner,
    get_planner,
    reminder_message,
    update_planner_reminder,
    update_planner_status,
)
from vaxi_backend.vaccines.tests.mixins import VaccineTestMixin


TODAY = date(2025, 6, 1)


class PriorityTest(SimpleTestCase):
    def test_overdue_is_urgent(self):
        self.assertEqual(determine_priority("overdue", -3, "Optional"), "urgent")

    def test_mandatory_within_thirty_days_is_high(self):
        self.assertEqual(determine_priority("upcoming", 30, "Mandatory"), "high")

    def test_optional_within_thirty_days_is_medium(self):
        self.assertEqual(determine_priority("upcoming", 10, "Optional"), "medium")

    def test_within_ninety_days_is_medium(self):
        self.assertEqual(determine_priority("upcoming", 90, "Mandatory"), "medium")

    def test_far_future_is_low(self):
        self.assertEqual(determine_priority("upcoming", 91, "Mandatory"), "low")

    def test_other_status_is_medium(self):
        self.assertEqual(determine_priority("completed", 5, "Mandatory"), "medium")


class ReminderMessageTest(SimpleTestCase):
    def test_overdue(self):
        self.assertEqual(reminder_message("MMR", "overdue", -12), "URGENT: MMR is 12 days overdue")

    def test_due_within_a_week(self):
        self.assertEqual(reminder_message("MMR", "upcoming", 7), "REMINDER: MMR is due in 7 days")

    def test_due_within_a_month(self):
        self.assertEqual(reminder_message("MMR", "upcoming", 8), "MMR is due in 8 days")

    def test_scheduled_later(self):
        self.assertEqual(reminder_message("MMR", "upcoming", 31), "MMR is scheduled for 31 days from now")

    def test_other_status(self):
        self.assertEqual(reminder_message("MMR", "skipped", 31), "MMR vaccination reminder")


class RecurrenceTest(SimpleTestCase):
    def test_frequency_forms(self):
        cases = {
            "Annual": (True, None),
            "annually": (True, None),
            "Every 10 years": (False, 10),
            "every 5 Years": (False, 5),
            "Every 6 months": (False, None),
            "Once": (False, None),
            "": (False, None),
        }
        for frequency, (annual, interval) in cases.items():
            vaccine = Vaccine(name="Test", frequency=frequency)
            self.assertEqual(vaccine.is_annual, annual, frequency)
            self.assertEqual(vaccine.booster_interval_years, interval, frequency)
            self.assertEqual(vaccine.is_recurring, annual or interval is not None, frequency)


class GeneratePlannerTest(VaccineTestMixin, TestCase):
    """Subject born 2024-01-01 is 16 months old on 2025-06-01."""

    databases = {"default"}

    def _entries(self, vaccine):
        return list(PlannerEntry.objects.filter(subject=self.subject, vaccine=vaccine).order_by("scheduled_date"))

    def test_annual_after_due_date(self):
        flu = self.make_vaccine("Influenza", type=Vaccine.TYPE_OPTIONAL, min_age_months=6, frequency="Annual")

        result = generate_planner(self.subject.id, today=TODAY)

        self.assertTrue(result.success)
        this_year, next_year = self._entries(flu)

        self.assertEqual(this_year.scheduled_date, date(2025, 3, 15))
        self.assertEqual(this_year.status, PlannerEntry.STATUS_OVERDUE)
        self.assertEqual(this_year.priority, PlannerEntry.PRIORITY_URGENT)
        self.assertEqual(this_year.reminder_date, TODAY)
        self.assertEqual(this_year.reminder_time, time(9, 0))
        self.assertEqual(this_year.reminder_message, "URGENT: Influenza is 78 days overdue")
        self.assertEqual(this_year.reminder_title, "Influenza Reminder")

        self.assertEqual(next_year.scheduled_date, date(2026, 3, 15))
        self.assertEqual(next_year.status, PlannerEntry.STATUS_UPCOMING)
        self.assertEqual(next_year.priority, PlannerEntry.PRIORITY_LOW)
        self.assertEqual(next_year.reminder_date, date(2026, 3, 10))
        self.assertEqual(next_year.reminder_message, "Influenza is scheduled for 287 days from now")

    def test_annual_before_due_date(self):
        flu = self.make_vaccine("Influenza", min_age_months=6, frequency="Annual")

        generate_planner(self.subject.id, today=date(2025, 3, 1))

        this_year = self._entries(flu)[0]
        self.assertEqual(this_year.status, PlannerEntry.STATUS_UPCOMING)
        self.assertEqual(this_year.priority, PlannerEntry.PRIORITY_HIGH)
        self.assertEqual(this_year.reminder_message, "Influenza is due in 14 days")
        self.assertEqual(this_year.reminder_date, date(2025, 3, 10))

    def test_annual_on_due_date_is_upcoming(self):
        flu = self.make_vaccine("Influenza", min_age_months=6, frequency="Annual")

        generate_planner(self.subject.id, today=date(2025, 3, 15))

        this_year = self._entries(flu)[0]
        self.assertEqual(this_year.status, PlannerEntry.STATUS_UPCOMING)
        self.assertEqual(this_year.reminder_message, "REMINDER: Influenza is due in 0 days")

    @override_settings(VAXI_ANNUAL_DUE_MONTH=10, VAXI_ANNUAL_DUE_DAY=1)
    def test_annual_due_date_configurable(self):
        flu = self.make_vaccine("Influenza", min_age_months=6, frequency="Annual")

        generate_planner(self.subject.id, today=TODAY)

        self.assertEqual(
            [e.scheduled_date for e in self._entries(flu)],
            [date(2025, 10, 1), date(2026, 10, 1)],
        )

    def test_decennial_booster(self):
        adult = Subject.objects.create(
            owner=self.member, relation="spouse", full_name="Kiran Rao", date_of_birth=date(2005, 8, 1),
        )
        td = self.make_vaccine("Td", min_age_months=120, frequency="Every 10 years")

        generate_planner(adult.id, today=TODAY)

        entry = PlannerEntry.objects.get(subject=adult, vaccine=td)
        self.assertEqual(entry.scheduled_date, date(2025, 8, 1))
        self.assertEqual(entry.status, PlannerEntry.STATUS_UPCOMING)
        self.assertEqual(entry.priority, PlannerEntry.PRIORITY_MEDIUM)
        self.assertEqual(entry.reminder_date, date(2025, 7, 22))
        self.assertEqual(entry.reminder_time, time(10, 0))

    def test_decennial_booster_outside_lookahead_skipped(self):
        adult = Subject.objects.create(
            owner=self.member, relation="parent", full_name="Meera Rao", date_of_birth=date(2000, 1, 1),
        )
        self.make_vaccine("Td", min_age_months=120, frequency="Every 10 years")

        result = generate_planner(adult.id, today=TODAY)

        self.assertEqual(result["planned_count"], 0)

    def test_one_time_vaccine(self):
        penta = self.make_vaccine("Pentavalent", min_age_months=2)

        generate_planner(self.subject.id, today=TODAY)

        entry = self._entries(penta)[0]
        self.assertEqual(entry.scheduled_date, date(2024, 3, 1))
        self.assertEqual(entry.status, PlannerEntry.STATUS_OVERDUE)
        self.assertEqual(entry.priority, PlannerEntry.PRIORITY_URGENT)
        self.assertEqual(entry.reminder_date, TODAY)
        self.assertEqual(entry.reminder_message, "URGENT: Pentavalent is 457 days overdue")

    def test_age_window(self):
        self.make_vaccine("Too early", min_age_months=24)
        self.make_vaccine("Too late", min_age_months=0, max_age_months=12)
        in_window = self.make_vaccine("In window", min_age_months=12, max_age_months=16)

        generate_planner(self.subject.id, today=TODAY)

        self.assertEqual(
            list(PlannerEntry.objects.filter(subject=self.subject).values_list("vaccine_id", flat=True)),
            [in_window.id],
        )

    def test_completed_one_time_skipped_but_recurring_kept(self):
        penta = self.make_vaccine("Pentavalent", min_age_months=2)
        flu = self.make_vaccine("Influenza", min_age_months=6, frequency="Annual")
        for vaccine in (penta, flu):
            VaccinationRecord.objects.create(
                subject=self.subject, vaccine=vaccine, status=VaccinationRecord.STATUS_COMPLETED,
                given_date=date(2025, 1, 10),
            )

        generate_planner(self.subject.id, today=TODAY)

        self.assertEqual(self._entries(penta), [])
        self.assertEqual(len(self._entries(flu)), 2)

    def test_completed_lowercase_booster_still_planned(self):
        adult = Subject.objects.create(
            owner=self.member, relation="spouse", full_name="Kiran Rao", date_of_birth=date(2005, 8, 1),
        )
        td = self.make_vaccine("Td", min_age_months=120, frequency="every 10 years")
        flu = self.make_vaccine("Influenza", min_age_months=6, frequency="annually")
        for vaccine in (td, flu):
            VaccinationRecord.objects.create(
                subject=adult, vaccine=vaccine, status=VaccinationRecord.STATUS_COMPLETED,
                given_date=date(2015, 8, 1),
            )

        generate_planner(adult.id, today=TODAY)

        booster = PlannerEntry.objects.get(subject=adult, vaccine=td)
        self.assertEqual(booster.scheduled_date, date(2025, 8, 1))
        self.assertEqual(PlannerEntry.objects.filter(subject=adult, vaccine=flu).count(), 2)

    @override_settings(VAXI_ANNUAL_DUE_MONTH=2, VAXI_ANNUAL_DUE_DAY=29)
    def test_leap_day_due_date_falls_back_in_common_years(self):
        flu = self.make_vaccine("Influenza", min_age_months=6, frequency="Annual")

        result = generate_planner(self.subject.id, today=TODAY)

        self.assertTrue(result.success)
        self.assertEqual(
            [e.scheduled_date for e in self._entries(flu)],
            [date(2025, 2, 28), date(2026, 2, 28)],
        )

    @override_settings(VAXI_ANNUAL_DUE_MONTH=13)
    def test_impossible_due_date_setting(self):
        self.make_vaccine("Influenza", min_age_months=6, frequency="Annual")

        result = generate_planner(self.subject.id, today=TODAY)

        self.assertIsInstance(result.error, ValidationError)

    def test_regeneration_replaces_entries(self):
        self.make_vaccine("Influenza", min_age_months=6, frequency="Annual")
        generate_planner(self.subject.id, today=TODAY)
        entry = PlannerEntry.objects.filter(subject=self.subject).first()
        entry.notes = "temporary"
        entry.save()

        result = generate_planner(self.subject.id, today=TODAY)

        self.assertEqual(result["planned_count"], 2)
        self.assertEqual(PlannerEntry.objects.filter(subject=self.subject).count(), 2)
        self.assertFalse(PlannerEntry.objects.filter(notes="temporary").exists())

    def test_missing_birth_date(self):
        self.subject.date_of_birth = None
        self.subject.save()

        result = generate_planner(self.subject.id, today=TODAY)

        self.assertIsInstance(result.error, ValidationError)

    def test_unknown_subject(self):
        result = generate_planner(424242, today=TODAY)
        self.assertIsInstance(result.error, NotFoundError)


class GetPlannerTest(VaccineTestMixin, TestCase):
    databases = {"default"}

    def setUp(self):
        super().setUp()
        self.flu = self.make_vaccine("Influenza", min_age_months=6, frequency="Annual", notes="")
        self.penta = self.make_vaccine("Pentavalent", min_age_months=2, route="Intramuscular")
        generate_planner(self.subject.id, today=TODAY)

    def test_ordering_overdue_then_upcoming(self):
        planner = get_planner(self.subject.id, today=TODAY)["planner"]

        self.assertEqual(
            [(e["vaccine_name"], e["status"]) for e in planner],
            [
                ("Pentavalent", "overdue"),
                ("Influenza", "overdue"),
                ("Influenza", "upcoming"),
            ],
        )

    def test_completed_sorted_after_upcoming(self):
        entry = PlannerEntry.objects.get(subject=self.subject, vaccine=self.penta)
        update_planner_status(entry.id, PlannerEntry.STATUS_COMPLETED, today=TODAY)

        planner = get_planner(self.subject.id, today=TODAY)["planner"]

        self.assertEqual([e["status"] for e in planner], ["overdue", "upcoming", "completed"])

    def test_entry_payload(self):
        planner = get_planner(self.subject.id, today=TODAY)["planner"]
        penta = planner[0]

        self.assertEqual(penta["days_from_today"], -457)
        self.assertEqual(penta["route"], "Intramuscular")
        self.assertEqual(penta["notes"], "Pentavalent vaccination")
        self.assertEqual(penta["reminder"]["title"], "Pentavalent Reminder")
        self.assertEqual(penta["reminder"]["reminder_time"], "09:00")
        self.assertEqual(penta["reminder"]["reminder_date"], TODAY)

    def test_reminder_block_null_when_disabled(self):
        entry = PlannerEntry.objects.get(subject=self.subject, vaccine=self.penta)
        update_planner_reminder(self.subject.id, entry.id, is_reminder=False, today=TODAY)

        planner = get_planner(self.subject.id, today=TODAY)["planner"]

        self.assertIsNone(planner[0]["reminder"])


class UpdatePlannerTest(VaccineTestMixin, TestCase):
    databases = {"default"}

    def setUp(self):
        super().setUp()
        self.penta = self.make_vaccine("Pentavalent", min_age_months=2)
        generate_planner(self.subject.id, today=TODAY)
        self.entry = PlannerEntry.objects.get(subject=self.subject, vaccine=self.penta)

    def test_complete_records_vaccination(self):
        result = update_planner_status(
            self.entry.id, "completed", completed_date="2025-05-30", given_at="City Clinic", notes="no reaction",
            today=TODAY,
        )

        self.assertTrue(result.success)
        self.entry.refresh_from_db()
        self.assertEqual(self.entry.completed_date, date(2025, 5, 30))
        self.assertEqual(self.entry.given_at, "City Clinic")
        record = VaccinationRecord.objects.get(subject=self.subject, vaccine=self.penta)
        self.assertEqual(record.status, VaccinationRecord.STATUS_COMPLETED)
        self.assertEqual(record.given_date, date(2025, 5, 30))

        # a completed one-time vaccine drops out on the next run
        generate_planner(self.subject.id, today=TODAY)
        self.assertFalse(PlannerEntry.objects.filter(subject=self.subject, vaccine=self.penta).exists())

    def test_complete_defaults_to_today(self):
        update_planner_status(self.entry.id, "completed", today=TODAY)
        self.entry.refresh_from_db()
        self.assertEqual(self.entry.completed_date, TODAY)

    def test_skip_does_not_record(self):
        update_planner_status(self.entry.id, "skipped", today=TODAY)
        self.assertFalse(VaccinationRecord.objects.exists())

    def test_invalid_status(self):
        result = update_planner_status(self.entry.id, "done", today=TODAY)
        self.assertIsInstance(result.error, ValidationError)

    def test_unknown_entry(self):
        result = update_planner_status(987654, "skipped", today=TODAY)
        self.assertIsInstance(result.error, NotFoundError)

    def test_update_reminder(self):
        result = update_planner_reminder(
            self.subject.id,
            self.entry.id,
            title="Clinic visit",
            message="Bring the card",
            reminder_date="2025-06-05",
            reminder_time="08:30",
            today=TODAY,
        )

        self.assertTrue(result.success)
        reminder = result["entry"]["reminder"]
        self.assertEqual(reminder["title"], "Clinic visit")
        self.assertEqual(reminder["message"], "Bring the card")
        self.assertEqual(reminder["reminder_date"], date(2025, 6, 5))
        self.assertEqual(reminder["reminder_time"], "08:30")

    def test_update_reminder_falls_back_to_generated_text(self):
        result = update_planner_reminder(self.subject.id, self.entry.id, today=TODAY)

        reminder = result["entry"]["reminder"]
        self.assertEqual(reminder["title"], "Pentavalent Reminder")
        self.assertEqual(reminder["message"], "Pentavalent vaccine is overdue")
        self.assertEqual(reminder["reminder_time"], "09:00")

    def test_update_reminder_other_subject(self):
        other = Subject.objects.create(owner=self.member, relation="child", full_name="Ravi Rao")
        result = update_planner_reminder(other.id, self.entry.id, title="x", today=TODAY)
        self.assertIsInstance(result.error, NotFoundError)

    def test_update_reminder_bad_time(self):
        result = update_planner_reminder(self.subject.id, self.entry.id, reminder_time="8 o'clock", today=TODAY)
        self.assertIsInstance(result.error, ValidationError)
        self.assertEqual(result.error.field, "time")
