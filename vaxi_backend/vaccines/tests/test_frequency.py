from types import SimpleNamespace

from django.test import SimpleTestCase

from vaxi_backend.vaccines.models import Vaccine
from vaxi_backend.vaccines.services.frequency import (
    DoseOffset,
    extract_text_offsets,
    parse_dose_offsets,
)


def offsets_as_days(offsets):
    return [offset.min_age_days for offset in offsets]


def _vaccine(total_doses=None, when_to_give="", min_age_months=0):
    return Vaccine(
        name="Test",
        total_doses=total_doses,
        when_to_give=when_to_give,
        min_age_months=min_age_months,
    )


class ExtractTextOffsetsTest(SimpleTestCase):
    def test_empty_text(self):
        self.assertEqual(extract_text_offsets(None), [])
        self.assertEqual(extract_text_offsets(""), [])

    def test_birth_and_weeks(self):
        self.assertEqual(extract_text_offsets("At birth, 6 weeks, 14 weeks"), [0, 42, 98])

    def test_month_list(self):
        self.assertEqual(extract_text_offsets("0, 1, and 6 months schedule"), [0, 30, 180])

    def test_week_list(self):
        self.assertEqual(extract_text_offsets("6, 10 and 14 weeks"), [42, 70, 98])

    def test_range_takes_first_number(self):
        self.assertEqual(extract_text_offsets("16-24 months"), [480])

    def test_scan_order_weeks_before_months_before_years(self):
        self.assertEqual(
            extract_text_offsets("2 years, 9 months, 6 weeks"),
            [42, 270, 730],
        )

    def test_duplicates_removed(self):
        self.assertEqual(
            extract_text_offsets("First dose at 9 years, second after 6 months, third after 6 months"),
            [180, 3285],
        )

    def test_text_without_counts(self):
        self.assertEqual(extract_text_offsets("First dose, second dose after the first"), [])


class ParseDoseOffsetsTest(SimpleTestCase):
    def test_single_dose_uses_min_age(self):
        offsets = parse_dose_offsets(_vaccine(total_doses=1, min_age_months=9, when_to_give="At 9 months"))
        self.assertEqual(offsets, [DoseOffset(dose_number=1, min_age_days=270)])

    def test_unset_total_is_single_dose(self):
        offsets = parse_dose_offsets(_vaccine(total_doses=None, min_age_months=2))
        self.assertEqual(offsets, [DoseOffset(dose_number=1, min_age_days=60)])

    def test_three_dose_month_list(self):
        offsets = parse_dose_offsets(_vaccine(total_doses=3, when_to_give="0, 1, and 6 months schedule"))
        self.assertEqual(offsets_as_days(offsets), [0, 30, 180])
        self.assertEqual([o.dose_number for o in offsets], [1, 2, 3])

    def test_extra_offsets_are_capped(self):
        offsets = parse_dose_offsets(
            _vaccine(total_doses=2, when_to_give="At birth, 6 weeks, 10 weeks and 14 weeks")
        )
        self.assertEqual(offsets_as_days(offsets), [0, 42])

    def test_missing_doses_synthesized_in_infancy(self):
        offsets = parse_dose_offsets(_vaccine(total_doses=3, when_to_give="At birth"))
        self.assertEqual(offsets_as_days(offsets), [0, 42, 84])

    def test_missing_doses_synthesized_after_first_year(self):
        offsets = parse_dose_offsets(_vaccine(total_doses=3, when_to_give="2 years"))
        self.assertEqual(offsets_as_days(offsets), [730, 1095, 1460])

    def test_synthesis_switches_interval_at_one_year(self):
        offsets = parse_dose_offsets(_vaccine(total_doses=4, when_to_give="10 months"))
        # 300 -> 342 -> 384 (>= 365 from here) -> 749
        self.assertEqual(offsets_as_days(offsets), [300, 342, 384, 749])

    def test_no_text_starts_from_min_age(self):
        offsets = parse_dose_offsets(_vaccine(total_doses=2, min_age_months=6))
        self.assertEqual(offsets_as_days(offsets), [180, 222])

    def test_unparseable_text_starts_from_min_age(self):
        offsets = parse_dose_offsets(
            _vaccine(total_doses=2, min_age_months=216, when_to_give="First dose, second dose after 28 days")
        )
        self.assertEqual(offsets_as_days(offsets), [6480, 6845])

    def test_offsets_sorted_and_numbered_contiguously(self):
        offsets = parse_dose_offsets(
            _vaccine(total_doses=3, when_to_give="First dose at 9 years, second after 6 months, third after 6 months")
        )
        self.assertEqual(offsets_as_days(offsets), [180, 3285, 3650])
        self.assertEqual([o.dose_number for o in offsets], [1, 2, 3])

    def test_structured_rows_win_over_text(self):
        rows = [
            SimpleNamespace(dose_number=2, min_age_days=60),
            SimpleNamespace(dose_number=1, min_age_days=0),
        ]
        offsets = parse_dose_offsets(_vaccine(total_doses=2, when_to_give="At birth, 6 weeks"), rows)
        self.assertEqual(offsets_as_days(offsets), [0, 60])

    def test_structured_rows_padded_to_total(self):
        rows = [SimpleNamespace(dose_number=1, min_age_days=400)]
        offsets = parse_dose_offsets(_vaccine(total_doses=2), rows)
        self.assertEqual(offsets_as_days(offsets), [400, 765])

    def test_length_always_matches_total(self):
        for text in ["", "At birth", "0, 1-3 months, and 9-12 months, booster every 3-5 years", "nonsense"]:
            offsets = parse_dose_offsets(_vaccine(total_doses=3, when_to_give=text))
            self.assertEqual(len(offsets), 3, text)

    def test_single_dose_ignores_structured_rows(self):
        rows = [SimpleNamespace(dose_number=1, min_age_days=400)]
        offsets = parse_dose_offsets(_vaccine(total_doses=1, min_age_months=9), rows)
        self.assertEqual(offsets_as_days(offsets), [270])
