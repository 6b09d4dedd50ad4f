"""
Frequency Parser.

Turns a catalog vaccine into an ordered list of dose offsets (days after
birth). Single-dose vaccines are given at ``min_age_months * 30``. For the
rest, structured ``VaccineDoseOffset`` rows are the source of truth and the
free-text ``when_to_give`` description is only parsed when a vaccine has none.

Text heuristics, applied when ``total_doses > 1``:

- "birth"                        -> day 0
- "N week(s)"                    -> N * 7
- "N month(s)"                   -> N * 30  ("16-24 months" takes 16,
                                            "0, 1, and 6 months" yields 0, 1, 6)
- "N year(s)"                    -> N * 365

Doses the text does not account for are synthesized: +42 days while the
previous dose falls in the first year, +365 days afterwards.

The parser never fails; a wrong guess for exotic text is an accepted
approximation.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Sequence

from vaxi_backend.vaccines.services.dates import DAYS_PER_MONTH, DAYS_PER_YEAR

INFANT_INTERVAL_DAYS = 42
BOOSTER_INTERVAL_DAYS = 365

_RANGE = r'\d+(?:\s*(?:-|–|—|to)\s*\d+)?'
_SEPARATOR = r'\s*(?:,\s*(?:and|or)\b|,|\band\b|\bor\b|&)\s*'
_LIST = rf'(?P<values>{_RANGE}(?:{_SEPARATOR}{_RANGE})*)'

BIRTH_RE = re.compile(r'\bbirth\b', re.IGNORECASE)
SEPARATOR_RE = re.compile(_SEPARATOR, re.IGNORECASE)
FIRST_NUMBER_RE = re.compile(r'\d+')

# Scan order matters: offsets are collected birth, weeks, months, years.
UNIT_PATTERNS: tuple[tuple[re.Pattern, int], ...] = (
    (re.compile(rf'{_LIST}\s*weeks?\b', re.IGNORECASE), 7),
    (re.compile(rf'{_LIST}\s*months?\b', re.IGNORECASE), DAYS_PER_MONTH),
    (re.compile(rf'{_LIST}\s*years?\b', re.IGNORECASE), DAYS_PER_YEAR),
)


@dataclass(frozen=True)
class DoseOffset:
    dose_number: int
    min_age_days: int


def _list_values(values: str) -> list[int]:
    """'0, 1-3, and 9' -> [0, 1, 9]: every list item, ranges by their start."""
    numbers = []
    for item in SEPARATOR_RE.split(values):
        match = FIRST_NUMBER_RE.search(item)
        if match:
            numbers.append(int(match.group()))
    return numbers


def extract_text_offsets(text: str | None) -> list[int]:
    """Day offsets mentioned in ``text``, in scan order, without duplicates."""
    if not text:
        return []

    offsets: list[int] = []

    def _add(value: int) -> None:
        if value not in offsets:
            offsets.append(value)

    if BIRTH_RE.search(text):
        _add(0)

    for pattern, multiplier in UNIT_PATTERNS:
        for match in pattern.finditer(text):
            for number in _list_values(match.group('values')):
                _add(number * multiplier)

    return offsets


def next_synthesized_offset(previous: int) -> int:
    if previous < DAYS_PER_YEAR:
        return previous + INFANT_INTERVAL_DAYS
    return previous + BOOSTER_INTERVAL_DAYS


def _complete(offsets: list[int], total: int, start: int) -> list[DoseOffset]:
    """Pad ``offsets`` to ``total`` entries, sort and number them 1..N."""
    result = sorted(offsets[:total])
    if not result:
        result = [start]
    while len(result) < total:
        result.append(next_synthesized_offset(result[-1]))
    return [DoseOffset(dose_number=i, min_age_days=days) for i, days in enumerate(result, start=1)]


def parse_dose_offsets(vaccine, structured: Sequence | None = None) -> list[DoseOffset]:
    """Dose offsets for ``vaccine``; always exactly ``total_doses`` entries (1 if unset).

    A single-dose vaccine is always given at ``min_age_months * 30`` days.
    Otherwise ``structured`` (the vaccine's ``VaccineDoseOffset`` rows, or any
    objects with ``dose_number`` and ``min_age_days``) replaces text parsing
    when non-empty.
    """
    total_doses = vaccine.total_doses or 0
    base_offset = (vaccine.min_age_months or 0) * DAYS_PER_MONTH

    if total_doses <= 1:
        return [DoseOffset(dose_number=1, min_age_days=base_offset)]

    if structured:
        rows = sorted(structured, key=lambda row: (row.dose_number, row.min_age_days))
        return _complete([row.min_age_days for row in rows], total_doses, base_offset)

    offsets = extract_text_offsets(vaccine.when_to_give)
    if not offsets:
        offsets = [base_offset]
    return _complete(offsets, total_doses, base_offset)
