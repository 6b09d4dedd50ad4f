"""Regeneration triggered by subject profile changes."""

from __future__ import annotations

import logging
from datetime import date

from vaxi_backend.vaccines.services.planner import generate_planner
from vaxi_backend.vaccines.services.schedule import generate_schedule

logger = logging.getLogger(__name__)


def regenerate_for_subject(subject_id: int, *, today: date | None = None) -> dict:
    """Rebuild schedule and planner after a subject's date of birth was set.

    Failures are logged and reported, never raised: a profile save must not
    fail because planning did.
    """
    outcome = {}
    for name, operation in (('schedule', generate_schedule), ('planner', generate_planner)):
        result = operation(subject_id, today=today)
        outcome[name] = result.success
        if not result.success:
            logger.warning('Failed to generate %s for subject %s: %s', name, subject_id, result.error)
    return outcome
