from django.db import transaction

from .catalog_data import VACCINE_CATALOG
from .models import PlannerEntry, VaccinationRecord, Vaccine, VaccineDoseOffset


def seed_vaccines(flush: bool = False) -> dict:
    """
    Seeds the vaccine catalog and its structured dose offsets.

    Vaccines are matched by name, so running it twice updates in place.

    If flush=True:
        - deletes planner entries and vaccination records
        - deletes the whole catalog (dose instances cascade)
    """
    stats: dict[str, int] = {}

    with transaction.atomic():
        if flush:
            PlannerEntry.objects.all().delete()
            VaccinationRecord.objects.all().delete()
            Vaccine.objects.all().delete()

        created = 0
        offsets = 0
        for entry in VACCINE_CATALOG:
            values = {k: v for k, v in entry.items() if k not in ("name", "offsets")}
            vaccine, was_created = Vaccine.objects.update_or_create(name=entry["name"], defaults=values)
            created += int(was_created)

            for dose_number, min_age_days in enumerate(entry.get("offsets") or [], start=1):
                VaccineDoseOffset.objects.update_or_create(
                    vaccine=vaccine,
                    dose_number=dose_number,
                    defaults={"min_age_days": min_age_days},
                )
                offsets += 1

        stats["vaccines_catalog"] = len(VACCINE_CATALOG)
        stats["vaccines_created"] = created
        stats["vaccines_dose_offsets"] = offsets

    return stats
