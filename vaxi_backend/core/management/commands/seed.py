"""
VaxiApp seed command: roles and the reference vaccine catalog.

Usage:
    python manage.py seed           # seed everything
    python manage.py seed --flush   # drop catalog, planner and records first
"""

from django.core.management.base import BaseCommand
from django.db import transaction

from vaxi_backend.core.seeders import seed_core
from vaxi_backend.vaccines.seeders import seed_vaccines


class Command(BaseCommand):
    help = "Seed database with roles and the vaccine catalog"

    def add_arguments(self, parser):
        parser.add_argument(
            "--flush",
            action="store_true",
            help="Delete the vaccine catalog and everything derived from it before seeding.",
        )

    def handle(self, *args, **options):
        flush = options.get("flush", False)

        self.stdout.write("=" * 80)
        self.stdout.write("  VaxiApp Seed")
        self.stdout.write("=" * 80)

        with transaction.atomic():
            stats = {}

            self.stdout.write("\n[1/2] Seeding Core (Roles)...")
            core_stats = seed_core(flush=flush)
            stats.update(core_stats)
            self._print_stats(core_stats)

            self.stdout.write("\n[2/2] Seeding Vaccines (Catalog, Dose Offsets)...")
            vaccine_stats = seed_vaccines(flush=flush)
            stats.update(vaccine_stats)
            self._print_stats(vaccine_stats)

        self.stdout.write("\n" + "=" * 80)
        self.stdout.write(self.style.SUCCESS("  Seeding finished"))
        self.stdout.write("=" * 80)

    def _print_stats(self, stats):
        for key, value in stats.items():
            self.stdout.write(f"  - {key}: {value}")
