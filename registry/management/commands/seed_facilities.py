import os

from django.conf import settings
from django.core.management.base import BaseCommand

from registry.services.seeding import seed_from_csv


class Command(BaseCommand):
    help = "Seed districts, facility types, facilities and facility users from CSV reports."

    def add_arguments(self, parser):
        parser.add_argument('--facilities', default=None, help="Facilities CSV (settings.FACILITIES_CSV_PATH)")
        parser.add_argument('--users', default=None, help="Users CSV (settings.USERS_CSV_PATH)")

    def handle(self, *args, **opts):
        facilities_path = opts['facilities'] or settings.FACILITIES_CSV_PATH
        users_path = opts['users'] or settings.USERS_CSV_PATH
        for path in (facilities_path, users_path):
            if not os.path.exists(path):
                self.stderr.write(self.style.ERROR(f"CSV file not found: {path}"))
                return

        summary = seed_from_csv(facilities_path, users_path, settings.FACILITY_DEFAULT_PASSWORD)
        self.stdout.write(self.style.SUCCESS(
            f"Seeded {summary.districts} districts, {summary.facility_types} facility types, "
            f"{summary.facilities_created} new facilities and {summary.users} users"
        ))
        if summary.unmatched_users:
            self.stdout.write(self.style.WARNING(
                f"No facility matched: {', '.join(summary.unmatched_users)}"
            ))
