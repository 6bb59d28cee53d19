import os

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from registry.services.icd10 import import_outline_file


class Command(BaseCommand):
    help = "Import the tab-indented ICD-10 outline (idempotent upsert by code)."

    def add_arguments(self, parser):
        parser.add_argument('path', nargs='?', default=None,
                            help="Outline file (defaults to settings.ICD10_SOURCE_PATH)")

    def handle(self, *args, **opts):
        path = opts['path'] or settings.ICD10_SOURCE_PATH
        if not os.path.exists(path):
            self.stdout.write(self.style.WARNING(f"ICD-10 source not found at {path}, skipping import"))
            return
        try:
            summary = import_outline_file(path)
        except (OSError, UnicodeDecodeError) as e:
            raise CommandError(f"Cannot read {path}: {e}") from e
        self.stdout.write(self.style.SUCCESS(
            f"Imported {summary.imported} ICD-10 codes "
            f"({summary.created} created, {summary.updated} updated, {summary.skipped} skipped)"
        ))
        if summary.skipped:
            details = ', '.join(f"{k}={v}" for k, v in summary.as_dict().items() if k not in ('created', 'updated'))
            self.stdout.write(self.style.WARNING(f"Skipped lines: {details}"))
