from django.core.management import call_command
from django.core.management.base import BaseCommand


class Command(BaseCommand):
    help = "Run ensure_admin, import_icd10 and seed_facilities in order."

    def handle(self, *args, **opts):
        for name in ('ensure_admin', 'import_icd10', 'seed_facilities'):
            self.stdout.write(f"== {name}")
            call_command(name, stdout=self.stdout, stderr=self.stderr)
        self.stdout.write(self.style.SUCCESS("Seeding complete."))
