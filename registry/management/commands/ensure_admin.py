from django.conf import settings
from django.contrib.auth.hashers import make_password
from django.core.management.base import BaseCommand

from registry.models import User

ADMIN_USERNAME = 'admin'


class Command(BaseCommand):
    help = "Ensure the admin account exists (idempotent, never resets the password)."

    def handle(self, *args, **opts):
        user, created = User.objects.get_or_create(
            username=ADMIN_USERNAME,
            defaults={
                'role': User.ROLE_ADMIN,
                'password': make_password(settings.DEFAULT_ADMIN_PASSWORD),
                'is_active': True,
            },
        )
        if created:
            self.stdout.write(self.style.SUCCESS(f"created: {ADMIN_USERNAME} ({User.ROLE_ADMIN})"))
            return
        # keep the password, only correct role and activation
        if user.role != User.ROLE_ADMIN or not user.is_active:
            user.role = User.ROLE_ADMIN
            user.is_active = True
            user.save(update_fields=['role', 'is_active'])
        self.stdout.write(self.style.SUCCESS(f"ok: {ADMIN_USERNAME} already exists"))
