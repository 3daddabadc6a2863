"""
Management command to create the default administrator.

Usage:
    python manage.py ensure_default_admin

Credentials come from the DEFAULT_ADMIN_EMAIL, DEFAULT_ADMIN_USERNAME and
DEFAULT_ADMIN_PASSWORD settings. Nothing happens if the email is taken.
"""

from django.core.management.base import BaseCommand

from apps.accounts.services import ensure_default_admin


class Command(BaseCommand):
    help = 'Create the default administrator account if it does not exist'

    def handle(self, *args, **options):
        user, created = ensure_default_admin()

        if created:
            self.stdout.write(self.style.SUCCESS(f'Created default administrator: {user.email}'))
        else:
            self.stdout.write(f'Administrator already exists: {user.email}')
