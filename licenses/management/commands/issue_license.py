"""
Django management command to issue a license from the command line.

Creates one license record, valid for a year, through the same handler
the admin API uses, and prints its key.
"""

import logging

from asgiref.sync import async_to_sync
from django.core.management.base import BaseCommand, CommandError

from core.domain.exceptions import DuplicateLicenseKeyError
from licenses.application.commands.create_license import CreateLicenseCommand
from licenses.application.handlers.license_lifecycle_handlers import CreateLicenseHandler
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    """Command to issue a license."""

    help = "Issue a new license (key generated unless --license-key is given)"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "--email",
            type=str,
            default=None,
            help="Owner label for the license (default: unassigned)",
        )
        parser.add_argument(
            "--license-key",
            type=str,
            default=None,
            help="Use this key instead of generating one",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        handler = CreateLicenseHandler(license_repository=DjangoLicenseRepository())
        command = CreateLicenseCommand(
            email=options["email"],
            license_key=options["license_key"],
        )
        try:
            license = async_to_sync(handler.handle)(command)
        except DuplicateLicenseKeyError as e:
            raise CommandError(e.message) from e

        # pylint: disable=no-member
        self.stdout.write(self.style.SUCCESS(f"Issued license: {license.license_key}"))
        self.stdout.write(
            f"Owner: {license.email} | Expires: {license.expiry_date.isoformat()}"
        )
