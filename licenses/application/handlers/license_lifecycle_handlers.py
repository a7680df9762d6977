"""
License lifecycle handlers.

Handlers for create, update, delete and reset-device commands.
Callers must already have passed the admin authorization gate.
"""
import logging

from core.domain.exceptions import LicenseNotFoundError
from core.metrics import license_mutations_total
from licenses.application.commands.create_license import CreateLicenseCommand
from licenses.application.commands.delete_license import DeleteLicenseCommand
from licenses.application.commands.reset_device import ResetDeviceCommand
from licenses.application.commands.update_license import UpdateLicenseCommand
from licenses.application.dto.license_dto import LicenseDTO, ResetDeviceResponseDTO
from licenses.domain.license import License
from licenses.domain.license_key import generate_license_key
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)


class CreateLicenseHandler:
    """Handler for CreateLicenseCommand."""

    def __init__(self, license_repository: LicenseRepository):
        """Initialize handler with repository."""
        self.license_repository = license_repository

    async def handle(self, command: CreateLicenseCommand) -> LicenseDTO:
        """
        Handle create license command.

        Args:
            command: CreateLicenseCommand

        Returns:
            Created LicenseDTO

        Raises:
            DuplicateLicenseKeyError: If the key already exists
        """
        license = License.create(
            license_key=command.license_key or generate_license_key(),
            email=command.email,
            mobile=command.mobile,
            telegram_id=command.telegram_id,
            amount=command.amount,
        )
        created = await self.license_repository.add(license)

        license_mutations_total.labels(operation="create").inc()
        logger.info("License %s created for %s", created.id, created.email)
        return LicenseDTO.from_entity(created)


class UpdateLicenseHandler:
    """Handler for UpdateLicenseCommand."""

    def __init__(self, license_repository: LicenseRepository):
        """Initialize handler with repository."""
        self.license_repository = license_repository

    async def handle(self, command: UpdateLicenseCommand) -> LicenseDTO:
        """
        Handle update license command.

        Only the provided fields are written; this is how termination,
        extension and manual device reassignment happen. Fields left out
        keep whatever the store holds, including a binding made while the
        admin was editing.

        Args:
            command: UpdateLicenseCommand

        Returns:
            Updated LicenseDTO

        Raises:
            LicenseNotFoundError: If license not found
            DuplicateLicenseKeyError: If the new key belongs to another record
        """
        updated = await self.license_repository.update(command.license_id, command.changes)
        if not updated:
            raise LicenseNotFoundError(f"License {command.license_id} not found")

        license_mutations_total.labels(operation="update").inc()
        logger.info(
            "License %s updated (%s)",
            updated.id,
            ", ".join(sorted(command.changes)) or "no fields",
        )
        return LicenseDTO.from_entity(updated)


class DeleteLicenseHandler:
    """Handler for DeleteLicenseCommand."""

    def __init__(self, license_repository: LicenseRepository):
        """Initialize handler with repository."""
        self.license_repository = license_repository

    async def handle(self, command: DeleteLicenseCommand) -> None:
        """
        Handle delete license command.

        Args:
            command: DeleteLicenseCommand

        Raises:
            LicenseNotFoundError: If license not found, including a repeat delete
        """
        deleted = await self.license_repository.delete(command.license_id)
        if not deleted:
            raise LicenseNotFoundError(f"License {command.license_id} not found")

        license_mutations_total.labels(operation="delete").inc()
        logger.info("License %s deleted", command.license_id)


class ResetDeviceHandler:
    """Handler for ResetDeviceCommand."""

    def __init__(self, license_repository: LicenseRepository):
        """Initialize handler with repository."""
        self.license_repository = license_repository

    async def handle(self, command: ResetDeviceCommand) -> ResetDeviceResponseDTO:
        """
        Handle reset device command.

        Args:
            command: ResetDeviceCommand

        Returns:
            ResetDeviceResponseDTO with the released record

        Raises:
            LicenseNotFoundError: If license not found
        """
        license = await self.license_repository.reset_device(command.license_id)
        if not license:
            raise LicenseNotFoundError(f"License {command.license_id} not found")

        license_mutations_total.labels(operation="reset_device").inc()
        logger.info("Device binding reset for license %s", license.id)
        return ResetDeviceResponseDTO(
            message="Device ID reset successfully.",
            user=LicenseDTO.from_entity(license),
        )
