"""
ValidateLicenseHandler.

Handler for client validation requests.
"""

import logging

from core.metrics import device_bindings_total, license_validations_total
from licenses.application.commands.validate_license import ValidateLicenseCommand
from licenses.application.dto.license_dto import ValidationResultDTO
from licenses.domain.services import DeviceBindingService
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)


class ValidateLicenseHandler:
    """Handler for ValidateLicenseCommand."""

    def __init__(self, license_repository: LicenseRepository):
        """Initialize handler with repository."""
        self.license_repository = license_repository

    async def handle(self, command: ValidateLicenseCommand) -> ValidationResultDTO:
        """
        Handle validate license command.

        Args:
            command: ValidateLicenseCommand

        Returns:
            ValidationResultDTO carrying the verdict

        Raises:
            BindingConflictError: If the record keeps changing concurrently
        """
        verdict = await DeviceBindingService.validate(
            command.license_key,
            command.device_id,
            self.license_repository,
        )

        if verdict.accepted:
            license_validations_total.labels(outcome="accepted").inc()
            if verdict.bound:
                device_bindings_total.inc()
            return ValidationResultDTO(valid=True, message=verdict.message, user=verdict.owner)

        license_validations_total.labels(outcome=verdict.reason.value.lower()).inc()
        logger.info(
            "License validation rejected: %s (key %s...)",
            verdict.reason.value,
            (command.license_key or "")[:8],
        )
        return ValidationResultDTO(
            valid=False,
            message=verdict.message,
            code=verdict.reason.value,
        )
