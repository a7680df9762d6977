"""
License domain services.

Domain services contain business logic that doesn't naturally
fit within a single entity.
"""
import logging
from datetime import datetime
from typing import Optional

from core.domain.exceptions import BindingConflictError
from core.domain.value_objects import RejectionReason, Verdict
from licenses.domain.license import MAX_DEVICE_ID_LENGTH, License, utc_now
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)

# Attempts at the conditional write before giving up on a record that
# keeps changing underneath the validation.
MAX_BINDING_ATTEMPTS = 3


class LicenseValidator:
    """Domain service for the ordered admission rules."""

    @staticmethod
    def check(
        license: Optional[License],
        device_id: str,
        current_time: datetime,
    ) -> Optional[Verdict]:
        """
        Apply the rejection rules in order.

        Args:
            license: License found for the key, or None
            device_id: Device asking for admission
            current_time: Time of the validation

        Returns:
            Rejecting Verdict, or None when the license may be used
        """
        if license is None:
            return Verdict.reject(RejectionReason.NOT_FOUND)
        # Termination wins over expiry.
        if not license.is_active:
            return Verdict.reject(RejectionReason.TERMINATED)
        if license.is_expired(current_time):
            return Verdict.reject(RejectionReason.EXPIRED)
        if license.is_bound_to_other(device_id):
            return Verdict.reject(RejectionReason.DEVICE_MISMATCH)
        return None


class DeviceBindingService:
    """Domain service validating keys and binding them to devices."""

    @staticmethod
    async def validate(
        license_key: Optional[str],
        device_id: Optional[str],
        repository: LicenseRepository,
        current_time: Optional[datetime] = None,
    ) -> Verdict:
        """
        Validate a license key for a device.

        Rejections never write; a device id too long to store is refused
        before any lookup. On acceptance an unbound license is
        bound to the device and last seen is refreshed, both through
        conditional updates; a lost update reloads the record and the
        rules run again.

        Args:
            license_key: Key presented by the client
            device_id: Device presenting the key
            repository: License repository
            current_time: Validation time (defaults to utc now)

        Returns:
            Verdict

        Raises:
            BindingConflictError: If the record keeps changing concurrently
        """
        if not license_key or not device_id:
            return Verdict.reject(RejectionReason.MISSING_INPUT)
        if len(device_id) > MAX_DEVICE_ID_LENGTH:
            return Verdict.reject(RejectionReason.INVALID_INPUT)

        now = current_time or utc_now()
        for _ in range(MAX_BINDING_ATTEMPTS):
            license = await repository.find_by_key(license_key)
            rejection = LicenseValidator.check(license, device_id, now)
            if rejection:
                return rejection

            if license.is_bound:
                updated = await repository.touch_last_seen(license.id, device_id, now)
            else:
                updated = await repository.bind_device(license.id, device_id, now)
                if updated:
                    logger.info(
                        "License %s... bound to device %s",
                        license_key[:8],
                        device_id,
                    )

            if updated:
                return Verdict.accept(updated.email, bound=not license.is_bound)

            logger.info(
                "License %s... changed during validation, re-checking",
                license_key[:8],
            )

        raise BindingConflictError()
