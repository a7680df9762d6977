"""
License DTOs for API responses.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from licenses.domain.license import License


@dataclass
class LicenseDTO:
    """DTO for a license record as shown to administrators."""

    id: uuid.UUID
    license_key: str
    email: str
    expiry_date: datetime
    is_active: bool
    device_id: Optional[str]
    last_seen: Optional[datetime]
    mobile: Optional[str]
    telegram_id: Optional[str]
    amount: Optional[str]

    @classmethod
    def from_entity(cls, license: License) -> "LicenseDTO":
        """Build the DTO from a License entity."""
        return cls(
            id=license.id,
            license_key=license.license_key,
            email=license.email,
            expiry_date=license.expiry_date,
            is_active=license.is_active,
            device_id=license.device_id,
            last_seen=license.last_seen,
            mobile=license.mobile,
            telegram_id=license.telegram_id,
            amount=license.amount,
        )


@dataclass
class ValidationResultDTO:
    """DTO for validate license response."""

    valid: bool
    message: str
    user: Optional[str] = None
    code: Optional[str] = None


@dataclass
class ResetDeviceResponseDTO:
    """DTO for reset device response."""

    message: str
    user: LicenseDTO


@dataclass
class LicenseStatsDTO:
    """DTO for license counters."""

    total: int
    active: int
    expired: int
