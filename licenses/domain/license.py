"""
License domain entity.

This is the core domain entity representing a device-bound license.
It contains business logic and is independent of infrastructure.
"""
import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Optional

DEFAULT_OWNER_LABEL = "unassigned"
LICENSE_VALIDITY_YEARS = 1
MAX_LICENSE_KEY_LENGTH = 100
MAX_DEVICE_ID_LENGTH = 255


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def add_years(moment: datetime, years: int) -> datetime:
    """
    Shift a datetime by whole calendar years.

    29 February falls back to 28 February when the target year
    is not a leap year.
    """
    try:
        return moment.replace(year=moment.year + years)
    except ValueError:
        return moment.replace(year=moment.year + years, day=28)


@dataclass(frozen=True)
class License:
    """
    License domain entity.

    A license key bound to at most one client device.
    This is an immutable value object with business logic.
    """

    id: uuid.UUID
    license_key: str
    email: str
    expiry_date: datetime
    is_active: bool
    device_id: Optional[str]
    last_seen: Optional[datetime]
    created_at: datetime
    updated_at: datetime
    mobile: Optional[str] = None
    telegram_id: Optional[str] = None
    amount: Optional[str] = None

    def __post_init__(self):
        """Validate license entity."""
        if not self.license_key or len(self.license_key.strip()) == 0:
            raise ValueError("License key cannot be empty")
        if len(self.license_key) > MAX_LICENSE_KEY_LENGTH:
            raise ValueError("License key too long")
        if self.expiry_date is None:
            raise ValueError("Expiry date is required")

    @classmethod
    def create(
        cls,
        license_key: str,
        email: Optional[str] = None,
        mobile: Optional[str] = None,
        telegram_id: Optional[str] = None,
        amount: Optional[str] = None,
        license_id: Optional[uuid.UUID] = None,
        now: Optional[datetime] = None,
    ) -> "License":
        """
        Create a new License entity.

        The server owns everything but the key and contact fields:
        the license starts active, unbound, never seen, and expires
        one calendar year from creation.

        Args:
            license_key: Opaque license key
            email: Owner label (placeholder used when omitted)
            mobile: Optional contact number
            telegram_id: Optional messenger handle
            amount: Optional payment note
            license_id: Optional UUID (generated if not provided)
            now: Creation time (defaults to utc now)

        Returns:
            License entity instance
        """
        now = now or utc_now()
        return cls(
            id=license_id or uuid.uuid4(),
            license_key=license_key,
            email=email or DEFAULT_OWNER_LABEL,
            expiry_date=add_years(now, LICENSE_VALIDITY_YEARS),
            is_active=True,
            device_id=None,
            last_seen=None,
            created_at=now,
            updated_at=now,
            mobile=mobile,
            telegram_id=telegram_id,
            amount=amount,
        )

    @property
    def is_bound(self) -> bool:
        """True once a device has claimed this license."""
        return self.device_id is not None

    def is_expired(self, current_time: Optional[datetime] = None) -> bool:
        """
        Check whether the license is past its expiry date.

        Args:
            current_time: Current time (defaults to utc now)

        Returns:
            True if current time is strictly after expiry
        """
        check_time = current_time or utc_now()
        return check_time > self.expiry_date

    def is_bound_to_other(self, device_id: str) -> bool:
        """True if a different device already holds the binding."""
        return self.is_bound and self.device_id != device_id

    def reset_device(self) -> "License":
        """
        Create a new License instance with the device binding released.

        Returns:
            New License instance with no device
        """
        return replace(self, device_id=None, updated_at=utc_now())

    def apply_changes(self, **changes) -> "License":
        """
        Create a new License instance with the given fields overridden.

        The id and creation time never change.

        Returns:
            New License instance
        """
        changes.pop("id", None)
        changes.pop("created_at", None)
        return replace(self, updated_at=utc_now(), **changes)

    def is_in_good_standing(self, current_time: Optional[datetime] = None) -> bool:
        """Active and not expired, as counted by the admin statistics."""
        check_time = current_time or utc_now()
        return self.is_active and self.expiry_date >= check_time
