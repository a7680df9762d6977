"""
ValidateLicenseCommand.

Command sent by a client asking whether its key is good on its device.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class ValidateLicenseCommand:
    """Command to validate a license key for a device."""

    license_key: Optional[str]
    device_id: Optional[str]
