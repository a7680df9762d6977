"""
ResetDeviceCommand.

Command to release the device bound to a license.
"""
import uuid
from dataclasses import dataclass


@dataclass
class ResetDeviceCommand:
    """Command to clear a license's device binding."""

    license_id: uuid.UUID
