"""
DeleteLicenseCommand.

Command to remove a license record.
"""
import uuid
from dataclasses import dataclass


@dataclass
class DeleteLicenseCommand:
    """Command to delete a license."""

    license_id: uuid.UUID
