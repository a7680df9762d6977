"""
CreateLicenseCommand.

Command to create a license record from the admin panel.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class CreateLicenseCommand:
    """Command to create a license; a key is generated when omitted."""

    email: Optional[str] = None
    license_key: Optional[str] = None
    mobile: Optional[str] = None
    telegram_id: Optional[str] = None
    amount: Optional[str] = None
