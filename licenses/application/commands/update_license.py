"""
UpdateLicenseCommand.

Command to write admin-supplied fields of an existing license.
"""
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass
class UpdateLicenseCommand:
    """Command to update a license with already validated fields."""

    license_id: uuid.UUID
    changes: Dict[str, Any] = field(default_factory=dict)
