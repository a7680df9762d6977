"""
License repository port (interface).

This defines the contract for license persistence operations.
Implementations are in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Optional
import uuid

from licenses.domain.license import License


class LicenseRepository(ABC):
    """
    Abstract repository for License entities.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    """

    @abstractmethod
    async def add(self, license: License) -> License:
        """
        Persist a new license entity.

        Args:
            license: License entity to insert

        Returns:
            Stored license entity

        Raises:
            DuplicateLicenseKeyError: If the key is already taken
        """
        pass

    @abstractmethod
    async def update(self, license_id: uuid.UUID, changes: Dict[str, Any]) -> Optional[License]:
        """
        Write the given fields of an existing license.

        Only the named columns (plus the update time) are written, so a
        device binding made concurrently survives an edit of other fields.

        Args:
            license_id: License UUID
            changes: Field name to new value

        Returns:
            Updated License entity, or None if the record does not exist

        Raises:
            DuplicateLicenseKeyError: If the key is taken by another record
        """
        pass

    @abstractmethod
    async def find_by_id(self, license_id: uuid.UUID) -> Optional[License]:
        """
        Find a license by ID.

        Args:
            license_id: License UUID

        Returns:
            License entity or None if not found
        """
        pass

    @abstractmethod
    async def find_by_key(self, license_key: str) -> Optional[License]:
        """
        Find a license by its key.

        Args:
            license_key: License key string

        Returns:
            License entity or None if not found
        """
        pass

    @abstractmethod
    async def list_all(self) -> List[License]:
        """
        List every license, oldest first.

        Returns:
            List of License entities
        """
        pass

    @abstractmethod
    async def delete(self, license_id: uuid.UUID) -> bool:
        """
        Delete a license.

        Args:
            license_id: License UUID

        Returns:
            True if a record was removed, False if none existed
        """
        pass

    @abstractmethod
    async def bind_device(
        self, license_id: uuid.UUID, device_id: str, seen_at: datetime
    ) -> Optional[License]:
        """
        Bind a device only if the license is still unbound.

        The check and the write are a single conditional update, which
        also requires the license to still be active and unexpired.

        Args:
            license_id: License UUID
            device_id: Device claiming the license
            seen_at: Validation time recorded as last seen

        Returns:
            Updated License entity, or None if the record no longer qualifies
        """
        pass

    @abstractmethod
    async def touch_last_seen(
        self, license_id: uuid.UUID, device_id: str, seen_at: datetime
    ) -> Optional[License]:
        """
        Refresh last seen only if the license is still bound to the device
        and still active and unexpired.

        Args:
            license_id: License UUID
            device_id: Device that must hold the binding
            seen_at: Validation time

        Returns:
            Updated License entity, or None if the binding changed
        """
        pass

    @abstractmethod
    async def reset_device(self, license_id: uuid.UUID) -> Optional[License]:
        """
        Release the device binding, leaving every other field untouched.

        Args:
            license_id: License UUID

        Returns:
            Updated License entity or None if not found
        """
        pass
