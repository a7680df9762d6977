"""
Django implementation of LicenseRepository port.

This adapter converts between domain entities and Django ORM models.
"""
import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

from asgiref.sync import sync_to_async
from django.db import IntegrityError, transaction
from django.utils import timezone

from core.domain.exceptions import DuplicateLicenseKeyError
from licenses.domain.license import License
from licenses.infrastructure.models import License as LicenseModel
from licenses.ports.license_repository import LicenseRepository

# Columns an admin may change through update().
EDITABLE_FIELDS = (
    "license_key",
    "email",
    "expiry_date",
    "is_active",
    "device_id",
    "last_seen",
    "mobile",
    "telegram_id",
    "amount",
)

# Columns written when a license is first stored.
STORED_FIELDS = EDITABLE_FIELDS + ("updated_at",)


class DjangoLicenseRepository(LicenseRepository):
    """
    Django ORM implementation of LicenseRepository.

    This adapter:
    1. Converts Django models to domain entities
    2. Converts domain entities to Django models
    3. Implements the conditional writes used for device binding
    """

    def _to_domain(self, model: LicenseModel) -> License:
        """
        Convert Django model to domain entity.

        Args:
            model: Django License model

        Returns:
            License domain entity
        """
        return License(
            id=model.id,
            license_key=model.license_key,
            email=model.email,
            expiry_date=model.expiry_date,
            is_active=model.is_active,
            device_id=model.device_id,
            last_seen=model.last_seen,
            created_at=model.created_at,
            updated_at=model.updated_at,
            mobile=model.mobile,
            telegram_id=model.telegram_id,
            amount=model.amount,
        )

    def _fields(self, license: License) -> dict:
        """Column values for a new license row."""
        return {field: getattr(license, field) for field in STORED_FIELDS}

    def _reload(self, license_id: uuid.UUID) -> Optional[License]:
        model = LicenseModel.objects.filter(id=license_id).first()
        return self._to_domain(model) if model else None

    def _usable(self, license_id: uuid.UUID, seen_at: datetime):
        """Rows a validation at seen_at may still write to."""
        return LicenseModel.objects.filter(
            id=license_id, is_active=True, expiry_date__gte=seen_at
        )

    @sync_to_async
    def add(self, license: License) -> License:
        """
        Persist a new license entity.

        Args:
            license: License entity to insert

        Returns:
            Stored license entity
        """
        if LicenseModel.objects.filter(license_key=license.license_key).exists():
            raise DuplicateLicenseKeyError()
        try:
            with transaction.atomic():
                model = LicenseModel.objects.create(id=license.id, **self._fields(license))
        except IntegrityError as e:
            # Lost a race against another create with the same key.
            raise DuplicateLicenseKeyError() from e
        return self._to_domain(model)

    @sync_to_async
    def update(self, license_id: uuid.UUID, changes: Dict[str, Any]) -> Optional[License]:
        """
        Write the given fields of an existing license.

        Args:
            license_id: License UUID
            changes: Field name to new value

        Returns:
            Updated License entity, or None if not found
        """
        columns = {field: value for field, value in changes.items() if field in EDITABLE_FIELDS}
        new_key = columns.get("license_key")
        if (
            new_key
            and LicenseModel.objects.filter(license_key=new_key).exclude(id=license_id).exists()
        ):
            raise DuplicateLicenseKeyError()
        try:
            with transaction.atomic():
                updated = LicenseModel.objects.filter(id=license_id).update(
                    updated_at=timezone.now(), **columns
                )
        except IntegrityError as e:
            raise DuplicateLicenseKeyError() from e
        if not updated:
            return None
        return self._reload(license_id)

    @sync_to_async
    def find_by_id(self, license_id: uuid.UUID) -> Optional[License]:
        """
        Find a license by ID.

        Args:
            license_id: License UUID

        Returns:
            License entity or None if not found
        """
        return self._reload(license_id)

    @sync_to_async
    def find_by_key(self, license_key: str) -> Optional[License]:
        """
        Find a license by its key.

        Args:
            license_key: License key string

        Returns:
            License entity or None if not found
        """
        model = LicenseModel.objects.filter(license_key=license_key).first()
        return self._to_domain(model) if model else None

    @sync_to_async
    def list_all(self) -> List[License]:
        """
        List every license, oldest first.

        Returns:
            List of License entities
        """
        return [
            self._to_domain(model)
            for model in LicenseModel.objects.order_by("created_at")
        ]

    @sync_to_async
    def delete(self, license_id: uuid.UUID) -> bool:
        """
        Delete a license.

        Args:
            license_id: License UUID

        Returns:
            True if a record was removed
        """
        deleted, _ = LicenseModel.objects.filter(id=license_id).delete()
        return deleted > 0

    @sync_to_async
    def bind_device(
        self, license_id: uuid.UUID, device_id: str, seen_at: datetime
    ) -> Optional[License]:
        """
        Bind a device only if the license is still unbound.

        Args:
            license_id: License UUID
            device_id: Device claiming the license
            seen_at: Validation time

        Returns:
            Updated License entity, or None if the record no longer qualifies
        """
        updated = self._usable(license_id, seen_at).filter(device_id__isnull=True).update(
            device_id=device_id, last_seen=seen_at, updated_at=seen_at
        )
        if not updated:
            return None
        return self._reload(license_id)

    @sync_to_async
    def touch_last_seen(
        self, license_id: uuid.UUID, device_id: str, seen_at: datetime
    ) -> Optional[License]:
        """
        Refresh last seen only if the license is still bound to the device.

        Args:
            license_id: License UUID
            device_id: Device that must hold the binding
            seen_at: Validation time

        Returns:
            Updated License entity, or None if the record no longer qualifies
        """
        updated = self._usable(license_id, seen_at).filter(device_id=device_id).update(
            last_seen=seen_at
        )
        if not updated:
            return None
        return self._reload(license_id)

    @sync_to_async
    def reset_device(self, license_id: uuid.UUID) -> Optional[License]:
        """
        Release the device binding.

        Args:
            license_id: License UUID

        Returns:
            Updated License entity or None if not found
        """
        updated = LicenseModel.objects.filter(id=license_id).update(
            device_id=None, updated_at=timezone.now()
        )
        if not updated:
            return None
        return self._reload(license_id)
