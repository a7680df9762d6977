"""
Integration tests for the Django license repository.

Repository coroutines are driven through async_to_sync so the ORM runs
on the test thread, inside the test transaction.
"""

import dataclasses
import uuid
from datetime import timedelta

import pytest
from asgiref.sync import async_to_sync

from core.domain.exceptions import DuplicateLicenseKeyError
from licenses.application.commands.update_license import UpdateLicenseCommand
from licenses.application.handlers.license_lifecycle_handlers import UpdateLicenseHandler
from licenses.domain.license import License, utc_now
from licenses.infrastructure.models import License as LicenseModel
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository


@pytest.mark.django_db
@pytest.mark.integration
class TestDjangoLicenseRepository:
    """Integration tests for DjangoLicenseRepository."""

    def test_add_and_find(self, license_repository, sample_license):
        """Test saving and loading a license."""
        saved = async_to_sync(license_repository.add)(sample_license)

        by_id = async_to_sync(license_repository.find_by_id)(saved.id)
        by_key = async_to_sync(license_repository.find_by_key)(sample_license.license_key)

        assert by_id == by_key
        assert by_id.license_key == "KEY-SAMPLE-0001"
        assert by_id.email == "owner@example.com"
        assert by_id.is_active is True
        assert by_id.device_id is None
        assert by_id.expiry_date == sample_license.expiry_date

    def test_find_missing(self, license_repository):
        """Test missing records load as None."""
        assert async_to_sync(license_repository.find_by_id)(uuid.uuid4()) is None
        assert async_to_sync(license_repository.find_by_key)("KEY-NONE") is None

    def test_add_duplicate_key(self, license_repository, db_license):
        """Test a second record with the same key is refused."""
        duplicate = License.create(license_key=db_license.license_key, email="other@example.com")

        with pytest.raises(DuplicateLicenseKeyError):
            async_to_sync(license_repository.add)(duplicate)

        assert LicenseModel.objects.filter(license_key=db_license.license_key).count() == 1

    def test_update(self, license_repository, db_license):
        """Test writing some fields of a record."""
        updated = async_to_sync(license_repository.update)(
            db_license.id, {"email": "new@example.com", "is_active": False}
        )

        assert updated.email == "new@example.com"
        assert updated.is_active is False
        assert updated.license_key == db_license.license_key
        assert updated.created_at == db_license.created_at
        assert updated.updated_at >= db_license.updated_at

    def test_update_leaves_other_columns(self, license_repository, db_license):
        """Test a binding made after the record was read survives an edit."""
        seen = utc_now()
        async_to_sync(license_repository.bind_device)(db_license.id, "pc-client", seen)

        updated = async_to_sync(license_repository.update)(
            db_license.id, {"email": "edited@example.com"}
        )

        assert updated.email == "edited@example.com"
        assert updated.device_id == "pc-client"
        assert updated.last_seen == seen

    def test_update_ignores_unknown_fields(self, license_repository, db_license):
        """Test identity and bookkeeping columns cannot be overwritten."""
        updated = async_to_sync(license_repository.update)(
            db_license.id, {"id": uuid.uuid4(), "created_at": utc_now() - timedelta(days=99)}
        )

        assert updated.id == db_license.id
        assert updated.created_at == db_license.created_at

    def test_update_renaming_onto_taken_key(self, license_repository, make_license, db_license):
        """Test renaming onto another record's key is refused."""
        other = make_license(license_key="KEY-OTHER")

        with pytest.raises(DuplicateLicenseKeyError):
            async_to_sync(license_repository.update)(
                other.id, {"license_key": db_license.license_key}
            )

        assert LicenseModel.objects.get(id=other.id).license_key == "KEY-OTHER"

    def test_update_missing(self, license_repository, db):
        """Test updating a record that does not exist."""
        assert async_to_sync(license_repository.update)(uuid.uuid4(), {"email": "x"}) is None

    def test_list_all_oldest_first(self, license_repository, make_license):
        """Test listing order."""
        first = make_license(license_key="KEY-1")
        second = make_license(license_key="KEY-2")

        results = async_to_sync(license_repository.list_all)()

        assert [license.id for license in results] == [first.id, second.id]

    def test_delete(self, license_repository, db_license):
        """Test delete reports whether a record was removed."""
        assert async_to_sync(license_repository.delete)(db_license.id) is True
        assert async_to_sync(license_repository.delete)(db_license.id) is False

    def test_bind_device_once(self, license_repository, db_license):
        """Test only the first conditional bind lands."""
        now = utc_now()

        first = async_to_sync(license_repository.bind_device)(db_license.id, "pc-1", now)
        second = async_to_sync(license_repository.bind_device)(
            db_license.id, "pc-2", now + timedelta(seconds=1)
        )

        assert first.device_id == "pc-1"
        assert first.last_seen == now
        assert second is None
        assert LicenseModel.objects.get(id=db_license.id).device_id == "pc-1"

    def test_touch_last_seen(self, license_repository, make_license):
        """Test last seen only moves for the bound device."""
        license = make_license(license_key="KEY-BOUND", device_id="pc-1")
        later = utc_now() + timedelta(minutes=5)

        assert async_to_sync(license_repository.touch_last_seen)(license.id, "pc-2", later) is None
        touched = async_to_sync(license_repository.touch_last_seen)(license.id, "pc-1", later)

        assert touched.last_seen == later

    def test_bind_device_skips_terminated(self, license_repository, make_license):
        """Test a license terminated after it was read cannot be bound."""
        license = make_license(license_key="KEY-DEAD", is_active=False)

        assert async_to_sync(license_repository.bind_device)(license.id, "pc-1", utc_now()) is None
        assert LicenseModel.objects.get(id=license.id).device_id is None

    def test_bind_device_skips_expired(self, license_repository, expired_license):
        """Test an expired license cannot be bound."""
        bound = async_to_sync(license_repository.bind_device)(expired_license.id, "pc-1", utc_now())

        assert bound is None

    def test_touch_last_seen_skips_terminated(self, license_repository, make_license):
        """Test last seen is not refreshed once the license is terminated."""
        license = make_license(license_key="KEY-DEAD", device_id="pc-1", is_active=False)

        assert async_to_sync(license_repository.touch_last_seen)(license.id, "pc-1", utc_now()) is None
        assert LicenseModel.objects.get(id=license.id).last_seen is None

    def test_reset_device(self, license_repository, make_license):
        """Test the binding is released and nothing else changes."""
        seen = utc_now()
        license = make_license(license_key="KEY-BOUND", device_id="pc-1", last_seen=seen)

        released = async_to_sync(license_repository.reset_device)(license.id)

        assert released.device_id is None
        assert released.last_seen == seen
        assert async_to_sync(license_repository.reset_device)(uuid.uuid4()) is None

    def test_rebind_after_reset(self, license_repository, make_license):
        """Test a released license binds to the next device."""
        license = make_license(license_key="KEY-BOUND", device_id="pc-1")
        async_to_sync(license_repository.reset_device)(license.id)

        rebound = async_to_sync(license_repository.bind_device)(license.id, "pc-2", utc_now())

        assert rebound.device_id == "pc-2"

    def test_optional_contact_fields(self, license_repository):
        """Test mobile, messenger handle and amount round through storage."""
        license = dataclasses.replace(
            License.create(license_key="KEY-CONTACT"),
            mobile="+15550100",
            telegram_id="@owner",
            amount="49",
        )

        saved = async_to_sync(license_repository.add)(license)

        assert (saved.mobile, saved.telegram_id, saved.amount) == ("+15550100", "@owner", "49")


class BindingDuringEditRepository(DjangoLicenseRepository):
    """Repository where a client claims the license just before an admin write lands."""

    seen_at = None

    async def update(self, license_id, changes):
        self.seen_at = utc_now()
        await self.bind_device(license_id, "pc-client", self.seen_at)
        return await super().update(license_id, changes)


@pytest.mark.django_db
@pytest.mark.integration
class TestUpdateDuringValidation:
    """An admin edit racing a first-use validation."""

    def test_email_edit_keeps_binding(self, db_license):
        """Test an email-only edit leaves the fresh binding and last seen alone."""
        repository = BindingDuringEditRepository()
        handler = UpdateLicenseHandler(license_repository=repository)

        result = async_to_sync(handler.handle)(
            UpdateLicenseCommand(license_id=db_license.id, changes={"email": "edited@example.com"})
        )

        stored = LicenseModel.objects.get(id=db_license.id)
        assert result.email == "edited@example.com"
        assert stored.device_id == "pc-client"
        assert stored.last_seen == repository.seen_at

    def test_explicit_device_override_wins(self, db_license):
        """Test an edit that names the device still replaces the binding."""
        repository = BindingDuringEditRepository()
        handler = UpdateLicenseHandler(license_repository=repository)

        async_to_sync(handler.handle)(
            UpdateLicenseCommand(license_id=db_license.id, changes={"device_id": None})
        )

        assert LicenseModel.objects.get(id=db_license.id).device_id is None
