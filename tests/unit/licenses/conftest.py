"""
Fixtures for license unit tests.
"""

import asyncio
import dataclasses
from typing import Dict, List, Optional

import pytest

from core.domain.exceptions import DuplicateLicenseKeyError
from licenses.domain.license import License
from licenses.ports.license_repository import LicenseRepository


class InMemoryLicenseRepository(LicenseRepository):
    """
    LicenseRepository kept in a dict.

    find_by_key takes its snapshot before yielding to the event loop, so
    tasks run with asyncio.gather all read before any of them writes.
    """

    def __init__(self, licenses: Optional[List[License]] = None):
        self.records: Dict = {license.id: license for license in licenses or []}
        self.bind_calls = 0

    def _by_key(self, license_key: str) -> Optional[License]:
        for license in self.records.values():
            if license.license_key == license_key:
                return license
        return None

    async def add(self, license: License) -> License:
        if self._by_key(license.license_key):
            raise DuplicateLicenseKeyError()
        self.records[license.id] = license
        return license

    async def update(self, license_id, changes):
        owner = self._by_key(changes.get("license_key"))
        if owner and owner.id != license_id:
            raise DuplicateLicenseKeyError()
        current = self.records.get(license_id)
        if current is None:
            return None
        self.records[license_id] = current.apply_changes(**changes)
        return self.records[license_id]

    async def find_by_id(self, license_id):
        return self.records.get(license_id)

    async def find_by_key(self, license_key: str) -> Optional[License]:
        snapshot = self._by_key(license_key)
        await asyncio.sleep(0)
        return snapshot

    async def list_all(self) -> List[License]:
        return sorted(self.records.values(), key=lambda license: license.created_at)

    async def delete(self, license_id) -> bool:
        return self.records.pop(license_id, None) is not None

    def _usable(self, license_id, seen_at) -> Optional[License]:
        current = self.records.get(license_id)
        if current is None or not current.is_active or current.is_expired(seen_at):
            return None
        return current

    async def bind_device(self, license_id, device_id, seen_at):
        self.bind_calls += 1
        current = self._usable(license_id, seen_at)
        if current is None or current.device_id is not None:
            return None
        self.records[license_id] = dataclasses.replace(
            current, device_id=device_id, last_seen=seen_at
        )
        return self.records[license_id]

    async def touch_last_seen(self, license_id, device_id, seen_at):
        current = self._usable(license_id, seen_at)
        if current is None or current.device_id != device_id:
            return None
        self.records[license_id] = dataclasses.replace(current, last_seen=seen_at)
        return self.records[license_id]

    async def reset_device(self, license_id):
        current = self.records.get(license_id)
        if current is None:
            return None
        self.records[license_id] = current.reset_device()
        return self.records[license_id]


@pytest.fixture
def memory_repository():
    """Fixture for an empty in-memory repository."""
    return InMemoryLicenseRepository()


@pytest.fixture
def stored_license(memory_repository):
    """Fixture for an unbound license held by the in-memory repository."""
    license = License.create(license_key="KEY-MEM-0001", email="owner@example.com")
    memory_repository.records[license.id] = license
    return license
