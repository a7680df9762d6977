"""
Pytest configuration and shared fixtures.
"""

import dataclasses
from datetime import timedelta

import pytest
from asgiref.sync import async_to_sync
from django.apps import apps
from django.conf import settings

from licenses.domain.license import License, utc_now
from licenses.domain.license_key import generate_license_key
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository


@pytest.fixture
def license_repository():
    """Fixture for LicenseRepository."""
    return DjangoLicenseRepository()


@pytest.fixture
def sample_license():
    """Fixture for a sample License entity."""
    return License.create(license_key="KEY-SAMPLE-0001", email="owner@example.com")


@pytest.fixture
def make_license(db, license_repository):
    """
    Fixture for saving Licenses in the database.

    Keyword arguments override any entity field after creation, e.g.
    make_license(is_active=False) or make_license(device_id="pc-1").
    """

    def _make(license_key=None, email="owner@example.com", **overrides):
        license = License.create(license_key=license_key or generate_license_key(), email=email)
        if overrides:
            license = dataclasses.replace(license, **overrides)
        return async_to_sync(license_repository.add)(license)

    return _make


@pytest.fixture
def db_license(make_license):
    """Fixture for an unbound License saved in database."""
    return make_license(license_key="KEY-DB-0001")


@pytest.fixture
def expired_license(make_license):
    """Fixture for a License that expired yesterday."""
    return make_license(license_key="KEY-EXPIRED-01", expiry_date=utc_now() - timedelta(days=1))


@pytest.fixture
def api_client():
    """Fixture for DRF API client."""
    from rest_framework.test import APIClient

    return APIClient()


@pytest.fixture
def admin_headers():
    """Headers carrying the configured admin secret."""
    header = "HTTP_" + settings.ADMIN_SECRET_HEADER.upper().replace("-", "_")
    return {header: settings.LICENSE_ADMIN_SECRET}


@pytest.fixture(autouse=True)
def reset_login_throttle():
    """Start every test with an empty login throttle."""
    apps.get_app_config("core").login_throttle.reset()
    yield
    apps.get_app_config("core").login_throttle.reset()
