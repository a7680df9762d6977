"""
Integration tests for the management command and Django admin action.
"""

from io import StringIO

import pytest
from django.core.management import CommandError, call_command
from django.urls import reverse

from licenses.infrastructure.models import License


@pytest.mark.django_db
@pytest.mark.integration
class TestIssueLicenseCommand:
    """Tests for the issue_license management command."""

    def test_issue_with_generated_key(self):
        """Test a license is issued with a generated key."""
        out = StringIO()

        call_command("issue_license", "--email", "cli@example.com", stdout=out)

        license = License.objects.get()
        assert license.email == "cli@example.com"
        assert license.license_key.startswith("KEY-")
        assert license.license_key in out.getvalue()

    def test_issue_with_given_key(self):
        """Test the key can be supplied."""
        call_command("issue_license", "--license-key", "KEY-CLI-0001", stdout=StringIO())

        license = License.objects.get(license_key="KEY-CLI-0001")
        assert license.email == "unassigned"

    def test_issue_duplicate_key(self, db_license):
        """Test a taken key fails without creating anything."""
        with pytest.raises(CommandError, match="already exists"):
            call_command(
                "issue_license", "--license-key", db_license.license_key, stdout=StringIO()
            )

        assert License.objects.count() == 1


@pytest.mark.django_db
@pytest.mark.integration
class TestLicenseAdmin:
    """Tests for the Django admin registration."""

    def test_changelist(self, admin_client, db_license):
        """Test the license table renders."""
        response = admin_client.get(reverse("admin:licenses_license_changelist"))

        assert response.status_code == 200
        assert db_license.license_key in response.content.decode()

    def test_reset_device_action(self, admin_client, make_license):
        """Test the bulk action releases the selected bindings."""
        bound = make_license(license_key="KEY-BOUND-1", device_id="pc-1")
        other = make_license(license_key="KEY-BOUND-2", device_id="pc-2")

        response = admin_client.post(
            reverse("admin:licenses_license_changelist"),
            {"action": "reset_device_binding", "_selected_action": [str(bound.id)]},
        )

        assert response.status_code == 302
        assert License.objects.get(id=bound.id).device_id is None
        assert License.objects.get(id=other.id).device_id == "pc-2"
