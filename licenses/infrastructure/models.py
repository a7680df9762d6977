"""
License Django ORM model.

This is the infrastructure layer model for licenses.
Domain entities are in licenses.domain.license.
"""
import uuid

from django.db import models


class License(models.Model):
    """
    A license key bound to at most one client device.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    license_key = models.CharField(max_length=100, unique=True, db_index=True)
    email = models.CharField(max_length=255, help_text="Owner label, not unique")
    expiry_date = models.DateTimeField()
    is_active = models.BooleanField(default=True)
    device_id = models.CharField(
        max_length=255,
        null=True,
        blank=True,
        help_text="Device bound on first successful validation",
    )
    last_seen = models.DateTimeField(null=True, blank=True)
    mobile = models.CharField(max_length=32, null=True, blank=True)
    telegram_id = models.CharField(max_length=64, null=True, blank=True)
    amount = models.CharField(max_length=32, null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "licenses"
        ordering = ["created_at"]
        indexes = [
            models.Index(fields=["email"], name="licenses_email_idx"),
            models.Index(fields=["is_active", "expiry_date"], name="licenses_active_expiry_idx"),
        ]

    def __str__(self):
        return f"{self.license_key} ({self.email})"
