"""
Django admin configuration for licenses app.
"""
from asgiref.sync import async_to_sync
from django.contrib import admin, messages
from django.utils import timezone
from django.utils.html import format_html

from licenses.application.commands.reset_device import ResetDeviceCommand
from licenses.application.handlers.license_lifecycle_handlers import ResetDeviceHandler
from licenses.infrastructure.models import License
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository


@admin.register(License)
class LicenseAdmin(admin.ModelAdmin):
    """Admin interface for License model."""

    list_display = [
        "license_key",
        "email",
        "status_display",
        "device_id",
        "last_seen",
        "expiry_date",
        "created_at",
    ]
    list_filter = ["is_active", "expiry_date", "created_at"]
    search_fields = ["license_key", "email", "device_id", "mobile", "telegram_id"]
    readonly_fields = ["id", "last_seen", "created_at", "updated_at"]
    actions = ["reset_device_binding"]
    fieldsets = (
        (
            "Basic Information",
            {
                "fields": ("id", "license_key", "email", "is_active", "expiry_date"),
            },
        ),
        (
            "Device",
            {
                "fields": ("device_id", "last_seen"),
            },
        ),
        (
            "Contact",
            {
                "fields": ("mobile", "telegram_id", "amount"),
            },
        ),
        (
            "Timestamps",
            {
                "fields": ("created_at", "updated_at"),
                "classes": ("collapse",),
            },
        ),
    )

    def status_display(self, obj):
        """Display status with color coding."""
        if not obj.is_active:
            color, label = "red", "TERMINATED"
        elif obj.expiry_date < timezone.now():
            color, label = "gray", "EXPIRED"
        else:
            color, label = "green", "ACTIVE"
        return format_html('<span style="color: {}; font-weight: bold;">{}</span>', color, label)

    status_display.short_description = "Status"

    @admin.action(description="Reset device binding")
    def reset_device_binding(self, request, queryset):
        """Release the device bound to each selected license."""
        handler = ResetDeviceHandler(license_repository=DjangoLicenseRepository())
        reset = 0
        for license_id in queryset.values_list("id", flat=True):
            async_to_sync(handler.handle)(ResetDeviceCommand(license_id=license_id))
            reset += 1
        self.message_user(request, f"Reset device binding on {reset} license(s).", messages.SUCCESS)
