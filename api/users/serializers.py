"""
Serializers for the admin license endpoints.

Field names are camelCase on the wire and map onto the snake_case
DTO and command attributes through source.
"""

from rest_framework import ISO_8601, serializers

DATETIME_INPUT_FORMATS = [ISO_8601, "%Y-%m-%d"]


class LicenseSerializer(serializers.Serializer):
    """Serializer for LicenseDTO."""

    id = serializers.UUIDField()
    licenseKey = serializers.CharField(source="license_key")
    email = serializers.CharField()
    expiryDate = serializers.DateTimeField(source="expiry_date")
    isActive = serializers.BooleanField(source="is_active")
    deviceId = serializers.CharField(source="device_id", allow_null=True)
    lastSeen = serializers.DateTimeField(source="last_seen", allow_null=True)
    mobile = serializers.CharField(allow_null=True)
    telegramId = serializers.CharField(source="telegram_id", allow_null=True)
    amount = serializers.CharField(allow_null=True)


class CreateLicenseRequestSerializer(serializers.Serializer):
    """Serializer for create license request."""

    email = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, max_length=255
    )
    licenseKey = serializers.CharField(
        source="license_key", required=False, allow_blank=True, allow_null=True, max_length=100
    )
    mobile = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, max_length=32
    )
    telegramId = serializers.CharField(
        source="telegram_id", required=False, allow_blank=True, allow_null=True, max_length=64
    )
    amount = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, max_length=32
    )


class UpdateLicenseRequestSerializer(serializers.Serializer):
    """
    Serializer for update license request.

    Every field is optional; id and unknown fields are ignored.
    """

    email = serializers.CharField(required=False, allow_blank=True, max_length=255)
    licenseKey = serializers.CharField(source="license_key", required=False, max_length=100)
    expiryDate = serializers.DateTimeField(
        source="expiry_date", required=False, input_formats=DATETIME_INPUT_FORMATS
    )
    isActive = serializers.BooleanField(source="is_active", required=False)
    deviceId = serializers.CharField(
        source="device_id", required=False, allow_blank=True, allow_null=True, max_length=255
    )
    lastSeen = serializers.DateTimeField(
        source="last_seen", required=False, allow_null=True, input_formats=DATETIME_INPUT_FORMATS
    )
    mobile = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, max_length=32
    )
    telegramId = serializers.CharField(
        source="telegram_id", required=False, allow_blank=True, allow_null=True, max_length=64
    )
    amount = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, max_length=32
    )

    def validate_deviceId(self, value):  # pylint: disable=invalid-name
        """An empty device id releases the binding."""
        return value or None


class ResetDeviceResponseSerializer(serializers.Serializer):
    """Serializer for reset device response."""

    message = serializers.CharField()
    user = LicenseSerializer()


class LicenseStatsSerializer(serializers.Serializer):
    """Serializer for LicenseStatsDTO."""

    total = serializers.IntegerField()
    active = serializers.IntegerField()
    expired = serializers.IntegerField()
