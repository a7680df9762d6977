"""
Serializers for client-facing endpoints.
"""

from rest_framework import serializers


class ValidateLicenseRequestSerializer(serializers.Serializer):
    """Serializer for validate license request."""

    licenseKey = serializers.CharField(
        source="license_key", required=False, allow_blank=True, allow_null=True
    )
    deviceId = serializers.CharField(
        source="device_id", required=False, allow_blank=True, allow_null=True
    )


class ValidateLicenseResponseSerializer(serializers.Serializer):
    """Serializer for validate license response."""

    valid = serializers.BooleanField()
    user = serializers.CharField(required=False)
    code = serializers.CharField(required=False)
    message = serializers.CharField()


class AdminLoginRequestSerializer(serializers.Serializer):
    """Serializer for admin login request."""

    password = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, trim_whitespace=False
    )


class AdminLoginResponseSerializer(serializers.Serializer):
    """Serializer for admin login response."""

    success = serializers.BooleanField()
    message = serializers.CharField(required=False)
