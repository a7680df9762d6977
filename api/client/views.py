"""
Client API views.

These endpoints are used by the desktop client to:
- Validate a license key on a device (binding it on first use)
- Check the admin password before opening the admin panel
"""

import logging
import math

from asgiref.sync import async_to_sync
from django.apps import apps
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.exceptions import ParseError
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.client.serializers import (
    AdminLoginRequestSerializer,
    AdminLoginResponseSerializer,
    ValidateLicenseRequestSerializer,
    ValidateLicenseResponseSerializer,
)
from core.domain.value_objects import RejectionReason
from core.instrumentation import Status, StatusCode, get_tracer
from core.metrics import admin_login_attempts_total
from licenses.application.commands.validate_license import ValidateLicenseCommand
from licenses.application.handlers.validate_license_handler import ValidateLicenseHandler
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository

logger = logging.getLogger(__name__)

# Initialize repositories (in production, use DI container)
_license_repo = DjangoLicenseRepository()

tracer = get_tracer(__name__)

_REJECTION_STATUS = {
    RejectionReason.MISSING_INPUT.value: status.HTTP_400_BAD_REQUEST,
    RejectionReason.INVALID_INPUT.value: status.HTTP_400_BAD_REQUEST,
    RejectionReason.NOT_FOUND.value: status.HTTP_404_NOT_FOUND,
    RejectionReason.TERMINATED.value: status.HTTP_403_FORBIDDEN,
    RejectionReason.EXPIRED.value: status.HTTP_403_FORBIDDEN,
    RejectionReason.DEVICE_MISMATCH.value: status.HTTP_403_FORBIDDEN,
}


def _payload(request: Request):
    """Request body, or an empty one when it cannot be parsed."""
    try:
        return request.data
    except ParseError:
        logger.info("Unparseable body on %s", request.path)
        return {}


class ValidateLicenseView(APIView):
    """View for validating a license key on a device."""

    @extend_schema(
        operation_id="validate_license",
        summary="Validate License",
        description=(
            "Check a license key for a device. The first successful validation "
            "binds the license to the device; later validations from the same "
            "device refresh its last seen time."
        ),
        tags=["Client API"],
        request=ValidateLicenseRequestSerializer,
        responses={
            200: ValidateLicenseResponseSerializer,
            400: ValidateLicenseResponseSerializer,
            403: ValidateLicenseResponseSerializer,
            404: ValidateLicenseResponseSerializer,
        },
    )
    def post(self, request: Request) -> Response:
        """Validate a license key for a device."""
        return async_to_sync(self._handle_validate_license)(request)

    async def _handle_validate_license(self, request: Request) -> Response:
        """Async handler for validate license."""
        with tracer.start_as_current_span("validate_license") as span:
            span.set_attribute("operation", "validate_license")

            serializer = ValidateLicenseRequestSerializer(data=_payload(request))
            if serializer.is_valid():
                license_key = serializer.validated_data.get("license_key")
                device_id = serializer.validated_data.get("device_id")
            else:
                # Non-string values count as missing input.
                license_key = device_id = None

            if license_key:
                span.set_attribute("license_key.prefix", license_key[:8])

            handler = ValidateLicenseHandler(license_repository=_license_repo)
            result = await handler.handle(
                ValidateLicenseCommand(license_key=license_key, device_id=device_id)
            )

            if result.valid:
                span.set_attribute("outcome", "accepted")
                span.set_status(Status(StatusCode.OK))
                return Response(
                    {"valid": True, "user": result.user, "message": result.message},
                    status=status.HTTP_200_OK,
                )

            span.set_attribute("outcome", result.code)
            return Response(
                {"valid": False, "code": result.code, "message": result.message},
                status=_REJECTION_STATUS[result.code],
            )


class AdminLoginView(APIView):
    """View for checking the admin password."""

    # Overridable through as_view(gate=..., throttle=...).
    gate = None
    throttle = None

    def get_gate(self):
        """Admin gate built at startup unless one was injected."""
        if self.gate is not None:
            return self.gate
        return apps.get_app_config("core").admin_gate

    def get_throttle(self):
        """Login throttle built at startup unless one was injected."""
        if self.throttle is not None:
            return self.throttle
        return apps.get_app_config("core").login_throttle

    @extend_schema(
        operation_id="admin_login",
        summary="Admin Login",
        description=(
            "Check the admin password. Attempts are limited per client address; "
            "beyond the limit the response is 429 whether or not the password is right."
        ),
        tags=["Client API"],
        request=AdminLoginRequestSerializer,
        responses={
            200: AdminLoginResponseSerializer,
            429: AdminLoginResponseSerializer,
        },
    )
    def post(self, request: Request) -> Response:
        """Check the admin password."""
        with tracer.start_as_current_span("admin_login") as span:
            span.set_attribute("operation", "admin_login")

            gate = self.get_gate()
            throttle = self.get_throttle()
            identity = gate.client_identity(request)

            throttle.purge_expired()
            is_allowed, remaining, reset_time = throttle.hit(identity)
            headers = {
                "X-RateLimit-Limit": str(throttle.max_attempts),
                "X-RateLimit-Remaining": str(remaining),
                "X-RateLimit-Reset": str(reset_time),
            }

            if not is_allowed:
                retry_after = throttle.retry_after(identity)
                admin_login_attempts_total.labels(result="throttled").inc()
                logger.warning("Admin login throttled for %s", identity)
                span.set_attribute("result", "throttled")
                span.set_status(Status(StatusCode.ERROR, "Too many attempts"))
                headers["Retry-After"] = str(retry_after)
                minutes = math.ceil(throttle.window_seconds / 60)
                return Response(
                    {
                        "success": False,
                        "message": (
                            "Too many login attempts. Please try again after "
                            f"{minutes} minute{'s' if minutes != 1 else ''}."
                        ),
                    },
                    status=status.HTTP_429_TOO_MANY_REQUESTS,
                    headers=headers,
                )

            serializer = AdminLoginRequestSerializer(data=_payload(request))
            password = serializer.validated_data.get("password") if serializer.is_valid() else None
            success = gate.is_valid_secret(password)

            result = "success" if success else "failure"
            admin_login_attempts_total.labels(result=result).inc()
            span.set_attribute("result", result)
            if not success:
                logger.info("Admin login failed for %s (%s attempts left)", identity, remaining)

            return Response({"success": success}, status=status.HTTP_200_OK, headers=headers)
