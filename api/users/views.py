"""
Admin license API views.

These endpoints back the admin panel and are used to:
- List, create, update and delete license records
- Release the device bound to a license
- Read the license counters

Every request has already passed AdminSecretMiddleware.
"""

import uuid

from asgiref.sync import async_to_sync
from django.conf import settings
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.users.serializers import (
    CreateLicenseRequestSerializer,
    LicenseSerializer,
    LicenseStatsSerializer,
    ResetDeviceResponseSerializer,
    UpdateLicenseRequestSerializer,
)
from core.domain.exceptions import InvalidInputError, InvalidLicenseIdError, UnauthorizedError
from core.instrumentation import Status, StatusCode, get_tracer
from licenses.application.commands.create_license import CreateLicenseCommand
from licenses.application.commands.delete_license import DeleteLicenseCommand
from licenses.application.commands.reset_device import ResetDeviceCommand
from licenses.application.commands.update_license import UpdateLicenseCommand
from licenses.application.handlers.license_lifecycle_handlers import (
    CreateLicenseHandler,
    DeleteLicenseHandler,
    ResetDeviceHandler,
    UpdateLicenseHandler,
)
from licenses.application.handlers.list_licenses_handler import (
    LicenseStatsHandler,
    ListLicensesHandler,
)
from licenses.application.queries.license_stats import LicenseStatsQuery
from licenses.application.queries.list_licenses import ListLicensesQuery
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository

# Initialize repositories (in production, use DI container)
_license_repo = DjangoLicenseRepository()

tracer = get_tracer(__name__)

ADMIN_SECRET_PARAMETER = OpenApiParameter(
    name=settings.ADMIN_SECRET_HEADER,
    type=str,
    location=OpenApiParameter.HEADER,
    required=True,
    description="Shared admin secret",
)

LICENSE_ID_PARAMETER = OpenApiParameter(
    name="license_id",
    type=str,
    location=OpenApiParameter.PATH,
    description="License record id (UUID)",
)


def _require_admin(request: Request) -> None:
    """Refuse requests the admin middleware did not admit."""
    if not getattr(request, "is_admin", False):
        raise UnauthorizedError()


def _parse_license_id(raw: str) -> uuid.UUID:
    """
    Parse a license id from the URL.

    Raises:
        InvalidLicenseIdError: If the id is not a UUID
    """
    try:
        return uuid.UUID(raw)
    except ValueError as e:
        raise InvalidLicenseIdError(f"Invalid license id: {raw}") from e


def _validated(serializer) -> dict:
    """
    Run a request serializer.

    Raises:
        InvalidInputError: With the per-field errors
    """
    if not serializer.is_valid():
        raise InvalidInputError("Invalid input", fields=serializer.errors)
    return serializer.validated_data


class LicenseCollectionView(APIView):
    """View for listing and creating licenses."""

    @extend_schema(
        operation_id="list_licenses",
        summary="List Licenses",
        description="Return every license record, oldest first.",
        tags=["Admin API"],
        parameters=[ADMIN_SECRET_PARAMETER],
        responses={
            200: LicenseSerializer(many=True),
            401: {"description": "Unauthorized - Missing or incorrect admin password"},
        },
    )
    def get(self, request: Request) -> Response:
        """List all licenses."""
        _require_admin(request)
        return async_to_sync(self._handle_list_licenses)(request)

    async def _handle_list_licenses(self, request: Request) -> Response:
        """Async handler for list licenses."""
        with tracer.start_as_current_span("list_licenses") as span:
            span.set_attribute("operation", "list_licenses")

            handler = ListLicensesHandler(license_repository=_license_repo)
            results = await handler.handle(ListLicensesQuery())

            span.set_attribute("licenses.count", len(results))
            span.set_status(Status(StatusCode.OK))
            return Response(LicenseSerializer(results, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="create_license",
        summary="Create License",
        description=(
            "Create a license record valid for one year. A license key is "
            "generated when none is supplied."
        ),
        tags=["Admin API"],
        parameters=[ADMIN_SECRET_PARAMETER],
        request=CreateLicenseRequestSerializer,
        responses={
            201: LicenseSerializer,
            400: {"description": "Bad Request"},
            401: {"description": "Unauthorized - Missing or incorrect admin password"},
            409: {"description": "License key already exists"},
        },
    )
    def post(self, request: Request) -> Response:
        """Create a license."""
        _require_admin(request)
        return async_to_sync(self._handle_create_license)(request)

    async def _handle_create_license(self, request: Request) -> Response:
        """Async handler for create license."""
        with tracer.start_as_current_span("create_license") as span:
            span.set_attribute("operation", "create_license")

            data = _validated(CreateLicenseRequestSerializer(data=request.data))

            handler = CreateLicenseHandler(license_repository=_license_repo)
            command = CreateLicenseCommand(
                email=data.get("email"),
                license_key=data.get("license_key"),
                mobile=data.get("mobile"),
                telegram_id=data.get("telegram_id"),
                amount=data.get("amount"),
            )
            result = await handler.handle(command)

            span.set_attribute("license.id", str(result.id))
            span.set_status(Status(StatusCode.OK))
            return Response(LicenseSerializer(result).data, status=status.HTTP_201_CREATED)


class LicenseStatsView(APIView):
    """View for the license counters."""

    @extend_schema(
        operation_id="license_stats",
        summary="License Statistics",
        description="Count total, active and expired licenses.",
        tags=["Admin API"],
        parameters=[ADMIN_SECRET_PARAMETER],
        responses={
            200: LicenseStatsSerializer,
            401: {"description": "Unauthorized - Missing or incorrect admin password"},
        },
    )
    def get(self, request: Request) -> Response:
        """Return the license counters."""
        _require_admin(request)
        return async_to_sync(self._handle_license_stats)(request)

    async def _handle_license_stats(self, request: Request) -> Response:
        """Async handler for license stats."""
        with tracer.start_as_current_span("license_stats"):
            handler = LicenseStatsHandler(license_repository=_license_repo)
            result = await handler.handle(LicenseStatsQuery())
            return Response(LicenseStatsSerializer(result).data, status=status.HTTP_200_OK)


class LicenseDetailView(APIView):
    """View for updating and deleting one license."""

    @extend_schema(
        operation_id="update_license",
        summary="Update License",
        description=(
            "Merge the supplied fields over a license. This is how licenses are "
            "terminated, extended or reassigned to another device."
        ),
        tags=["Admin API"],
        parameters=[ADMIN_SECRET_PARAMETER, LICENSE_ID_PARAMETER],
        request=UpdateLicenseRequestSerializer,
        responses={
            200: LicenseSerializer,
            400: {"description": "Invalid id or field values"},
            401: {"description": "Unauthorized - Missing or incorrect admin password"},
            404: {"description": "License not found"},
            409: {"description": "License key already exists"},
        },
    )
    def put(self, request: Request, license_id: str) -> Response:
        """Update a license."""
        _require_admin(request)
        return async_to_sync(self._handle_update_license)(request, license_id)

    async def _handle_update_license(self, request: Request, license_id: str) -> Response:
        """Async handler for update license."""
        with tracer.start_as_current_span("update_license") as span:
            span.set_attribute("operation", "update_license")
            span.set_attribute("license.id", license_id)

            parsed_id = _parse_license_id(license_id)
            changes = dict(_validated(UpdateLicenseRequestSerializer(data=request.data)))
            span.set_attribute("fields", ",".join(sorted(changes)))

            handler = UpdateLicenseHandler(license_repository=_license_repo)
            result = await handler.handle(
                UpdateLicenseCommand(license_id=parsed_id, changes=changes)
            )

            span.set_status(Status(StatusCode.OK))
            return Response(LicenseSerializer(result).data, status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="delete_license",
        summary="Delete License",
        description="Delete a license record.",
        tags=["Admin API"],
        parameters=[ADMIN_SECRET_PARAMETER, LICENSE_ID_PARAMETER],
        responses={
            204: None,
            400: {"description": "Invalid license id"},
            401: {"description": "Unauthorized - Missing or incorrect admin password"},
            404: {"description": "License not found"},
        },
    )
    def delete(self, request: Request, license_id: str) -> Response:
        """Delete a license."""
        _require_admin(request)
        return async_to_sync(self._handle_delete_license)(request, license_id)

    async def _handle_delete_license(self, request: Request, license_id: str) -> Response:
        """Async handler for delete license."""
        with tracer.start_as_current_span("delete_license") as span:
            span.set_attribute("operation", "delete_license")
            span.set_attribute("license.id", license_id)

            handler = DeleteLicenseHandler(license_repository=_license_repo)
            await handler.handle(DeleteLicenseCommand(license_id=_parse_license_id(license_id)))

            span.set_status(Status(StatusCode.OK))
            return Response(status=status.HTTP_204_NO_CONTENT)


class ResetDeviceView(APIView):
    """View for releasing a license's device binding."""

    @extend_schema(
        operation_id="reset_device",
        summary="Reset Device",
        description=(
            "Clear the device bound to a license so the next device to "
            "validate it claims it."
        ),
        tags=["Admin API"],
        parameters=[ADMIN_SECRET_PARAMETER, LICENSE_ID_PARAMETER],
        request=None,
        responses={
            200: ResetDeviceResponseSerializer,
            400: {"description": "Invalid license id"},
            401: {"description": "Unauthorized - Missing or incorrect admin password"},
            404: {"description": "License not found"},
        },
    )
    def post(self, request: Request, license_id: str) -> Response:
        """Reset the device bound to a license."""
        _require_admin(request)
        return async_to_sync(self._handle_reset_device)(request, license_id)

    async def _handle_reset_device(self, request: Request, license_id: str) -> Response:
        """Async handler for reset device."""
        with tracer.start_as_current_span("reset_device") as span:
            span.set_attribute("operation", "reset_device")
            span.set_attribute("license.id", license_id)

            handler = ResetDeviceHandler(license_repository=_license_repo)
            result = await handler.handle(
                ResetDeviceCommand(license_id=_parse_license_id(license_id))
            )

            span.set_status(Status(StatusCode.OK))
            return Response(ResetDeviceResponseSerializer(result).data, status=status.HTTP_200_OK)
