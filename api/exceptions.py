"""
API exception handlers.

This module provides custom exception handling for REST API responses.
"""

import logging
from typing import Any, Dict, Optional

from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.domain.exceptions import (
    BindingConflictError,
    DomainException,
    DuplicateLicenseKeyError,
    InvalidInputError,
    InvalidLicenseIdError,
    LicenseNotFoundError,
    UnauthorizedError,
)
from core.metrics import errors_total
from core.middleware.observability import UNMATCHED_ROUTE, route_label

logger = logging.getLogger(__name__)

_DOMAIN_STATUS = (
    (LicenseNotFoundError, status.HTTP_404_NOT_FOUND),
    (DuplicateLicenseKeyError, status.HTTP_409_CONFLICT),
    (UnauthorizedError, status.HTTP_401_UNAUTHORIZED),
    (BindingConflictError, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (InvalidLicenseIdError, status.HTTP_400_BAD_REQUEST),
    (InvalidInputError, status.HTTP_400_BAD_REQUEST),
)


def custom_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """Custom exception handler for REST API."""
    trace_id = _get_trace_id(context)

    if isinstance(exc, DomainException):
        response = _handle_domain_exception(exc, context, trace_id)
    elif isinstance(exc, APIException):
        response = exception_handler(exc, context)
        code = exc.default_code.upper().replace("-", "_")
        response.data = {
            "error": {"code": code, "message": response.data.get("detail", exc.default_detail)}
        }
    elif isinstance(exc, Http404):
        response = Response(
            {"error": {"code": "NOT_FOUND", "message": "Resource not found"}},
            status=status.HTTP_404_NOT_FOUND,
        )
    else:
        response = _handle_unexpected_exception(exc, context, trace_id)

    if trace_id:
        response["X-Trace-ID"] = trace_id
    return response


def domain_status(exc: DomainException) -> int:
    """HTTP status code for a domain exception."""
    for exc_type, status_code in _DOMAIN_STATUS:
        if isinstance(exc, exc_type):
            return status_code
    return status.HTTP_400_BAD_REQUEST


def _get_trace_id(context: Dict[str, Any]) -> Optional[str]:
    """Extract trace ID from request context."""
    request = context.get("request")
    if not request:
        return None
    return getattr(request, "trace_id", getattr(request, "correlation_id", None))


def _endpoint(context: Dict[str, Any]) -> str:
    """Route name of the failing request, never its raw path."""
    request = context.get("request")
    return route_label(request) if request else UNMATCHED_ROUTE


def _handle_domain_exception(
    exc: DomainException, context: Dict[str, Any], trace_id: Optional[str]
) -> Response:
    """Handle domain-specific exceptions."""
    status_code = domain_status(exc)
    errors_total.labels(error_type=exc.code.lower(), endpoint=_endpoint(context)).inc()

    if status_code >= 500:
        logger.error(
            "Domain exception: %s - %s", exc.code, exc.message, extra={"trace_id": trace_id}
        )
    else:
        logger.warning(
            "Domain exception: %s - %s", exc.code, exc.message, extra={"trace_id": trace_id}
        )

    body = {"code": exc.code, "message": exc.message}
    if isinstance(exc, InvalidInputError) and exc.fields:
        body["fields"] = exc.fields
    return Response({"error": body}, status=status_code)


def _handle_unexpected_exception(
    exc: Exception, context: Dict[str, Any], trace_id: Optional[str]
) -> Response:
    """Handle unexpected or untracked exceptions."""
    logger.error("Unexpected error: %s", exc, extra={"trace_id": trace_id}, exc_info=True)
    errors_total.labels(error_type="internal_error", endpoint=_endpoint(context)).inc()
    return Response(
        {"error": {"code": "INTERNAL_ERROR", "message": "An internal error occurred"}},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
