"""
Admin secret authentication middleware.

This middleware guards the license administration API with the
shared admin secret.
"""

import logging
from typing import Optional

from django.apps import apps
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.utils.deprecation import MiddlewareMixin

from core.domain.exceptions import UnauthorizedError
from core.metrics import errors_total

logger = logging.getLogger(__name__)

ADMIN_API_PREFIX = "/api/users"


class AdminSecretMiddleware(MiddlewareMixin):
    """
    Middleware for admin secret authentication.

    This middleware:
    1. Applies the admin gate to every /api/users request
    2. Returns 401 Unauthorized before the view runs if the gate refuses
    3. Leaves client validation, login and health routes alone
    """

    def __init__(self, get_response=None, gate=None):
        """Initialize middleware with the gate built at startup."""
        super().__init__(get_response)
        self.gate = gate if gate is not None else apps.get_app_config("core").admin_gate

    def process_request(self, request: HttpRequest) -> Optional[HttpResponse]:
        """
        Process request and validate the admin secret.

        Args:
            request: HTTP request

        Returns:
            HttpResponse with 401 if authentication fails, None otherwise
        """
        if not self._requires_admin(request.path):
            return None

        try:
            self.gate.authorize(request)
        except UnauthorizedError as e:
            errors_total.labels(error_type="unauthorized", endpoint=ADMIN_API_PREFIX).inc()
            logger.warning(
                "Rejected admin request %s %s from %s",
                request.method,
                request.path,
                request.META.get("REMOTE_ADDR"),
            )
            return JsonResponse({"error": {"code": e.code, "message": e.message}}, status=401)

        request.is_admin = True  # type: ignore
        return None

    def _requires_admin(self, path: str) -> bool:
        """
        Check if the path belongs to the admin API.

        Args:
            path: Request path

        Returns:
            True if the admin secret is required
        """
        return path == ADMIN_API_PREFIX or path.startswith(ADMIN_API_PREFIX + "/")
