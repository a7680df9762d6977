"""
Admin authorization gate.

Every administrative operation is admitted by a single shared secret.
"""

import hmac
from typing import Optional

from django.http import HttpRequest

from core.domain.exceptions import UnauthorizedError
from core.security.config import AdminAuthConfig


class AdminGate:
    """
    Shared-secret check for admin callers.

    The comparison is constant time and the rejection never says
    what was wrong with the credential.
    """

    def __init__(self, config: AdminAuthConfig):
        """Initialize gate with its configuration."""
        self.config = config

    def is_valid_secret(self, candidate: Optional[str]) -> bool:
        """
        Check a candidate secret.

        Args:
            candidate: Secret supplied by the caller

        Returns:
            True if it matches the configured secret exactly
        """
        if not candidate:
            return False
        return hmac.compare_digest(
            candidate.encode("utf-8"), self.config.secret.encode("utf-8")
        )

    def credential_from(self, request: HttpRequest) -> Optional[str]:
        """Read the admin secret header from a request."""
        return request.headers.get(self.config.header_name)

    def authorize(self, request: HttpRequest) -> None:
        """
        Admit or reject an admin request.

        Args:
            request: HTTP request

        Raises:
            UnauthorizedError: If the secret header is missing or wrong
        """
        if not self.is_valid_secret(self.credential_from(request)):
            raise UnauthorizedError()

    def client_identity(self, request: HttpRequest) -> str:
        """
        Identity used for throttling: the client address.

        The first X-Forwarded-For hop is used only when the deployment
        says a trusted proxy sets it.
        """
        if self.config.trust_forwarded_for:
            forwarded = request.META.get("HTTP_X_FORWARDED_FOR", "")
            first_hop = forwarded.split(",")[0].strip()
            if first_hop:
                return first_hop
        return request.META.get("REMOTE_ADDR") or "unknown"
